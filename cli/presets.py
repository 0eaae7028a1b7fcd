"""presets command CLI parsing and control flow."""

from __future__ import annotations

import argparse

from sketch import ColorSketchConfig, SketchPreset, config_for_preset


def add_presets_subparser(subparsers: argparse._SubParsersAction) -> None:
    presets_parser = subparsers.add_parser(
        "presets",
        help="List presets and the filter parameters they map to",
    )
    presets_parser.set_defaults(_cmd=cmd_presets)


def format_preset_table() -> list[str]:
    lines = [
        f"{'preset':<18} {'style':<13} {'int':>5} {'det':>5} {'kernel':>6} {'sigma':>7} {'color':>6}  description",
    ]
    for preset in SketchPreset:
        config = config_for_preset(preset)
        color = (
            f"{config.color_strength:.3f}"
            if isinstance(config, ColorSketchConfig) else "-"
        )
        lines.append(
            f"{preset.value:<18} {preset.style.value:<13} "
            f"{preset.default_intensity:>5.2f} {preset.default_detail:>5.2f} "
            f"{config.blur_kernel:>6} {config.sigma:>7.2f} {color:>6}  "
            f"{preset.display_name} - {preset.subtitle}"
        )
    return lines


def cmd_presets(args: argparse.Namespace) -> int:
    for line in format_preset_table():
        print(line)
    return 0
