"""pencil / color / render command CLI parsing and control flow."""

from __future__ import annotations

import argparse
import logging

from config import DEFAULT_BLUR_KERNEL, DEFAULT_SIGMA, DEFAULT_COLOR_STRENGTH
from photo import load_image, save_image, save_step_artifacts
from sketch import (
    ColorSketchConfig,
    InvalidInput,
    SketchConfig,
    SketchPreset,
    config_for_preset,
    run_sketch_pipeline,
)

logger = logging.getLogger(__name__)


def _add_io_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input", help="Input image file")
    parser.add_argument("output", help="Output image file (format from extension)")
    parser.add_argument(
        "--save-steps",
        metavar="DIR",
        help="Also write every intermediate image into DIR",
    )


def _add_blur_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-k", "--blur-kernel",
        type=int,
        default=DEFAULT_BLUR_KERNEL,
        help=f"Gaussian kernel size, odd and positive (default: {DEFAULT_BLUR_KERNEL})",
    )
    parser.add_argument(
        "-s", "--sigma",
        type=float,
        default=DEFAULT_SIGMA,
        help=f"Gaussian standard deviation (default: {DEFAULT_SIGMA})",
    )


def add_render_subparsers(subparsers: argparse._SubParsersAction) -> None:
    pencil_parser = subparsers.add_parser(
        "pencil",
        help="Render a grayscale pencil sketch",
    )
    _add_io_arguments(pencil_parser)
    _add_blur_arguments(pencil_parser)
    pencil_parser.set_defaults(_cmd=cmd_pencil)

    color_parser = subparsers.add_parser(
        "color",
        help="Render a color pencil sketch",
    )
    _add_io_arguments(color_parser)
    _add_blur_arguments(color_parser)
    color_parser.add_argument(
        "-c", "--color-strength",
        type=float,
        default=DEFAULT_COLOR_STRENGTH,
        help=(
            "Weight of the original colors, 0 = pure sketch, 1 = original "
            f"(default: {DEFAULT_COLOR_STRENGTH})"
        ),
    )
    color_parser.set_defaults(_cmd=cmd_color)

    render_parser = subparsers.add_parser(
        "render",
        help="Render with a named preset",
    )
    _add_io_arguments(render_parser)
    render_parser.add_argument(
        "-p", "--preset",
        required=True,
        choices=[p.value for p in SketchPreset],
        help="Preset name (see 'psk presets')",
    )
    render_parser.add_argument(
        "--intensity",
        type=float,
        help="Intensity slider in [0, 1] (default: preset's own)",
    )
    render_parser.add_argument(
        "--detail",
        type=float,
        help="Detail slider in [0, 1] (default: preset's own)",
    )
    render_parser.set_defaults(_cmd=cmd_render)


def render_to_file(args: argparse.Namespace, config: SketchConfig) -> int:
    """Load, render and save one image. Returns a process exit code."""
    try:
        image = load_image(args.input)
        result = run_sketch_pipeline(image, config)
        save_image(result.sketch, args.output)
        if args.save_steps:
            paths = save_step_artifacts(result, args.save_steps)
            logger.info("Saved %d intermediate images to %s", len(paths), args.save_steps)
    except InvalidInput as e:
        logger.error("Invalid input: %s", e)
        return 1
    except OSError as e:
        logger.error("Cannot process %s: %s", args.input, e)
        return 1

    width, height = result.dimensions
    logger.info("Wrote %dx%d sketch to %s", width, height, args.output)
    return 0


def cmd_pencil(args: argparse.Namespace) -> int:
    config = SketchConfig(blur_kernel=args.blur_kernel, sigma=args.sigma)
    return render_to_file(args, config)


def cmd_color(args: argparse.Namespace) -> int:
    config = ColorSketchConfig(
        blur_kernel=args.blur_kernel,
        sigma=args.sigma,
        color_strength=args.color_strength,
    )
    return render_to_file(args, config)


def cmd_render(args: argparse.Namespace) -> int:
    try:
        config = config_for_preset(args.preset, args.intensity, args.detail)
    except InvalidInput as e:
        logger.error("Invalid input: %s", e)
        return 1
    logger.debug("Preset %s -> %s", args.preset, config)
    return render_to_file(args, config)
