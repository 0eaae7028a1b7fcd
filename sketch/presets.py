"""
Named sketch presets.

Users pick a look and move two sliders, intensity and detail, both in [0, 1].
This module maps that choice onto concrete filter parameters:

- detail drives the blur kernel size (more detail -> wider kernel)
- intensity drives sigma and, for color presets, how much color survives
"""

import math
from enum import Enum

import numpy as np

from config import (
    PRESET_KERNEL_BASE,
    PRESET_KERNEL_SPAN,
    PRESET_KERNEL_MIN,
    PRESET_KERNEL_MAX,
    PRESET_SIGMA_BASE,
    PRESET_SIGMA_SPAN,
    PRESET_COLOR_STRENGTH_BASE,
    PRESET_COLOR_STRENGTH_SPAN,
)
from .config import SketchConfig, ColorSketchConfig
from .errors import InvalidInput
from .filters import grayscale_sketch, color_sketch


class SketchStyle(str, Enum):
    PENCIL = "pencil"
    COLOR_PENCIL = "color_pencil"


# value -> (display name, subtitle, style, default intensity, default detail)
_PRESET_TABLE = {
    "graphite_classic": ("Graphite Classic", "Close to the store look", SketchStyle.PENCIL, 0.82, 0.78),
    "soft_pencil": ("Soft Pencil", "Gentler on skin tones", SketchStyle.PENCIL, 0.58, 0.42),
    "clean_line": ("Clean Line", "Crisper outlines", SketchStyle.PENCIL, 0.74, 0.90),
    "color_pencil": ("Color Pencil", "Natural colored pencil", SketchStyle.COLOR_PENCIL, 0.72, 0.66),
    "vivid_color": ("Vivid Color", "Stronger colors", SketchStyle.COLOR_PENCIL, 0.88, 0.72),
    "pastel_color": ("Pastel Color", "Light pastel on paper", SketchStyle.COLOR_PENCIL, 0.55, 0.48),
}


class SketchPreset(str, Enum):
    GRAPHITE_CLASSIC = "graphite_classic"
    SOFT_PENCIL = "soft_pencil"
    CLEAN_LINE = "clean_line"
    COLOR_PENCIL = "color_pencil"
    VIVID_COLOR = "vivid_color"
    PASTEL_COLOR = "pastel_color"

    @property
    def display_name(self) -> str:
        return _PRESET_TABLE[self.value][0]

    @property
    def subtitle(self) -> str:
        return _PRESET_TABLE[self.value][1]

    @property
    def style(self) -> SketchStyle:
        return _PRESET_TABLE[self.value][2]

    @property
    def default_intensity(self) -> float:
        return _PRESET_TABLE[self.value][3]

    @property
    def default_detail(self) -> float:
        return _PRESET_TABLE[self.value][4]


def get_preset(name) -> SketchPreset:
    """Resolve a preset from its value (e.g. "soft_pencil") or the enum itself.

    Raises:
        InvalidInput: If no preset has that name.
    """
    if isinstance(name, SketchPreset):
        return name
    try:
        return SketchPreset(str(name).strip().lower().replace("-", "_"))
    except ValueError:
        known = ", ".join(p.value for p in SketchPreset)
        raise InvalidInput(f"unknown preset {name!r}, expected one of: {known}") from None


def _clamp_unit(value: float) -> float:
    return min(max(float(value), 0.0), 1.0)


def normalized_odd_kernel(detail: float) -> int:
    """Map detail in [0, 1] to an odd kernel size in [3, 39]."""
    raw = math.floor(PRESET_KERNEL_BASE + detail * PRESET_KERNEL_SPAN + 0.5)
    clamped = min(max(raw, PRESET_KERNEL_MIN), PRESET_KERNEL_MAX)
    return clamped + 1 if clamped % 2 == 0 else clamped


def sigma_for_intensity(intensity: float) -> float:
    return PRESET_SIGMA_BASE + intensity * PRESET_SIGMA_SPAN


def color_strength_for_intensity(intensity: float) -> float:
    return PRESET_COLOR_STRENGTH_BASE + intensity * PRESET_COLOR_STRENGTH_SPAN


def config_for_preset(
    preset,
    intensity: float | None = None,
    detail: float | None = None,
) -> SketchConfig:
    """Build the filter configuration for a preset and slider values.

    Sliders default to the preset's own values and are clamped to [0, 1].

    Args:
        preset: SketchPreset or its string value.
        intensity: Stroke darkness slider.
        detail: Stroke width slider.

    Returns:
        SketchConfig for pencil presets, ColorSketchConfig for color presets.

    Raises:
        InvalidInput: If the preset is unknown or a slider is not a number.
    """
    preset = get_preset(preset)
    try:
        intensity = _clamp_unit(preset.default_intensity if intensity is None else intensity)
        detail = _clamp_unit(preset.default_detail if detail is None else detail)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"intensity and detail must be numbers: {e}") from e
    if math.isnan(intensity) or math.isnan(detail):
        raise InvalidInput("intensity and detail must not be NaN")

    blur_kernel = normalized_odd_kernel(detail)
    sigma = sigma_for_intensity(intensity)

    if preset.style is SketchStyle.COLOR_PENCIL:
        return ColorSketchConfig(
            blur_kernel=blur_kernel,
            sigma=sigma,
            color_strength=color_strength_for_intensity(intensity),
        )
    return SketchConfig(blur_kernel=blur_kernel, sigma=sigma)


def render(
    img: np.ndarray,
    preset,
    intensity: float | None = None,
    detail: float | None = None,
) -> np.ndarray:
    """Render img with a preset.

    Returns:
        (H, W) uint8 for pencil presets, (H, W, 3) uint8 for color presets.

    Raises:
        InvalidInput: If the preset, a slider or the image is invalid.
    """
    config = config_for_preset(preset, intensity, detail)
    if isinstance(config, ColorSketchConfig):
        return color_sketch(img, config.blur_kernel, config.sigma, config.color_strength)
    return grayscale_sketch(img, config.blur_kernel, config.sigma)
