"""
Blend modes used to composite sketch layers.

Both blends take uint8 layers, compute in float64 and return a new uint8
image clipped to [0, 255].
"""

import math
from numbers import Real

import numpy as np

from config import DODGE_EPSILON
from .errors import InvalidInput
from .normalization import to_uint8


def validate_color_strength(color_strength) -> None:
    """Raise InvalidInput unless color_strength is a finite number in [0, 1]."""
    if isinstance(color_strength, bool) or not isinstance(color_strength, Real):
        raise InvalidInput(
            f"color_strength must be a number, got {type(color_strength).__name__}"
        )
    if not math.isfinite(color_strength) or not 0.0 <= color_strength <= 1.0:
        raise InvalidInput(
            f"color_strength must be in [0, 1], got {color_strength!r}"
        )


def _require_same_shape(a: np.ndarray, b: np.ndarray, what: str) -> None:
    if a.shape != b.shape:
        raise InvalidInput(
            f"{what} layers must have the same shape, got {a.shape} and {b.shape}"
        )


def color_dodge(
    base: np.ndarray,
    blend: np.ndarray,
    epsilon: float = DODGE_EPSILON,
) -> np.ndarray:
    """Color dodge base by blend.

    result = min(255, base * 255 / (255 - blend + epsilon))

    With the blurred negative of the base as blend layer, flat regions wash
    out to white and only edges stay dark, which is the pencil look.

    Args:
        base: uint8 base layer (the grayscale image).
        blend: uint8 blend layer of the same shape.
        epsilon: Added to the divisor; must be positive.

    Returns:
        uint8 image of the same shape.

    Raises:
        InvalidInput: If the shapes differ or epsilon is not positive.
    """
    _require_same_shape(base, blend, "color dodge")
    if not epsilon > 0:
        raise InvalidInput(f"dodge epsilon must be positive, got {epsilon!r}")

    divisor = 255.0 - blend.astype(np.float64) + epsilon
    dodged = base.astype(np.float64) * 255.0 / divisor
    return to_uint8(np.minimum(dodged, 255.0))


def linear_blend(
    original: np.ndarray,
    overlay: np.ndarray,
    strength: float,
) -> np.ndarray:
    """Mix two layers: strength * original + (1 - strength) * overlay.

    strength == 1 returns original exactly, strength == 0 returns overlay.

    Raises:
        InvalidInput: If the shapes differ or strength is outside [0, 1].
    """
    _require_same_shape(original, overlay, "linear blend")
    validate_color_strength(strength)

    mixed = (
        strength * original.astype(np.float64)
        + (1.0 - strength) * overlay.astype(np.float64)
    )
    return to_uint8(mixed)
