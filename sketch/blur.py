"""
Gaussian blur with an explicit, validated kernel.

Borders are handled by edge replication (cv2.BORDER_REPLICATE): pixels
outside the image take the value of the nearest edge pixel. A constant
image therefore blurs to itself.
"""

import math
from numbers import Integral, Real

import cv2
import numpy as np

from .errors import InvalidInput
from .normalization import to_uint8


BORDER_MODE = cv2.BORDER_REPLICATE


def validate_blur_params(blur_kernel, sigma) -> None:
    """Check Gaussian blur parameters.

    Raises:
        InvalidInput: If blur_kernel is not an odd positive integer or sigma
            is not a positive finite number.
    """
    if (
        isinstance(blur_kernel, bool)
        or not isinstance(blur_kernel, Integral)
        or blur_kernel <= 0
        or blur_kernel % 2 == 0
    ):
        raise InvalidInput(
            f"blur_kernel must be an odd positive integer, got {blur_kernel!r}"
        )

    if isinstance(sigma, bool) or not isinstance(sigma, Real):
        raise InvalidInput(f"sigma must be a number, got {type(sigma).__name__}")

    if not math.isfinite(sigma) or sigma <= 0:
        raise InvalidInput(f"sigma must be positive, got {sigma!r}")


def gaussian_kernel(blur_kernel: int, sigma: float) -> np.ndarray:
    """Return the 1D Gaussian kernel used for both blur passes.

    The kernel is symmetric and normalized so its weights sum to 1.

    Args:
        blur_kernel: Odd positive kernel size.
        sigma: Positive standard deviation.

    Returns:
        float64 array of shape (blur_kernel,).

    Raises:
        InvalidInput: If the parameters are invalid.
    """
    validate_blur_params(blur_kernel, sigma)
    kernel = cv2.getGaussianKernel(int(blur_kernel), float(sigma), cv2.CV_64F)
    return kernel.ravel()


def gaussian_blur(img: np.ndarray, blur_kernel: int, sigma: float) -> np.ndarray:
    """Blur a single-channel uint8 image.

    Pure function: returns a new array without modifying the input.

    The blur runs as two separable passes in float64 and is quantized back
    to uint8 at the end.

    Args:
        img: 2D uint8 image.
        blur_kernel: Odd positive kernel size.
        sigma: Positive standard deviation.

    Returns:
        Blurred 2D uint8 image of the same shape.

    Raises:
        InvalidInput: If the parameters are invalid or img is not 2D.
    """
    if img.ndim != 2:
        raise InvalidInput(
            f"gaussian_blur requires a grayscale (2D) image, got shape {img.shape}"
        )

    kernel = gaussian_kernel(blur_kernel, sigma)
    blurred = cv2.sepFilter2D(
        img.astype(np.float64),
        cv2.CV_64F,
        kernel,
        kernel,
        borderType=BORDER_MODE,
    )
    return to_uint8(blurred)
