"""
Pixel buffer validation and channel conversions.

A pixel buffer is a uint8 numpy array shaped (H, W), (H, W, 1) or (H, W, 3),
with RGB channel order for color images. All functions are pure: they take an
input and return a new output without mutating the original array.
"""

import numpy as np
import cv2

from .errors import InvalidInput


def validate_image(img: np.ndarray, require_color: bool = False) -> None:
    """Check that img is a usable pixel buffer.

    Args:
        img: Candidate pixel buffer.
        require_color: Reject anything that is not 3-channel RGB.

    Raises:
        InvalidInput: If img is not a uint8 array of shape (H, W), (H, W, 1)
            or (H, W, 3) with positive dimensions.
    """
    if not isinstance(img, np.ndarray):
        raise InvalidInput(f"image must be a numpy.ndarray, got {type(img).__name__}")

    if img.ndim < 2 or img.ndim > 3:
        raise InvalidInput(
            f"image must be a 2D or 3D array, got {img.ndim}D array with shape {img.shape}"
        )

    height, width = img.shape[:2]
    if height <= 0 or width <= 0:
        raise InvalidInput(
            f"image dimensions must be positive, got ({height}, {width})"
        )

    channels = channel_count(img)
    if channels not in (1, 3):
        raise InvalidInput(
            f"image must have 1 or 3 channels, got {channels}"
        )

    if require_color and channels != 3:
        raise InvalidInput(
            f"color sketch requires a 3-channel RGB image, got {channels} channel(s)"
        )

    if img.dtype != np.uint8:
        raise InvalidInput(f"image dtype must be uint8, got {img.dtype}")


def channel_count(img: np.ndarray) -> int:
    """Number of channels in a 2D or 3D image array."""
    return 1 if img.ndim == 2 else img.shape[2]


def to_uint8(values: np.ndarray) -> np.ndarray:
    """Round half-to-even, clip to [0, 255] and cast to uint8.

    Every stage that hands a pixel buffer back goes through here so that
    float intermediates are quantized the same way everywhere.
    """
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def to_grayscale(img: np.ndarray) -> np.ndarray:
    """Convert a pixel buffer to a single-channel intensity image.

    Pure function: returns a new array without modifying the input.

    RGB input is reduced with the ITU-R BT.601 luma weights
    (0.299 R + 0.587 G + 0.114 B); grayscale input is copied.

    Args:
        img: Pixel buffer, (H, W), (H, W, 1) or (H, W, 3).

    Returns:
        Grayscale image as a 2D uint8 array.

    Raises:
        InvalidInput: If img is not a valid pixel buffer.

    Examples:
        >>> rgb = np.zeros((100, 200, 3), dtype=np.uint8)
        >>> gray = to_grayscale(rgb)
        >>> gray.shape
        (100, 200)
        >>> gray.dtype
        dtype('uint8')
    """
    validate_image(img)

    if img.ndim == 2:
        return img.copy()

    if img.shape[2] == 1:
        return img[:, :, 0].copy()

    # cvtColor rejects strided views (e.g. img[:, ::-1]).
    return cv2.cvtColor(np.ascontiguousarray(img), cv2.COLOR_RGB2GRAY)


def invert(gray: np.ndarray) -> np.ndarray:
    """Return the negative of a uint8 image (255 - value)."""
    return 255 - gray


def replicate_channels(gray: np.ndarray) -> np.ndarray:
    """Expand a 2D grayscale image to (H, W, 3) with R = G = B.

    Raises:
        InvalidInput: If gray is not a single-channel image.
    """
    if gray.ndim == 3 and gray.shape[2] == 1:
        gray = gray[:, :, 0]
    if gray.ndim != 2:
        raise InvalidInput(
            f"channel replication requires a grayscale image, got shape {gray.shape}"
        )
    return np.repeat(gray[:, :, np.newaxis], 3, axis=2)
