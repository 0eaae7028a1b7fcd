"""
Photo file decoding and encoding for the command line tools.

The sketch library itself only works on decoded numpy arrays. This module is
the boundary: it turns image files into uint8 RGB (or grayscale) arrays and
writes rendered arrays back to disk.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from config import STEP_ARTIFACT_EXTENSION
from sketch import SketchResult

logger = logging.getLogger(__name__)

_GRAYSCALE_MODES = {"1", "L"}

# Full-scale value of the high bit depth grayscale modes.
_HIGH_DEPTH_RANGES = {"I": 65535.0, "F": 1.0}


def _high_depth_range(mode: str) -> float | None:
    if mode.startswith("I;16"):
        return 65535.0
    return _HIGH_DEPTH_RANGES.get(mode)


def _scale_to_uint8(image: Image.Image, full_scale: float) -> np.ndarray:
    """Rescale a 16-bit, 32-bit or float grayscale image to 0-255.

    Pillow's convert("L") clips these modes instead of rescaling them.
    """
    values = np.asarray(image, dtype=np.float64)
    values = np.clip(values, 0.0, full_scale) * (255.0 / full_scale)
    return np.rint(values).astype(np.uint8)


def load_image(path: str | Path) -> np.ndarray:
    """Decode an image file into a uint8 pixel buffer.

    EXIF orientation is applied so the array matches what a viewer shows.
    Grayscale files load as (H, W); everything else is converted to RGB
    (alpha is dropped) and loads as (H, W, 3).

    Args:
        path: Image file path.

    Returns:
        uint8 numpy array.

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the file is not a readable image.
    """
    path = Path(path)
    try:
        with Image.open(path) as image:
            image = ImageOps.exif_transpose(image)
            full_scale = _high_depth_range(image.mode)
            if full_scale is not None:
                array = _scale_to_uint8(image, full_scale)
            else:
                mode = "L" if image.mode in _GRAYSCALE_MODES else "RGB"
                array = np.asarray(image.convert(mode), dtype=np.uint8)
    except UnidentifiedImageError as e:
        raise OSError(f"Not a readable image: {path}") from e

    logger.debug("Loaded %s as %s", path, array.shape)
    return array


def save_image(img: np.ndarray, path: str | Path) -> Path:
    """Encode a uint8 pixel buffer to disk, creating parent directories.

    The file format follows the path's extension.

    Args:
        img: (H, W), (H, W, 1) or (H, W, 3) uint8 array.
        path: Output file path.

    Returns:
        The path written.

    Raises:
        OSError: If the extension is not a format Pillow can write, or the
            write fails.
    """
    path = Path(path)
    if path.suffix.lower() not in Image.registered_extensions():
        raise OSError(f"Unknown image file extension: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    if img.ndim == 3 and img.shape[2] == 1:
        img = img[:, :, 0]
    try:
        Image.fromarray(np.ascontiguousarray(img)).save(path)
    except (KeyError, ValueError) as e:
        # read-only formats and unsupported modes
        raise OSError(f"Cannot write {path}: {e}") from e
    logger.debug("Saved %s image to %s", img.shape, path)
    return path


def save_step_artifacts(result: SketchResult, directory: str | Path) -> dict[str, Path]:
    """Write the original and every intermediate image of a pipeline run.

    Files are named after the step key, e.g. ``grayscale.png``,
    ``gaussian_blur.png``, ``color_dodge.png``.

    Args:
        result: Result of run_sketch_pipeline().
        directory: Output directory, created if needed.

    Returns:
        Dict mapping "original" and each step key to the written path.
    """
    directory = Path(directory)
    paths = {"original": save_image(result.original, directory / f"original{STEP_ARTIFACT_EXTENSION}")}
    for step in result.steps:
        paths[step.key] = save_image(step.image, directory / f"{step.key}{STEP_ARTIFACT_EXTENSION}")
    return paths
