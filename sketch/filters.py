"""
Pencil sketch filters.

The sketch is the classic dodge-and-burn trick: take the grayscale image,
blur its negative, and color dodge the grayscale by that blurred negative.
Flat areas divide out to near white, edges keep their darkness.

This module provides two APIs:
1. grayscale_sketch() / color_sketch() - plain functions returning the image
2. run_sketch_pipeline() - runs the same stages through a Pipeline and keeps
   every intermediate for inspection

Both paths validate every parameter and the image before touching pixels.
"""

import logging

import numpy as np

from .config import SketchConfig, ColorSketchConfig, SketchResult
from .blend import linear_blend
from .normalization import validate_image, replicate_channels
from .steps import (
    Pipeline,
    SketchStep,
    GrayscaleStep,
    InvertStep,
    GaussianBlurStep,
    ColorDodgeStep,
    ReplicateChannelsStep,
    ColorBlendStep,
)

logger = logging.getLogger(__name__)


def build_pipeline(config: SketchConfig) -> Pipeline:
    """Build a Pipeline from a sketch configuration.

    Grayscale pipeline:
    1. GrayscaleStep - luma conversion
    2. InvertStep - 255 - gray
    3. GaussianBlurStep - blur the negative
    4. ColorDodgeStep - dodge the grayscale by the blurred negative

    A ColorSketchConfig appends:
    5. ReplicateChannelsStep - sketch to RGB
    6. ColorBlendStep - mix the original colors back in

    Args:
        config: Sketch configuration. Not validated here.

    Returns:
        Pipeline configured according to the config.
    """
    steps: list[SketchStep] = [
        GrayscaleStep(),
        InvertStep(),
        GaussianBlurStep(blur_kernel=config.blur_kernel, sigma=config.sigma),
        ColorDodgeStep(base="grayscale"),
    ]

    if isinstance(config, ColorSketchConfig):
        steps.append(ReplicateChannelsStep())
        steps.append(ColorBlendStep(color_strength=config.color_strength))

    return Pipeline(steps=steps)


def run_sketch_pipeline(
    img: np.ndarray,
    config: SketchConfig | None = None,
) -> SketchResult:
    """Render a sketch and keep every intermediate image.

    Args:
        img: uint8 pixel buffer, (H, W), (H, W, 1) or (H, W, 3) RGB.
             Color configs require (H, W, 3).
        config: SketchConfig or ColorSketchConfig. Defaults to SketchConfig().

    Returns:
        SketchResult with the original, the rendered sketch and the
        per-step results.

    Raises:
        InvalidInput: If the configuration or the image is invalid.

    Examples:
        >>> img = np.full((4, 4, 3), 255, dtype=np.uint8)
        >>> result = run_sketch_pipeline(img, SketchConfig(blur_kernel=5, sigma=3.0))
        >>> int(result.sketch[0, 0])
        254
    """
    if config is None:
        config = SketchConfig()

    config.validate()
    validate_image(img, require_color=config.is_color)

    pipeline = build_pipeline(config)
    logger.debug("Running %d-step sketch pipeline on %s image", len(pipeline), img.shape)
    pipeline_result = pipeline.run(img)

    return SketchResult(
        original=pipeline_result.original,
        sketch=pipeline_result.final,
        config=config,
        steps=pipeline_result.steps,
        metadata=pipeline_result.all_metadata,
    )


def grayscale_sketch(img: np.ndarray, blur_kernel: int, sigma: float) -> np.ndarray:
    """Render a monochrome pencil sketch.

    Pure function: returns a new array without modifying the input.

    Args:
        img: uint8 pixel buffer, (H, W), (H, W, 1) or (H, W, 3) RGB.
        blur_kernel: Odd positive Gaussian kernel size.
        sigma: Positive Gaussian standard deviation.

    Returns:
        2D uint8 sketch with the same height and width as img.

    Raises:
        InvalidInput: If the image or a parameter is invalid.

    Examples:
        >>> white = np.full((4, 4, 3), 255, dtype=np.uint8)
        >>> int(grayscale_sketch(white, 5, 3.0)[0, 0])
        254
    """
    config = SketchConfig(blur_kernel=blur_kernel, sigma=sigma)
    return run_sketch_pipeline(img, config).sketch


def color_sketch(
    img: np.ndarray,
    blur_kernel: int,
    sigma: float,
    color_strength: float,
) -> np.ndarray:
    """Render a color pencil sketch.

    The grayscale sketch is replicated to RGB and mixed with the original:
    color_strength * original + (1 - color_strength) * sketch.

    Args:
        img: uint8 RGB pixel buffer of shape (H, W, 3).
        blur_kernel: Odd positive Gaussian kernel size.
        sigma: Positive Gaussian standard deviation.
        color_strength: Weight of the original colors in [0, 1].

    Returns:
        uint8 array of shape (H, W, 3).

    Raises:
        InvalidInput: If the image or a parameter is invalid. Errors from the
            grayscale stage propagate unchanged.
    """
    ColorSketchConfig(
        blur_kernel=blur_kernel, sigma=sigma, color_strength=color_strength
    ).validate()
    validate_image(img, require_color=True)

    sketch = grayscale_sketch(img, blur_kernel, sigma)
    return linear_blend(img, replicate_channels(sketch), color_strength)
