"""
Pencil sketch rendering.

This module provides pure, deterministic functions that turn a decoded pixel
buffer (uint8 numpy array, grayscale or RGB) into a pencil sketch. All
functions follow the pattern: input -> output with no mutation of the
original arrays and no state kept between calls.

Key components:
- filters: grayscale_sketch() and color_sketch(), the two entry operations
- config: SketchConfig / ColorSketchConfig dataclasses for parameterizing runs
- steps: Class-based steps with a common SketchStep interface and a Pipeline
- presets: Named looks mapped onto filter parameters
- normalization, blur, blend: the individual image operations

Two APIs are available:
1. Function-based: grayscale_sketch(img, blur_kernel, sigma) -> ndarray
2. Pipeline-based: run_sketch_pipeline(img, config) -> SketchResult, which
   also keeps every intermediate image

Every invalid image or parameter raises InvalidInput.
"""

from .errors import InvalidInput
from .config import SketchConfig, ColorSketchConfig, SketchResult
from .normalization import validate_image, to_grayscale, invert, replicate_channels
from .blur import gaussian_kernel, gaussian_blur
from .blend import color_dodge, linear_blend
from .filters import grayscale_sketch, color_sketch, build_pipeline, run_sketch_pipeline
from .presets import (
    SketchStyle,
    SketchPreset,
    get_preset,
    config_for_preset,
    render,
)
from .steps import (
    SketchStep,
    BlendStep,
    GrayscaleStep,
    InvertStep,
    GaussianBlurStep,
    ColorDodgeStep,
    ReplicateChannelsStep,
    ColorBlendStep,
    Pipeline,
    PipelineStepResults,
    StepResult,
)

__all__ = [
    # Errors
    "InvalidInput",
    # Config and results
    "SketchConfig",
    "ColorSketchConfig",
    "SketchResult",
    # Function API
    "grayscale_sketch",
    "color_sketch",
    "run_sketch_pipeline",
    "build_pipeline",
    "validate_image",
    "to_grayscale",
    "invert",
    "replicate_channels",
    "gaussian_kernel",
    "gaussian_blur",
    "color_dodge",
    "linear_blend",
    # Presets
    "SketchStyle",
    "SketchPreset",
    "get_preset",
    "config_for_preset",
    "render",
    # Class-based API
    "SketchStep",
    "BlendStep",
    "GrayscaleStep",
    "InvertStep",
    "GaussianBlurStep",
    "ColorDodgeStep",
    "ReplicateChannelsStep",
    "ColorBlendStep",
    "Pipeline",
    "PipelineStepResults",
    "StepResult",
]
