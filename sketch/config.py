"""
Configuration for the sketch filters.

Every filter run is parameterized through an immutable config object so a
result can always be traced back to the exact settings that produced it.
"""

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from config import DEFAULT_BLUR_KERNEL, DEFAULT_SIGMA, DEFAULT_COLOR_STRENGTH
from .blend import validate_color_strength
from .blur import validate_blur_params
from .steps import ORIGINAL_KEY


@dataclass(frozen=True)
class SketchConfig:
    """Parameters for the grayscale pencil sketch.

    Attributes:
        blur_kernel: Gaussian kernel size. Must be odd and positive.
                     Larger kernels give softer, wider strokes.
        sigma: Gaussian standard deviation. Must be positive.
    """

    blur_kernel: int = DEFAULT_BLUR_KERNEL
    sigma: float = DEFAULT_SIGMA

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            InvalidInput: If any parameter is invalid.
        """
        validate_blur_params(self.blur_kernel, self.sigma)

    @property
    def is_color(self) -> bool:
        return False


@dataclass(frozen=True)
class ColorSketchConfig(SketchConfig):
    """Parameters for the color pencil sketch.

    Attributes:
        color_strength: Weight of the original colors in [0, 1].
                        0 gives the plain sketch, 1 the untouched original.
    """

    color_strength: float = DEFAULT_COLOR_STRENGTH

    def validate(self) -> None:
        super().validate()
        validate_color_strength(self.color_strength)

    @property
    def is_color(self) -> bool:
        return True


@dataclass
class SketchResult:
    """Result of running a sketch pipeline.

    Attributes:
        original: Copy of the input image.
        sketch: Final rendered image, (H, W) for pencil, (H, W, 3) for color.
        config: The configuration used.
        steps: Per-step results in execution order.
        metadata: Aggregated metadata from all steps.
    """

    original: np.ndarray
    sketch: np.ndarray
    config: SketchConfig
    steps: list = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def dimensions(self) -> tuple[int, int]:
        """Get (width, height) of the rendered image."""
        h, w = self.sketch.shape[:2]
        return w, h

    def get_intermediate(self, step_name: str) -> np.ndarray | None:
        """Image produced by a step, looked up by full name or key.

        "original" returns the input copy. None if nothing matches.
        """
        if step_name == ORIGINAL_KEY:
            return self.original
        for step in self.steps:
            if step.name == step_name or step.key == step_name:
                return step.image
        return None
