"""
Sketch step classes with a common interface.

Each step is a frozen dataclass that implements the SketchStep interface.
Steps are pure: they take an input and return a new output without mutating
the original array.

Blend steps combine the current image with an earlier intermediate, named by
their ``base`` attribute ("original" or the key of a previous step).

Usage:
    from sketch.steps import GrayscaleStep, InvertStep, GaussianBlurStep, Pipeline

    pipeline = Pipeline(steps=[
        GrayscaleStep(),
        InvertStep(),
        GaussianBlurStep(blur_kernel=21, sigma=10.0),
        ColorDodgeStep(base="grayscale"),
    ])
    result = pipeline.run(image)
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from config import DODGE_EPSILON
from .blend import color_dodge, linear_blend
from .blur import gaussian_blur
from .errors import InvalidInput
from .normalization import to_grayscale, invert, replicate_channels

logger = logging.getLogger(__name__)

ORIGINAL_KEY = "original"


def step_key(name: str) -> str:
    """Normalize a step name for lookups, e.g. "color_blend(0.8)" -> "color_blend"."""
    return name.split("(")[0]


class SketchStep(ABC):
    """Base class for sketch steps.

    Steps should be pure functions: they take an input image and return a
    new output without mutating the original.
    """

    @abstractmethod
    def apply(self, img: np.ndarray) -> np.ndarray:
        """Apply this step to an image.

        Must be pure: never mutates the input image.

        Args:
            img: Input image as numpy array.

        Returns:
            Processed image as a new numpy array.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging and debugging."""
        pass

    def get_metadata(self) -> dict[str, Any]:
        """Return the parameters this step ran with. Empty by default."""
        return {}


class BlendStep(SketchStep):
    """A step that composites the current image with an earlier one.

    Subclasses set ``base`` to the key of the intermediate they blend
    against and implement blend().
    """

    base: str

    @abstractmethod
    def blend(self, img: np.ndarray, base_img: np.ndarray) -> np.ndarray:
        """Combine img (the running image) with base_img."""
        pass

    def apply(self, img: np.ndarray) -> np.ndarray:
        raise InvalidInput(
            f"{self.name} needs the '{self.base}' intermediate; run it inside a Pipeline"
        )


@dataclass(frozen=True)
class GrayscaleStep(SketchStep):
    """Convert an RGB or grayscale pixel buffer to 2D luma."""

    def apply(self, img: np.ndarray) -> np.ndarray:
        return to_grayscale(img)

    @property
    def name(self) -> str:
        return "grayscale"


@dataclass(frozen=True)
class InvertStep(SketchStep):
    """Replace every value v by 255 - v."""

    def apply(self, img: np.ndarray) -> np.ndarray:
        return invert(img)

    @property
    def name(self) -> str:
        return "invert"


@dataclass(frozen=True)
class GaussianBlurStep(SketchStep):
    """Gaussian blur with edge-replicated borders.

    Requires grayscale input.

    Attributes:
        blur_kernel: Odd positive kernel size.
        sigma: Positive standard deviation.
    """

    blur_kernel: int
    sigma: float

    def apply(self, img: np.ndarray) -> np.ndarray:
        return gaussian_blur(img, self.blur_kernel, self.sigma)

    @property
    def name(self) -> str:
        return f"gaussian_blur(k={self.blur_kernel}, sigma={self.sigma})"

    def get_metadata(self) -> dict[str, Any]:
        return {"blur_kernel": self.blur_kernel, "sigma": self.sigma}


@dataclass(frozen=True)
class ColorDodgeStep(BlendStep):
    """Color dodge the base intermediate by the running image.

    In the sketch pipeline the running image is the blurred negative and the
    base is the grayscale image.
    """

    base: str = "grayscale"
    epsilon: float = DODGE_EPSILON

    def blend(self, img: np.ndarray, base_img: np.ndarray) -> np.ndarray:
        return color_dodge(base_img, img, self.epsilon)

    @property
    def name(self) -> str:
        return "color_dodge"

    def get_metadata(self) -> dict[str, Any]:
        return {"dodge_epsilon": self.epsilon}


@dataclass(frozen=True)
class ReplicateChannelsStep(SketchStep):
    """Expand a grayscale image to three identical RGB channels."""

    def apply(self, img: np.ndarray) -> np.ndarray:
        return replicate_channels(img)

    @property
    def name(self) -> str:
        return "replicate"


@dataclass(frozen=True)
class ColorBlendStep(BlendStep):
    """Mix the base intermediate (normally the original) back in.

    Attributes:
        color_strength: Weight of the base layer in [0, 1].
        base: Key of the intermediate to blend with.
    """

    color_strength: float
    base: str = ORIGINAL_KEY

    def blend(self, img: np.ndarray, base_img: np.ndarray) -> np.ndarray:
        return linear_blend(base_img, img, self.color_strength)

    @property
    def name(self) -> str:
        return f"color_blend({self.color_strength})"

    def get_metadata(self) -> dict[str, Any]:
        return {"color_strength": self.color_strength}


@dataclass
class StepResult:
    """Result of applying a single step.

    Attributes:
        name: Name of the step that produced this result.
        image: Output image from the step.
        metadata: Parameters reported by the step.
        elapsed: Wall time spent in the step, in seconds.
    """

    name: str
    image: np.ndarray
    metadata: dict[str, Any] = field(default_factory=dict)
    elapsed: float = 0.0

    @property
    def key(self) -> str:
        return step_key(self.name)


@dataclass
class PipelineStepResults:
    """Results from running a sketch pipeline.

    Provides access to all intermediate images and aggregated metadata.

    Attributes:
        original: The original input image.
        steps: List of StepResult for each step in order.
    """

    original: np.ndarray
    steps: list[StepResult] = field(default_factory=list)

    @property
    def final(self) -> np.ndarray:
        """Get the final processed image."""
        if not self.steps:
            return self.original
        return self.steps[-1].image

    def get_intermediate(self, step_name: str) -> np.ndarray | None:
        """Get intermediate image by step name or key.

        Args:
            step_name: Full step name (e.g. "color_blend(0.8)"), its key
                (e.g. "color_blend") or "original".

        Returns:
            The image produced by that step, or None if not found.
        """
        if step_name == ORIGINAL_KEY:
            return self.original
        for step in self.steps:
            if step.name == step_name or step.key == step_name:
                return step.image
        return None

    def get_metadata(self, key: str) -> Any | None:
        """Get metadata value from any step.

        Searches steps in order and returns the first match.
        """
        for step in self.steps:
            if key in step.metadata:
                return step.metadata[key]
        return None

    @property
    def all_metadata(self) -> dict[str, Any]:
        """Get all metadata from all steps, merged into one dict.

        Later steps override earlier ones if keys conflict.
        """
        result = {}
        for step in self.steps:
            result.update(step.metadata)
        return result

    @property
    def intermediates(self) -> dict[str, np.ndarray]:
        """Map of step key to image, starting with the original."""
        images = {ORIGINAL_KEY: self.original}
        for step in self.steps:
            images[step.key] = step.image
        return images


@dataclass
class Pipeline:
    """A sequence of sketch steps to apply to images.

    The pipeline runs each step in order, passing the output of one step
    as the input to the next. All intermediate results are preserved, which
    is what lets blend steps reach back to earlier images.

    Attributes:
        steps: List of SketchStep instances to apply in order.
    """

    steps: list[SketchStep]

    def run(self, img: np.ndarray) -> PipelineStepResults:
        """Run the pipeline on an image.

        Args:
            img: Input image as numpy array.

        Returns:
            PipelineStepResults containing all intermediate images and metadata.

        Raises:
            InvalidInput: If a step rejects its input or a blend step's base
                intermediate was not produced earlier in the pipeline.
        """
        result = PipelineStepResults(original=img.copy())
        current = result.original

        for step in self.steps:
            started = time.perf_counter()
            if isinstance(step, BlendStep):
                base_img = result.get_intermediate(step.base)
                if base_img is None:
                    raise InvalidInput(
                        f"{step.name} blends with '{step.base}', "
                        "which no earlier step produced"
                    )
                output = step.blend(current, base_img)
            else:
                output = step.apply(current)
            elapsed = time.perf_counter() - started

            logger.debug(
                "%s: %s -> %s in %.1f ms",
                step.name, current.shape, output.shape, elapsed * 1000,
            )
            result.steps.append(
                StepResult(
                    name=step.name,
                    image=output,
                    metadata=step.get_metadata(),
                    elapsed=elapsed,
                )
            )
            current = output

        return result

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)
