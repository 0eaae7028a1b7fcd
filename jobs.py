"""Batch sketch jobs described in a YAML file.

Example job file::

    output_dir: out/
    jobs:
      - input: a.jpg
        output: a_sketch.png
        preset: graphite_classic
        intensity: 0.9
      - input: b.jpg
        output: b_color.png
        style: color_pencil
        blur_kernel: 21
        sigma: 30
        color_strength: 0.8

Relative inputs resolve against the job file's directory, relative outputs
against ``output_dir`` (itself relative to the job file) when it is set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator
from tqdm import tqdm

from photo import load_image, save_image
from sketch import (
    ColorSketchConfig,
    InvalidInput,
    SketchConfig,
    SketchPreset,
    SketchStyle,
    config_for_preset,
    run_sketch_pipeline,
)

logger = logging.getLogger(__name__)


class SketchJob(BaseModel):
    """One input image rendered to one output file."""

    input: str
    output: str
    preset: SketchPreset | None = None
    intensity: float | None = None
    detail: float | None = None
    style: SketchStyle | None = None
    blur_kernel: int | None = None
    sigma: float | None = None
    color_strength: float | None = None

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_parameters(self) -> SketchJob:
        if (self.preset is None) == (self.style is None):
            raise ValueError("job needs exactly one of 'preset' or 'style'")

        if self.preset is not None:
            explicit = [
                name for name in ("blur_kernel", "sigma", "color_strength")
                if getattr(self, name) is not None
            ]
            if explicit:
                raise ValueError(
                    f"preset jobs take intensity/detail, not {', '.join(explicit)}"
                )
            return self

        if self.intensity is not None or self.detail is not None:
            raise ValueError("intensity/detail only apply to preset jobs")
        if self.blur_kernel is None or self.sigma is None:
            raise ValueError("style jobs need 'blur_kernel' and 'sigma'")
        if self.style is SketchStyle.COLOR_PENCIL and self.color_strength is None:
            raise ValueError("color_pencil jobs need 'color_strength'")
        if self.style is SketchStyle.PENCIL and self.color_strength is not None:
            raise ValueError("pencil jobs do not take 'color_strength'")
        return self

    def sketch_config(self) -> SketchConfig:
        """Filter configuration for this job. Not validated."""
        if self.preset is not None:
            return config_for_preset(self.preset, self.intensity, self.detail)
        if self.style is SketchStyle.COLOR_PENCIL:
            return ColorSketchConfig(
                blur_kernel=self.blur_kernel,
                sigma=self.sigma,
                color_strength=self.color_strength,
            )
        return SketchConfig(blur_kernel=self.blur_kernel, sigma=self.sigma)


class JobFile(BaseModel):
    output_dir: str | None = None
    jobs: list[SketchJob] = Field(min_length=1)

    model_config = ConfigDict(extra="forbid")


@dataclass
class JobOutcome:
    """What happened to one job."""

    job: SketchJob
    output_path: Path
    ok: bool
    error: str | None = None


def load_job_file(path: Path) -> JobFile:
    """Parse and validate a YAML job file.

    Raises:
        ValueError: If the YAML is malformed or does not match the schema.
    """
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Job file {path} is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Job file {path} must contain a mapping with a 'jobs' list")

    return JobFile.model_validate(data)


def _resolve(path: str, base: Path) -> Path:
    candidate = Path(path).expanduser()
    return candidate if candidate.is_absolute() else base / candidate


def run_job(job: SketchJob, input_dir: Path, output_dir: Path) -> JobOutcome:
    """Render a single job, recording rather than raising per-job failures."""
    source = _resolve(job.input, input_dir)
    target = _resolve(job.output, output_dir)

    try:
        result = run_sketch_pipeline(load_image(source), job.sketch_config())
        save_image(result.sketch, target)
    except (InvalidInput, OSError) as e:
        logger.warning("Job %s failed: %s", source, e)
        return JobOutcome(job=job, output_path=target, ok=False, error=str(e))

    logger.info("Rendered %s -> %s", source, target)
    return JobOutcome(job=job, output_path=target, ok=True)


def run_jobs(
    job_file: JobFile,
    base_dir: Path,
    show_progress: bool = True,
) -> list[JobOutcome]:
    """Run every job in order.

    Args:
        job_file: Parsed job file.
        base_dir: Directory relative paths resolve against (normally the
            job file's own directory).
        show_progress: Show a tqdm progress bar.

    Returns:
        One JobOutcome per job, in file order.
    """
    output_dir = base_dir
    if job_file.output_dir:
        output_dir = _resolve(job_file.output_dir, base_dir)

    outcomes = []
    for job in tqdm(job_file.jobs, desc="Sketching", unit="img", disable=not show_progress):
        outcomes.append(run_job(job, base_dir, output_dir))

    failed = sum(1 for o in outcomes if not o.ok)
    logger.info("Batch done: %d ok, %d failed", len(outcomes) - failed, failed)
    return outcomes
