"""Tests for the step classes, Pipeline and run_sketch_pipeline."""

import logging

import numpy as np
import pytest

from sketch import (
    InvalidInput,
    SketchConfig,
    ColorSketchConfig,
    GrayscaleStep,
    InvertStep,
    GaussianBlurStep,
    ColorDodgeStep,
    ReplicateChannelsStep,
    ColorBlendStep,
    Pipeline,
    build_pipeline,
    run_sketch_pipeline,
    grayscale_sketch,
)


class TestSteps:
    def test_grayscale_step(self, random_rgb):
        result = GrayscaleStep().apply(random_rgb)
        assert result.shape == random_rgb.shape[:2]

    def test_invert_step(self):
        gray = np.array([[0, 255]], dtype=np.uint8)
        assert InvertStep().apply(gray).tolist() == [[255, 0]]

    def test_blur_step_name_and_metadata(self):
        step = GaussianBlurStep(blur_kernel=5, sigma=2.0)
        assert step.name == "gaussian_blur(k=5, sigma=2.0)"
        assert step.get_metadata() == {"blur_kernel": 5, "sigma": 2.0}

    def test_replicate_step(self, random_gray):
        assert ReplicateChannelsStep().apply(random_gray).shape == random_gray.shape + (3,)

    def test_blend_step_outside_pipeline_raises(self, random_gray):
        with pytest.raises(InvalidInput, match="inside a Pipeline"):
            ColorDodgeStep().apply(random_gray)

    def test_blend_step_metadata(self):
        assert ColorDodgeStep().get_metadata() == {"dodge_epsilon": 1.0}
        assert ColorBlendStep(color_strength=0.3).get_metadata() == {"color_strength": 0.3}

    def test_steps_are_frozen(self):
        step = GaussianBlurStep(blur_kernel=5, sigma=2.0)
        with pytest.raises(AttributeError):
            step.sigma = 3.0


class TestPipeline:
    def test_empty_pipeline_returns_original(self, random_rgb):
        result = Pipeline(steps=[]).run(random_rgb)
        assert np.array_equal(result.final, random_rgb)
        assert result.final is not random_rgb

    def test_tracks_intermediates(self, random_rgb):
        pipeline = Pipeline(steps=[GrayscaleStep(), InvertStep()])
        result = pipeline.run(random_rgb)
        assert len(result.steps) == 2
        assert result.steps[0].name == "grayscale"
        assert result.steps[1].name == "invert"
        assert np.array_equal(result.final, 255 - result.steps[0].image)

    def test_get_intermediate_by_name_or_key(self, random_rgb):
        pipeline = Pipeline(steps=[
            GrayscaleStep(),
            GaussianBlurStep(blur_kernel=3, sigma=1.0),
        ])
        result = pipeline.run(random_rgb)
        assert result.get_intermediate("gaussian_blur") is result.final
        assert result.get_intermediate("gaussian_blur(k=3, sigma=1.0)") is result.final
        assert result.get_intermediate("original") is result.original
        assert result.get_intermediate("unknown") is None

    def test_blend_step_uses_named_base(self, random_rgb):
        pipeline = Pipeline(steps=[
            GrayscaleStep(),
            ReplicateChannelsStep(),
            ColorBlendStep(color_strength=1.0, base="original"),
        ])
        result = pipeline.run(random_rgb)
        assert np.array_equal(result.final, random_rgb)

    def test_missing_base_raises(self, random_rgb):
        pipeline = Pipeline(steps=[InvertStep(), ColorDodgeStep(base="grayscale")])
        with pytest.raises(InvalidInput, match="no earlier step produced"):
            pipeline.run(random_rgb)

    def test_aggregates_metadata(self, random_rgb):
        result = build_pipeline(ColorSketchConfig(blur_kernel=7, sigma=2.5, color_strength=0.4)).run(random_rgb)
        assert result.all_metadata == {
            "blur_kernel": 7,
            "sigma": 2.5,
            "dodge_epsilon": 1.0,
            "color_strength": 0.4,
        }
        assert result.get_metadata("sigma") == 2.5
        assert result.get_metadata("missing") is None

    def test_records_elapsed_time(self, random_rgb):
        result = Pipeline(steps=[GrayscaleStep()]).run(random_rgb)
        assert result.steps[0].elapsed >= 0.0

    def test_logs_steps_at_debug(self, random_rgb, caplog):
        with caplog.at_level(logging.DEBUG, logger="sketch.steps"):
            Pipeline(steps=[GrayscaleStep(), InvertStep()]).run(random_rgb)
        assert "grayscale" in caplog.text
        assert "invert" in caplog.text

    def test_preserves_original(self, random_rgb):
        original = random_rgb.copy()
        result = Pipeline(steps=[GrayscaleStep(), InvertStep()]).run(random_rgb)
        assert np.array_equal(random_rgb, original)
        assert result.original is not random_rgb

    def test_len_and_iter(self):
        steps = [GrayscaleStep(), InvertStep()]
        pipeline = Pipeline(steps=steps)
        assert len(pipeline) == 2
        assert list(pipeline) == steps


class TestBuildPipeline:
    def test_grayscale_pipeline_steps(self):
        pipeline = build_pipeline(SketchConfig(blur_kernel=5, sigma=2.0))
        assert [step.name for step in pipeline] == [
            "grayscale",
            "invert",
            "gaussian_blur(k=5, sigma=2.0)",
            "color_dodge",
        ]

    def test_color_pipeline_appends_blend(self):
        pipeline = build_pipeline(ColorSketchConfig(blur_kernel=5, sigma=2.0, color_strength=0.5))
        assert [step.name for step in pipeline][-2:] == ["replicate", "color_blend(0.5)"]


class TestRunSketchPipeline:
    def test_matches_function_api(self, random_rgb):
        result = run_sketch_pipeline(random_rgb, SketchConfig(blur_kernel=9, sigma=4.0))
        assert np.array_equal(result.sketch, grayscale_sketch(random_rgb, 9, 4.0))

    def test_intermediates_follow_the_algorithm(self, white_rgb):
        result = run_sketch_pipeline(white_rgb, SketchConfig(blur_kernel=5, sigma=3.0))
        assert np.all(result.get_intermediate("grayscale") == 255)
        assert np.all(result.get_intermediate("invert") == 0)
        assert np.all(result.get_intermediate("gaussian_blur") == 0)
        assert np.all(result.get_intermediate("color_dodge") == 254)

    def test_intermediate_lookup_by_name_key_and_original(self, random_rgb):
        result = run_sketch_pipeline(random_rgb, SketchConfig(blur_kernel=5, sigma=3.0))
        by_name = result.get_intermediate("gaussian_blur(k=5, sigma=3.0)")
        assert by_name is not None
        assert np.array_equal(by_name, result.get_intermediate("gaussian_blur"))
        assert np.array_equal(result.get_intermediate("original"), random_rgb)
        assert result.get_intermediate("sharpen") is None

    def test_default_config(self, random_rgb):
        result = run_sketch_pipeline(random_rgb)
        assert result.config == SketchConfig()
        assert result.dimensions == (64, 48)

    def test_invalid_config_raises_before_running(self, random_rgb):
        with pytest.raises(InvalidInput, match="blur_kernel"):
            run_sketch_pipeline(random_rgb, SketchConfig(blur_kernel=8))

    def test_color_config_requires_rgb(self, random_gray):
        with pytest.raises(InvalidInput, match="3-channel"):
            run_sketch_pipeline(random_gray, ColorSketchConfig())
