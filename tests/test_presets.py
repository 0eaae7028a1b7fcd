"""Tests for preset resolution and slider-to-parameter mapping."""

import numpy as np
import pytest

from sketch import (
    InvalidInput,
    SketchConfig,
    ColorSketchConfig,
    SketchPreset,
    SketchStyle,
    get_preset,
    config_for_preset,
    render,
    grayscale_sketch,
    color_sketch,
)
from sketch.presets import (
    normalized_odd_kernel,
    sigma_for_intensity,
    color_strength_for_intensity,
)


class TestNormalizedOddKernel:
    @pytest.mark.parametrize(
        "detail,expected",
        [
            (0.0, 9),
            (0.42, 23),   # 21.6 -> 22 -> 23
            (0.48, 23),   # 23.4 -> 23
            (0.5, 25),    # 24 -> 25
            (0.66, 29),   # 28.8 -> 29
            (0.78, 33),   # 32.4 -> 32 -> 33
            (0.9, 37),    # 36 -> 37
            (1.0, 39),
        ],
    )
    def test_mapping(self, detail, expected):
        assert normalized_odd_kernel(detail) == expected

    def test_clamped_to_bounds(self):
        assert normalized_odd_kernel(-5.0) == 3
        assert normalized_odd_kernel(5.0) == 39

    @pytest.mark.parametrize("detail", np.linspace(0.0, 1.0, 41))
    def test_always_odd(self, detail):
        assert normalized_odd_kernel(detail) % 2 == 1


class TestIntensityMapping:
    def test_sigma_range(self):
        assert sigma_for_intensity(0.0) == pytest.approx(18.0)
        assert sigma_for_intensity(1.0) == pytest.approx(80.0)

    def test_color_strength_range(self):
        assert color_strength_for_intensity(0.0) == pytest.approx(0.68)
        assert color_strength_for_intensity(1.0) == pytest.approx(0.90)


class TestGetPreset:
    def test_by_value(self):
        assert get_preset("soft_pencil") is SketchPreset.SOFT_PENCIL

    def test_tolerates_case_and_dashes(self):
        assert get_preset("Soft-Pencil") is SketchPreset.SOFT_PENCIL

    def test_enum_passthrough(self):
        assert get_preset(SketchPreset.CLEAN_LINE) is SketchPreset.CLEAN_LINE

    def test_unknown_raises(self):
        with pytest.raises(InvalidInput, match="unknown preset"):
            get_preset("charcoal")


class TestPresetTable:
    def test_six_presets(self):
        assert len(SketchPreset) == 6

    @pytest.mark.parametrize(
        "preset,style",
        [
            (SketchPreset.GRAPHITE_CLASSIC, SketchStyle.PENCIL),
            (SketchPreset.SOFT_PENCIL, SketchStyle.PENCIL),
            (SketchPreset.CLEAN_LINE, SketchStyle.PENCIL),
            (SketchPreset.COLOR_PENCIL, SketchStyle.COLOR_PENCIL),
            (SketchPreset.VIVID_COLOR, SketchStyle.COLOR_PENCIL),
            (SketchPreset.PASTEL_COLOR, SketchStyle.COLOR_PENCIL),
        ],
    )
    def test_styles(self, preset, style):
        assert preset.style is style

    def test_defaults(self):
        assert SketchPreset.GRAPHITE_CLASSIC.default_intensity == 0.82
        assert SketchPreset.GRAPHITE_CLASSIC.default_detail == 0.78
        assert SketchPreset.PASTEL_COLOR.default_intensity == 0.55
        assert SketchPreset.PASTEL_COLOR.default_detail == 0.48

    def test_every_preset_has_labels(self):
        for preset in SketchPreset:
            assert preset.display_name
            assert preset.subtitle

    def test_display_name_leaves_str_methods_alone(self):
        assert SketchPreset.CLEAN_LINE.display_name == "Clean Line"
        assert SketchPreset.CLEAN_LINE.title() == "Clean_Line"


class TestConfigForPreset:
    def test_pencil_preset_defaults(self):
        config = config_for_preset("graphite_classic")
        assert type(config) is SketchConfig
        assert config.blur_kernel == 33
        assert config.sigma == pytest.approx(18 + 0.82 * 62)

    def test_color_preset_defaults(self):
        config = config_for_preset(SketchPreset.COLOR_PENCIL)
        assert isinstance(config, ColorSketchConfig)
        assert config.blur_kernel == 29
        assert config.sigma == pytest.approx(18 + 0.72 * 62)
        assert config.color_strength == pytest.approx(0.68 + 0.72 * 0.22)

    def test_slider_overrides(self):
        config = config_for_preset("soft_pencil", intensity=0.0, detail=1.0)
        assert config.blur_kernel == 39
        assert config.sigma == pytest.approx(18.0)

    def test_sliders_clamped(self):
        config = config_for_preset("vivid_color", intensity=3.0, detail=-2.0)
        assert config.blur_kernel == 9
        assert config.sigma == pytest.approx(80.0)
        assert config.color_strength == pytest.approx(0.90)

    @pytest.mark.parametrize("preset", list(SketchPreset))
    def test_every_preset_config_is_valid(self, preset):
        config_for_preset(preset).validate()

    def test_nan_slider_raises(self):
        with pytest.raises(InvalidInput, match="NaN"):
            config_for_preset("clean_line", intensity=float("nan"))

    def test_non_numeric_slider_raises(self):
        with pytest.raises(InvalidInput, match="must be numbers"):
            config_for_preset("clean_line", detail="lots")


class TestRender:
    def test_pencil_preset_matches_grayscale_sketch(self, random_rgb):
        config = config_for_preset("clean_line")
        expected = grayscale_sketch(random_rgb, config.blur_kernel, config.sigma)
        assert np.array_equal(render(random_rgb, "clean_line"), expected)

    def test_color_preset_matches_color_sketch(self, random_rgb):
        config = config_for_preset("pastel_color", intensity=0.3)
        expected = color_sketch(
            random_rgb, config.blur_kernel, config.sigma, config.color_strength
        )
        assert np.array_equal(render(random_rgb, "pastel_color", intensity=0.3), expected)

    def test_pencil_preset_accepts_gray(self, random_gray):
        assert render(random_gray, "soft_pencil").shape == random_gray.shape

    def test_color_preset_rejects_gray(self, random_gray):
        with pytest.raises(InvalidInput, match="3-channel"):
            render(random_gray, "vivid_color")
