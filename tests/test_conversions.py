"""
Unit tests for color space conversions.
"""
import numpy as np
import pytest

from closetcolors.services.colors.conversions import (
    RGB, color_distance, hex_to_hsl, hex_to_rgb, hsl_to_hex, hsl_to_rgb,
    hue_difference, normalize_hex, rgb_to_hex, rgb_to_hsl, rgb_to_hsl_array, wrap_hue
)


class TestHexParsing:
    """Test hex <-> RGB conversions."""

    def test_hex_to_rgb_accepts_both_cases(self):
        assert hex_to_rgb("#FF8000") == RGB(255, 128, 0)
        assert hex_to_rgb("#ff8000") == RGB(255, 128, 0)
        assert hex_to_rgb("ff8000") == RGB(255, 128, 0)

    @pytest.mark.parametrize("value", ["#ff00", "#gggggg", "", "#ff00000", None, 123])
    def test_malformed_hex_returns_none(self, value):
        assert hex_to_rgb(value) is None
        assert normalize_hex(value) is None

    def test_rgb_to_hex_is_lowercase(self):
        assert rgb_to_hex(209, 43, 43) == "#d12b2b"
        assert normalize_hex("#D12B2B") == "#d12b2b"


class TestHslConversions:
    """Test RGB <-> HSL conversions."""

    def test_primary_colors(self):
        h, s, l = rgb_to_hsl(255, 0, 0)
        assert h == pytest.approx(0.0)
        assert s == pytest.approx(1.0)
        assert l == pytest.approx(0.5)

        h, _, _ = rgb_to_hsl(0, 0, 255)
        assert h == pytest.approx(240.0)

    def test_achromatic_has_zero_hue_and_saturation(self):
        for value in (0, 128, 255):
            h, s, _ = rgb_to_hsl(value, value, value)
            assert h == 0.0
            assert s == 0.0

    def test_hsl_to_rgb_primaries(self):
        assert hsl_to_rgb(0, 1.0, 0.5) == RGB(255, 0, 0)
        assert hsl_to_rgb(120, 1.0, 0.5) == RGB(0, 255, 0)
        assert hsl_to_rgb(360, 1.0, 0.5) == RGB(255, 0, 0)
        assert hsl_to_hex(240, 1.0, 0.5) == "#0000ff"

    def test_channels_round_half_up(self):
        # l=0.55, s=1 gives 0.1 * 255 = 25.5 on the minor channels
        assert hsl_to_rgb(0, 1.0, 0.55) == RGB(255, 26, 26)

    def test_hex_to_hsl_malformed(self):
        assert hex_to_hsl("not-a-color") is None

    def test_vectorized_matches_scalar(self):
        colors = np.array([[
            [255, 0, 0], [0, 255, 0], [0, 0, 255], [128, 128, 128],
            [209, 43, 43], [20, 40, 90], [245, 245, 240], [255, 0, 128],
        ]], dtype=np.uint8)
        hue, sat, light = rgb_to_hsl_array(colors)
        for i, (r, g, b) in enumerate(colors[0]):
            expected = rgb_to_hsl(int(r), int(g), int(b))
            assert hue[0, i] == pytest.approx(expected.h, abs=1e-6)
            assert sat[0, i] == pytest.approx(expected.s, abs=1e-6)
            assert light[0, i] == pytest.approx(expected.l, abs=1e-6)


class TestHueMath:
    """Test hue wrapping and distances."""

    def test_wrap_hue(self):
        assert wrap_hue(370) == pytest.approx(10)
        assert wrap_hue(-30) == pytest.approx(330)

    def test_hue_difference_wraps(self):
        assert hue_difference(350, 10) == pytest.approx(20)
        assert hue_difference(0, 180) == pytest.approx(180)

    def test_hue_difference_on_arrays(self):
        gaps = hue_difference(np.array([350.0, 10.0, 200.0]), 10.0)
        assert gaps.tolist() == pytest.approx([20.0, 0.0, 170.0])

    def test_color_distance(self):
        assert color_distance((0, 0, 0), (3, 4, 0)) == pytest.approx(5.0)
        assert color_distance((0, 0, 0), (0, 0, 0)) == 0.0
