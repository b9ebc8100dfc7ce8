"""Tests for RGB <-> HSV conversion and hex helpers."""

import numpy as np
import pytest

from lutgrade.color.space import (
    from_hex,
    hsv_to_rgb,
    hsv_to_rgb_array,
    rgb_to_hsv,
    rgb_to_hsv_array,
    to_hex,
)


class TestRgbToHsv:
    """Test rgb_to_hsv."""

    @pytest.mark.parametrize(
        "rgb,expected",
        [
            ((1.0, 0.0, 0.0), (0.0, 1.0, 1.0)),
            ((0.0, 1.0, 0.0), (1 / 3, 1.0, 1.0)),
            ((0.0, 0.0, 1.0), (2 / 3, 1.0, 1.0)),
            ((1.0, 0.0, 1.0), (5 / 6, 1.0, 1.0)),
            ((0.0, 1.0, 1.0), (0.5, 1.0, 1.0)),
        ],
    )
    def test_primaries_and_secondaries(self, rgb, expected):
        """Test hue positions of primary and secondary colors."""
        np.testing.assert_allclose(rgb_to_hsv(*rgb), expected, atol=1e-12)

    @pytest.mark.parametrize("level", [0.0, 0.25, 0.5, 1.0])
    def test_gray_has_zero_hue_and_saturation(self, level):
        """Test delta == 0 gives h = 0 and s = 0."""
        assert rgb_to_hsv(level, level, level) == (0.0, 0.0, level)

    def test_hue_in_unit_interval(self):
        """Test hue stays in [0, 1) for random inputs."""
        rng = np.random.default_rng(42)
        for r, g, b in rng.random((500, 3)):
            h, s, v = rgb_to_hsv(r, g, b)
            assert 0.0 <= h < 1.0
            assert 0.0 <= s <= 1.0
            assert 0.0 <= v <= 1.0

    def test_returns_python_floats(self):
        """Test scalar results are plain floats."""
        assert all(type(c) is float for c in rgb_to_hsv(0.2, 0.4, 0.6))


class TestHsvToRgb:
    """Test hsv_to_rgb."""

    def test_cyan(self):
        """Test hue 0.5 at full saturation is cyan."""
        assert hsv_to_rgb(0.5, 1.0, 1.0) == (0.0, 1.0, 1.0)

    def test_zero_saturation_is_gray(self):
        """Test s = 0 gives a gray of level v for any hue."""
        for h in (0.0, 0.3, 0.9):
            np.testing.assert_allclose(hsv_to_rgb(h, 0.0, 0.7), (0.7, 0.7, 0.7))

    def test_zero_value_is_black(self):
        """Test v = 0 gives black."""
        assert hsv_to_rgb(0.4, 1.0, 0.0) == (0.0, 0.0, 0.0)

    def test_hue_one_wraps_to_red(self):
        """Test h = 1 lands in sector 0 (red)."""
        np.testing.assert_allclose(hsv_to_rgb(1.0, 1.0, 1.0), (1.0, 0.0, 0.0))

    def test_round_trip(self):
        """Test hsv_to_rgb(rgb_to_hsv(c)) reproduces c."""
        rng = np.random.default_rng(42)
        colors = rng.random((2000, 3))
        for color in colors:
            np.testing.assert_allclose(hsv_to_rgb(*rgb_to_hsv(*color)), color, atol=1e-12)


class TestArrayConversion:
    """Test vectorized conversions."""

    def test_matches_scalar(self):
        """Test array versions agree with the scalar functions."""
        rng = np.random.default_rng(42)
        colors = rng.random((100, 3))
        hsv = rgb_to_hsv_array(colors)
        for color, row in zip(colors, hsv):
            np.testing.assert_allclose(row, rgb_to_hsv(*color), atol=1e-12)

    def test_shape_preserved(self):
        """Test [..., 3] shapes are kept."""
        rng = np.random.default_rng(42)
        colors = rng.random((8, 5, 3))
        hsv = rgb_to_hsv_array(colors)
        assert hsv.shape == (8, 5, 3)
        np.testing.assert_allclose(hsv_to_rgb_array(hsv), colors, atol=1e-12)

    def test_bad_shape_raises(self):
        """Test arrays without a trailing axis of 3 are rejected."""
        with pytest.raises(ValueError, match="Expected"):
            rgb_to_hsv_array(np.zeros((10, 4)))


class TestHex:
    """Test hex helpers."""

    def test_to_hex(self):
        """Test formatting with rounding."""
        assert to_hex((1.0, 0.0, 0.5)) == "#ff0080"
        assert to_hex((0.0, 0.0, 0.0)) == "#000000"

    def test_to_hex_clamps(self):
        """Test out-of-range channels are clamped."""
        assert to_hex((1.5, -0.2, 1.0)) == "#ff00ff"

    def test_from_hex(self):
        """Test parsing with and without the leading #."""
        assert from_hex("#ff0000") == (1.0, 0.0, 0.0)
        assert from_hex("00ff00") == (0.0, 1.0, 0.0)

    def test_round_trip(self):
        """Test from_hex(to_hex(c)) reproduces 8-bit colors."""
        assert to_hex(from_hex("#3a7bd5")) == "#3a7bd5"

    @pytest.mark.parametrize("value", ["#fff", "#gggggg", "", "#12345678"])
    def test_invalid_hex_raises(self, value):
        """Test malformed strings are rejected."""
        with pytest.raises(ValueError, match="Expected #rrggbb"):
            from_hex(value)
