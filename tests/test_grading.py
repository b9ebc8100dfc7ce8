"""Tests for the grading operator pipeline."""

import numpy as np
import pytest

from lutgrade.color.grading import grade, grade_array, pack_parameters
from lutgrade.config.values import (
    Adjustment,
    ColorCorrection,
    Curve,
    GradingParameters,
    Offset2D,
    ToneWheel,
)


@pytest.fixture
def colors():
    """Random colors in [0, 1]."""
    rng = np.random.default_rng(42)
    return rng.random((500, 3))


class TestIdentity:
    """Test neutral parameters leave colors unchanged."""

    def test_identity_parameters(self, colors):
        """Test identity parameters reproduce the input."""
        params = GradingParameters.identity()
        np.testing.assert_allclose(grade_array(colors, params), colors, atol=1e-9)

    def test_diagonal_curves_are_identity(self, colors):
        """Test the 5-point diagonal behaves like the 2-point identity."""
        diagonal = Curve.diagonal(5)
        params = GradingParameters(
            red_curve=diagonal, green_curve=diagonal, blue_curve=diagonal
        )
        np.testing.assert_allclose(grade_array(colors, params), colors, atol=1e-9)


class TestStages:
    """Test individual stages through the full pipeline."""

    def test_exposure_saturates_white(self):
        """Test doubling white clamps back to white."""
        assert grade((1.0, 1.0, 1.0), GradingParameters(exposure=1.0)) == pytest.approx(
            (1.0, 1.0, 1.0)
        )

    def test_exposure_doubles(self):
        """Test one stop doubles a dark color."""
        result = grade((0.1, 0.2, 0.3), GradingParameters(exposure=1.0))
        np.testing.assert_allclose(result, (0.2, 0.4, 0.6), atol=1e-9)

    def test_brightness(self):
        """Test brightness multiplies every channel."""
        result = grade((0.2, 0.4, 0.6), GradingParameters(brightness=1.5))
        np.testing.assert_allclose(result, (0.3, 0.6, 0.9), atol=1e-9)

    @pytest.mark.parametrize("contrast", [-2.0, 0.0, 1.7, 4.0])
    def test_contrast_midpoint_fixed(self, contrast):
        """Test mid-gray is a fixed point of contrast."""
        result = grade((0.5, 0.5, 0.5), GradingParameters(contrast=contrast))
        np.testing.assert_allclose(result, (0.5, 0.5, 0.5), atol=1e-12)

    def test_negative_contrast_inverts(self):
        """Test contrast -1 mirrors around mid-gray."""
        result = grade((0.2, 0.2, 0.2), GradingParameters(contrast=-1.0))
        np.testing.assert_allclose(result, (0.8, 0.8, 0.8), atol=1e-9)

    def test_hue_rotation(self):
        """Test a 180 degree hue rotation maps red to cyan."""
        result = grade((1.0, 0.0, 0.0), GradingParameters(hue=180.0))
        np.testing.assert_allclose(result, (0.0, 1.0, 1.0), atol=1e-9)

    def test_negative_hue_wraps(self):
        """Test negative rotations wrap to a non-negative hue."""
        result = grade((1.0, 0.0, 0.0), GradingParameters(hue=-120.0))
        np.testing.assert_allclose(result, (0.0, 0.0, 1.0), atol=1e-9)

    def test_zero_saturation_is_gray(self):
        """Test saturation 0 removes all color."""
        result = grade((0.8, 0.2, 0.4), GradingParameters(saturation=0.0))
        np.testing.assert_allclose(result, (0.8, 0.8, 0.8), atol=1e-9)

    def test_value_scales_max_channel(self):
        """Test value scales the HSV value."""
        result = grade((0.8, 0.4, 0.2), GradingParameters(value=0.5))
        np.testing.assert_allclose(result, (0.4, 0.2, 0.1), atol=1e-9)

    def test_vibrancy_boosts_muted_colors(self):
        """Test vibrancy 1 pushes saturation to 1."""
        result = grade((0.6, 0.3, 0.3), GradingParameters(vibrancy=1.0))
        np.testing.assert_allclose(result, (0.6, 0.0, 0.0), atol=1e-9)

    def test_vibrancy_protects_saturated_colors(self):
        """Test vibrancy adds less saturation to already saturated colors."""
        params = GradingParameters(vibrancy=0.5)
        muted = grade((0.6, 0.5, 0.5), params)
        vivid = grade((0.6, 0.1, 0.1), params)
        # muted: s 0.167 -> 0.583, vivid: s 0.833 -> 0.917
        assert (0.5 - muted[1]) > (0.1 - vivid[1])

    def test_cross_process_on_gray(self):
        """Test cross-process on mid-gray only lifts green."""
        result = grade((0.5, 0.5, 0.5), GradingParameters(cross_process=1.0))
        np.testing.assert_allclose(result, (0.5, 0.7, 0.5), atol=1e-9)

    def test_lift_affects_shadows(self):
        """Test the lift wheel acts fully on black."""
        params = GradingParameters(lift=ToneWheel(Offset2D(1.0, 0.0)))
        np.testing.assert_allclose(grade((0.0, 0.0, 0.0), params), (0.3, 0.0, 0.0), atol=1e-9)

    def test_lift_ignores_white(self):
        """Test the lift wheel leaves white untouched."""
        params = GradingParameters(lift=ToneWheel(Offset2D(-1.0, -1.0)))
        np.testing.assert_allclose(grade((1.0, 1.0, 1.0), params), (1.0, 1.0, 1.0), atol=1e-9)

    def test_gain_affects_highlights(self):
        """Test the gain wheel acts fully on white."""
        params = GradingParameters(gain=ToneWheel(Offset2D(0.0, 1.0)))
        np.testing.assert_allclose(grade((1.0, 1.0, 1.0), params), (1.0, 1.0, 0.85), atol=1e-9)

    def test_gamma_affects_midtones(self):
        """Test the gamma wheel peaks at mid-gray."""
        params = GradingParameters(gamma=ToneWheel(Offset2D(0.5, 0.0), strength=0.5))
        # bias r = 0.5 * 0.3 * 0.5, b = -0.5 * 0.15 * 0.5, weight sin(pi / 2) = 1
        np.testing.assert_allclose(
            grade((0.5, 0.5, 0.5), params), (0.575, 0.5, 0.4625), atol=1e-9
        )

    def test_wheel_strength_zero_is_neutral(self, colors):
        """Test a wheel with strength 0 has no effect."""
        params = GradingParameters(lift=ToneWheel(Offset2D(1.0, 1.0), strength=0.0))
        np.testing.assert_allclose(grade_array(colors, params), colors, atol=1e-9)

    def test_curves_after_grade(self):
        """Test curves see the post-grade value."""
        # exposure doubles 0.25 to 0.5, which the curve maps to 0.9
        curve = Curve([(0.0, 0.0), (0.5, 0.9), (1.0, 1.0)])
        params = GradingParameters(exposure=1.0, red_curve=curve)
        result = grade((0.25, 0.0, 0.0), params)
        assert result[0] == pytest.approx(0.9)

    def test_curves_per_channel(self):
        """Test each channel uses its own curve."""
        params = GradingParameters(
            red_curve=Curve([(0.0, 0.25), (1.0, 0.25)]),
            blue_curve=Curve([(0.0, 1.0), (1.0, 0.0)]),
        )
        np.testing.assert_allclose(grade((0.8, 0.6, 0.1), params), (0.25, 0.6, 0.9), atol=1e-9)

    def test_corrections_after_curves(self):
        """Test corrections see post-curve colors."""
        # the curve turns red into black before the red correction runs
        params = GradingParameters(
            red_curve=Curve([(0.0, 0.0), (1.0, 0.0)]),
            corrections=(
                ColorCorrection.create(target=(1, 0, 0), adjustment=Adjustment(hue_shift=180)),
            ),
        )
        np.testing.assert_allclose(grade((1.0, 0.0, 0.0), params), (0.0, 0.0, 0.0), atol=1e-12)

    def test_correction_scenario(self):
        """Test red with a 180 degree correction becomes cyan."""
        params = GradingParameters(
            corrections=(
                ColorCorrection.create(
                    target=(1, 0, 0), tolerance=0.3, adjustment=Adjustment(hue_shift=180)
                ),
            )
        )
        np.testing.assert_allclose(grade((1.0, 0.0, 0.0), params), (0.0, 1.0, 1.0), atol=1e-9)

    def test_disabled_correction_skipped(self):
        """Test disabled corrections do not run."""
        correction = ColorCorrection.create(
            target=(1, 0, 0), adjustment=Adjustment(hue_shift=180), enabled=False
        )
        params = GradingParameters(corrections=(correction,))
        np.testing.assert_allclose(grade((1.0, 0.0, 0.0), params), (1.0, 0.0, 0.0), atol=1e-9)


class TestOutputRange:
    """Test every output is clamped to [0, 1]."""

    def test_extreme_parameters(self, colors):
        """Test extreme settings still produce valid colors."""
        params = GradingParameters(
            exposure=2.0,
            brightness=1.75,
            contrast=4.0,
            hue=90.0,
            saturation=2.0,
            value=2.0,
            vibrancy=1.0,
            cross_process=1.0,
            lift=ToneWheel(Offset2D(-1.0, 1.0)),
            gamma=ToneWheel(Offset2D(1.0, 1.0)),
            gain=ToneWheel(Offset2D(-1.0, -1.0)),
            corrections=(
                ColorCorrection.create(
                    target=(0.5, 0.2, 0.1), adjustment=Adjustment(brightness_shift=1.0)
                ),
            ),
        )
        result = grade_array(colors, params)
        assert result.min() >= 0.0
        assert result.max() <= 1.0

    def test_grade_array_matches_grade(self, colors):
        """Test the vectorized grade agrees with the scalar one."""
        params = GradingParameters(exposure=0.3, hue=25.0, cross_process=0.4)
        batch = grade_array(colors[:50], params)
        for color, row in zip(colors[:50], batch):
            np.testing.assert_allclose(row, grade(color, params), atol=1e-12)

    def test_grade_array_shape(self):
        """Test [..., 3] shapes are preserved."""
        image = np.full((4, 6, 3), 0.5)
        assert grade_array(image, GradingParameters()).shape == (4, 6, 3)

    def test_grade_array_bad_shape(self):
        """Test arrays without a trailing axis of 3 are rejected."""
        with pytest.raises(ValueError, match="Expected"):
            grade_array(np.zeros((5, 2)), GradingParameters())


class TestPackParameters:
    """Test kernel packing."""

    def test_layout(self):
        """Test scalars and wheels land in their slots."""
        params = GradingParameters(
            exposure=0.5,
            cross_process=0.25,
            lift=ToneWheel(Offset2D(0.1, 0.2), 0.3),
            gain=ToneWheel(Offset2D(-0.4, 0.5), 0.6),
        )
        packed = pack_parameters(params)
        assert packed.params.shape == (17,)
        assert packed.params[0] == 0.5
        assert packed.params[7] == 0.25
        np.testing.assert_array_equal(packed.params[8:11], [0.1, 0.2, 0.3])
        np.testing.assert_array_equal(packed.params[11:14], [0.0, 0.0, 1.0])
        np.testing.assert_array_equal(packed.params[14:17], [-0.4, 0.5, 0.6])

    def test_curves_packed(self):
        """Test curves are packed as contiguous [K, 2] arrays."""
        packed = pack_parameters(GradingParameters(green_curve=Curve.diagonal(5)))
        assert packed.curve_r.shape == (2, 2)
        assert packed.curve_g.shape == (5, 2)
        assert packed.curve_g.flags["C_CONTIGUOUS"]
        assert packed.corrections.shape == (0, 8)
