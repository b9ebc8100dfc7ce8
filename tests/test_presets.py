"""Tests for the preset library and dict conversion."""

import json

import numpy as np
import pytest

from lutgrade.config.presets import (
    NEUTRAL,
    PRESETS,
    TEAL_ORANGE,
    get_preset,
    params_from_dict,
    params_to_dict,
)
from lutgrade.config.values import (
    Adjustment,
    ColorCorrection,
    Curve,
    GradingParameters,
    Offset2D,
    ToneWheel,
)
from lutgrade.lut import LUTCube, bake


@pytest.fixture
def full_params():
    """Parameters touching every field."""
    return GradingParameters(
        exposure=0.25,
        brightness=1.1,
        contrast=1.3,
        hue=15.0,
        saturation=0.9,
        value=1.05,
        vibrancy=0.2,
        cross_process=0.3,
        lift=ToneWheel(Offset2D(-0.2, 0.1), 0.7),
        gamma=ToneWheel(Offset2D(0.05, 0.0), 0.5),
        gain=ToneWheel(Offset2D(0.3, 0.2), 0.9),
        red_curve=Curve([(0.0, 0.05), (0.5, 0.55), (1.0, 1.0)]),
        green_curve=Curve.diagonal(5),
        corrections=(
            ColorCorrection.create(
                target=(0.9, 0.6, 0.4),
                tolerance=0.2,
                adjustment=Adjustment(saturation_shift=-0.3, brightness_shift=0.1),
            ),
        ),
    )


class TestGetPreset:
    """Test preset lookup."""

    def test_lookup(self):
        assert get_preset("teal_orange") is TEAL_ORANGE

    def test_case_insensitive(self):
        assert get_preset("Neutral") is NEUTRAL

    def test_unknown_preset(self):
        """Test the error lists available presets."""
        with pytest.raises(KeyError, match="Available: neutral"):
            get_preset("sepia")

    def test_neutral_is_neutral(self):
        assert NEUTRAL.is_neutral()

    @pytest.mark.parametrize("name", [n for n in PRESETS if n != "neutral"])
    def test_presets_change_the_image(self, name):
        """Test every non-neutral preset bakes a non-identity cube."""
        preset = get_preset(name)
        assert not preset.is_neutral()
        cube = bake(preset)
        assert cube != LUTCube.identity()
        assert np.all(cube.buffer[..., 3] == 255)


class TestDictConversion:
    """Test params_to_dict / params_from_dict."""

    def test_round_trip(self, full_params):
        assert params_from_dict(params_to_dict(full_params)) == full_params

    def test_json_compatible(self, full_params):
        """Test the dict survives a JSON round trip."""
        d = json.loads(json.dumps(params_to_dict(full_params)))
        assert params_from_dict(d) == full_params

    def test_shape(self, full_params):
        d = params_to_dict(full_params)
        assert d["exposure"] == 0.25
        assert d["lift"] == {"offset": {"x": -0.2, "y": 0.1}, "strength": 0.7}
        assert d["red_curve"][1] == {"x": 0.5, "y": 0.55}
        assert d["corrections"][0]["tolerance"] == 0.2

    def test_missing_keys_use_defaults(self):
        params = params_from_dict({"contrast": 1.5})
        assert params == GradingParameters(contrast=1.5)

    def test_partial_wheel(self):
        """Test a wheel dict without strength defaults to 1."""
        params = params_from_dict({"gain": {"offset": {"x": 0.2}}})
        assert params.gain == ToneWheel(Offset2D(0.2, 0.0), 1.0)

    def test_unknown_keys_ignored(self):
        params = params_from_dict({"exposure": 0.1, "grain": 0.5, "version": 2})
        assert params == GradingParameters(exposure=0.1)

    def test_invalid_values_raise(self):
        with pytest.raises(ValueError, match="strictly increasing"):
            params_from_dict({"red_curve": [{"x": 0.5, "y": 0}, {"x": 0.2, "y": 1}]})
