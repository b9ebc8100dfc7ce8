"""Grading operator configuration.

This module defines the standardized parameter specifications for the
global grading operators and the targeted color corrections. The ranges
mirror the controls exposed by the grading editor.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from lutgrade.config.operations import OperationSpec


@dataclass(frozen=True)
class GradingConfig:
    """Configuration for all global grading operators."""

    exposure: OperationSpec = OperationSpec(
        name="exposure",
        min_value=-2.0,
        max_value=2.0,
        default=0.0,
        neutral=0.0,
        description="Exposure in stops: multiplies by 2^exposure",
    )

    brightness: OperationSpec = OperationSpec(
        name="brightness",
        min_value=0.25,
        max_value=1.75,
        default=1.0,
        neutral=1.0,
        description="Brightness multiplier: 1.0=no change",
    )

    contrast: OperationSpec = OperationSpec(
        name="contrast",
        min_value=-2.0,
        max_value=4.0,
        default=1.0,
        neutral=1.0,
        description="Contrast around 0.5: 1.0=no change, negative inverts",
    )

    hue: OperationSpec = OperationSpec(
        name="hue",
        min_value=-180.0,
        max_value=180.0,
        default=0.0,
        neutral=0.0,
        description="Hue rotation in degrees",
    )

    saturation: OperationSpec = OperationSpec(
        name="saturation",
        min_value=0.0,
        max_value=2.0,
        default=1.0,
        neutral=1.0,
        description="Saturation multiplier: 0=grayscale, 1.0=no change",
    )

    value: OperationSpec = OperationSpec(
        name="value",
        min_value=0.0,
        max_value=2.0,
        default=1.0,
        neutral=1.0,
        description="HSV value multiplier: 1.0=no change",
    )

    vibrancy: OperationSpec = OperationSpec(
        name="vibrancy",
        min_value=-1.0,
        max_value=1.0,
        default=0.0,
        neutral=0.0,
        description="Saturation boost weighted toward muted colors: 0=no change",
    )

    cross_process: OperationSpec = OperationSpec(
        name="cross_process",
        min_value=0.0,
        max_value=1.0,
        default=0.0,
        neutral=0.0,
        description="Film cross-process bias: 0=off, 1=full",
    )

    offset: OperationSpec = OperationSpec(
        name="offset",
        min_value=-1.0,
        max_value=1.0,
        default=0.0,
        neutral=0.0,
        description="Lift/gamma/gain wheel offset per axis",
    )

    strength: OperationSpec = OperationSpec(
        name="strength",
        min_value=0.0,
        max_value=1.0,
        default=1.0,
        neutral=0.0,
        description="Lift/gamma/gain wheel strength",
    )

    def get_spec(self, name: str) -> OperationSpec:
        """Get operation spec by name.

        :param name: Operation name
        :return: OperationSpec for the operation
        :raises AttributeError: If operation not found
        """
        return getattr(self, name)

    def get_all_specs(self) -> dict[str, OperationSpec]:
        """Get all operation specs as a dictionary.

        :return: Dictionary mapping operation names to specs
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class CorrectionConfig:
    """Configuration for targeted color corrections."""

    tolerance: OperationSpec = OperationSpec(
        name="tolerance",
        min_value=0.05,
        max_value=1.0,
        default=0.3,
        neutral=0.3,
        description="Maximum HSV distance with a nonzero effect",
    )

    hue_shift: OperationSpec = OperationSpec(
        name="hue_shift",
        min_value=-180.0,
        max_value=180.0,
        default=0.0,
        neutral=0.0,
        description="Hue rotation of matched colors in degrees",
    )

    saturation_shift: OperationSpec = OperationSpec(
        name="saturation_shift",
        min_value=-1.0,
        max_value=1.0,
        default=0.0,
        neutral=0.0,
        description="Saturation offset scaled by match strength",
    )

    value_shift: OperationSpec = OperationSpec(
        name="value_shift",
        min_value=-1.0,
        max_value=1.0,
        default=0.0,
        neutral=0.0,
        description="HSV value offset scaled by match strength",
    )

    brightness_shift: OperationSpec = OperationSpec(
        name="brightness_shift",
        min_value=-1.0,
        max_value=1.0,
        default=0.0,
        neutral=0.0,
        description="RGB gain offset scaled by match strength",
    )

    def get_spec(self, name: str) -> OperationSpec:
        """Get operation spec by name."""
        return getattr(self, name)

    def get_all_specs(self) -> dict[str, OperationSpec]:
        """Get all operation specs as a dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
