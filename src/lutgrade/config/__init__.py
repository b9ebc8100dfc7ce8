"""Configuration and value types for lutgrade.

This module provides the parameter specifications (ranges, defaults and
neutral values) for every grading operator, the immutable values that
describe one grade, and a small preset library.

Usage:
    from lutgrade.config import CONFIG
    CONFIG.grading.contrast.neutral  # 1.0
    CONFIG.correction.tolerance.default  # 0.3

    from lutgrade.config import GradingParameters, Curve
    params = GradingParameters(exposure=0.5, red_curve=Curve.diagonal(5))
"""

from lutgrade.config.config import CONFIG, CORRECTION_CONFIG, GRADING_CONFIG, LutgradeConfig
from lutgrade.config.grading import CorrectionConfig, GradingConfig
from lutgrade.config.operations import OperationSpec
from lutgrade.config.presets import (
    BLEACH_BYPASS,
    CROSS_PROCESS,
    FADED_FILM,
    NEUTRAL,
    PRESETS,
    TEAL_ORANGE,
    WARM_HIGHLIGHTS,
    get_preset,
    params_from_dict,
    params_to_dict,
)
from lutgrade.config.values import (
    Adjustment,
    ColorCorrection,
    Curve,
    CurvePoint,
    GradingParameters,
    Offset2D,
    ToneWheel,
)

__all__ = [
    # Specifications
    "OperationSpec",
    "GradingConfig",
    "CorrectionConfig",
    "LutgradeConfig",
    "CONFIG",
    "GRADING_CONFIG",
    "CORRECTION_CONFIG",
    # Values
    "CurvePoint",
    "Curve",
    "Offset2D",
    "ToneWheel",
    "Adjustment",
    "ColorCorrection",
    "GradingParameters",
    # Presets
    "NEUTRAL",
    "CROSS_PROCESS",
    "FADED_FILM",
    "TEAL_ORANGE",
    "BLEACH_BYPASS",
    "WARM_HIGHLIGHTS",
    "PRESETS",
    "get_preset",
    "params_to_dict",
    "params_from_dict",
]
