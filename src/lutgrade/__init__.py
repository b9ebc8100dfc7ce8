"""
lutgrade - Parametric color grading baked into 3D lookup tables

Turns a set of grading operators (exposure, contrast, HSV, vibrancy,
cross-process, lift/gamma/gain wheels, per-channel tone curves and targeted
hue-range corrections) into a 16x16x16 LUT cube, encoded as a 256x16 RGBA8
buffer, and applies that cube to RGBA8 images by nearest-cell lookup.

Features:
- Numba-compiled grading kernels shared by the cube bake and single-color grade
- Parallel cube bake and image apply (prange over independent slices/rows)
- Immutable, validated parameter values with dict conversion and presets
- Curve editor operations and a Catmull-Rom display spline
- Fluent Grade builder that caches the most recent bake

Example - Functional API:
    >>> from lutgrade import GradingParameters, ToneWheel, Offset2D, apply_lut, bake
    >>>
    >>> params = GradingParameters(
    ...     exposure=0.3,
    ...     contrast=1.2,
    ...     lift=ToneWheel(Offset2D(-0.3, 0.1)),
    ... )
    >>> cube = bake(params)              # LUTCube, buffer [16, 256, 4] uint8
    >>> graded = apply_lut(image, cube)  # image [H, W, 4] uint8, alpha kept

Example - Builder:
    >>> from lutgrade import Grade
    >>>
    >>> grade = Grade().exposure(0.3).saturation(1.2).correct((1, 0, 0), hue_shift=30)
    >>> graded = grade(image)
"""

__version__ = "0.1.0"

from lutgrade.color import (
    apply_correction,
    apply_corrections,
    evaluate_curve,
    from_hex,
    grade,
    grade_array,
    hsv_to_rgb,
    insert_midpoint,
    match_strength,
    move_point,
    nearest_point,
    preview_correction,
    rgb_to_hsv,
    sample_spline,
    spline_point,
    to_hex,
)
from lutgrade.config import (
    BLEACH_BYPASS,
    CONFIG,
    CROSS_PROCESS,
    FADED_FILM,
    NEUTRAL,
    TEAL_ORANGE,
    WARM_HIGHLIGHTS,
    Adjustment,
    ColorCorrection,
    Curve,
    CurvePoint,
    GradingParameters,
    Offset2D,
    ToneWheel,
    get_preset,
    params_from_dict,
    params_to_dict,
)
from lutgrade.constants import CUBE_SIZE
from lutgrade.lut import LUTCube, apply_lut, bake
from lutgrade.pipeline import Grade

__all__ = [
    "__version__",
    # Core
    "bake",
    "apply_lut",
    "grade",
    "grade_array",
    "LUTCube",
    "CUBE_SIZE",
    # Values
    "GradingParameters",
    "Curve",
    "CurvePoint",
    "Offset2D",
    "ToneWheel",
    "Adjustment",
    "ColorCorrection",
    # Color math
    "rgb_to_hsv",
    "hsv_to_rgb",
    "to_hex",
    "from_hex",
    "evaluate_curve",
    "match_strength",
    "apply_correction",
    "apply_corrections",
    "preview_correction",
    # Curve editing
    "spline_point",
    "sample_spline",
    "insert_midpoint",
    "move_point",
    "nearest_point",
    # Builder
    "Grade",
    # Config and presets
    "CONFIG",
    "NEUTRAL",
    "CROSS_PROCESS",
    "FADED_FILM",
    "TEAL_ORANGE",
    "BLEACH_BYPASS",
    "WARM_HIGHLIGHTS",
    "get_preset",
    "params_to_dict",
    "params_from_dict",
]
