"""
Color module - color-space math, curves, corrections and the grading pipeline.

Every function here is pure: inputs are immutable values and outputs are
new colors. The scalar helpers wrap the same Numba kernels the cube bake
runs, so they double as a reference for what a baked cell holds.

Example:
    >>> from lutgrade.color import grade
    >>> from lutgrade.config import GradingParameters
    >>> grade((0.5, 0.5, 0.5), GradingParameters(contrast=4.0))
    (0.5, 0.5, 0.5)
"""

from lutgrade.color.correction import (
    apply_correction,
    apply_corrections,
    match_strength,
    pack_corrections,
    preview_correction,
)
from lutgrade.color.curves import (
    evaluate_curve,
    insert_midpoint,
    move_point,
    nearest_midpoint,
    nearest_point,
    sample_spline,
    segment_midpoint,
    spline_point,
)
from lutgrade.color.grading import PackedParameters, grade, grade_array, pack_parameters
from lutgrade.color.space import (
    from_hex,
    hsv_to_rgb,
    hsv_to_rgb_array,
    rgb_to_hsv,
    rgb_to_hsv_array,
    to_hex,
)

__all__ = [
    # Color space
    "rgb_to_hsv",
    "hsv_to_rgb",
    "rgb_to_hsv_array",
    "hsv_to_rgb_array",
    "to_hex",
    "from_hex",
    # Curves
    "evaluate_curve",
    "spline_point",
    "sample_spline",
    "segment_midpoint",
    "insert_midpoint",
    "move_point",
    "nearest_point",
    "nearest_midpoint",
    # Corrections
    "match_strength",
    "apply_correction",
    "apply_corrections",
    "preview_correction",
    "pack_corrections",
    # Grading
    "grade",
    "grade_array",
    "pack_parameters",
    "PackedParameters",
]
