"""Shared constants for lutgrade.

Cube resolution, luminance weights and the fixed factors used by the
grading operators and the curve editor.
"""

# LUT cube resolution (cells per axis)
CUBE_SIZE = 16

# Rec. 601 luma weights
LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114

# Split-tone wheel bias factors (red/green push, inverse blue push)
WHEEL_RG_FACTOR = 0.3
WHEEL_B_FACTOR = 0.15

# Cross-process channel factors
CROSS_RED_FACTOR = 0.3
CROSS_GREEN_PIVOT = 0.3
CROSS_GREEN_SLOPE = 0.2
CROSS_BLUE_FACTOR = 0.3

# Curve editor
CURVE_MIN_GAP = 0.001
CURVE_PICK_RADIUS = 0.10
CURVE_MIDPOINT_PICK_RADIUS = 0.06
CURVE_SPLINE_TENSION = 0.5
CURVE_SPLINE_SAMPLES = 100

# Color wheel: handle is drawn at 0.6 * offset, dragging is bounded by radius 0.7
WHEEL_HANDLE_SCALE = 0.6
WHEEL_DRAG_RADIUS = 0.7

# Color corrections
DEFAULT_TOLERANCE = 0.3
DEFAULT_TARGET = (0.5, 0.5, 0.5)
