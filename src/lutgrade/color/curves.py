"""Tone curve evaluation and editing.

The bake always evaluates curves piecewise-linearly
(:func:`evaluate_curve`). The editor draws a smoothed Catmull-Rom spline
through the same control points (:func:`sample_spline`); both pass through
every control point exactly, so the preview and the baked LUT only differ
between points.

Editing functions never mutate: each returns a new :class:`Curve`.

Example:
    >>> curve = Curve.diagonal(5)
    >>> curve = move_point(curve, 2, 0.5, 0.65)   # lift midtones
    >>> evaluate_curve(curve, 0.5)
    0.65
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping

import numpy as np

from lutgrade.color.kernels import evaluate_curve_numba
from lutgrade.config.values import Curve, CurvePoint
from lutgrade.constants import (
    CURVE_MIDPOINT_PICK_RADIUS,
    CURVE_MIN_GAP,
    CURVE_PICK_RADIUS,
    CURVE_SPLINE_SAMPLES,
    CURVE_SPLINE_TENSION,
)

logger = logging.getLogger(__name__)

CurveLike = Curve | Iterable[CurvePoint | Mapping | Iterable[float]]


def _as_curve(curve: CurveLike) -> Curve:
    return curve if isinstance(curve, Curve) else Curve(curve)


def evaluate_curve(curve: CurveLike, x: float) -> float:
    """Evaluate a curve at ``x`` by linear interpolation.

    ``x`` is clamped to [0, 1]. The first segment whose x-range contains it
    is used. Outside the points' x-range the nearest endpoint's y is returned.

    :param curve: Curve (or points that form a valid curve)
    :param x: Input value
    :returns: Output value
    """
    return float(evaluate_curve_numba(_as_curve(curve).to_array(), float(x)))


# ============================================================================
# Display spline
# ============================================================================


def _catmull_rom(p0: float, p1: float, p2: float, p3: float, w: float, tension: float) -> float:
    t0 = tension * (p2 - p0)
    t1 = tension * (p3 - p1)
    c2 = -3.0 * p1 + 3.0 * p2 - 2.0 * t0 - t1
    c3 = 2.0 * p1 - 2.0 * p2 + t0 + t1
    return p1 + t0 * w + c2 * w * w + c3 * w * w * w


def spline_point(
    curve: CurveLike, t: float, tension: float = CURVE_SPLINE_TENSION
) -> tuple[float, float]:
    """Point on the editor's display spline at parameter ``t`` in [0, 1].

    Uniform Catmull-Rom through the control points; the missing outer
    neighbours are reflected through the endpoints. Control point ``i`` sits
    at ``t = i / (len(curve) - 1)``.

    :param curve: Curve to smooth
    :param t: Curve parameter
    :param tension: Tangent scale (0.5 = standard Catmull-Rom)
    :returns: (x, y)
    """
    pts = _as_curve(curve).points
    n = len(pts)
    t = min(1.0, max(0.0, float(t)))

    p = (n - 1) * t
    index = int(math.floor(p))
    weight = p - index
    if index >= n - 1:
        return pts[-1].x, pts[-1].y
    if weight == 0.0:
        return pts[index].x, pts[index].y

    p1 = pts[index]
    p2 = pts[index + 1]
    if index > 0:
        p0 = (pts[index - 1].x, pts[index - 1].y)
    else:
        p0 = (2.0 * pts[0].x - pts[1].x, 2.0 * pts[0].y - pts[1].y)
    if index + 2 < n:
        p3 = (pts[index + 2].x, pts[index + 2].y)
    else:
        p3 = (2.0 * pts[-1].x - pts[-2].x, 2.0 * pts[-1].y - pts[-2].y)

    x = _catmull_rom(p0[0], p1.x, p2.x, p3[0], weight, tension)
    y = _catmull_rom(p0[1], p1.y, p2.y, p3[1], weight, tension)
    return x, y


def sample_spline(
    curve: CurveLike,
    samples: int = CURVE_SPLINE_SAMPLES,
    tension: float = CURVE_SPLINE_TENSION,
) -> np.ndarray:
    """Sample the display spline at ``samples + 1`` evenly spaced parameters.

    :returns: Polyline [samples + 1, 2]
    """
    if samples < 1:
        raise ValueError(f"samples must be >= 1, got {samples}")
    curve = _as_curve(curve)
    return np.array(
        [spline_point(curve, i / samples, tension) for i in range(samples + 1)],
        dtype=np.float64,
    )


# ============================================================================
# Editing
# ============================================================================


def segment_midpoint(curve: CurveLike, index: int) -> tuple[float, float]:
    """Display-spline midpoint of segment ``index`` (between points index and index+1)."""
    curve = _as_curve(curve)
    if not 0 <= index < len(curve) - 1:
        raise IndexError(f"segment index {index} out of range for {len(curve)} points")
    return spline_point(curve, (index + 0.5) / (len(curve) - 1))


def insert_midpoint(curve: CurveLike, index: int) -> Curve:
    """Insert a new control point at the spline midpoint of segment ``index``.

    The new x is kept at least ``CURVE_MIN_GAP`` away from both neighbours.

    :raises ValueError: If the segment is too narrow to split
    """
    curve = _as_curve(curve)
    x, y = segment_midpoint(curve, index)
    left = curve[index].x + CURVE_MIN_GAP
    right = curve[index + 1].x - CURVE_MIN_GAP
    if left >= right:
        raise ValueError(f"segment {index} is too narrow to insert a point")

    point = CurvePoint(min(right, max(left, x)), min(1.0, max(0.0, y)))
    points = list(curve.points)
    points.insert(index + 1, point)
    logger.debug("[Curve] Inserted point %s at index %d", point, index + 1)
    return Curve(points)


def move_point(curve: CurveLike, index: int, x: float, y: float) -> Curve:
    """Move control point ``index`` to ``(x, y)``.

    ``y`` is clamped to [0, 1]; ``x`` is clamped between the neighbours
    (``CURVE_MIN_GAP`` apart) or to [0, 1] for the outer points, so the
    endpoints can be dragged inward.
    """
    curve = _as_curve(curve)
    n = len(curve)
    if not 0 <= index < n:
        raise IndexError(f"point index {index} out of range for {n} points")

    min_x = curve[index - 1].x + CURVE_MIN_GAP if index > 0 else 0.0
    max_x = curve[index + 1].x - CURVE_MIN_GAP if index < n - 1 else 1.0
    x = min(1.0, max(0.0, float(x)))
    x = min(max_x, max(min_x, x))
    y = min(1.0, max(0.0, float(y)))

    points = list(curve.points)
    points[index] = CurvePoint(x, y)
    return Curve(points)


def nearest_point(
    curve: CurveLike, x: float, y: float, radius: float = CURVE_PICK_RADIUS
) -> int | None:
    """Index of the control point closest to ``(x, y)``, or None if beyond ``radius``."""
    curve = _as_curve(curve)
    distances = [math.hypot(p.x - x, p.y - y) for p in curve.points]
    best = int(np.argmin(distances))
    return best if distances[best] < radius else None


def nearest_midpoint(
    curve: CurveLike, x: float, y: float, radius: float = CURVE_MIDPOINT_PICK_RADIUS
) -> int | None:
    """Segment whose spline midpoint is within ``radius`` of ``(x, y)``, or None.

    Segments are checked in order and the first hit wins.
    """
    curve = _as_curve(curve)
    for i in range(len(curve) - 1):
        mx, my = segment_midpoint(curve, i)
        if math.hypot(mx - x, my - y) < radius:
            return i
    return None
