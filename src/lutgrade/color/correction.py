"""Targeted hue-range color corrections.

A :class:`ColorCorrection` recolors pixels near its target color. How much
a pixel is affected is given by :func:`match_strength`: 1 at the target,
falling smoothly to 0 at the tolerance boundary.

Example:
    >>> red = ColorCorrection.create(target=(1, 0, 0), tolerance=0.3,
    ...                              adjustment=Adjustment(hue_shift=180))
    >>> apply_correction((1.0, 0.0, 0.0), red)
    (0.0, 1.0, 1.0)
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from lutgrade.color.kernels import (
    N_CORRECTION_FIELDS,
    apply_correction_numba,
    apply_corrections_numba,
    match_strength_numba,
)
from lutgrade.config.values import ColorCorrection
from lutgrade.types import RGB, ColorLike


def _triple(color: ColorLike) -> RGB:
    r, g, b = color
    return float(r), float(g), float(b)


def match_strength(color: ColorLike, target: ColorLike, tolerance: float) -> float:
    """How strongly a correction aimed at ``target`` affects ``color``.

    Distance is measured in HSV with hue counted circularly and weighted
    double, normalized so the worst case is 1.

    :param color: Color to test
    :param target: Correction target
    :param tolerance: Distance at which the effect reaches 0
    :returns: Strength in [0, 1]
    """
    r, g, b = _triple(color)
    tr, tg, tb = _triple(target)
    return float(match_strength_numba(r, g, b, tr, tg, tb, float(tolerance)))


def pack_correction(correction: ColorCorrection) -> np.ndarray:
    """Pack one correction into the kernels' ``[8]`` row layout."""
    a = correction.adjustment
    return np.array(
        [
            *correction.target,
            correction.tolerance,
            a.hue_shift,
            a.saturation_shift,
            a.value_shift,
            a.brightness_shift,
        ],
        dtype=np.float64,
    )


def pack_corrections(corrections: Iterable[ColorCorrection]) -> np.ndarray:
    """Pack enabled corrections, in order, into a ``[M, 8]`` array.

    Disabled corrections are dropped here so the kernels never see them.
    """
    rows = [pack_correction(c) for c in corrections if c.enabled]
    if not rows:
        return np.zeros((0, N_CORRECTION_FIELDS), dtype=np.float64)
    return np.ascontiguousarray(np.stack(rows))


def apply_correction(color: ColorLike, correction: ColorCorrection) -> RGB:
    """Apply a single correction to a color.

    A disabled correction, or a color outside the tolerance, passes through
    unchanged.

    :returns: Corrected (r, g, b)
    """
    r, g, b = _triple(color)
    if not correction.enabled:
        return r, g, b
    r, g, b = apply_correction_numba(r, g, b, pack_correction(correction))
    return float(r), float(g), float(b)


def apply_corrections(color: ColorLike, corrections: Iterable[ColorCorrection]) -> RGB:
    """Apply corrections in list order; each sees the previous one's output."""
    r, g, b = apply_corrections_numba(*_triple(color), pack_corrections(corrections))
    return float(r), float(g), float(b)


def preview_correction(correction: ColorCorrection) -> RGB:
    """Color the correction maps its own target to (the full-strength result).

    Used for the swatch shown next to a correction; the enabled flag is
    ignored so a disabled correction still previews what it would do.
    """
    r, g, b = correction.target
    out = apply_correction_numba(r, g, b, pack_correction(correction))
    return float(out[0]), float(out[1]), float(out[2])
