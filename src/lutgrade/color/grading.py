"""Grade single colors or color arrays through the full operator pipeline.

The pipeline runs in a fixed stage order: exposure, brightness, contrast,
clamp, HSV adjustments, cross-process, lift/gamma/gain, clamp, curves,
corrections, final clamp. Curves see post-grade values and corrections see
post-curve values; the order is part of the result.

:func:`pack_parameters` flattens a :class:`GradingParameters` value into
the contiguous float64 arrays the Numba kernels consume. The cube bake in
:mod:`lutgrade.lut.cube` shares it, so :func:`grade` and a baked cell
always agree.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

import numpy as np

from lutgrade.color.correction import pack_corrections
from lutgrade.color.kernels import (
    N_PARAMS,
    P_BRIGHTNESS,
    P_CONTRAST,
    P_CROSS_PROCESS,
    P_EXPOSURE,
    P_GAIN,
    P_GAMMA,
    P_HUE,
    P_LIFT,
    P_SATURATION,
    P_VALUE,
    P_VIBRANCY,
    grade_color_numba,
    grade_colors_numba,
)
from lutgrade.config.values import GradingParameters
from lutgrade.types import RGB, ColorLike

logger = logging.getLogger(__name__)


class PackedParameters(NamedTuple):
    """Kernel-ready view of one :class:`GradingParameters` value."""

    params: np.ndarray  # [17]
    curve_r: np.ndarray  # [K, 2]
    curve_g: np.ndarray
    curve_b: np.ndarray
    corrections: np.ndarray  # [M, 8], enabled only


def pack_parameters(params: GradingParameters) -> PackedParameters:
    """Flatten grading parameters for the kernels.

    :param params: Grading parameters
    :returns: PackedParameters with contiguous float64 arrays
    """
    packed = np.zeros(N_PARAMS, dtype=np.float64)
    packed[P_EXPOSURE] = params.exposure
    packed[P_BRIGHTNESS] = params.brightness
    packed[P_CONTRAST] = params.contrast
    packed[P_HUE] = params.hue
    packed[P_SATURATION] = params.saturation
    packed[P_VALUE] = params.value
    packed[P_VIBRANCY] = params.vibrancy
    packed[P_CROSS_PROCESS] = params.cross_process
    for base, wheel in ((P_LIFT, params.lift), (P_GAMMA, params.gamma), (P_GAIN, params.gain)):
        packed[base] = wheel.offset.x
        packed[base + 1] = wheel.offset.y
        packed[base + 2] = wheel.strength

    return PackedParameters(
        params=packed,
        curve_r=params.red_curve.to_array(),
        curve_g=params.green_curve.to_array(),
        curve_b=params.blue_curve.to_array(),
        corrections=pack_corrections(params.corrections),
    )


def grade(color: ColorLike, params: GradingParameters) -> RGB:
    """Run one color through every grading stage.

    :param color: Input (r, g, b), each in [0, 1]
    :param params: Grading parameters
    :returns: Graded (r, g, b), each in [0, 1]

    Example:
        >>> grade((1.0, 1.0, 1.0), GradingParameters(exposure=1.0))
        (1.0, 1.0, 1.0)
    """
    r, g, b = color
    packed = pack_parameters(params)
    out = grade_color_numba(float(r), float(g), float(b), *packed)
    return float(out[0]), float(out[1]), float(out[2])


def grade_array(colors: np.ndarray, params: GradingParameters) -> np.ndarray:
    """Grade an ``[..., 3]`` array of colors directly (no cube quantization).

    :param colors: Colors in [0, 1]
    :param params: Grading parameters
    :returns: Graded float64 array with the same shape
    """
    arr = np.asarray(colors, dtype=np.float64)
    if arr.ndim == 0 or arr.shape[-1] != 3:
        raise ValueError(f"Expected [..., 3] array, got shape {arr.shape}")
    flat = np.ascontiguousarray(arr.reshape(-1, 3))
    out = np.empty_like(flat)
    logger.debug("[Grade] Grading %d colors", flat.shape[0])
    grade_colors_numba(flat, *pack_parameters(params), out)
    return out.reshape(arr.shape)
