"""Numba-optimized kernels for color grading.

Provides JIT-compiled scalar kernels for every grading stage plus the two
parallel drivers: the cube bake and the image apply. Every driver writes
only its own output cell or pixel, so ``prange`` partitioning never changes
the result.

Packed inputs (built by :func:`lutgrade.color.grading.pack_parameters`):

- ``params``: float64 ``[17]`` -- the eight global scalars followed by
  (x, y, strength) for the lift, gamma and gain wheels
- ``curve_*``: float64 ``[K, 2]`` control points, x strictly increasing
- ``corrections``: float64 ``[M, 8]`` enabled corrections in list order:
  target r, g, b, tolerance, hue shift (degrees), saturation shift,
  value shift, brightness shift
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

from lutgrade.constants import (
    CROSS_BLUE_FACTOR,
    CROSS_GREEN_PIVOT,
    CROSS_GREEN_SLOPE,
    CROSS_RED_FACTOR,
    LUMA_B,
    LUMA_G,
    LUMA_R,
    WHEEL_B_FACTOR,
    WHEEL_RG_FACTOR,
)

# =============================================================================
# Packed layout
# =============================================================================

P_EXPOSURE = 0
P_BRIGHTNESS = 1
P_CONTRAST = 2
P_HUE = 3
P_SATURATION = 4
P_VALUE = 5
P_VIBRANCY = 6
P_CROSS_PROCESS = 7
P_LIFT = 8  # x, y, strength
P_GAMMA = 11
P_GAIN = 14
N_PARAMS = 17

C_TARGET = 0  # r, g, b
C_TOLERANCE = 3
C_HUE_SHIFT = 4
C_SATURATION_SHIFT = 5
C_VALUE_SHIFT = 6
C_BRIGHTNESS_SHIFT = 7
N_CORRECTION_FIELDS = 8


# =============================================================================
# Scalar helpers
# =============================================================================


@njit(cache=True, nogil=True)
def clamp01(x: float) -> float:
    if x < 0.0:
        return 0.0
    if x > 1.0:
        return 1.0
    return x


@njit(cache=True, nogil=True)
def luminance(r: float, g: float, b: float) -> float:
    return LUMA_R * r + LUMA_G * g + LUMA_B * b


@njit(cache=True, nogil=True)
def wrap_hue(h: float) -> float:
    """Reduce a hue to [0, 1)."""
    h = h % 1.0
    if h < 0.0:
        h += 1.0
    # -1e-17 % 1.0 rounds to exactly 1.0
    if h >= 1.0:
        h = 0.0
    return h


@njit(cache=True, nogil=True)
def rgb_to_hsv_numba(r: float, g: float, b: float) -> tuple[float, float, float]:
    """RGB in [0, 1] to HSV with hue in [0, 1).

    :param r: Red
    :param g: Green
    :param b: Blue
    :returns: (h, s, v)
    """
    max_c = max(r, max(g, b))
    min_c = min(r, min(g, b))
    delta = max_c - min_c

    h = 0.0
    s = 0.0 if max_c == 0.0 else delta / max_c
    v = max_c

    if delta != 0.0:
        if max_c == r:
            h = (g - b) / delta
            if g < b:
                h += 6.0
            h /= 6.0
        elif max_c == g:
            h = ((b - r) / delta + 2.0) / 6.0
        else:
            h = ((r - g) / delta + 4.0) / 6.0

    return h, s, v


@njit(cache=True, nogil=True)
def hsv_to_rgb_numba(h: float, s: float, v: float) -> tuple[float, float, float]:
    """HSV to RGB using the six-sector formulation.

    :param h: Hue in [0, 1]
    :param s: Saturation in [0, 1]
    :param v: Value in [0, 1]
    :returns: (r, g, b)
    """
    i = int(math.floor(h * 6.0))
    f = h * 6.0 - i
    p = v * (1.0 - s)
    q = v * (1.0 - f * s)
    t = v * (1.0 - (1.0 - f) * s)

    sector = i % 6
    if sector == 0:
        return v, t, p
    if sector == 1:
        return q, v, p
    if sector == 2:
        return p, v, t
    if sector == 3:
        return p, q, v
    if sector == 4:
        return t, p, v
    return v, p, q


@njit(cache=True, nogil=True)
def evaluate_curve_numba(curve: NDArray[np.float64], x: float) -> float:
    """Piecewise-linear curve lookup.

    Input is clamped to [0, 1]; the first segment containing it wins. Inputs
    before the first point return the first y and inputs past every segment
    (a curve missing its x=1 point) return the last y.

    :param curve: Control points [K, 2], K >= 2
    :param x: Input value
    :returns: Interpolated output
    """
    x = clamp01(x)
    n = curve.shape[0]
    if x < curve[0, 0]:
        return curve[0, 1]
    for i in range(n - 1):
        x0 = curve[i, 0]
        x1 = curve[i + 1, 0]
        if x >= x0 and x <= x1:
            y0 = curve[i, 1]
            y1 = curve[i + 1, 1]
            # exact at knots
            if x == x1:
                return y1
            t = (x - x0) / (x1 - x0)
            return y0 + t * (y1 - y0)
    return curve[n - 1, 1]


# =============================================================================
# Targeted corrections
# =============================================================================


@njit(cache=True, nogil=True)
def match_strength_numba(
    r: float,
    g: float,
    b: float,
    tr: float,
    tg: float,
    tb: float,
    tolerance: float,
) -> float:
    """Soft-falloff match of a color against a target in HSV space.

    :returns: 1 at the target, falling to 0 at ``tolerance`` (cosine falloff)
    """
    h, s, v = rgb_to_hsv_numba(r, g, b)
    th, ts, tv = rgb_to_hsv_numba(tr, tg, tb)

    dh = abs(h - th)
    if dh > 0.5:
        dh = 1.0 - dh
    ds = s - ts
    dv = v - tv

    # Hue weighted double; /2 maps the worst case to 1
    distance = math.sqrt(2.0 * dh * dh + ds * ds + dv * dv) / 2.0
    if distance > tolerance:
        return 0.0
    return math.cos((distance / tolerance) * math.pi * 0.5)


@njit(cache=True, nogil=True)
def apply_correction_numba(
    r: float,
    g: float,
    b: float,
    correction: NDArray[np.float64],
) -> tuple[float, float, float]:
    """Apply one packed correction row to a color.

    :param correction: Packed correction [8]
    :returns: Corrected (r, g, b)
    """
    strength = match_strength_numba(
        r,
        g,
        b,
        correction[C_TARGET],
        correction[C_TARGET + 1],
        correction[C_TARGET + 2],
        correction[C_TOLERANCE],
    )
    if strength <= 0.0:
        return r, g, b

    h, s, v = rgb_to_hsv_numba(r, g, b)

    hue_shift = correction[C_HUE_SHIFT]
    if hue_shift != 0.0:
        h = wrap_hue(h + hue_shift / 360.0)

    saturation_shift = correction[C_SATURATION_SHIFT]
    if saturation_shift != 0.0:
        s = clamp01(s + saturation_shift * strength)

    value_shift = correction[C_VALUE_SHIFT]
    if value_shift != 0.0:
        v = clamp01(v + value_shift * strength)

    r, g, b = hsv_to_rgb_numba(h, s, v)

    brightness_shift = correction[C_BRIGHTNESS_SHIFT]
    if brightness_shift != 0.0:
        gain = 1.0 + brightness_shift * strength
        r = clamp01(r * gain)
        g = clamp01(g * gain)
        b = clamp01(b * gain)

    return r, g, b


@njit(cache=True, nogil=True)
def apply_corrections_numba(
    r: float,
    g: float,
    b: float,
    corrections: NDArray[np.float64],
) -> tuple[float, float, float]:
    """Apply packed corrections in order, each one seeing the previous output."""
    for k in range(corrections.shape[0]):
        r, g, b = apply_correction_numba(r, g, b, corrections[k])
    return r, g, b


# =============================================================================
# Full grade
# =============================================================================


@njit(cache=True, nogil=True)
def _add_wheel(
    r: float,
    g: float,
    b: float,
    params: NDArray[np.float64],
    base: int,
    weight: float,
) -> tuple[float, float, float]:
    x = params[base]
    y = params[base + 1]
    strength = params[base + 2]
    bias_r = x * WHEEL_RG_FACTOR * strength
    bias_g = y * WHEEL_RG_FACTOR * strength
    bias_b = -(x + y) * WHEEL_B_FACTOR * strength
    return r + bias_r * weight, g + bias_g * weight, b + bias_b * weight


@njit(cache=True, nogil=True)
def grade_color_numba(
    r: float,
    g: float,
    b: float,
    params: NDArray[np.float64],
    curve_r: NDArray[np.float64],
    curve_g: NDArray[np.float64],
    curve_b: NDArray[np.float64],
    corrections: NDArray[np.float64],
) -> tuple[float, float, float]:
    """Run one color through every grading stage in fixed order.

    Stage order is significant: curves see post-grade values and
    corrections see post-curve values.

    :returns: Graded (r, g, b), each in [0, 1]
    """
    # 1-2. Exposure and brightness
    gain = math.pow(2.0, params[P_EXPOSURE])
    r = r * gain
    g = g * gain
    b = b * gain
    brightness = params[P_BRIGHTNESS]
    r = r * brightness
    g = g * brightness
    b = b * brightness

    # 3. Contrast around the midpoint
    contrast = params[P_CONTRAST]
    r = (r - 0.5) * contrast + 0.5
    g = (g - 0.5) * contrast + 0.5
    b = (b - 0.5) * contrast + 0.5

    # 4. Clamp
    r = clamp01(r)
    g = clamp01(g)
    b = clamp01(b)

    # 5. HSV stage
    h, s, v = rgb_to_hsv_numba(r, g, b)
    h = wrap_hue(h + params[P_HUE] / 360.0)
    s = s * params[P_SATURATION]
    vibrancy = params[P_VIBRANCY]
    if vibrancy != 0.0:
        s = s + (1.0 - s) * vibrancy
    v = v * params[P_VALUE]
    s = clamp01(s)
    v = clamp01(v)
    r, g, b = hsv_to_rgb_numba(h, s, v)

    # 6. Cross-process
    cross = params[P_CROSS_PROCESS]
    if cross != 0.0:
        lum = luminance(r, g, b)
        r = r + cross * (lum - 0.5) * CROSS_RED_FACTOR
        g = g + cross * (CROSS_GREEN_PIVOT - lum * CROSS_GREEN_SLOPE)
        b = b + cross * (0.5 - lum) * CROSS_BLUE_FACTOR

    # 7. Lift / gamma / gain, weighted by post-cross-process luminance
    lum = luminance(r, g, b)
    lift_w = (1.0 - lum) * (1.0 - lum)
    gamma_w = math.sin(lum * math.pi)
    gain_w = lum * lum

    r, g, b = _add_wheel(r, g, b, params, P_LIFT, lift_w)
    r, g, b = _add_wheel(r, g, b, params, P_GAMMA, gamma_w)
    r, g, b = _add_wheel(r, g, b, params, P_GAIN, gain_w)

    # 8. Clamp
    r = clamp01(r)
    g = clamp01(g)
    b = clamp01(b)

    # 9. Per-channel curves
    r = evaluate_curve_numba(curve_r, r)
    g = evaluate_curve_numba(curve_g, g)
    b = evaluate_curve_numba(curve_b, b)

    # 10. Targeted corrections
    r, g, b = apply_corrections_numba(r, g, b, corrections)

    # 11. Final clamp
    return clamp01(r), clamp01(g), clamp01(b)


# =============================================================================
# Parallel drivers
# =============================================================================


@njit(parallel=True, cache=True, nogil=True)
def bake_cube_numba(
    size: int,
    params: NDArray[np.float64],
    curve_r: NDArray[np.float64],
    curve_g: NDArray[np.float64],
    curve_b: NDArray[np.float64],
    corrections: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """Grade every cell of a ``size``^3 cube.

    :param size: Cells per axis
    :param out: Output table [size(b), size(g), size(r), 3] (modified in-place)
    """
    scale = 1.0 / (size - 1)
    for bi in prange(size):
        for gi in range(size):
            for ri in range(size):
                r, g, b = grade_color_numba(
                    ri * scale,
                    gi * scale,
                    bi * scale,
                    params,
                    curve_r,
                    curve_g,
                    curve_b,
                    corrections,
                )
                out[bi, gi, ri, 0] = r
                out[bi, gi, ri, 1] = g
                out[bi, gi, ri, 2] = b


@njit(parallel=True, cache=True, nogil=True)
def grade_colors_numba(
    colors: NDArray[np.float64],
    params: NDArray[np.float64],
    curve_r: NDArray[np.float64],
    curve_g: NDArray[np.float64],
    curve_b: NDArray[np.float64],
    corrections: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """Grade an array of colors [N, 3] directly, without a cube."""
    n = colors.shape[0]
    for i in prange(n):
        r, g, b = grade_color_numba(
            colors[i, 0],
            colors[i, 1],
            colors[i, 2],
            params,
            curve_r,
            curve_g,
            curve_b,
            corrections,
        )
        out[i, 0] = r
        out[i, 1] = g
        out[i, 2] = b


@njit(parallel=True, cache=True, nogil=True)
def apply_lut_numba(
    image: NDArray[np.uint8],
    buffer: NDArray[np.uint8],
    size: int,
    out: NDArray[np.uint8],
) -> None:
    """Nearest-cell lookup of every pixel through an encoded cube.

    :param image: Source pixels [H, W, 4]
    :param buffer: Encoded cube [size, size*size, 4]
    :param size: Cells per axis
    :param out: Output pixels [H, W, 4]; alpha is copied from ``image``
    """
    height = image.shape[0]
    width = image.shape[1]
    scale = (size - 1) / 255.0
    for y in prange(height):
        for x in range(width):
            ri = int(math.floor(image[y, x, 0] * scale + 0.5))
            gi = int(math.floor(image[y, x, 1] * scale + 0.5))
            bi = int(math.floor(image[y, x, 2] * scale + 0.5))
            column = bi * size + ri
            out[y, x, 0] = buffer[gi, column, 0]
            out[y, x, 1] = buffer[gi, column, 1]
            out[y, x, 2] = buffer[gi, column, 2]
            out[y, x, 3] = image[y, x, 3]


@njit(parallel=True, cache=True, nogil=True)
def hsv_to_rgb_array_numba(hsv: NDArray[np.float64], out: NDArray[np.float64]) -> None:
    """Vectorized :func:`hsv_to_rgb_numba` over [N, 3]."""
    for i in prange(hsv.shape[0]):
        r, g, b = hsv_to_rgb_numba(hsv[i, 0], hsv[i, 1], hsv[i, 2])
        out[i, 0] = r
        out[i, 1] = g
        out[i, 2] = b


@njit(parallel=True, cache=True, nogil=True)
def rgb_to_hsv_array_numba(rgb: NDArray[np.float64], out: NDArray[np.float64]) -> None:
    """Vectorized :func:`rgb_to_hsv_numba` over [N, 3]."""
    for i in prange(rgb.shape[0]):
        h, s, v = rgb_to_hsv_numba(rgb[i, 0], rgb[i, 1], rgb[i, 2])
        out[i, 0] = h
        out[i, 1] = s
        out[i, 2] = v
