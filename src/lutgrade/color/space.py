"""RGB <-> HSV conversion.

All channels are in [0, 1]; hue is a fraction of a full turn in [0, 1).
The scalar functions wrap the same compiled kernels the LUT bake uses, so
a value converted here matches the value used inside a cube exactly.

Example:
    >>> rgb_to_hsv(1.0, 0.0, 0.0)
    (0.0, 1.0, 1.0)
    >>> hsv_to_rgb(0.5, 1.0, 1.0)
    (0.0, 1.0, 1.0)
"""

from __future__ import annotations

import numpy as np

from lutgrade.color.kernels import (
    hsv_to_rgb_array_numba,
    hsv_to_rgb_numba,
    rgb_to_hsv_array_numba,
    rgb_to_hsv_numba,
)
from lutgrade.types import RGB, ColorLike


def rgb_to_hsv(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert RGB to HSV.

    When all channels are equal (``delta == 0``) hue and saturation are 0.

    :returns: (h, s, v) with h in [0, 1)
    """
    h, s, v = rgb_to_hsv_numba(float(r), float(g), float(b))
    return float(h), float(s), float(v)


def hsv_to_rgb(h: float, s: float, v: float) -> tuple[float, float, float]:
    """Convert HSV to RGB using the six-sector formulation.

    :returns: (r, g, b)
    """
    r, g, b = hsv_to_rgb_numba(float(h), float(s), float(v))
    return float(r), float(g), float(b)


def _as_colors(colors: np.ndarray) -> tuple[np.ndarray, tuple[int, ...]]:
    arr = np.asarray(colors, dtype=np.float64)
    if arr.ndim == 0 or arr.shape[-1] != 3:
        raise ValueError(f"Expected [..., 3] array, got shape {arr.shape}")
    return np.ascontiguousarray(arr.reshape(-1, 3)), arr.shape


def rgb_to_hsv_array(colors: np.ndarray) -> np.ndarray:
    """Vectorized :func:`rgb_to_hsv` over an ``[..., 3]`` array."""
    flat, shape = _as_colors(colors)
    out = np.empty_like(flat)
    rgb_to_hsv_array_numba(flat, out)
    return out.reshape(shape)


def hsv_to_rgb_array(colors: np.ndarray) -> np.ndarray:
    """Vectorized :func:`hsv_to_rgb` over an ``[..., 3]`` array."""
    flat, shape = _as_colors(colors)
    out = np.empty_like(flat)
    hsv_to_rgb_array_numba(flat, out)
    return out.reshape(shape)


def to_hex(color: ColorLike) -> str:
    """Format an RGB triple in [0, 1] as ``#rrggbb``."""
    r, g, b = (min(255, max(0, round(float(c) * 255))) for c in color)
    return f"#{r:02x}{g:02x}{b:02x}"


def from_hex(value: str) -> RGB:
    """Parse ``#rrggbb`` (leading ``#`` optional) into an RGB triple in [0, 1].

    :raises ValueError: If the string is not six hex digits
    """
    digits = value[1:] if value.startswith("#") else value
    if len(digits) != 6:
        raise ValueError(f"Expected #rrggbb, got {value!r}")
    try:
        channels = [int(digits[i : i + 2], 16) for i in (0, 2, 4)]
    except ValueError as e:
        raise ValueError(f"Expected #rrggbb, got {value!r}") from e
    return channels[0] / 255.0, channels[1] / 255.0, channels[2] / 255.0
