"""Apply a baked LUT cube to RGBA8 images."""

from __future__ import annotations

import logging

import numpy as np

from lutgrade.color.kernels import apply_lut_numba
from lutgrade.constants import CUBE_SIZE
from lutgrade.lut.cube import LUTCube, check_buffer

logger = logging.getLogger(__name__)


def check_image(image: np.ndarray) -> None:
    """Raise ValueError unless ``image`` is an ``[H, W, 4]`` uint8 RGBA array."""
    if not isinstance(image, np.ndarray):
        raise ValueError(f"image must be a numpy array, got {type(image).__name__}")
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[2] != 4:
        raise ValueError(
            f"resolution mismatch: image must be uint8 [H, W, 4], "
            f"got {image.dtype} {image.shape}"
        )


def apply_lut(image: np.ndarray, cube: LUTCube | np.ndarray) -> np.ndarray:
    """Map every pixel of an RGBA8 image through a cube (nearest cell).

    Each channel is quantized to a cell index with
    ``round(channel / 255 * 15)`` (halves round up); RGB is replaced by the
    stored color and alpha is passed through unchanged.

    :param image: Source pixels [H, W, 4] uint8
    :param cube: LUTCube, or its raw [16, 256, 4] uint8 buffer
    :returns: New image with the same shape and dtype
    :raises ValueError: If the image or cube buffer has the wrong shape or dtype

    Example:
        >>> graded = apply_lut(image, bake(params))
        >>> np.array_equal(graded[..., 3], image[..., 3])
        True
    """
    buffer = cube.buffer if isinstance(cube, LUTCube) else cube
    check_buffer(buffer)
    check_image(image)

    src = np.ascontiguousarray(image)
    out = np.empty_like(src)
    if src.size:
        apply_lut_numba(src, np.ascontiguousarray(buffer), CUBE_SIZE, out)
    logger.debug("[Apply] Applied cube to %dx%d image", src.shape[1], src.shape[0])
    return out
