"""Bake grading parameters into an encoded 16x16x16 LUT cube.

The cube is stored the way renderers consume it: a ``256 x 16`` RGBA8
pixel buffer (numpy shape ``[16, 256, 4]``). The blue axis is tiled
horizontally into 16 square slices; inside a slice green is the row and
red the column, so cell ``(ri, gi, bi)`` lives at
``buffer[gi, bi * 16 + ri]``. Alpha is always 255.

Example:
    >>> cube = bake(GradingParameters(exposure=0.5, saturation=1.2))
    >>> cube.buffer.shape
    (16, 256, 4)
    >>> cube.lookup(15, 15, 15)
    (1.0, 1.0, 1.0)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from lutgrade.color.grading import pack_parameters
from lutgrade.color.kernels import bake_cube_numba
from lutgrade.config.values import GradingParameters
from lutgrade.constants import CUBE_SIZE
from lutgrade.types import RGB

logger = logging.getLogger(__name__)

BUFFER_SHAPE = (CUBE_SIZE, CUBE_SIZE * CUBE_SIZE, 4)


def check_buffer(buffer: np.ndarray) -> None:
    """Raise ValueError unless ``buffer`` is a ``[16, 256, 4]`` uint8 cube buffer."""
    if not isinstance(buffer, np.ndarray) or buffer.dtype != np.uint8:
        raise ValueError(
            f"resolution mismatch: cube buffer must be uint8 {BUFFER_SHAPE}, "
            f"got {getattr(buffer, 'dtype', type(buffer).__name__)}"
        )
    if buffer.shape != BUFFER_SHAPE:
        raise ValueError(
            f"resolution mismatch: cube buffer must have shape {BUFFER_SHAPE}, got {buffer.shape}"
        )


def encode_table(table: np.ndarray) -> np.ndarray:
    """Encode a float cube table into the RGBA8 slice buffer.

    Channels are clamped to [0, 1], scaled to 0-255 and rounded (half to
    even).

    :param table: Graded colors [N(b), N(g), N(r), 3]
    :returns: Buffer [N, N*N, 4] uint8
    """
    n = table.shape[0]
    if table.shape != (n, n, n, 3):
        raise ValueError(f"Expected cube table [N, N, N, 3], got shape {table.shape}")

    rgb = np.rint(np.clip(table, 0.0, 1.0) * 255.0).astype(np.uint8)
    buffer = np.empty((n, n * n, 4), dtype=np.uint8)
    # [b, g, r] -> [g, b, r] -> rows of g, columns b * n + r
    buffer[..., :3] = rgb.transpose(1, 0, 2, 3).reshape(n, n * n, 3)
    buffer[..., 3] = 255
    return buffer


def decode_buffer(buffer: np.ndarray) -> np.ndarray:
    """Inverse of :func:`encode_table`: buffer -> float table [N(b), N(g), N(r), 3] in [0, 1]."""
    n = buffer.shape[0]
    if buffer.ndim != 3 or buffer.shape[1:] != (n * n, 4):
        raise ValueError(f"Expected cube buffer [N, N*N, 4], got shape {buffer.shape}")
    rgb = buffer[..., :3].reshape(n, n, n, 3).transpose(1, 0, 2, 3)
    return rgb.astype(np.float64) / 255.0


@dataclass(frozen=True, eq=False)
class LUTCube:
    """An encoded 16x16x16 color lookup table.

    A cube is nothing but its buffer; two cubes are equal when their
    buffers are. The buffer is made read-only on construction.

    :raises ValueError: If the buffer is not uint8 ``[16, 256, 4]``
    """

    buffer: np.ndarray

    def __post_init__(self):
        check_buffer(self.buffer)
        buffer = self.buffer.copy() if self.buffer.flags.writeable else self.buffer
        buffer.flags.writeable = False
        object.__setattr__(self, "buffer", buffer)

    @classmethod
    def identity(cls) -> LUTCube:
        """Cube that maps every cell to its own coordinate."""
        return bake(GradingParameters.identity())

    @classmethod
    def from_bytes(cls, data: bytes) -> LUTCube:
        """Rebuild a cube from the raw RGBA bytes of :meth:`to_bytes`."""
        expected = int(np.prod(BUFFER_SHAPE))
        if len(data) != expected:
            raise ValueError(f"resolution mismatch: expected {expected} bytes, got {len(data)}")
        return cls(np.frombuffer(data, dtype=np.uint8).reshape(BUFFER_SHAPE).copy())

    @property
    def size(self) -> int:
        """Cells per axis."""
        return self.buffer.shape[0]

    @property
    def width(self) -> int:
        """Pixel width of the encoded buffer (``size ** 2``)."""
        return self.buffer.shape[1]

    @property
    def height(self) -> int:
        return self.buffer.shape[0]

    def lookup(self, ri: int, gi: int, bi: int) -> RGB:
        """Stored color of cell ``(ri, gi, bi)``, normalized to [0, 1]."""
        n = self.size
        for name, index in (("ri", ri), ("gi", gi), ("bi", bi)):
            if not 0 <= index < n:
                raise IndexError(f"{name}={index} is outside [0, {n - 1}]")
        r, g, b = self.buffer[gi, bi * n + ri, :3]
        return r / 255.0, g / 255.0, b / 255.0

    def to_table(self) -> np.ndarray:
        """Decode into a float table [N(b), N(g), N(r), 3]."""
        return decode_buffer(self.buffer)

    def to_bytes(self) -> bytes:
        """Flat row-major RGBA8 bytes of the buffer (256 x 16 pixels)."""
        return self.buffer.tobytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LUTCube):
            return NotImplemented
        return np.array_equal(self.buffer, other.buffer)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"LUTCube(size={self.size})"


def bake_table(params: GradingParameters, size: int = CUBE_SIZE) -> np.ndarray:
    """Grade every cell of a ``size``^3 cube without encoding.

    :returns: Float table [size(b), size(g), size(r), 3] in [0, 1]
    """
    if size < 2:
        raise ValueError(f"size must be >= 2, got {size}")
    table = np.empty((size, size, size, 3), dtype=np.float64)
    bake_cube_numba(size, *pack_parameters(params), table)
    return table


def bake(params: GradingParameters) -> LUTCube:
    """Bake grading parameters into an encoded LUT cube.

    Every cell is graded independently (parallel over blue slices), so the
    result does not depend on scheduling.

    :param params: Grading parameters
    :returns: Read-only LUTCube
    """
    start = time.perf_counter()
    table = bake_table(params, CUBE_SIZE)
    cube = LUTCube(encode_table(table))
    logger.debug(
        "[Bake] Baked %d^3 cube (%d corrections) in %.2fms",
        CUBE_SIZE,
        len(params.enabled_corrections),
        (time.perf_counter() - start) * 1000,
    )
    return cube
