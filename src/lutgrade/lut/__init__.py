"""
LUT module - bake grading parameters into a 16^3 cube and apply it to images.

Example:
    >>> from lutgrade.lut import apply_lut, bake
    >>> cube = bake(params)
    >>> graded = apply_lut(image, cube)
"""

from lutgrade.lut.apply import apply_lut
from lutgrade.lut.cube import LUTCube, bake, bake_table, decode_buffer, encode_table

__all__ = [
    "LUTCube",
    "bake",
    "bake_table",
    "encode_table",
    "decode_buffer",
    "apply_lut",
]
