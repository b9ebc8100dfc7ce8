"""
Grade: fluent grading builder with a lazily baked LUT cube.

The builder holds one immutable :class:`GradingParameters` value. Every
setter replaces that value and marks the cube dirty; the cube is re-baked on
the next :meth:`Grade.compile`, :attr:`Grade.cube` access or apply. This is
the caller-side cache of the most recent bake: the core functions
(:func:`lutgrade.lut.bake`, :func:`lutgrade.lut.apply_lut`) stay stateless.

Example:
    >>> grade = (Grade()
    ...     .exposure(0.3)
    ...     .contrast(1.2)
    ...     .lift(-0.3, 0.1)                  # cool shadows
    ...     .gain(0.3, 0.1, strength=0.8)     # warm highlights
    ...     .curve("red", [(0, 0), (0.5, 0.55), (1, 1)])
    ... )
    >>> graded = grade(image)                 # bakes once, then reuses the cube
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Self

import numpy as np

from lutgrade.config import CORRECTION_CONFIG, GRADING_CONFIG, OperationSpec
from lutgrade.config.values import (
    SCALAR_FIELDS,
    Adjustment,
    ColorCorrection,
    Curve,
    CurvePoint,
    GradingParameters,
    Offset2D,
    ToneWheel,
)
from lutgrade.constants import DEFAULT_TARGET
from lutgrade.lut.apply import apply_lut
from lutgrade.lut.cube import LUTCube, bake
from lutgrade.validators import validate_choices, validate_range

logger = logging.getLogger(__name__)

_G = GRADING_CONFIG
_C = CORRECTION_CONFIG

_CHANNELS = {"red": "red_curve", "green": "green_curve", "blue": "blue_curve"}


def _in_range(spec: OperationSpec, name: str, param_index: int = 1):
    return validate_range(spec.min_value, spec.max_value, name, param_index=param_index)


class Grade:
    """
    Fluent color-grading builder with lazy cube compilation.

    Setters take the same values as :class:`GradingParameters` and validate
    them against the configured slider ranges (``CONFIG.grading``). Setting
    a parameter replaces its previous value; calls do not stack.

    Split-tone wheels take an offset ``(x, y)`` in [-1, 1] and a strength in
    [0, 1]. Curves are set per channel from control points.
    """

    __slots__ = (
        "_params",
        "_compiled_cube",
        "_is_dirty",
    )

    def __init__(self, params: GradingParameters | None = None):
        """
        Initialize the builder.

        :param params: Starting parameters (default: identity)
        """
        self._params = params if params is not None else GradingParameters.identity()
        self._compiled_cube: LUTCube | None = None
        self._is_dirty: bool = True
        logger.info("[Grade] Initialized")

    @classmethod
    def from_parameters(cls, params: GradingParameters) -> Self:
        """Create a builder starting from existing parameters (e.g. a preset)."""
        if not isinstance(params, GradingParameters):
            raise TypeError(f"Expected GradingParameters, got {type(params).__name__}")
        return cls(params)

    # ========================================================================
    # Properties
    # ========================================================================

    @property
    def parameters(self) -> GradingParameters:
        """Current parameters (immutable snapshot)."""
        return self._params

    @property
    def is_compiled(self) -> bool:
        """Check if the cube is baked and up-to-date."""
        return self._compiled_cube is not None and not self._is_dirty

    @property
    def cube(self) -> LUTCube:
        """Baked cube for the current parameters (compiles if needed)."""
        self.compile()
        return self._compiled_cube

    def _set(self, **changes) -> Self:
        self._params = self._params.with_changes(**changes)
        self._is_dirty = True
        return self

    # ========================================================================
    # Global operators
    # ========================================================================

    @_in_range(_G.exposure, "exposure")
    def exposure(self, exposure: float) -> Self:
        """
        Set exposure in stops.

        :param exposure: Stops (0=no change, 1=double, -1=half)
        :return: Self for method chaining
        """
        return self._set(exposure=float(exposure))

    @_in_range(_G.brightness, "brightness")
    def brightness(self, brightness: float) -> Self:
        """Set the brightness multiplier (1.0=no change)."""
        return self._set(brightness=float(brightness))

    @_in_range(_G.contrast, "contrast")
    def contrast(self, contrast: float) -> Self:
        """
        Set contrast around mid-gray.

        Mid-gray (0.5) is a fixed point for every contrast value; negative
        values invert the tonal range.

        :param contrast: Contrast factor (1.0=no change)
        :return: Self for method chaining
        """
        return self._set(contrast=float(contrast))

    @_in_range(_G.hue, "hue")
    def hue(self, hue: float) -> Self:
        """Rotate hue by ``hue`` degrees."""
        return self._set(hue=float(hue))

    @_in_range(_G.saturation, "saturation")
    def saturation(self, saturation: float) -> Self:
        """Set the saturation multiplier (0=grayscale, 1=no change)."""
        return self._set(saturation=float(saturation))

    @_in_range(_G.value, "value")
    def value(self, value: float) -> Self:
        """Set the HSV value multiplier (1.0=no change)."""
        return self._set(value=float(value))

    @_in_range(_G.vibrancy, "vibrancy")
    def vibrancy(self, vibrancy: float) -> Self:
        """
        Set vibrancy.

        Positive values boost muted colors more than already saturated ones.

        :param vibrancy: Vibrancy (0=no change)
        :return: Self for method chaining
        """
        return self._set(vibrancy=float(vibrancy))

    @_in_range(_G.cross_process, "cross_process")
    def cross_process(self, cross_process: float) -> Self:
        """Set the film cross-process amount (0=off)."""
        return self._set(cross_process=float(cross_process))

    # ========================================================================
    # Split-tone wheels
    # ========================================================================

    def _wheel(self, name: str, x: float, y: float, strength: float) -> Self:
        wheel = ToneWheel(Offset2D(float(x), float(y)), float(strength))
        return self._set(**{name: wheel})

    @_in_range(_G.offset, "x", 1)
    @_in_range(_G.offset, "y", 2)
    @_in_range(_G.strength, "strength", 3)
    def lift(self, x: float, y: float, strength: float = 1.0) -> Self:
        """
        Set the shadow (lift) wheel.

        :param x: Red push (negative pushes toward cyan)
        :param y: Green push (negative pushes toward magenta)
        :param strength: Scale of the whole wheel
        :return: Self for method chaining
        """
        return self._wheel("lift", x, y, strength)

    @_in_range(_G.offset, "x", 1)
    @_in_range(_G.offset, "y", 2)
    @_in_range(_G.strength, "strength", 3)
    def gamma(self, x: float, y: float, strength: float = 1.0) -> Self:
        """Set the midtone (gamma) wheel. See :meth:`lift`."""
        return self._wheel("gamma", x, y, strength)

    @_in_range(_G.offset, "x", 1)
    @_in_range(_G.offset, "y", 2)
    @_in_range(_G.strength, "strength", 3)
    def gain(self, x: float, y: float, strength: float = 1.0) -> Self:
        """Set the highlight (gain) wheel. See :meth:`lift`."""
        return self._wheel("gain", x, y, strength)

    # ========================================================================
    # Curves
    # ========================================================================

    @validate_choices(_CHANNELS, "channel")
    def curve(
        self, channel: str, points: Curve | Iterable[CurvePoint | Mapping | Iterable[float]]
    ) -> Self:
        """
        Set the tone curve of one channel.

        :param channel: "red", "green" or "blue"
        :param points: Curve or its control points
        :return: Self for method chaining
        """
        curve = points if isinstance(points, Curve) else Curve(points)
        return self._set(**{_CHANNELS[channel]: curve})

    # ========================================================================
    # Targeted corrections
    # ========================================================================

    @_in_range(_C.tolerance, "tolerance", 2)
    @_in_range(_C.hue_shift, "hue_shift", 3)
    @_in_range(_C.saturation_shift, "saturation_shift", 4)
    @_in_range(_C.value_shift, "value_shift", 5)
    @_in_range(_C.brightness_shift, "brightness_shift", 6)
    def correct(
        self,
        target: Iterable[float] = DEFAULT_TARGET,
        tolerance: float = CORRECTION_CONFIG.tolerance.default,
        hue_shift: float = 0.0,
        saturation_shift: float = 0.0,
        value_shift: float = 0.0,
        brightness_shift: float = 0.0,
    ) -> Self:
        """
        Append a targeted color correction.

        Corrections apply in the order they were added.

        :param target: RGB color to match, each channel in [0, 1]
        :param tolerance: Match radius
        :param hue_shift: Hue rotation in degrees for matched colors
        :param saturation_shift: Added to saturation, scaled by match strength
        :param value_shift: Added to value, scaled by match strength
        :param brightness_shift: Brightness gain offset, scaled by match strength
        :return: Self for method chaining
        """
        adjustment = Adjustment(
            hue_shift=hue_shift,
            saturation_shift=saturation_shift,
            value_shift=value_shift,
            brightness_shift=brightness_shift,
        )
        return self.add_correction(
            ColorCorrection.create(target=target, tolerance=tolerance, adjustment=adjustment)
        )

    def add_correction(self, correction: ColorCorrection) -> Self:
        """Append an existing correction."""
        if not isinstance(correction, ColorCorrection):
            raise TypeError(f"Expected ColorCorrection, got {type(correction).__name__}")
        return self._set(corrections=(*self._params.corrections, correction))

    def update_correction(self, correction_id: str, **changes) -> Self:
        """
        Replace fields of the correction with id ``correction_id``.

        :raises KeyError: If no correction has that id
        """
        corrections = list(self._params.corrections)
        for i, c in enumerate(corrections):
            if c.id == correction_id:
                corrections[i] = c.with_changes(**changes)
                return self._set(corrections=tuple(corrections))
        raise KeyError(f"Unknown correction id '{correction_id}'")

    def remove_correction(self, correction_id: str) -> Self:
        """
        Remove the correction with id ``correction_id``.

        :raises KeyError: If no correction has that id
        """
        corrections = tuple(c for c in self._params.corrections if c.id != correction_id)
        if len(corrections) == len(self._params.corrections):
            raise KeyError(f"Unknown correction id '{correction_id}'")
        return self._set(corrections=corrections)

    def clear_corrections(self) -> Self:
        return self._set(corrections=())

    # ========================================================================
    # Compilation and application
    # ========================================================================

    def compile(self) -> Self:
        """
        Bake the current parameters into a cube.

        Does nothing if the cube is already up-to-date.

        :return: Self for method chaining
        """
        if self.is_compiled:
            logger.debug("[Grade] Already compiled, skipping")
            return self

        self._compiled_cube = bake(self._params)
        self._is_dirty = False
        logger.debug(
            "[Grade] Compiled cube (neutral=%s, corrections=%d)",
            self._params.is_neutral(),
            len(self._params.enabled_corrections),
        )
        return self

    def apply(self, image: np.ndarray) -> np.ndarray:
        """
        Grade an RGBA8 image through the baked cube.

        :param image: Pixels [H, W, 4] uint8
        :return: New graded image; alpha unchanged
        """
        result = apply_lut(image, self.cube)
        logger.info("[Grade] Applied to %dx%d image", image.shape[1], image.shape[0])
        return result

    def __call__(self, image: np.ndarray) -> np.ndarray:
        """Apply the grade to an image. See :meth:`apply`."""
        return self.apply(image)

    def is_neutral(self) -> bool:
        """Check if the current parameters leave every color unchanged."""
        return self._params.is_neutral()

    def reset(self) -> Self:
        """
        Reset all parameters to identity and drop the compiled cube.

        :return: Self for method chaining
        """
        self._params = GradingParameters.identity()
        self._compiled_cube = None
        self._is_dirty = True
        logger.debug("[Grade] Reset to defaults")
        return self

    def copy(self) -> Self:
        """Independent builder with the same parameters and compiled cube."""
        new = type(self)(self._params)
        new._compiled_cube = self._compiled_cube
        new._is_dirty = self._is_dirty
        return new

    def __copy__(self) -> Self:
        return self.copy()

    def __repr__(self) -> str:
        p = self._params
        changed = [
            f"{name}={getattr(p, name):.2f}"
            for name in SCALAR_FIELDS
            if not _G.get_spec(name).is_neutral(getattr(p, name))
        ]
        changed += [name for name in ("lift", "gamma", "gain") if not getattr(p, name).is_neutral()]
        changed += [
            f"{ch}_curve" for ch, attr in _CHANNELS.items() if not getattr(p, attr).is_identity()
        ]
        if p.corrections:
            changed.append(f"{len(p.corrections)} corrections")
        param_str = ", ".join(changed) if changed else "defaults"
        status = "compiled" if self.is_compiled else "not compiled"
        return f"Grade({param_str}) [{status}]"
