"""Grading value dataclasses.

This module holds the immutable values that describe one grade: curves,
split-tone wheels, targeted corrections and the aggregate
:class:`GradingParameters`. Values are validated once, at construction;
the baking kernels assume every number they receive is finite.

Editing produces new values instead of mutating old ones:

Example:
    >>> params = GradingParameters(exposure=0.5, contrast=1.2)
    >>> warmer = params.with_changes(hue=-10.0)
    >>> params.hue, warmer.hue
    (0.0, -10.0)
"""

from __future__ import annotations

import math
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

import numpy as np

from lutgrade.config.config import CORRECTION_CONFIG, GRADING_CONFIG
from lutgrade.constants import (
    DEFAULT_TARGET,
    DEFAULT_TOLERANCE,
    WHEEL_B_FACTOR,
    WHEEL_DRAG_RADIUS,
    WHEEL_HANDLE_SCALE,
    WHEEL_RG_FACTOR,
)


def _finite(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float | np.floating | np.integer):
        raise TypeError(f"{name} must be a number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    return value


def _unit(name: str, value: Any) -> float:
    value = _finite(name, value)
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name}={value} is outside valid range [0.0, 1.0]")
    return value


def _rgb(name: str, value: Any) -> tuple[float, float, float]:
    if isinstance(value, Mapping):
        value = (value["r"], value["g"], value["b"])
    channels = tuple(value)
    if len(channels) != 3:
        raise ValueError(f"{name} must have 3 channels, got {len(channels)}")
    return tuple(_unit(f"{name}[{i}]", c) for i, c in enumerate(channels))


# ============================================================================
# Curves
# ============================================================================


@dataclass(frozen=True)
class CurvePoint:
    """Control point of a tone curve, both coordinates in [0, 1]."""

    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, "x", _unit("x", self.x))
        object.__setattr__(self, "y", _unit("y", self.y))

    @classmethod
    def coerce(cls, value: CurvePoint | Mapping | Iterable[float]) -> CurvePoint:
        """Build a point from a CurvePoint, an ``(x, y)`` pair or an ``{"x", "y"}`` dict."""
        if isinstance(value, CurvePoint):
            return value
        if isinstance(value, Mapping):
            return cls(value["x"], value["y"])
        x, y = value
        return cls(x, y)


@dataclass(frozen=True, init=False)
class Curve:
    """Per-channel tone curve: two or more points with strictly increasing x.

    The editor keeps the first point at x=0 and the last at x=1, but a curve
    is allowed to lose either endpoint (the evaluator clamps instead).

    :raises ValueError: If fewer than two points are given or x does not
        strictly increase
    """

    points: tuple[CurvePoint, ...]

    def __init__(self, points: Iterable[CurvePoint | Mapping | Iterable[float]]):
        pts = tuple(CurvePoint.coerce(p) for p in points)
        if len(pts) < 2:
            raise ValueError(f"Curve needs at least 2 points, got {len(pts)}")
        for a, b in zip(pts, pts[1:]):
            if not b.x > a.x:
                raise ValueError(
                    f"Curve points must have strictly increasing x, got {a.x} followed by {b.x}"
                )
        object.__setattr__(self, "points", pts)

    @classmethod
    def identity(cls) -> Curve:
        """Two-point diagonal ``[(0, 0), (1, 1)]``."""
        return cls([(0.0, 0.0), (1.0, 1.0)])

    @classmethod
    def diagonal(cls, n: int = 5) -> Curve:
        """Identity curve with ``n`` evenly spaced points (the editor's default)."""
        if n < 2:
            raise ValueError(f"Curve needs at least 2 points, got {n}")
        return cls([(i / (n - 1), i / (n - 1)) for i in range(n)])

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __getitem__(self, index: int) -> CurvePoint:
        return self.points[index]

    @property
    def xs(self) -> tuple[float, ...]:
        return tuple(p.x for p in self.points)

    @property
    def ys(self) -> tuple[float, ...]:
        return tuple(p.y for p in self.points)

    def is_identity(self) -> bool:
        """True if every point lies on the diagonal and both endpoints are present."""
        return (
            self.points[0].x == 0.0
            and self.points[-1].x == 1.0
            and all(p.x == p.y for p in self.points)
        )

    def to_array(self) -> np.ndarray:
        """Pack points into a contiguous ``[K, 2]`` float64 array for the kernels."""
        return np.ascontiguousarray([[p.x, p.y] for p in self.points], dtype=np.float64)

    def to_list(self) -> list[dict[str, float]]:
        return [{"x": p.x, "y": p.y} for p in self.points]


# ============================================================================
# Split-tone wheels
# ============================================================================


@dataclass(frozen=True)
class Offset2D:
    """Color wheel offset; each axis nominally in [-1, 1]."""

    x: float = 0.0
    y: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "x", _finite("x", self.x))
        object.__setattr__(self, "y", _finite("y", self.y))

    @classmethod
    def from_wheel(cls, x: float, y: float) -> Offset2D:
        """Convert a wheel handle position (scene units, center at 0) into an offset.

        The handle is bounded by the wheel's inner disk; the offset is the
        handle position divided by the handle scale.
        """
        x = _finite("x", x)
        y = _finite("y", y)
        dist = math.hypot(x, y)
        if dist > WHEEL_DRAG_RADIUS:
            x = x / dist * WHEEL_DRAG_RADIUS
            y = y / dist * WHEEL_DRAG_RADIUS
        return cls(x / WHEEL_HANDLE_SCALE, y / WHEEL_HANDLE_SCALE)

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0


@dataclass(frozen=True)
class ToneWheel:
    """Offset2D paired with the strength that scales its contribution."""

    offset: Offset2D = field(default_factory=Offset2D)
    strength: float = 1.0

    def __post_init__(self):
        if not isinstance(self.offset, Offset2D):
            if isinstance(self.offset, Mapping):
                offset = Offset2D(self.offset["x"], self.offset["y"])
            else:
                offset = Offset2D(*self.offset)
            object.__setattr__(self, "offset", offset)
        object.__setattr__(self, "strength", _finite("strength", self.strength))

    def bias(self) -> tuple[float, float, float]:
        """Per-channel RGB bias before luminance weighting.

        Blue is the inverse of the combined red/green push.
        """
        x, y, s = self.offset.x, self.offset.y, self.strength
        return (
            x * WHEEL_RG_FACTOR * s,
            y * WHEEL_RG_FACTOR * s,
            -(x + y) * WHEEL_B_FACTOR * s,
        )

    def is_neutral(self) -> bool:
        return self.offset.is_zero() or self.strength == 0.0


# ============================================================================
# Targeted color corrections
# ============================================================================


@dataclass(frozen=True)
class Adjustment:
    """What a color correction does to the colors it matches."""

    hue_shift: float = 0.0  # degrees, -180 to 180
    saturation_shift: float = 0.0  # -1 to 1
    value_shift: float = 0.0  # -1 to 1
    brightness_shift: float = 0.0  # -1 to 1

    def __post_init__(self):
        for name in ("hue_shift", "saturation_shift", "value_shift", "brightness_shift"):
            object.__setattr__(self, name, _finite(name, getattr(self, name)))

    def is_neutral(self) -> bool:
        return (
            self.hue_shift == 0.0
            and self.saturation_shift == 0.0
            and self.value_shift == 0.0
            and self.brightness_shift == 0.0
        )

    def clamp(self) -> Adjustment:
        """Clamp all shifts to their configured ranges."""
        return Adjustment(
            hue_shift=CORRECTION_CONFIG.hue_shift.validate(self.hue_shift),
            saturation_shift=CORRECTION_CONFIG.saturation_shift.validate(self.saturation_shift),
            value_shift=CORRECTION_CONFIG.value_shift.validate(self.value_shift),
            brightness_shift=CORRECTION_CONFIG.brightness_shift.validate(self.brightness_shift),
        )


@dataclass(frozen=True)
class ColorCorrection:
    """A hue-range correction: recolors pixels near ``target`` with soft falloff.

    :raises ValueError: If tolerance is not in (0, 1] or the target is not an
        RGB triple in [0, 1]
    """

    id: str
    target: tuple[float, float, float]
    tolerance: float = DEFAULT_TOLERANCE
    adjustment: Adjustment = field(default_factory=Adjustment)
    enabled: bool = True

    def __post_init__(self):
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "target", _rgb("target", self.target))
        tolerance = _finite("tolerance", self.tolerance)
        if not 0.0 < tolerance <= 1.0:
            raise ValueError(f"tolerance={tolerance} is outside valid range (0.0, 1.0]")
        object.__setattr__(self, "tolerance", tolerance)
        if isinstance(self.adjustment, Mapping):
            object.__setattr__(self, "adjustment", Adjustment(**self.adjustment))
        object.__setattr__(self, "enabled", bool(self.enabled))

    @classmethod
    def create(
        cls,
        target: Iterable[float] = DEFAULT_TARGET,
        tolerance: float = DEFAULT_TOLERANCE,
        adjustment: Adjustment | None = None,
        enabled: bool = True,
    ) -> ColorCorrection:
        """Create a correction with a fresh identity token."""
        return cls(
            id=uuid.uuid4().hex,
            target=tuple(target),
            tolerance=tolerance,
            adjustment=adjustment if adjustment is not None else Adjustment(),
            enabled=enabled,
        )

    def with_changes(self, **changes: Any) -> ColorCorrection:
        """Return a copy with the given fields replaced (identity is kept)."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        r, g, b = self.target
        a = self.adjustment
        return {
            "id": self.id,
            "enabled": self.enabled,
            "target": {"r": r, "g": g, "b": b},
            "tolerance": self.tolerance,
            "adjustment": {
                "hue_shift": a.hue_shift,
                "saturation_shift": a.saturation_shift,
                "value_shift": a.value_shift,
                "brightness_shift": a.brightness_shift,
            },
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> ColorCorrection:
        return cls(
            id=d.get("id") or uuid.uuid4().hex,
            target=d.get("target", DEFAULT_TARGET),
            tolerance=d.get("tolerance", DEFAULT_TOLERANCE),
            adjustment=Adjustment(**d.get("adjustment", {})),
            enabled=d.get("enabled", True),
        )


# ============================================================================
# Aggregate
# ============================================================================

SCALAR_FIELDS = (
    "exposure",
    "brightness",
    "contrast",
    "hue",
    "saturation",
    "value",
    "vibrancy",
    "cross_process",
)


@dataclass(frozen=True)
class GradingParameters:
    """Every input of one bake.

    Scalars are validated for finiteness only; range membership is the
    caller's contract (see :meth:`clamp`).

    Example:
        >>> params = GradingParameters(
        ...     exposure=0.3,
        ...     lift=ToneWheel(Offset2D(-0.2, 0.1), strength=0.8),
        ...     red_curve=Curve([(0, 0), (0.5, 0.6), (1, 1)]),
        ... )
    """

    exposure: float = 0.0
    brightness: float = 1.0
    contrast: float = 1.0
    hue: float = 0.0  # degrees
    saturation: float = 1.0
    value: float = 1.0
    vibrancy: float = 0.0
    cross_process: float = 0.0

    lift: ToneWheel = field(default_factory=ToneWheel)
    gamma: ToneWheel = field(default_factory=ToneWheel)
    gain: ToneWheel = field(default_factory=ToneWheel)

    red_curve: Curve = field(default_factory=Curve.identity)
    green_curve: Curve = field(default_factory=Curve.identity)
    blue_curve: Curve = field(default_factory=Curve.identity)

    corrections: tuple[ColorCorrection, ...] = ()

    def __post_init__(self):
        for name in SCALAR_FIELDS:
            object.__setattr__(self, name, _finite(name, getattr(self, name)))
        for name in ("lift", "gamma", "gain"):
            wheel = getattr(self, name)
            if not isinstance(wheel, ToneWheel):
                raise TypeError(f"{name} must be a ToneWheel, got {type(wheel).__name__}")
        for name in ("red_curve", "green_curve", "blue_curve"):
            value = getattr(self, name)
            if not isinstance(value, Curve):
                object.__setattr__(self, name, Curve(value))
        corrections = tuple(self.corrections)
        for c in corrections:
            if not isinstance(c, ColorCorrection):
                raise TypeError(f"corrections must hold ColorCorrection, got {type(c).__name__}")
        object.__setattr__(self, "corrections", corrections)

    @classmethod
    def identity(cls) -> GradingParameters:
        return cls()

    @property
    def curves(self) -> tuple[Curve, Curve, Curve]:
        return self.red_curve, self.green_curve, self.blue_curve

    @property
    def wheels(self) -> tuple[ToneWheel, ToneWheel, ToneWheel]:
        return self.lift, self.gamma, self.gain

    @property
    def enabled_corrections(self) -> tuple[ColorCorrection, ...]:
        return tuple(c for c in self.corrections if c.enabled)

    def with_changes(self, **changes: Any) -> GradingParameters:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def is_neutral(self) -> bool:
        """Check if baking these parameters would produce an identity cube.

        :returns: True if every operator is at its neutral value
        """
        return (
            all(
                GRADING_CONFIG.get_spec(name).is_neutral(getattr(self, name))
                for name in SCALAR_FIELDS
            )
            and all(w.is_neutral() for w in self.wheels)
            and all(c.is_identity() for c in self.curves)
            and all(c.adjustment.is_neutral() for c in self.enabled_corrections)
        )

    def clamp(self) -> GradingParameters:
        """Clamp scalars, wheel offsets and strengths to their configured ranges.

        :returns: New GradingParameters with clamped values
        """
        offset_spec = GRADING_CONFIG.offset
        strength_spec = GRADING_CONFIG.strength

        def clamp_wheel(w: ToneWheel) -> ToneWheel:
            return ToneWheel(
                Offset2D(offset_spec.validate(w.offset.x), offset_spec.validate(w.offset.y)),
                strength_spec.validate(w.strength),
            )

        scalars = {
            name: GRADING_CONFIG.get_spec(name).validate(getattr(self, name))
            for name in SCALAR_FIELDS
        }
        return replace(
            self,
            **scalars,
            lift=clamp_wheel(self.lift),
            gamma=clamp_wheel(self.gamma),
            gain=clamp_wheel(self.gain),
        )
