"""Preset library of named looks.

Provides ready-made :class:`GradingParameters` values and conversion to and
from plain dicts (the shape a UI state store or a JSON document holds).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from lutgrade.config.values import (
    SCALAR_FIELDS,
    ColorCorrection,
    Curve,
    GradingParameters,
    Offset2D,
    ToneWheel,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Presets
# ============================================================================

NEUTRAL = GradingParameters()

CROSS_PROCESS = GradingParameters(
    cross_process=0.6,
    contrast=1.15,
    saturation=1.1,
)

FADED_FILM = GradingParameters(
    contrast=0.9,
    saturation=0.8,
    red_curve=Curve([(0.0, 0.08), (0.5, 0.52), (1.0, 0.94)]),
    green_curve=Curve([(0.0, 0.07), (0.5, 0.5), (1.0, 0.93)]),
    blue_curve=Curve([(0.0, 0.1), (0.5, 0.5), (1.0, 0.9)]),
)

TEAL_ORANGE = GradingParameters(
    contrast=1.1,
    saturation=1.1,
    lift=ToneWheel(Offset2D(-0.5, 0.1), strength=0.8),
    gain=ToneWheel(Offset2D(0.4, 0.1), strength=0.8),
)

BLEACH_BYPASS = GradingParameters(
    brightness=0.95,
    contrast=1.35,
    saturation=0.45,
)

WARM_HIGHLIGHTS = GradingParameters(
    exposure=0.1,
    gain=ToneWheel(Offset2D(0.35, 0.15), strength=0.8),
    gamma=ToneWheel(Offset2D(0.1, 0.05), strength=0.5),
)

PRESETS: dict[str, GradingParameters] = {
    "neutral": NEUTRAL,
    "cross_process": CROSS_PROCESS,
    "faded_film": FADED_FILM,
    "teal_orange": TEAL_ORANGE,
    "bleach_bypass": BLEACH_BYPASS,
    "warm_highlights": WARM_HIGHLIGHTS,
}


def get_preset(name: str) -> GradingParameters:
    """Get preset by name.

    :param name: Preset name (case-insensitive)
    :returns: GradingParameters preset
    :raises KeyError: If preset not found
    """
    name_lower = name.lower()
    if name_lower not in PRESETS:
        available = ", ".join(PRESETS.keys())
        raise KeyError(f"Unknown preset '{name}'. Available: {available}")
    return PRESETS[name_lower]


# ============================================================================
# Dict conversion
# ============================================================================

_WHEELS = ("lift", "gamma", "gain")
_CURVES = ("red_curve", "green_curve", "blue_curve")


def _wheel_to_dict(wheel: ToneWheel) -> dict:
    return {"offset": {"x": wheel.offset.x, "y": wheel.offset.y}, "strength": wheel.strength}


def _wheel_from_dict(d: Mapping[str, Any]) -> ToneWheel:
    offset = d.get("offset", {})
    return ToneWheel(
        Offset2D(offset.get("x", 0.0), offset.get("y", 0.0)),
        d.get("strength", 1.0),
    )


def params_to_dict(params: GradingParameters) -> dict:
    """Convert GradingParameters to a plain dictionary.

    :param params: GradingParameters instance
    :returns: Dictionary representation (JSON-compatible)
    """
    d: dict[str, Any] = {name: getattr(params, name) for name in SCALAR_FIELDS}
    for name in _WHEELS:
        d[name] = _wheel_to_dict(getattr(params, name))
    for name in _CURVES:
        d[name] = getattr(params, name).to_list()
    d["corrections"] = [c.to_dict() for c in params.corrections]
    return d


def params_from_dict(d: Mapping[str, Any]) -> GradingParameters:
    """Create GradingParameters from a dictionary.

    Missing keys take their defaults and unknown keys are ignored.

    :param d: Dictionary with grading parameters
    :returns: GradingParameters instance

    Example:
        >>> params = params_from_dict({"exposure": 0.5, "lift": {"offset": {"x": 0.2, "y": 0}}})
    """
    kwargs: dict[str, Any] = {k: d[k] for k in SCALAR_FIELDS if k in d}
    for name in _WHEELS:
        if name in d:
            kwargs[name] = _wheel_from_dict(d[name])
    for name in _CURVES:
        if name in d:
            kwargs[name] = Curve(d[name])
    if "corrections" in d:
        kwargs["corrections"] = tuple(ColorCorrection.from_dict(c) for c in d["corrections"])

    unknown = set(d) - set(SCALAR_FIELDS) - set(_WHEELS) - set(_CURVES) - {"corrections"}
    if unknown:
        logger.debug("[Presets] Ignoring unknown keys: %s", sorted(unknown))
    return GradingParameters(**kwargs)
