"""Validation decorators for builder setters.

Setters on the fluent :class:`lutgrade.pipeline.Grade` builder take their
value as a positional argument (after ``self``) or as a keyword argument.
These decorators locate that argument, check it and raise with a message
that names the parameter and, where useful, what the neutral value is.
"""

from __future__ import annotations

import functools
import math
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

_MISSING = object()

# Hints appended to range errors for well-known parameters
_SUGGESTIONS = {
    "exposure": "Use 0.0 for no change (each stop doubles or halves the signal).",
    "brightness": "Use 1.0 for no change.",
    "contrast": "Use 1.0 for no change.",
    "hue": "Use 0.0 for no rotation.",
    "saturation": "Use 1.0 for no change, 0.0 for grayscale.",
    "value": "Use 1.0 for no change.",
    "vibrancy": "Use 0.0 for no change.",
    "cross_process": "Use 0.0 to disable the film cross-process look.",
    "strength": "Use 1.0 for the full wheel effect, 0.0 to disable it.",
    "tolerance": "Smaller tolerances match a narrower range of colors.",
}


def _get_argument(args: tuple, kwargs: dict, name: str, param_index: int) -> Any:
    if name in kwargs:
        return kwargs[name]
    if len(args) > param_index:
        return args[param_index]
    return _MISSING


def _check_number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise TypeError(f"{name} must be a number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name}={value} must be finite")
    return value


def validate_range(
    min_value: float, max_value: float, name: str, param_index: int = 1
) -> Callable[[F], F]:
    """Validate that a numeric argument lies within ``[min_value, max_value]``.

    :param min_value: Inclusive lower bound
    :param max_value: Inclusive upper bound
    :param name: Argument name (also used for keyword lookup)
    :param param_index: Positional index of the argument (``self`` is 0)
    :returns: Decorator
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            value = _get_argument(args, kwargs, name, param_index)
            if value is not _MISSING:
                value = _check_number(name, value)
                if not min_value <= value <= max_value:
                    message = f"{name}={value} is outside valid range [{min_value}, {max_value}]."
                    suggestion = _SUGGESTIONS.get(name)
                    if suggestion:
                        message = f"{message} {suggestion}"
                    raise ValueError(message)
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def validate_finite(name: str, param_index: int = 1) -> Callable[[F], F]:
    """Validate that a numeric argument is a finite number.

    :param name: Argument name (also used for keyword lookup)
    :param param_index: Positional index of the argument (``self`` is 0)
    :returns: Decorator
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            value = _get_argument(args, kwargs, name, param_index)
            if value is not _MISSING:
                _check_number(name, value)
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def validate_choices(choices: Iterable[str], name: str, param_index: int = 1) -> Callable[[F], F]:
    """Validate that an argument is one of a fixed set of strings.

    :param choices: Allowed values
    :param name: Argument name (also used for keyword lookup)
    :param param_index: Positional index of the argument (``self`` is 0)
    :returns: Decorator
    """
    allowed = frozenset(choices)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            value = _get_argument(args, kwargs, name, param_index)
            if value is not _MISSING and value not in allowed:
                raise ValueError(
                    f'{name}="{value}" is not valid. Valid options: {sorted(allowed)}'
                )
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
