"""
Validation decorators for transfer parameters and node configuration.

Each decorator looks the checked argument up in ``kwargs`` first and falls
back to the positional argument at ``param_index``. Argument index 0 is the
first positional argument, so methods usually keep the default of 1 (skipping
``self``) while plain functions pass ``param_index=0``.

Example:
    >>> @validate_finite("slope", param_index=0)
    ... def make_linear(slope: float) -> float:
    ...     return slope
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Callable, Iterable
from functools import wraps
from typing import Any

from svgfx.config import TRANSFER_CONFIG

_RANGE_SUGGESTIONS = {
    "table_value": "Table values are intensities: 0.0 maps to black, 1.0 to full channel",
}

_FINITE_SUGGESTIONS = {
    "slope": "Use 1.0 for no change or 0.0 for a constant channel",
    "amplitude": "Use 1.0 for no change",
    "exponent": "Use 1.0 for a linear response",
}


def _lookup(args: tuple, kwargs: dict, param_name: str, param_index: int) -> tuple[bool, Any]:
    if param_name in kwargs:
        return True, kwargs[param_name]
    if len(args) > param_index:
        return True, args[param_index]
    return False, None


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def validate_finite(param_name: str, param_index: int = 1) -> Callable:
    """
    Require a numeric argument that is neither NaN nor infinite.

    :param param_name: Argument name (also used in error messages)
    :param param_index: Positional index of the argument when not passed by keyword
    :raises TypeError: If the value is not a number
    :raises ValueError: If the value is NaN or infinite
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            found, value = _lookup(args, kwargs, param_name, param_index)
            if found:
                check_finite(value, param_name)
            return func(*args, **kwargs)

        return wrapper

    return decorator


def validate_type(expected: type | tuple[type, ...], param_name: str, param_index: int = 1) -> Callable:
    """
    Require an argument to be an instance of ``expected``.

    ``None`` is always accepted so optional arguments can be left unset.

    :raises TypeError: If the value has the wrong type
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            found, value = _lookup(args, kwargs, param_name, param_index)
            if found and value is not None and not isinstance(value, expected):
                if isinstance(expected, tuple):
                    names = ", ".join(t.__name__ for t in expected)
                    raise TypeError(
                        f"{param_name} must be one of ({names}), got {type(value).__name__}"
                    )
                raise TypeError(
                    f"{param_name} must be {expected.__name__}, got {type(value).__name__}"
                )
            return func(*args, **kwargs)

        return wrapper

    return decorator


def validate_unit_values(values: Iterable[float], param_name: str = "table_value") -> tuple[float, ...]:
    """
    Convert ``values`` to a tuple of floats inside the ``table_value`` range.

    :param values: Sequence of intensities
    :param param_name: Name used in error messages
    :returns: Tuple of floats
    :raises TypeError: If an element is not a number
    :raises ValueError: If an element is outside the range or not finite
    """
    spec = TRANSFER_CONFIG.table_value
    result = []
    for i, value in enumerate(values):
        if not _is_number(value):
            raise TypeError(f"{param_name}[{i}] must be a number, got {type(value).__name__}")
        number = float(value)
        if not spec.in_range(number):
            raise ValueError(
                f"{param_name}[{i}]={number} is outside valid range "
                f"[{spec.min_value}, {spec.max_value}]. "
                f"{_RANGE_SUGGESTIONS['table_value']}."
            )
        result.append(number)
    return tuple(result)


def check_finite(value: Any, param_name: str) -> float:
    """
    Check that ``value`` is a finite real number.

    :returns: ``value`` as float
    :raises TypeError: If the value is not a number
    :raises ValueError: If the value is NaN or infinite
    """
    if not _is_number(value):
        raise TypeError(f"{param_name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        message = f"{param_name}={value} must be finite."
        suggestion = _FINITE_SUGGESTIONS.get(param_name)
        if suggestion:
            message = f"{message} {suggestion}."
        raise ValueError(message)
    return float(value)
