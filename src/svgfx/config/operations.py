"""Parameter specifications for transfer-function configuration.

This module defines the ParameterSpec dataclass that records the default,
neutral value, and (where one exists) the allowed range of each
transfer-function parameter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ParameterSpec:
    """Specification for a transfer-function parameter.

    Attributes:
        name: Parameter name (e.g., "slope", "exponent")
        default: Default value when the parameter is not specified
        neutral: Value that causes no change to the channel
        min_value: Minimum allowed value (unbounded by default)
        max_value: Maximum allowed value (unbounded by default)
        description: Human-readable description
    """

    name: str
    default: float
    neutral: float
    min_value: float = -math.inf
    max_value: float = math.inf
    description: str = ""

    def in_range(self, value: float) -> bool:
        """Check if value lies within [min_value, max_value] (NaN never does).

        :param value: Value to check
        :returns: True if value is inside the allowed range
        """
        return self.min_value <= value <= self.max_value

    def is_neutral(self, value: float, tolerance: float = 1e-6) -> bool:
        """Check if value is effectively neutral (no change).

        :param value: Value to check
        :param tolerance: Tolerance for floating point comparison
        :returns: True if value is within tolerance of neutral
        """
        return abs(value - self.neutral) < tolerance

    def __repr__(self) -> str:
        return (
            f"ParameterSpec({self.name}, "
            f"range=[{self.min_value}, {self.max_value}], "
            f"default={self.default}, neutral={self.neutral})"
        )
