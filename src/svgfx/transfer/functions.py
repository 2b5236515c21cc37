"""
Channel transfer functions.

Each variant maps an 8-bit input sample ``v`` to an 8-bit output sample. The
formulas are defined on the normalized input ``x = v / 255``; results are
rounded half-up and clamped to ``[0, 255]``.

Variants are frozen dataclasses. A node caches compiled tables by spec
identity, so a spec must never change after it has been handed to a node;
build a new one instead.

Example:
    >>> LinearTransfer(slope=0.5, intercept=64).evaluate(np.array([0, 255]))
    array([ 64, 192], dtype=uint8)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

import numpy as np
from numpy.typing import NDArray

from svgfx.config import TRANSFER_CONFIG
from svgfx.constants import CHANNEL_MAX
from svgfx.validators import check_finite, validate_unit_values


class TransferKind(Enum):
    """Type tag of a transfer function."""

    IDENTITY = "identity"
    TABLE = "table"
    DISCRETE = "discrete"
    LINEAR = "linear"
    GAMMA = "gamma"


def _round_clamp(values: NDArray[np.float64]) -> NDArray[np.uint8]:
    """Round half-up and clamp to the 8-bit range."""
    rounded = np.floor(values + 0.5)
    return np.clip(rounded, 0, CHANNEL_MAX).astype(np.uint8)


def _as_codes(samples: NDArray) -> NDArray[np.int64]:
    """Integer code values; step indices are computed on these to stay exact."""
    return np.clip(np.asarray(samples, dtype=np.int64), 0, CHANNEL_MAX)


def _normalize(samples: NDArray) -> NDArray[np.float64]:
    return np.asarray(samples, dtype=np.float64) / CHANNEL_MAX


@dataclass(frozen=True)
class IdentityTransfer:
    """Leaves the channel unchanged."""

    kind: ClassVar[TransferKind] = TransferKind.IDENTITY

    def evaluate(self, samples: NDArray) -> NDArray[np.uint8]:
        return np.clip(np.asarray(samples), 0, CHANNEL_MAX).astype(np.uint8)


@dataclass(frozen=True, init=False)
class TableTransfer:
    """Piecewise-linear interpolation between N control points.

    With fewer than two points the function is the identity.
    """

    values: tuple[float, ...]

    kind: ClassVar[TransferKind] = TransferKind.TABLE

    def __init__(self, values: Sequence[float] = ()):
        object.__setattr__(self, "values", validate_unit_values(values))

    def evaluate(self, samples: NDArray) -> NDArray[np.uint8]:
        n = len(self.values)
        if n < 2:
            return IdentityTransfer().evaluate(samples)

        table = np.asarray(self.values, dtype=np.float64)
        scaled = _as_codes(samples) * (n - 1)
        k = np.clip(scaled // CHANNEL_MAX, 0, n - 2)
        f = (scaled - k * CHANNEL_MAX) / CHANNEL_MAX
        return _round_clamp(CHANNEL_MAX * (table[k] + f * (table[k + 1] - table[k])))


@dataclass(frozen=True, init=False)
class DiscreteTransfer:
    """Step function over N control points, without interpolation.

    With no points the function is the identity.
    """

    values: tuple[float, ...]

    kind: ClassVar[TransferKind] = TransferKind.DISCRETE

    def __init__(self, values: Sequence[float] = ()):
        object.__setattr__(self, "values", validate_unit_values(values))

    def evaluate(self, samples: NDArray) -> NDArray[np.uint8]:
        n = len(self.values)
        if n == 0:
            return IdentityTransfer().evaluate(samples)

        table = np.asarray(self.values, dtype=np.float64)
        k = np.clip(_as_codes(samples) * n // CHANNEL_MAX, 0, n - 1)
        return _round_clamp(CHANNEL_MAX * table[k])


@dataclass(frozen=True)
class LinearTransfer:
    """``slope * v + intercept``.

    ``intercept`` is in code-value units (0-255), not unit space.
    """

    slope: float = 1.0
    intercept: float = 0.0

    kind: ClassVar[TransferKind] = TransferKind.LINEAR

    def __post_init__(self):
        _check_finite(slope=self.slope, intercept=self.intercept)

    def is_neutral(self) -> bool:
        """Check if this function leaves the channel unchanged."""
        return TRANSFER_CONFIG.slope.is_neutral(
            self.slope
        ) and TRANSFER_CONFIG.intercept.is_neutral(self.intercept)

    def evaluate(self, samples: NDArray) -> NDArray[np.uint8]:
        v = np.asarray(samples, dtype=np.float64)
        return _round_clamp(self.slope * v + self.intercept)


@dataclass(frozen=True)
class GammaTransfer:
    """``amplitude * x ** exponent * 255 + offset``.

    ``offset`` is in code-value units (0-255), not unit space.
    """

    amplitude: float = 1.0
    exponent: float = 1.0
    offset: float = 0.0

    kind: ClassVar[TransferKind] = TransferKind.GAMMA

    def __post_init__(self):
        _check_finite(amplitude=self.amplitude, exponent=self.exponent, offset=self.offset)

    def is_neutral(self) -> bool:
        """Check if this function leaves the channel unchanged."""
        return (
            TRANSFER_CONFIG.amplitude.is_neutral(self.amplitude)
            and TRANSFER_CONFIG.exponent.is_neutral(self.exponent)
            and TRANSFER_CONFIG.offset.is_neutral(self.offset)
        )

    def evaluate(self, samples: NDArray) -> NDArray[np.uint8]:
        x = _normalize(samples)
        if self.amplitude == 0.0:
            return _round_clamp(np.full_like(x, self.offset))
        # 0 ** negative exponent is +inf; clamping turns it into full intensity
        with np.errstate(divide="ignore", over="ignore"):
            y = self.amplitude * np.power(x, self.exponent) * CHANNEL_MAX + self.offset
        y = np.nan_to_num(y, posinf=CHANNEL_MAX, neginf=0.0)
        return _round_clamp(y)


def _check_finite(**params: float) -> None:
    for name, value in params.items():
        check_finite(value, name)


ChannelSpec = IdentityTransfer | TableTransfer | DiscreteTransfer | LinearTransfer | GammaTransfer

TRANSFER_TYPES: tuple[type, ...] = (
    IdentityTransfer,
    TableTransfer,
    DiscreteTransfer,
    LinearTransfer,
    GammaTransfer,
)
