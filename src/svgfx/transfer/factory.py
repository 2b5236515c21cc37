"""
Build transfer functions from SVG ``feFuncX``-style parameters.

Markup expresses ``intercept`` and ``offset`` as unit-space intensities; the
transfer variants store them as code values, so the factory scales them by
255 on the way in.

Example:
    >>> create_transfer("linear", slope=0.5, intercept=0.25)
    LinearTransfer(slope=0.5, intercept=63.75)
    >>> create_transfer("table", table_values=parse_table_values("0 0.5, 1"))
    TableTransfer(values=(0.0, 0.5, 1.0))
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from svgfx.config import TRANSFER_CONFIG
from svgfx.constants import CHANNEL_MAX
from svgfx.exceptions import ConfigurationError
from svgfx.transfer.functions import (
    ChannelSpec,
    DiscreteTransfer,
    GammaTransfer,
    IdentityTransfer,
    LinearTransfer,
    TableTransfer,
    TransferKind,
)
from svgfx.validators import validate_finite

_SEPARATORS = re.compile(r"[\s,]+")


def resolve_kind(kind: TransferKind | str) -> TransferKind:
    """
    Convert a kind name to a TransferKind.

    :raises ConfigurationError: If the name is not a known transfer kind
    """
    if isinstance(kind, TransferKind):
        return kind
    if isinstance(kind, str):
        try:
            return TransferKind(kind.strip().lower())
        except ValueError:
            pass
    valid = ", ".join(k.value for k in TransferKind)
    raise ConfigurationError(f"Unknown transfer kind {kind!r}. Valid kinds: {valid}")


def parse_table_values(text: str) -> tuple[float, ...]:
    """
    Split a ``tableValues`` attribute into floats.

    Values may be separated by whitespace and/or commas.

    :raises ValueError: If an item is not a number
    """
    items = [item for item in _SEPARATORS.split(text.strip()) if item]
    try:
        return tuple(float(item) for item in items)
    except ValueError:
        raise ValueError(f"tableValues must be a list of numbers, got {text!r}") from None


@validate_finite("slope")
@validate_finite("intercept")
@validate_finite("amplitude")
@validate_finite("exponent")
@validate_finite("offset")
def create_transfer(
    kind: TransferKind | str,
    *,
    table_values: Sequence[float] = (),
    slope: float = TRANSFER_CONFIG.slope.default,
    intercept: float = TRANSFER_CONFIG.intercept.default,
    amplitude: float = TRANSFER_CONFIG.amplitude.default,
    exponent: float = TRANSFER_CONFIG.exponent.default,
    offset: float = TRANSFER_CONFIG.offset.default,
) -> ChannelSpec:
    """
    Create a transfer function of the given kind.

    Parameters that do not apply to ``kind`` are ignored, as the SVG
    attributes are.

    :param kind: Transfer kind or its name ("identity", "table", "discrete", "linear", "gamma")
    :param table_values: Control points in [0, 1] for table and discrete kinds
    :param slope: Linear slope
    :param intercept: Linear intercept in unit space
    :param amplitude: Gamma amplitude
    :param exponent: Gamma exponent
    :param offset: Gamma offset in unit space
    :returns: Immutable transfer function
    :raises ConfigurationError: If ``kind`` is unknown
    :raises ValueError: If a parameter is out of range or not finite
    """
    kind = resolve_kind(kind)

    if kind is TransferKind.IDENTITY:
        return IdentityTransfer()
    if kind is TransferKind.TABLE:
        return TableTransfer(table_values)
    if kind is TransferKind.DISCRETE:
        return DiscreteTransfer(table_values)
    if kind is TransferKind.LINEAR:
        return LinearTransfer(slope=float(slope), intercept=CHANNEL_MAX * float(intercept))
    if kind is TransferKind.GAMMA:
        return GammaTransfer(
            amplitude=float(amplitude),
            exponent=float(exponent),
            offset=CHANNEL_MAX * float(offset),
        )
    raise ConfigurationError(f"Unhandled transfer kind {kind!r}")
