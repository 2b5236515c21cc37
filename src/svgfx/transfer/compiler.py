"""
Compile channel transfer functions into 256-entry lookup tables.

Compilation is pure and deterministic: compiling the same spec twice yields
equal tables, so callers may cache results keyed by spec identity.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from svgfx.config import RENDER_CONFIG
from svgfx.exceptions import ConfigurationError
from svgfx.transfer.functions import (
    ChannelSpec,
    DiscreteTransfer,
    GammaTransfer,
    IdentityTransfer,
    LinearTransfer,
    TableTransfer,
)

logger = logging.getLogger(__name__)

_SAMPLES = np.arange(RENDER_CONFIG.lut_size, dtype=np.int64)


def _freeze(table: NDArray[np.uint8]) -> NDArray[np.uint8]:
    table.setflags(write=False)
    return table


IDENTITY_TABLE: NDArray[np.uint8] = _freeze(np.arange(RENDER_CONFIG.lut_size, dtype=np.uint8))


def compile_transfer_table(spec: ChannelSpec | None) -> NDArray[np.uint8]:
    """
    Build the lookup table realizing ``spec``.

    :param spec: Transfer function, or None for identity
    :returns: Read-only uint8 array of shape (256,)
    :raises ConfigurationError: If ``spec`` is not a transfer function variant
    """
    if spec is None or isinstance(spec, IdentityTransfer):
        return IDENTITY_TABLE

    if isinstance(spec, TableTransfer):
        if len(spec.values) < 2:
            return IDENTITY_TABLE
        table = spec.evaluate(_SAMPLES)
    elif isinstance(spec, DiscreteTransfer):
        if not spec.values:
            return IDENTITY_TABLE
        table = spec.evaluate(_SAMPLES)
    elif isinstance(spec, LinearTransfer | GammaTransfer):
        if spec.is_neutral():
            logger.debug("[TransferCompiler] Neutral %s, using identity table", spec.kind.value)
            return IDENTITY_TABLE
        table = spec.evaluate(_SAMPLES)
    else:
        raise ConfigurationError(
            f"Unknown transfer function {type(spec).__name__}. "
            "Expected IdentityTransfer, TableTransfer, DiscreteTransfer, "
            "LinearTransfer or GammaTransfer."
        )

    logger.debug("[TransferCompiler] Compiled %s table", spec.kind.value)
    return _freeze(np.ascontiguousarray(table, dtype=np.uint8))


def compile_transfer_tables(specs: Sequence[ChannelSpec | None]) -> NDArray[np.uint8]:
    """
    Compile one table per channel and stack them in channel order.

    :param specs: Four specs in alpha, red, green, blue order (None = identity)
    :returns: Read-only uint8 array of shape (4, 256)
    :raises ValueError: If ``specs`` does not have four entries
    """
    if len(specs) != RENDER_CONFIG.channel_count:
        raise ValueError(f"Expected {RENDER_CONFIG.channel_count} channel specs, got {len(specs)}")
    return _freeze(np.stack([compile_transfer_table(spec) for spec in specs]))


def is_identity_table(table: NDArray[np.uint8]) -> bool:
    """Check whether ``table`` maps every code value to itself."""
    return table is IDENTITY_TABLE or np.array_equal(table, IDENTITY_TABLE)
