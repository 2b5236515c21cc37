"""
Channel transfer functions and their lookup-table compiler.

Example:
    >>> from svgfx.transfer import LinearTransfer, compile_transfer_table
    >>> table = compile_transfer_table(LinearTransfer(slope=0.0, intercept=128))
    >>> int(table[0]), int(table[255])
    (128, 128)
"""

from svgfx.transfer.compiler import (
    IDENTITY_TABLE,
    compile_transfer_table,
    compile_transfer_tables,
    is_identity_table,
)
from svgfx.transfer.factory import create_transfer, parse_table_values, resolve_kind
from svgfx.transfer.functions import (
    TRANSFER_TYPES,
    ChannelSpec,
    DiscreteTransfer,
    GammaTransfer,
    IdentityTransfer,
    LinearTransfer,
    TableTransfer,
    TransferKind,
)

__all__ = [
    "ChannelSpec",
    "TransferKind",
    "IdentityTransfer",
    "TableTransfer",
    "DiscreteTransfer",
    "LinearTransfer",
    "GammaTransfer",
    "TRANSFER_TYPES",
    # Compilation
    "IDENTITY_TABLE",
    "compile_transfer_table",
    "compile_transfer_tables",
    "is_identity_table",
    # Factory
    "create_transfer",
    "parse_table_values",
    "resolve_kind",
]
