"""
svgfx - SVG filter-graph rendering core

Composable, lazily evaluated image filter nodes that render ARGB rasters on
demand, with the SVG component-transfer primitive.

Features:
- FilterNode protocol: ordered sources, bounds, render-on-demand
- ComponentTransferNode: independent alpha/red/green/blue transfer functions
- Transfer functions: identity, table, discrete, linear, gamma
- Lazily compiled, thread-safe 256-entry lookup tables per channel
- Immutable CachedRaster results with origin in logical pixel space

Example:
    >>> import numpy as np
    >>> from svgfx import (
    ...     ComponentTransferNode, LinearTransfer, RasterSourceNode, RenderContext,
    ... )
    >>>
    >>> pixels = np.zeros((64, 64, 4), dtype=np.uint8)
    >>> pixels[..., 0] = 255  # opaque black
    >>> node = ComponentTransferNode(
    ...     RasterSourceNode(pixels),
    ...     red=LinearTransfer(slope=0.5, intercept=64),
    ... )
    >>> raster = node.render(RenderContext())
    >>> raster.pixel(0, 0)
    (255, 64, 0, 0)

Example - SVG-style parameters:
    >>> from svgfx import create_transfer
    >>> node.set_channel_function("blue", create_transfer("gamma", amplitude=1, exponent=0.5))
"""

__version__ = "0.1.0"

from svgfx.channels import Channel
from svgfx.config import CONFIG
from svgfx.context import RenderContext
from svgfx.exceptions import ConfigurationError, ResourceError, SvgfxError
from svgfx.geometry import Rect
from svgfx.nodes import AbstractFilterNode, ComponentTransferNode, RasterSourceNode
from svgfx.protocols import FilterNode
from svgfx.raster import CachedRaster
from svgfx.transfer import (
    ChannelSpec,
    DiscreteTransfer,
    GammaTransfer,
    IdentityTransfer,
    LinearTransfer,
    TableTransfer,
    TransferKind,
    compile_transfer_table,
    compile_transfer_tables,
    create_transfer,
    parse_table_values,
)

__all__ = [
    "__version__",
    # Graph
    "FilterNode",
    "AbstractFilterNode",
    "ComponentTransferNode",
    "RasterSourceNode",
    "RenderContext",
    "CachedRaster",
    "Rect",
    "Channel",
    # Transfer functions
    "ChannelSpec",
    "TransferKind",
    "IdentityTransfer",
    "TableTransfer",
    "DiscreteTransfer",
    "LinearTransfer",
    "GammaTransfer",
    "compile_transfer_table",
    "compile_transfer_tables",
    "create_transfer",
    "parse_table_values",
    # Configuration
    "CONFIG",
    # Errors
    "SvgfxError",
    "ConfigurationError",
    "ResourceError",
]
