"""
Filter-graph nodes.

Example:
    >>> from svgfx.nodes import ComponentTransferNode, RasterSourceNode
    >>> node = ComponentTransferNode(RasterSourceNode(pixels))
"""

from svgfx.nodes.base import AbstractFilterNode
from svgfx.nodes.component_transfer import ComponentTransferNode
from svgfx.nodes.source import RasterSourceNode

__all__ = [
    "AbstractFilterNode",
    "ComponentTransferNode",
    "RasterSourceNode",
]
