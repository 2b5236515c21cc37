"""
Protocol definitions for filter-graph nodes.

Any object with these methods can act as a source for a filter node; the
library does not care how a leaf produces its pixels.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from svgfx.context import RenderContext
    from svgfx.geometry import Rect
    from svgfx.raster import CachedRaster


@runtime_checkable
class FilterNode(Protocol):
    """
    Protocol for nodes of the rendering graph.

    A node holds zero or more upstream sources, reports its output bounds,
    and renders on demand against a caller-supplied context.
    """

    def get_sources(self) -> list[FilterNode]:
        """Return the node's upstream sources in order (possibly empty)."""
        ...

    def get_bounds(self) -> Rect | None:
        """Return the node's output bounds, or None if it has none."""
        ...

    def render(self, context: RenderContext) -> CachedRaster | None:
        """
        Render the node.

        :param context: Rendering context, passed through to sources
        :returns: Rendered raster, or None when there is nothing to draw
        """
        ...
