"""
Base class for filter-graph nodes.

Keeps the ordered source list and provides the pass-through geometry shared
by nodes that do not move pixels: output bounds equal the first source's
bounds, and dependency/dirty regions are the requested region clipped to
those bounds.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from svgfx.context import RenderContext
from svgfx.geometry import Rect
from svgfx.protocols import FilterNode
from svgfx.raster import CachedRaster

logger = logging.getLogger(__name__)


class AbstractFilterNode(ABC):
    """
    Filter node with an ordered, mutable list of upstream sources.

    Subclasses implement :meth:`render`. Nodes compare by identity.
    """

    def __init__(self, sources: Iterable[FilterNode | None] = ()):
        self._sources: list[FilterNode | None] = []
        self.set_sources(sources)

    # ========================================================================
    # Sources
    # ========================================================================

    def get_sources(self) -> list[FilterNode | None]:
        """Return a copy of the upstream sources in order."""
        return list(self._sources)

    def set_sources(self, sources: Iterable[FilterNode | None]) -> None:
        """
        Replace all upstream sources.

        ``None`` entries mark unset inputs; rendering treats them as empty.

        :raises TypeError: If an entry is neither None nor a FilterNode
        """
        new_sources = list(sources)
        for i, source in enumerate(new_sources):
            if source is not None and not isinstance(source, FilterNode):
                raise TypeError(f"source[{i}] must be a FilterNode, got {type(source).__name__}")
            if source is self:
                raise ValueError("A filter node cannot be its own source")
        # Single reference swap; readers always see a complete list
        self._sources = new_sources

    # ========================================================================
    # Geometry
    # ========================================================================

    def get_bounds(self) -> Rect | None:
        """Bounds of the first source, or None if it is unset."""
        sources = self._sources
        if not sources or sources[0] is None:
            return None
        return sources[0].get_bounds()

    def get_dependency_region(self, src_index: int, output_region: Rect) -> Rect | None:
        """
        Region of source ``src_index`` needed to render ``output_region``.

        :raises IndexError: If ``src_index`` does not name a source
        """
        self._check_index(src_index)
        bounds = self.get_bounds()
        if bounds is None:
            return None
        return output_region.intersect(bounds)

    def get_dirty_region(self, src_index: int, input_region: Rect) -> Rect | None:
        """
        Region of this node's output affected by a change to ``input_region``
        of source ``src_index``.

        :raises IndexError: If ``src_index`` does not name a source
        """
        self._check_index(src_index)
        bounds = self.get_bounds()
        if bounds is None:
            return None
        return input_region.intersect(bounds)

    def _check_index(self, src_index: int) -> None:
        if not 0 <= src_index < len(self._sources):
            raise IndexError(
                f"source index {src_index} is out of range for {len(self._sources)} source(s)"
            )

    # ========================================================================
    # Rendering
    # ========================================================================

    @abstractmethod
    def render(self, context: RenderContext) -> CachedRaster | None:
        """
        Render this node.

        :param context: Rendering context, passed through to sources
        :returns: Rendered raster, or None when there is nothing to draw
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sources={len(self._sources)})"
