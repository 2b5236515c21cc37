"""Leaf node that serves an existing raster."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from svgfx.context import RenderContext
from svgfx.geometry import Rect
from svgfx.nodes.base import AbstractFilterNode
from svgfx.raster import CachedRaster

logger = logging.getLogger(__name__)


class RasterSourceNode(AbstractFilterNode):
    """
    Source node backed by an in-memory ARGB raster.

    Rasters are immutable, so the same raster (or a view of it restricted to
    the context's area of interest) is returned from every render.
    A node without an image (or with an empty one) renders nothing.

    Example:
        >>> source = RasterSourceNode(np.zeros((2, 2, 4), dtype=np.uint8), origin=(5, 5))
        >>> source.get_bounds()
        Rect(x=5, y=5, width=2, height=2)
    """

    def __init__(
        self,
        image: CachedRaster | NDArray[np.uint8] | None = None,
        origin: Sequence[int] = (0, 0),
    ):
        super().__init__()
        self._raster: CachedRaster | None = None
        self.set_image(image, origin)

    def set_image(
        self,
        image: CachedRaster | NDArray[np.uint8] | None,
        origin: Sequence[int] = (0, 0),
    ) -> None:
        """
        Replace the served image.

        Arrays are copied; ``origin`` is ignored for CachedRaster inputs,
        which carry their own.
        """
        if image is None or isinstance(image, CachedRaster):
            self._raster = image
        else:
            self._raster = CachedRaster.from_argb(image, origin)

    @property
    def raster(self) -> CachedRaster | None:
        return self._raster

    def get_bounds(self) -> Rect | None:
        raster = self._raster
        return None if raster is None else raster.bounds

    def render(self, context: RenderContext) -> CachedRaster | None:
        """Return the raster, cropped to the context's area of interest if it has one."""
        raster = self._raster
        if raster is None or raster.bounds.is_empty():
            logger.debug("[RasterSource] Nothing to render")
            return None

        area = context.area_of_interest
        if area is None:
            return raster

        cropped = raster.crop(area)
        if cropped is None:
            logger.debug("[RasterSource] Area of interest %s misses %s", area, raster.bounds)
        return cropped
