"""
Rendering context passed down a filter graph.

Filter nodes treat the context as opaque and hand it to their sources
unchanged. Leaf sources may inspect it; RasterSourceNode crops its
raster to the area of interest.

Example:
    >>> ctx = RenderContext().with_hints(quality="speed")
    >>> raster = node.render(ctx)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import numpy as np
from numpy.typing import NDArray

from svgfx.geometry import Rect


def _identity_transform() -> NDArray[np.float64]:
    matrix = np.eye(3, dtype=np.float64)
    matrix.setflags(write=False)
    return matrix


@dataclass(frozen=True, eq=False)
class RenderContext:
    """Target-space transform, rendering hints and optional area of interest.

    Attributes:
        transform: 3x3 affine matrix from user space to device space
        hints: Read-only mapping of rendering hints (e.g. ``quality``)
        area_of_interest: Region of the output the caller needs, or None for all
    """

    transform: NDArray[np.float64] = field(default_factory=_identity_transform)
    hints: Mapping[str, Any] = field(default_factory=dict)
    area_of_interest: Rect | None = None

    def __post_init__(self):
        matrix = np.array(self.transform, dtype=np.float64)
        if matrix.shape != (3, 3):
            raise ValueError(f"transform must be a 3x3 matrix, got shape {matrix.shape}")
        matrix.setflags(write=False)
        object.__setattr__(self, "transform", matrix)
        object.__setattr__(self, "hints", MappingProxyType(dict(self.hints)))

    def with_hints(self, **hints: Any) -> RenderContext:
        """Return a new context with ``hints`` merged over the current ones."""
        merged = dict(self.hints)
        merged.update(hints)
        return RenderContext(self.transform, merged, self.area_of_interest)

    def with_transform(self, transform: NDArray[np.float64]) -> RenderContext:
        """Return a new context using ``transform``."""
        return RenderContext(transform, self.hints, self.area_of_interest)

    def with_area_of_interest(self, area: Rect | None) -> RenderContext:
        """Return a new context restricted to ``area``."""
        return RenderContext(self.transform, self.hints, area)
