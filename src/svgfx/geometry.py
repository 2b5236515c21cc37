"""Axis-aligned integer rectangles for node bounds and regions."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Rectangle in the node's logical pixel space.

    ``x``/``y`` is the top-left corner; the rectangle covers
    ``[x, x + width) x [y, y + height)``.
    """

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rect size must be non-negative, got {self.width}x{self.height}")

    @property
    def max_x(self) -> int:
        return self.x + self.width

    @property
    def max_y(self) -> int:
        return self.y + self.height

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def intersect(self, other: Rect) -> Rect | None:
        """Return the overlap of two rectangles, or None if they do not overlap."""
        x0 = max(self.x, other.x)
        y0 = max(self.y, other.y)
        x1 = min(self.max_x, other.max_x)
        y1 = min(self.max_y, other.max_y)
        if x1 <= x0 or y1 <= y0:
            return None
        return Rect(x0, y0, x1 - x0, y1 - y0)

    def union(self, other: Rect) -> Rect:
        """Return the smallest rectangle containing both rectangles."""
        x0 = min(self.x, other.x)
        y0 = min(self.y, other.y)
        return Rect(x0, y0, max(self.max_x, other.max_x) - x0, max(self.max_y, other.max_y) - y0)

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.max_x and self.y <= y < self.max_y
