"""
Immutable rendered rasters.

A CachedRaster pairs an ARGB pixel array with its origin in the node's
logical coordinate space. The array is owned exclusively by the raster and
flagged read-only, so rasters can be shared between nodes and threads.

Example:
    >>> raster = CachedRaster.filled(4, 2, argb=(255, 0, 0, 0), origin=(10, 5))
    >>> raster.bounds
    Rect(x=10, y=5, width=4, height=2)
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from svgfx.channels import Channel
from svgfx.constants import CHANNEL_COUNT
from svgfx.exceptions import ResourceError
from svgfx.geometry import Rect


def _as_origin(origin: Sequence[int]) -> tuple[int, int]:
    if len(origin) != 2:
        raise ValueError(f"origin must be an (x, y) pair, got {origin!r}")
    for value in origin:
        if isinstance(value, bool) or not isinstance(value, int | np.integer):
            raise TypeError(f"origin coordinates must be integers, got {origin!r}")
    x, y = origin
    return int(x), int(y)


class CachedRaster:
    """Read-only ARGB pixel buffer with an integer origin.

    Pixels have shape ``(height, width, 4)`` and dtype ``uint8``; the last
    axis is indexed by :class:`~svgfx.channels.Channel`. Equality is identity.
    """

    __slots__ = ("_pixels", "_origin")

    def __init__(self, pixels: NDArray[np.uint8], origin: Sequence[int] = (0, 0)):
        """
        Wrap ``pixels`` without copying.

        The raster takes ownership of ``pixels`` and marks it read-only; the
        caller must not keep writing to it. Use :meth:`from_argb` to wrap an
        array the caller keeps using.

        :param pixels: Array of shape (height, width, 4), dtype uint8
        :param origin: (x, y) of the top-left pixel
        :raises TypeError: If pixels is not a uint8 ndarray
        :raises ValueError: If pixels does not have shape (H, W, 4)
        """
        if not isinstance(pixels, np.ndarray):
            raise TypeError(f"pixels must be ndarray, got {type(pixels).__name__}")
        if pixels.dtype != np.uint8:
            raise TypeError(f"pixels must have dtype uint8, got {pixels.dtype}")
        if pixels.ndim != 3 or pixels.shape[2] != CHANNEL_COUNT:
            raise ValueError(
                f"pixels must have shape (height, width, {CHANNEL_COUNT}), got {pixels.shape}"
            )
        pixels.setflags(write=False)
        self._pixels = pixels
        self._origin = _as_origin(origin)

    @classmethod
    def from_argb(cls, pixels: NDArray[np.uint8], origin: Sequence[int] = (0, 0)) -> CachedRaster:
        """Create a raster from a private copy of ``pixels``."""
        return cls(np.array(pixels, dtype=np.uint8, order="C", copy=True), origin)

    @classmethod
    def filled(
        cls,
        width: int,
        height: int,
        argb: Sequence[int] = (0, 0, 0, 0),
        origin: Sequence[int] = (0, 0),
    ) -> CachedRaster:
        """
        Create a solid-colour raster.

        :param width: Width in pixels
        :param height: Height in pixels
        :param argb: (alpha, red, green, blue) code values
        :param origin: (x, y) of the top-left pixel
        :raises ResourceError: If the pixel buffer cannot be allocated
        """
        if width < 0 or height < 0:
            raise ValueError(f"raster size must be non-negative, got {width}x{height}")
        if len(argb) != CHANNEL_COUNT:
            raise ValueError(f"argb must have {CHANNEL_COUNT} components, got {len(argb)}")
        try:
            pixels = np.empty((height, width, CHANNEL_COUNT), dtype=np.uint8)
        except MemoryError as exc:
            raise ResourceError(f"Cannot allocate {width}x{height} raster") from exc
        pixels[...] = np.asarray(argb, dtype=np.uint8)
        return cls(pixels, origin)

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def pixels(self) -> NDArray[np.uint8]:
        """Read-only (height, width, 4) ARGB array."""
        return self._pixels

    @property
    def origin(self) -> tuple[int, int]:
        return self._origin

    @property
    def x(self) -> int:
        return self._origin[0]

    @property
    def y(self) -> int:
        return self._origin[1]

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def bounds(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def channel(self, channel: Channel | str | int) -> NDArray[np.uint8]:
        """Read-only (height, width) view of one channel."""
        return self._pixels[:, :, Channel.resolve(channel)]

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """ARGB tuple of the pixel at logical coordinates (x, y)."""
        if not self.bounds.contains(x, y):
            raise IndexError(f"({x}, {y}) is outside raster bounds {self.bounds}")
        a, r, g, b = self._pixels[y - self.y, x - self.x]
        return int(a), int(r), int(g), int(b)

    def crop(self, region: Rect) -> CachedRaster | None:
        """
        Return the part of this raster inside ``region``.

        The result shares this raster's read-only buffer.

        :param region: Region in logical coordinates
        :returns: Raster covering the overlap, self if it covers the whole
            raster, or None if there is no overlap
        """
        overlap = self.bounds.intersect(region)
        if overlap is None:
            return None
        if overlap == self.bounds:
            return self
        top = overlap.y - self.y
        left = overlap.x - self.x
        view = self._pixels[top : top + overlap.height, left : left + overlap.width]
        return CachedRaster(view, (overlap.x, overlap.y))

    def copy_pixels(self) -> NDArray[np.uint8]:
        """Writable copy of the pixel array."""
        return self._pixels.copy()

    def __repr__(self) -> str:
        return f"CachedRaster({self.width}x{self.height} at {self.origin})"
