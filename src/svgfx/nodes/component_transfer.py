"""
ComponentTransferNode: per-channel intensity remapping of a source image.

Each of the four channels (alpha, red, green, blue) has a slot holding a
transfer function and, once compiled, its 256-entry lookup table. Setting a
channel's function discards only that channel's table; the next render
recompiles it.

Concurrency:
    A slot is a single immutable (spec, table) pair that is swapped by
    reference. ``render`` snapshots the four slots, compiles any missing
    tables from the snapshot, and publishes a compiled table back only if the
    node still holds the very slot it snapshotted. A render racing
    ``set_channel_function`` therefore uses either the old or the new
    function for a channel, never a table compiled for a different spec.

Example:
    >>> source = RasterSourceNode(CachedRaster.filled(1, 1, argb=(255, 0, 0, 0)))
    >>> node = ComponentTransferNode(source, red=LinearTransfer(slope=0.5, intercept=64))
    >>> node.render(RenderContext()).pixel(0, 0)
    (255, 64, 0, 0)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from svgfx.channels import ALL_CHANNELS, Channel
from svgfx.config import RENDER_CONFIG
from svgfx.context import RenderContext
from svgfx.exceptions import ResourceError
from svgfx.kernels import apply_channel_luts_numba
from svgfx.nodes.base import AbstractFilterNode
from svgfx.protocols import FilterNode
from svgfx.raster import CachedRaster
from svgfx.transfer.compiler import IDENTITY_TABLE, compile_transfer_table
from svgfx.transfer.functions import ChannelSpec
from svgfx.validators import validate_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class _ChannelSlot:
    """Transfer function of one channel and its table, if compiled."""

    spec: ChannelSpec | None
    table: NDArray[np.uint8] | None = None


class ComponentTransferNode(AbstractFilterNode):
    """
    Filter node applying independent transfer functions to A, R, G and B.

    Unset channel functions (None) leave their channel unchanged. The node's
    bounds are its source's bounds.
    """

    def __init__(
        self,
        source: FilterNode | None = None,
        alpha: ChannelSpec | None = None,
        red: ChannelSpec | None = None,
        green: ChannelSpec | None = None,
        blue: ChannelSpec | None = None,
    ):
        """
        :param source: Upstream node (may be set later)
        :param alpha: Alpha transfer function, None for identity
        :param red: Red transfer function, None for identity
        :param green: Green transfer function, None for identity
        :param blue: Blue transfer function, None for identity
        """
        super().__init__([source])
        self._lock = threading.Lock()
        self._slots: list[_ChannelSlot] = [
            _ChannelSlot(alpha),
            _ChannelSlot(red),
            _ChannelSlot(green),
            _ChannelSlot(blue),
        ]
        logger.debug("[ComponentTransfer] Initialized %r", self)

    # ========================================================================
    # Source
    # ========================================================================

    def get_source(self) -> FilterNode | None:
        """Return the upstream node, or None if unset."""
        return self._sources[0]

    @validate_type(FilterNode, "source")
    def set_source(self, source: FilterNode | None) -> None:
        """Replace the upstream node."""
        self.set_sources([source])

    source = property(get_source, set_source)

    # ========================================================================
    # Channel functions
    # ========================================================================

    def get_channel_function(self, channel: Channel | str | int) -> ChannelSpec | None:
        """
        Return the transfer function configured for ``channel``.

        :param channel: Channel member, name ("alpha", "red", ...) or index
        :returns: Transfer function, or None meaning identity
        """
        return self._slots[Channel.resolve(channel)].spec

    def set_channel_function(self, channel: Channel | str | int, spec: ChannelSpec | None) -> None:
        """
        Replace the transfer function of ``channel`` and drop its compiled table.

        :param channel: Channel member, name ("alpha", "red", ...) or index
        :param spec: Transfer function, or None for identity
        """
        index = Channel.resolve(channel)
        with self._lock:
            self._slots[index] = _ChannelSlot(spec)
        logger.debug("[ComponentTransfer] Set %s function to %r", index.name.lower(), spec)

    def is_compiled(self, channel: Channel | str | int) -> bool:
        """Check whether ``channel``'s current function has a cached table."""
        return self._slots[Channel.resolve(channel)].table is not None

    @property
    def alpha_function(self) -> ChannelSpec | None:
        return self.get_channel_function(Channel.ALPHA)

    @alpha_function.setter
    def alpha_function(self, spec: ChannelSpec | None) -> None:
        self.set_channel_function(Channel.ALPHA, spec)

    @property
    def red_function(self) -> ChannelSpec | None:
        return self.get_channel_function(Channel.RED)

    @red_function.setter
    def red_function(self, spec: ChannelSpec | None) -> None:
        self.set_channel_function(Channel.RED, spec)

    @property
    def green_function(self) -> ChannelSpec | None:
        return self.get_channel_function(Channel.GREEN)

    @green_function.setter
    def green_function(self, spec: ChannelSpec | None) -> None:
        self.set_channel_function(Channel.GREEN, spec)

    @property
    def blue_function(self) -> ChannelSpec | None:
        return self.get_channel_function(Channel.BLUE)

    @blue_function.setter
    def blue_function(self, spec: ChannelSpec | None) -> None:
        self.set_channel_function(Channel.BLUE, spec)

    # ========================================================================
    # Rendering
    # ========================================================================

    def _resolve_tables(self) -> list[NDArray[np.uint8]]:
        """Return one table per channel, compiling and caching missing ones."""
        snapshot = list(self._slots)
        tables = []

        for channel, slot in zip(ALL_CHANNELS, snapshot):
            if slot.table is not None:
                tables.append(slot.table)
                continue

            table = compile_transfer_table(slot.spec)
            tables.append(table)

            with self._lock:
                if self._slots[channel] is slot:
                    self._slots[channel] = _ChannelSlot(slot.spec, table)
                else:
                    logger.debug(
                        "[ComponentTransfer] %s function changed during render, not caching",
                        channel.name.lower(),
                    )

        return tables

    def render(self, context: RenderContext) -> CachedRaster | None:
        """
        Render the source and remap its channels.

        :param context: Rendering context, passed to the source unchanged
        :returns: New raster with the source's origin, or None if the source
            is unset or renders nothing
        :raises ResourceError: If the output buffer cannot be allocated
        """
        source = self.get_source()
        if source is None:
            logger.debug("[ComponentTransfer] No source, nothing to render")
            return None

        src = source.render(context)
        if src is None:
            return None

        tables = self._resolve_tables()

        try:
            out = np.empty_like(src.pixels, order="C")
        except MemoryError as exc:
            raise ResourceError(
                f"Cannot allocate {src.width}x{src.height} component transfer output"
            ) from exc

        if RENDER_CONFIG.skip_identity and all(t is IDENTITY_TABLE for t in tables):
            np.copyto(out, src.pixels)
        else:
            apply_channel_luts_numba(src.pixels, np.stack(tables), out)

        logger.debug(
            "[ComponentTransfer] Rendered %dx%d at %s", src.width, src.height, src.origin
        )
        return CachedRaster(out, src.origin)

    def __repr__(self) -> str:
        functions = ", ".join(
            f"{channel.name.lower()}={slot.spec!r}"
            for channel, slot in zip(ALL_CHANNELS, self._slots)
            if slot.spec is not None
        )
        return f"ComponentTransferNode({functions or 'identity'})"
