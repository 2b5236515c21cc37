"""Render configuration for the component-transfer pass."""

from __future__ import annotations

from dataclasses import dataclass

from svgfx.constants import CHANNEL_COUNT, LUT_SIZE


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for rendering filter nodes.

    Attributes:
        lut_size: Entries per compiled channel table
        channel_count: Channels per pixel (alpha, red, green, blue)
        skip_identity: Copy the source instead of running the lookup kernel
            when all four tables are identity
    """

    lut_size: int = LUT_SIZE
    channel_count: int = CHANNEL_COUNT
    skip_identity: bool = True

    def get_all_specs(self) -> dict[str, int | bool]:
        """Get all render settings keyed by name."""
        return {
            "lut_size": self.lut_size,
            "channel_count": self.channel_count,
            "skip_identity": self.skip_identity,
        }
