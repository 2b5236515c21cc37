"""Unified svgfx configuration.

This module provides a top-level configuration dataclass that contains
the transfer-function and render configurations as sub-attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from svgfx.config.render import RenderConfig
from svgfx.config.transfer import TransferConfig


@dataclass(frozen=True)
class SvgfxConfig:
    """Top-level configuration containing all svgfx configurations.

    Provides hierarchical access:
        CONFIG.transfer.slope.default
        CONFIG.render.skip_identity

    Attributes:
        transfer: Transfer-function parameter specifications
        render: Render settings
    """

    transfer: TransferConfig = TransferConfig()
    render: RenderConfig = RenderConfig()

    def get_all_specs(self) -> dict[str, dict[str, Any]]:
        """Get all specs organized by section.

        :return: Nested dictionary of all specifications
        """
        return {
            "transfer": self.transfer.get_all_specs(),
            "render": self.render.get_all_specs(),
        }


# Main singleton instance
CONFIG = SvgfxConfig()

# Section shortcuts
TRANSFER_CONFIG = CONFIG.transfer
RENDER_CONFIG = CONFIG.render
