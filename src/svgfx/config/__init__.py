"""Configuration module for svgfx.

Usage:
    from svgfx.config import CONFIG
    CONFIG.transfer.slope.default  # 1.0
    CONFIG.render.lut_size  # 256

    from svgfx.config import TRANSFER_CONFIG
    TRANSFER_CONFIG.exponent.neutral  # 1.0
"""

from svgfx.config.config import CONFIG, RENDER_CONFIG, TRANSFER_CONFIG, SvgfxConfig
from svgfx.config.operations import ParameterSpec
from svgfx.config.render import RenderConfig
from svgfx.config.transfer import TransferConfig

__all__ = [
    "CONFIG",
    "RENDER_CONFIG",
    "TRANSFER_CONFIG",
    "SvgfxConfig",
    "ParameterSpec",
    "RenderConfig",
    "TransferConfig",
]
