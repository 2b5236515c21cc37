"""
Example: component transfer usage.

Demonstrates how to use the svgfx filter graph for:
- Wrapping an ARGB array as a source node
- Per-channel transfer functions (linear, gamma, table, discrete)
- Building functions from SVG feFuncX attributes
- Chaining nodes and re-rendering after a change
"""

import logging

import numpy as np

from svgfx import (
    Channel,
    ComponentTransferNode,
    DiscreteTransfer,
    GammaTransfer,
    LinearTransfer,
    RasterSourceNode,
    RenderContext,
    create_transfer,
    parse_table_values,
)

# Configure logging to see compile and render events
logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")


def generate_gradient(width: int = 256, height: int = 64) -> np.ndarray:
    """Generate an opaque ARGB gradient: red ramps left to right, green top to bottom."""
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[..., Channel.ALPHA] = 255
    pixels[..., Channel.RED] = np.linspace(0, 255, width, dtype=np.uint8)[None, :]
    pixels[..., Channel.GREEN] = np.linspace(0, 255, height, dtype=np.uint8)[:, None]
    pixels[..., Channel.BLUE] = 128
    return pixels


def example_basic():
    """Darken red and brighten green with explicit transfer functions."""
    print("\n=== Basic component transfer ===")

    source = RasterSourceNode(generate_gradient(), origin=(10, 20))
    node = ComponentTransferNode(
        source,
        red=LinearTransfer(slope=0.5, intercept=0),
        green=GammaTransfer(amplitude=1.0, exponent=0.5, offset=0),
    )

    raster = node.render(RenderContext())
    print(f"Rendered {raster} with bounds {node.get_bounds()}")
    print(f"Top-right pixel (ARGB): {raster.pixel(raster.x + raster.width - 1, raster.y)}")


def example_svg_attributes():
    """Build functions from feFuncX-style attributes."""
    print("\n=== SVG attributes ===")

    node = ComponentTransferNode(RasterSourceNode(generate_gradient()))
    node.red_function = create_transfer("table", table_values=parse_table_values("1 0"))
    node.blue_function = create_transfer("linear", slope=0.0, intercept=0.25)

    raster = node.render(RenderContext())
    print(f"Inverted red at x=0: {raster.pixel(0, 0)[1]}")
    print(f"Constant blue: {int(raster.channel('blue')[0, 0])}")


def example_chain():
    """Posterize the output of another component transfer."""
    print("\n=== Chained nodes ===")

    source = RasterSourceNode(generate_gradient())
    darken = ComponentTransferNode(source, red=LinearTransfer(slope=0.8, intercept=0))
    posterize = ComponentTransferNode(darken, red=DiscreteTransfer([0.0, 0.33, 0.66, 1.0]))

    context = RenderContext()
    levels = np.unique(posterize.render(context).channel("red"))
    print(f"Red levels after posterize: {levels.tolist()}")

    # Changing the upstream function is picked up on the next render
    darken.set_channel_function("red", None)
    levels = np.unique(posterize.render(context).channel("red"))
    print(f"Red levels without darkening: {levels.tolist()}")


if __name__ == "__main__":
    example_basic()
    example_svg_attributes()
    example_chain()
