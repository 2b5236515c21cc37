"""
Numba-optimized kernels for per-pixel channel lookups.

The kernel is serial and releases the GIL, so several renders can run it
from different Python threads at once.
"""

from __future__ import annotations

import numpy as np
from numba import njit
from numpy.typing import NDArray


@njit(fastmath=True, cache=True, nogil=True)
def apply_channel_luts_numba(
    pixels: NDArray[np.uint8],
    luts: NDArray[np.uint8],
    out: NDArray[np.uint8],
) -> None:
    """
    Remap every channel of every pixel through its lookup table.

    Args:
        pixels: Source pixels [H, W, C]
        luts: One 256-entry table per channel [C, 256]
        out: Output pixels [H, W, C] (modified in-place)
    """
    height = pixels.shape[0]
    width = pixels.shape[1]
    channels = pixels.shape[2]

    for y in range(height):
        for x in range(width):
            for c in range(channels):
                out[y, x, c] = luts[c, pixels[y, x, c]]
