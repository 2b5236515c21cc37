"""Numeric constants shared by the transfer compiler and the render path."""

# Size of a compiled per-channel lookup table (one entry per 8-bit code value)
LUT_SIZE = 256

# Largest 8-bit code value
CHANNEL_MAX = 255

# Channels per pixel (alpha, red, green, blue)
CHANNEL_COUNT = 4
