"""Pixel channel identifiers.

A channel's value is also its index on the last axis of a raster's pixel
array, so rasters are stored in A, R, G, B order.
"""

from __future__ import annotations

import numbers
from enum import IntEnum


class Channel(IntEnum):
    """The four channels of an ARGB pixel."""

    ALPHA = 0
    RED = 1
    GREEN = 2
    BLUE = 3

    @classmethod
    def resolve(cls, channel: Channel | str | int) -> Channel:
        """
        Convert a channel name, index or member into a Channel.

        :param channel: Channel member, case-insensitive name ("red") or index 0-3
        :returns: Channel member
        :raises ValueError: If the name or index does not denote a channel
        :raises TypeError: If ``channel`` has an unsupported type
        """
        if isinstance(channel, cls):
            return channel
        if isinstance(channel, str):
            try:
                return cls[channel.upper()]
            except KeyError:
                names = ", ".join(c.name.lower() for c in cls)
                raise ValueError(f'channel="{channel}" is not valid. Valid options: {names}') from None
        if isinstance(channel, numbers.Integral) and not isinstance(channel, bool):
            try:
                return cls(int(channel))
            except ValueError:
                raise ValueError(f"channel index {channel} is outside valid range [0, 3]") from None
        raise TypeError(f"channel must be Channel, str or int, got {type(channel).__name__}")


ALL_CHANNELS: tuple[Channel, ...] = tuple(Channel)
