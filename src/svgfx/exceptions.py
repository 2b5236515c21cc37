"""Exception hierarchy for svgfx.

Empty renders are not errors: a node that has nothing to draw returns ``None``
from ``render`` instead of raising.
"""

from __future__ import annotations


class SvgfxError(Exception):
    """Base class for all svgfx errors."""


class ConfigurationError(SvgfxError, TypeError):
    """A transfer specification the compiler does not know how to handle.

    Raised when something other than one of the transfer variants reaches the
    table compiler, or when a transfer kind name is not recognized. This is a
    caller bug and is never caught inside the library.
    """


class ResourceError(SvgfxError, MemoryError):
    """Output buffer for a render could not be allocated."""
