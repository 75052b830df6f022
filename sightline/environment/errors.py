"""Exceptions raised by the map and visibility code.

All of them derive from builtin exception types so callers that only care
about the broad category (``ValueError`` / ``IndexError``) can keep catching
those.
"""

from __future__ import annotations


class LoadError(ValueError):
    """A map source is missing, unreadable, empty, or not rectangular."""


class BoundsError(IndexError):
    """A coordinate lies outside the grid.

    This is always a programming error: coordinates are never clamped, since
    clamping would silently distort field-of-view geometry.
    """

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"Cell ({x}, {y}) is outside the {width}x{height} grid")
        self.x = x
        self.y = y


class BufferSizeError(ValueError):
    """A visibility buffer is too small for the grid it is computed over."""
