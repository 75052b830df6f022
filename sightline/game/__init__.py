"""
This package contains the state of the things that look at the map.
"""

from .observer import Observer, ViewSpec

__all__ = [
    "Observer",
    "ViewSpec",
]
