"""Conversion helpers between continuous positions, cells and flat indices."""

from __future__ import annotations

import math

from sightline.types import CellIndex, CellPos, TileCoord, WorldPos


def round_half_away(value: float) -> TileCoord:
    """Round to the nearest integer, with halves rounded away from zero.

    Python's builtin ``round`` uses banker's rounding (``round(2.5) == 2``),
    which would make a cell's extent depend on the parity of its coordinate.
    """
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)


def world_to_cell(pos: WorldPos) -> CellPos:
    """Return the cell containing a continuous position."""
    return round_half_away(pos[0]), round_half_away(pos[1])


def cell_index(x: TileCoord, y: TileCoord, width: int) -> CellIndex:
    """Row-major index of cell (x, y) in a grid ``width`` cells wide."""
    return y * width + x


def index_to_cell(index: CellIndex, width: int) -> CellPos:
    """Inverse of :func:`cell_index`."""
    y, x = divmod(index, width)
    return x, y


def distance(a: CellPos, b: CellPos) -> float:
    """Euclidean distance between two cells, in cells."""
    return math.hypot(b[0] - a[0], b[1] - a[1])
