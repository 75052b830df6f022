"""The obstruction grid the visibility engine runs over.

A :class:`Grid` is an immutable rectangle of :class:`Tile` cells. Internally it
keeps two numpy arrays shaped ``(width, height)`` in Fortran order, the same
layout the rest of the code uses for per-cell maps:

- ``opaque``: True where a tile blocks sight.
- ``glyphs``: the character each opaque tile was loaded from ("" for open).

Flattening either array in Fortran order yields the row-major cell order
(``index = y * width + x``) used by visibility buffers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from sightline import config
from sightline.environment.errors import BoundsError, LoadError
from sightline.types import CellIndex, TileCoord
from sightline.util.coordinates import cell_index

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Tile:
    """One cell's static terrain: open floor or an opaque obstruction.

    ``glyph`` is rendering metadata only; visibility looks at ``opaque``.
    """

    opaque: bool = False
    glyph: str | None = None

    def __post_init__(self) -> None:
        # Glyphs are stored one character per cell.
        if self.glyph is not None and len(self.glyph) != 1:
            raise ValueError(
                f"Tile glyph must be one character, got {self.glyph!r}"
            )

    @classmethod
    def open(cls) -> Tile:
        return _OPEN_TILE

    @classmethod
    def wall(cls, glyph: str | None = "#") -> Tile:
        return cls(opaque=True, glyph=glyph)

    def is_opaque(self) -> bool:
        return self.opaque


_OPEN_TILE = Tile()


class Grid:
    """Immutable 2-D array of tiles with row-major cell indexing."""

    def __init__(self, width: int, tiles: Sequence[Tile]) -> None:
        """
        Args:
            width: Number of columns. Must be positive.
            tiles: Every cell in row-major order; the length must be a
                non-zero multiple of ``width``.
        """
        if width <= 0:
            raise ValueError(f"Grid width must be positive, got {width}")
        if not tiles or len(tiles) % width != 0:
            raise ValueError(
                f"Grid needs a non-empty multiple of {width} tiles, got {len(tiles)}"
            )

        self.width: int = width
        self.height: int = len(tiles) // width

        opaque = np.fromiter((t.is_opaque() for t in tiles), dtype=np.bool_)
        glyphs = np.array(
            [t.glyph if t.is_opaque() and t.glyph else "" for t in tiles], dtype="U1"
        )
        # Row-major input -> (width, height) Fortran-ordered arrays.
        self.opaque: NDArray[np.bool_] = opaque.reshape(
            (self.width, self.height), order="F"
        )
        self.glyphs: NDArray[np.str_] = glyphs.reshape(
            (self.width, self.height), order="F"
        )
        self.opaque.flags.writeable = False
        self.glyphs.flags.writeable = False

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def open_field(cls, width: int, height: int) -> Grid:
        """A grid with no obstructions at all."""
        return cls(width, [Tile.open()] * (width * height))

    @classmethod
    def from_opaque_mask(cls, opaque: NDArray[np.bool_], glyph: str = "#") -> Grid:
        """Build a grid from a boolean array shaped ``(width, height)``."""
        width, height = opaque.shape
        wall = Tile.wall(glyph)
        tiles = [
            wall if opaque[x, y] else Tile.open()
            for y in range(height)
            for x in range(width)
        ]
        return cls(width, tiles)

    @classmethod
    def from_text(
        cls, text: str | Iterable[str], empty: str = config.EMPTY_TILE_CHAR
    ) -> Grid:
        """Build a grid from rows of characters.

        ``empty`` marks open cells; any other character becomes an opaque
        tile using that character as its glyph. Every row must be exactly as
        long as the first.

        Raises:
            LoadError: No rows, an empty first row, or a ragged row.
        """
        rows = text.splitlines() if isinstance(text, str) else list(text)
        if not rows:
            raise LoadError("Map source contains no rows")

        width = len(rows[0])
        if width == 0:
            raise LoadError("First map row is empty")

        tiles: list[Tile] = []
        for line_no, row in enumerate(rows, start=1):
            if len(row) != width:
                raise LoadError(
                    f"Map row {line_no} has length {len(row)}, expected {width}"
                )
            tiles.extend(Tile.open() if ch == empty else Tile.wall(ch) for ch in row)

        return cls(width, tiles)

    def replace(self, x: TileCoord, y: TileCoord, tile: Tile) -> Grid:
        """Return a copy of this grid with the tile at (x, y) swapped out."""
        self._check_bounds(x, y)
        tiles = list(self.tiles())
        tiles[self.index_of(x, y)] = tile
        return Grid(self.width, tiles)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def in_bounds(self, x: TileCoord, y: TileCoord) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_bounds(self, x: TileCoord, y: TileCoord) -> None:
        # Checked explicitly: numpy would happily wrap negative indices.
        if not self.in_bounds(x, y):
            raise BoundsError(x, y, self.width, self.height)

    def index_of(self, x: TileCoord, y: TileCoord) -> CellIndex:
        return cell_index(x, y, self.width)

    def obstructs(self, x: TileCoord, y: TileCoord) -> bool:
        """True if the tile at (x, y) blocks sight.

        Raises:
            BoundsError: (x, y) is outside the grid.
        """
        self._check_bounds(x, y)
        return bool(self.opaque[x, y])

    def tile_at(self, x: TileCoord, y: TileCoord) -> Tile:
        self._check_bounds(x, y)
        if not self.opaque[x, y]:
            return Tile.open()
        return Tile.wall(str(self.glyphs[x, y]) or None)

    def tiles(self) -> Iterable[Tile]:
        """All tiles in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield self.tile_at(x, y)

    def to_text(self, empty: str = config.EMPTY_TILE_CHAR) -> str:
        """Inverse of :meth:`from_text`. Glyph-less walls are written as ``#``."""
        rows = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                if self.opaque[x, y]:
                    row.append(str(self.glyphs[x, y]) or "#")
                else:
                    row.append(empty)
            rows.append("".join(row))
        return "\n".join(rows)

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"


def load_grid(path: str | Path, empty: str = config.EMPTY_TILE_CHAR) -> Grid:
    """Read a map file and build a :class:`Grid` from it.

    Raises:
        LoadError: The file can't be read or its contents are malformed.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LoadError(f"Cannot read map file {path}: {exc}") from exc

    grid = Grid.from_text(text, empty=empty)
    logger.info(f"Loaded {grid.width}x{grid.height} map from {path}")
    return grid
