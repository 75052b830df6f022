"""Drawing a visibility field.

The appearance of each cell depends on three things: whether it's the
observer's cell, whether it's visible, and whether its tile is opaque.

- observer cell: ``@``
- visible opaque tile: the glyph it was loaded from
- visible open tile: ``.``
- anything not visible: ``-``

:func:`render_text` produces a plain-text frame (handy for logging and
tests); :func:`draw_frame` writes the same frame, coloured, into a tcod
console along with a status line.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from tcod.console import Console

from sightline import colors, config
from sightline.environment.grid import Grid, Tile
from sightline.game.observer import Observer


def cell_appearance(
    tile: Tile, visible: bool, is_observer: bool
) -> tuple[str, colors.Color]:
    """Glyph and foreground colour for a single cell."""
    if is_observer:
        return config.OBSERVER_GLYPH, colors.OBSERVER_COLOR
    if not visible:
        return config.UNSEEN_GLYPH, colors.UNSEEN
    if tile.is_opaque():
        return tile.glyph or "#", colors.LIGHT_WALL
    return config.FLOOR_GLYPH, colors.LIGHT_GROUND


def _field_as_map(grid: Grid, field: NDArray[np.bool_]) -> NDArray[np.bool_]:
    """View a flat row-major field as a (width, height) array."""
    return field[: grid.cell_count].reshape((grid.width, grid.height), order="F")


def render_text(grid: Grid, observer: Observer, field: NDArray[np.bool_]) -> str:
    """Render the frame as newline-separated rows of glyphs."""
    rows = []
    observer_cell = observer.cell
    for y in range(grid.height):
        row = []
        for x in range(grid.width):
            glyph, _ = cell_appearance(
                grid.tile_at(x, y),
                bool(field[grid.index_of(x, y)]),
                (x, y) == observer_cell,
            )
            row.append(glyph)
        rows.append("".join(row))
    return "\n".join(rows)


def status_line(observer: Observer) -> str:
    x, y = observer.cell
    facing = math.degrees(observer.facing)
    if observer.view is None:
        return f"({x}, {y}) facing {facing:.0f}° | no light"
    return (
        f"({x}, {y}) facing {facing:.0f}° | "
        f"radius {observer.view.radius:g} | "
        f"fov {math.degrees(observer.view.fov_width):.0f}°"
    )


def draw_frame(
    console: Console, grid: Grid, observer: Observer, field: NDArray[np.bool_]
) -> None:
    """Draw the map and a status line into ``console``.

    ``console`` must be in Fortran order and at least ``grid.width`` wide and
    ``grid.height + config.STATUS_HEIGHT`` tall.
    """
    console.clear()
    visible = _field_as_map(grid, field)
    w, h = grid.width, grid.height

    # Start with every cell unseen, then reveal visible tiles.
    ch = np.full((w, h), ord(config.UNSEEN_GLYPH), dtype=np.int32)
    fg = np.empty((w, h, 3), dtype=np.uint8)
    fg[...] = colors.UNSEEN

    wall_codes = np.vectorize(lambda g: ord(g) if g else ord("#"), otypes=[np.int32])(
        grid.glyphs
    )
    visible_walls = visible & grid.opaque
    visible_floor = visible & ~grid.opaque
    ch[visible_walls] = wall_codes[visible_walls]
    fg[visible_walls] = colors.LIGHT_WALL
    ch[visible_floor] = ord(config.FLOOR_GLYPH)
    fg[visible_floor] = colors.LIGHT_GROUND

    ox, oy = observer.cell
    ch[ox, oy] = ord(config.OBSERVER_GLYPH)
    fg[ox, oy] = colors.OBSERVER_COLOR

    console.rgb["ch"][:w, :h] = ch
    console.rgb["fg"][:w, :h] = fg

    console.print(0, h, status_line(observer), fg=colors.STATUS_TEXT)
