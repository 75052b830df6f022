from __future__ import annotations

import math

from sightline.controller import Controller
from sightline.environment.grid import Grid
from sightline.game.observer import Observer, ViewSpec


def make_grid(*rows: str) -> Grid:
    """Build a grid from readable rows where ``.`` is open floor."""
    return Grid.from_text(rows, empty=".")


def full_circle_observer(x: int, y: int, radius: float = 10.0) -> Observer:
    """An observer that sees in every direction."""
    return Observer(x, y, facing=0.0, view=ViewSpec(radius, math.tau))


def make_controller(
    grid: Grid | None = None, observer: Observer | None = None, workers: int = 1
) -> Controller:
    """A controller over a 5x5 open map with a full-circle observer in the middle."""
    if grid is None:
        grid = Grid.open_field(5, 5)
    if observer is None:
        observer = full_circle_observer(2, 2)
    return Controller(grid, observer, workers=workers)
