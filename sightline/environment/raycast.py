"""Line-of-sight ray casting between two grid cells.

The ray walks a straight line from the origin cell toward the target cell.
The axis with the larger difference (the *major* axis) advances exactly one
cell per step; the other axis advances by ``minor / major`` of a cell. At
each step the position is rounded to the nearest cell (halves away from zero)
and that cell is sampled.

This is a line-of-sight test, not a reachability test. Sampling rounded
midpoints lets a ray slip through a one-cell diagonal slit between two
diagonally adjacent walls; that is accepted behaviour.

Positions are computed with integer arithmetic as exact rationals
``origin + i * delta / steps``. Accumulating a float increment instead would
put some samples at ``k + 0.49999...`` rather than ``k + 0.5`` and round them
the other way, so the sampled cells would depend on float drift.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sightline.types import CellPos, TileCoord

if TYPE_CHECKING:
    from sightline.environment.grid import Grid


def _rounded_position(start: TileCoord, delta: int, step: int, steps: int) -> int:
    """round(start + step * delta / steps), halves rounded up.

    Grid coordinates are non-negative, so rounding halves up is the same as
    rounding them away from zero.
    """
    two_steps = 2 * steps
    return (two_steps * start + 2 * step * delta + steps) // two_steps


def ray_cells(origin: CellPos, target: CellPos) -> list[CellPos]:
    """Cells sampled by a ray from ``origin`` up to, but excluding, ``target``.

    The first entry is ``origin`` itself unless ``origin == target``, in which
    case the list is empty.
    """
    ox, oy = origin
    dx = target[0] - ox
    dy = target[1] - oy
    steps = max(abs(dx), abs(dy))

    # The major axis moves exactly one cell per step, so only the final step
    # (step == steps) can land on the target; it is never sampled.
    return [
        (
            _rounded_position(ox, dx, i, steps),
            _rounded_position(oy, dy, i, steps),
        )
        for i in range(steps)
    ]


def cast_ray(origin: CellPos, target: CellPos, grid: Grid) -> bool:
    """Return True if nothing opaque lies on the line from origin to target.

    The origin cell is sampled (an observer standing inside a wall sees
    nothing past it); the target cell is not, so a wall is itself visible.
    When ``origin == target`` no cell is sampled and the result is True.

    Raises:
        BoundsError: A sampled cell is outside the grid, which only happens
            when ``origin`` or ``target`` is.
    """
    return not any(grid.obstructs(x, y) for x, y in ray_cells(origin, target))
