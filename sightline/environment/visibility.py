"""Per-cell visibility for an observer with a limited field of view.

A cell is visible when, in this order:

1. it is the observer's own cell (always visible), or
2. the observer has a light to see by (a :class:`ViewSpec`),
3. it lies within the sight radius (Euclidean, in cells),
4. its bearing falls strictly inside the field-of-view arc, and
5. a ray from the observer reaches it without crossing an opaque cell.

The checks are ordered cheapest first so most cells are rejected before any
ray is cast.

Bearings use screen space: ``atan2(ty - oy, ox - tx) + π`` puts 0 at east
(+x) and π/2 at north (-y, up the screen), growing counter-clockwise as
displayed.

The visibility field is a flat boolean array indexed ``y * width + x``. It is
always rewritten in full, so callers can keep one buffer and reuse it every
turn.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from sightline import config
from sightline.environment.errors import BoundsError, BufferSizeError
from sightline.environment.grid import Grid
from sightline.environment.raycast import cast_ray
from sightline.types import CellPos
from sightline.util.angles import (
    TAU,
    is_within_arc,
    normalize_advance,
    normalize_reduce,
)
from sightline.util.coordinates import distance
from sightline.util.performance import measure

logger = logging.getLogger(__name__)


class ViewParameters(Protocol):
    radius: float
    fov_width: float


class Viewer(Protocol):
    """Anything with a position, a facing angle and an optional light."""

    @property
    def cell(self) -> CellPos: ...

    @property
    def facing(self) -> float: ...

    @property
    def view(self) -> ViewParameters | None: ...


def bearing(origin: CellPos, target: CellPos) -> float:
    """Screen-space angle from ``origin`` to ``target``, in (0, 2π]."""
    return math.atan2(target[1] - origin[1], origin[0] - target[0]) + math.pi


def is_visible(grid: Grid, viewer: Viewer, target: CellPos) -> bool:
    """Return True if ``viewer`` can see cell ``target``.

    Raises:
        BoundsError: ``target`` or the viewer's cell is outside the grid.
    """
    tx, ty = target
    if not grid.in_bounds(tx, ty):
        raise BoundsError(tx, ty, grid.width, grid.height)
    origin = viewer.cell
    if not grid.in_bounds(*origin):
        raise BoundsError(origin[0], origin[1], grid.width, grid.height)

    if target == origin:
        return True

    view = viewer.view
    if view is None:
        # No light source: nothing but the viewer's own cell.
        return False

    if distance(origin, target) > view.radius:
        return False

    # A full circle has left == right, which the strict arc test would treat
    # as an empty arc.
    if view.fov_width < TAU:
        half_width = view.fov_width / 2
        left = normalize_reduce(viewer.facing, half_width)
        right = normalize_advance(viewer.facing, half_width)
        if not is_within_arc(bearing(origin, target), left, right):
            return False

    return cast_ray(origin, target, grid)


def new_visibility_buffer(grid: Grid) -> NDArray[np.bool_]:
    """Allocate a buffer sized for ``grid``, all cells not visible."""
    return np.zeros(grid.cell_count, dtype=np.bool_)


def _fill_rows(
    grid: Grid,
    viewer: Viewer,
    out: NDArray[np.bool_],
    start_row: int,
    end_row: int,
) -> None:
    """Evaluate rows [start_row, end_row), writing only their slice of ``out``."""
    width = grid.width
    for y in range(start_row, end_row):
        base = y * width
        for x in range(width):
            out[base + x] = is_visible(grid, viewer, (x, y))


@measure("visibility_field")
def compute_visibility_field(
    grid: Grid,
    viewer: Viewer,
    out: NDArray[np.bool_] | None = None,
    *,
    workers: int | None = None,
) -> NDArray[np.bool_]:
    """Compute visibility of every cell of ``grid`` for ``viewer``.

    Args:
        grid: The obstruction grid. Only read.
        viewer: Whose sight to evaluate. Must not be mutated during the call.
        out: Buffer to overwrite, at least ``grid.cell_count`` long. A new one
            is allocated when omitted.
        workers: Number of worker threads. ``None`` uses
            ``config.VISIBILITY_WORKERS``; 1 or less evaluates sequentially.
            Each worker owns a disjoint band of rows, so no locking is needed.

    Returns:
        ``out`` (or the new buffer), with ``out[y * width + x]`` set for every
        cell.

    Raises:
        BufferSizeError: ``out`` is smaller than the grid.
    """
    if out is None:
        out = new_visibility_buffer(grid)
    elif len(out) < grid.cell_count:
        raise BufferSizeError(
            f"Visibility buffer holds {len(out)} cells, grid has {grid.cell_count}"
        )

    if workers is None:
        workers = config.VISIBILITY_WORKERS
    workers = min(workers, grid.height)

    if workers <= 1:
        _fill_rows(grid, viewer, out, 0, grid.height)
        return out

    # Partition rows across workers; the last one takes the remainder.
    rows_per_worker = grid.height // workers
    bands = []
    for worker_id in range(workers):
        start_row = worker_id * rows_per_worker
        if worker_id == workers - 1:
            end_row = grid.height
        else:
            end_row = start_row + rows_per_worker
        bands.append((start_row, end_row))

    logger.debug(f"Evaluating {grid.cell_count} cells on {workers} workers")
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(_fill_rows, grid, viewer, out, start, end)
            for start, end in bands
        ]
        for future in futures:
            # Re-raises any error (e.g. BoundsError) from the worker.
            future.result()

    return out
