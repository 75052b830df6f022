"""The observer whose field of view is being computed.

An observer has a continuous position, a facing angle, and optionally a
:class:`ViewSpec` describing how far and how wide it can see. An observer with
no view spec is in the dark: it sees its own cell and nothing else.

Continuous coordinates are the source of truth; the cell used for every
geometric check is derived by rounding them. Observers that only ever move in
whole-cell steps simply never hold fractional coordinates.

None of the mutators here know about the grid. Keeping the observer inside
the map is the job of whoever issues the moves (see ``sightline.commands``).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from sightline import config
from sightline.types import CellPos, WorldPos
from sightline.util.angles import TAU, normalize_advance, normalize_reduce
from sightline.util.coordinates import world_to_cell


@dataclass
class ViewSpec:
    """How far (cells) and how wide (radians) an observer can see."""

    radius: float = config.DEFAULT_SIGHT_RADIUS
    fov_width: float = config.DEFAULT_FOV_WIDTH

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError(f"Sight radius must be >= 0, got {self.radius}")


class Observer:
    """A position, a facing angle and an optional light to see by."""

    def __init__(
        self,
        x: float,
        y: float,
        facing: float = config.DEFAULT_FACING,
        view: ViewSpec | None = None,
    ) -> None:
        self.x = float(x)
        self.y = float(y)
        self.facing = facing % TAU
        self.view = view

    @property
    def position(self) -> WorldPos:
        return self.x, self.y

    @property
    def cell(self) -> CellPos:
        return world_to_cell((self.x, self.y))

    # --- Movement -------------------------------------------------------------

    def move_by(self, dx: int, dy: int) -> None:
        """Step by whole cells, typically one of the four cardinal directions."""
        self.x += dx
        self.y += dy

    def forward_position(self, distance: float = config.MOVE_STEP) -> WorldPos:
        """Where a move of ``distance`` along the facing angle would end up.

        Negative distances move backward. Screen y grows downward while
        angles grow counter-clockwise, hence the subtraction on y.
        """
        return (
            self.x + math.cos(self.facing) * distance,
            self.y - math.sin(self.facing) * distance,
        )

    def move_forward(self, distance: float = config.MOVE_STEP) -> None:
        self.x, self.y = self.forward_position(distance)

    def move_backward(self, distance: float = config.MOVE_STEP) -> None:
        self.x, self.y = self.forward_position(-distance)

    # --- View parameters ------------------------------------------------------

    def rotate(self, delta: float) -> None:
        """Turn counter-clockwise by ``delta`` radians (clockwise if negative)."""
        if delta >= 0:
            self.facing = normalize_advance(self.facing, delta)
        else:
            self.facing = normalize_reduce(self.facing, -delta)
        if self.facing >= TAU:
            # 2π and 0 are the same heading; keep facing in [0, 2π).
            self.facing = 0.0

    def adjust_radius(self, delta: float) -> None:
        """Grow or shrink the sight radius, never below zero."""
        if self.view is None:
            return
        self.view.radius = max(0.0, self.view.radius + delta)

    def adjust_fov_width(self, delta: float) -> None:
        """Widen or narrow the field of view, kept within [0, 2π]."""
        if self.view is None:
            return
        self.view.fov_width = min(TAU, max(0.0, self.view.fov_width + delta))

    def __repr__(self) -> str:
        return (
            f"Observer(x={self.x:.2f}, y={self.y:.2f}, "
            f"facing={self.facing:.3f}, view={self.view})"
        )
