"""
Commands issued by the input layer.

Each command maps 1:1 onto an observer mutator (or quitting). Commands are
where the grid's bounds are enforced: the observer itself never looks at the
map, so a movement command checks the destination cell first and leaves the
observer untouched if the move would leave the grid (or, with
``config.WALLS_BLOCK_MOVEMENT``, step into an opaque cell).

Every command that runs returns whether it changed anything, so the
controller only recomputes visibility when something moved.
"""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING

from sightline import config
from sightline.types import WorldPos
from sightline.util.coordinates import world_to_cell

if TYPE_CHECKING:
    from sightline.controller import Controller

logger = logging.getLogger(__name__)


class Command(abc.ABC):
    """Base class for everything the input handler can produce."""

    def __init__(self, controller: Controller) -> None:
        self.controller = controller

    @abc.abstractmethod
    def execute(self) -> bool:
        """Apply the command. Returns True if observer state changed."""


class QuitCommand(Command):
    """Command for leaving the interactive loop."""

    def execute(self) -> bool:
        self.controller.quit()
        return False


class _MovementCommand(Command):
    def can_enter(self, pos: WorldPos) -> bool:
        """True if the observer may stand at continuous position ``pos``."""
        grid = self.controller.grid
        x, y = world_to_cell(pos)
        if not grid.in_bounds(x, y):
            logger.debug(f"Move to ({x}, {y}) refused: outside the map")
            return False
        if config.WALLS_BLOCK_MOVEMENT and grid.obstructs(x, y):
            logger.debug(f"Move to ({x}, {y}) refused: cell is opaque")
            return False
        return True


class MoveCommand(_MovementCommand):
    """Step the observer by whole cells."""

    def __init__(self, controller: Controller, dx: int, dy: int) -> None:
        super().__init__(controller)
        self.dx = dx
        self.dy = dy

    def execute(self) -> bool:
        observer = self.controller.observer
        if not self.can_enter((observer.x + self.dx, observer.y + self.dy)):
            return False
        observer.move_by(self.dx, self.dy)
        return True


class MoveForwardCommand(_MovementCommand):
    """Move along the facing angle."""

    def __init__(
        self, controller: Controller, distance: float = config.MOVE_STEP
    ) -> None:
        super().__init__(controller)
        self.distance = distance

    def execute(self) -> bool:
        observer = self.controller.observer
        if not self.can_enter(observer.forward_position(self.distance)):
            return False
        observer.move_forward(self.distance)
        return True


class MoveBackwardCommand(MoveForwardCommand):
    """Move against the facing angle."""

    def execute(self) -> bool:
        observer = self.controller.observer
        if not self.can_enter(observer.forward_position(-self.distance)):
            return False
        observer.move_backward(self.distance)
        return True


class RotateCommand(Command):
    """Turn the observer; positive deltas turn counter-clockwise."""

    def __init__(self, controller: Controller, delta: float) -> None:
        super().__init__(controller)
        self.delta = delta

    def execute(self) -> bool:
        self.controller.observer.rotate(self.delta)
        return True


class AdjustRadiusCommand(Command):
    def __init__(self, controller: Controller, delta: float) -> None:
        super().__init__(controller)
        self.delta = delta

    def execute(self) -> bool:
        observer = self.controller.observer
        if observer.view is None:
            return False
        observer.adjust_radius(self.delta)
        return True


class AdjustFovWidthCommand(Command):
    def __init__(self, controller: Controller, delta: float) -> None:
        super().__init__(controller)
        self.delta = delta

    def execute(self) -> bool:
        observer = self.controller.observer
        if observer.view is None:
            return False
        observer.adjust_fov_width(self.delta)
        return True
