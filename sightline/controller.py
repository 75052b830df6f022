"""The interactive session: owns the map, the observer and the visibility buffer.

The loop is turn-based. It blocks until an input event arrives, turns it into
a command, runs the command, recomputes the visibility field if anything
changed, and redraws. Nothing happens between key presses.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import tcod.event
from numpy.typing import NDArray
from tcod.console import Console

from sightline import config
from sightline.commands import Command
from sightline.environment.grid import Grid
from sightline.environment.visibility import (
    compute_visibility_field,
    new_visibility_buffer,
)
from sightline.game.observer import Observer
from sightline.input_handler import InputHandler
from sightline.render import draw_frame
from sightline.util import performance

if TYPE_CHECKING:
    import tcod.context

logger = logging.getLogger(__name__)


class Controller:
    """Ties the grid, the observer and the visibility buffer together.

    The grid is shared read-only. The observer and the buffer are only ever
    mutated here, between visibility computations.
    """

    def __init__(
        self, grid: Grid, observer: Observer, *, workers: int | None = None
    ) -> None:
        self.grid = grid
        self.observer = observer
        self.workers = config.VISIBILITY_WORKERS if workers is None else workers
        self.visible: NDArray[np.bool_] = new_visibility_buffer(grid)
        self.running = True
        self.input_handler = InputHandler(self)
        self.recompute()

    def recompute(self) -> None:
        compute_visibility_field(
            self.grid, self.observer, self.visible, workers=self.workers
        )

    def execute(self, command: Command) -> bool:
        """Run a command and refresh visibility if it changed anything."""
        changed = command.execute()
        if changed:
            logger.debug(f"{type(command).__name__} -> {self.observer}")
            self.recompute()
        return changed

    def quit(self) -> None:
        self.running = False

    def render(self, console: Console) -> None:
        with performance.measure_block("render"):
            draw_frame(console, self.grid, self.observer, self.visible)

    def run(self, context: tcod.context.Context, console: Console) -> None:
        """Block on input and redraw after each event until quit."""
        self.render(console)
        context.present(console, keep_aspect=True)

        while self.running:
            for event in tcod.event.wait():
                performance.start_frame()
                command = self.input_handler.dispatch(event)
                if command is not None:
                    self.execute(command)
                performance.end_frame()
                if not self.running:
                    break

            self.render(console)
            context.present(console, keep_aspect=True)
