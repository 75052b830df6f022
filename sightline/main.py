"""Main entry point: load a map and explore it interactively."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path

import tcod.context
import tcod.tileset
from tcod.console import Console

from . import config
from .controller import Controller
from .environment.errors import LoadError
from .environment.grid import Grid, load_grid
from .game.observer import Observer, ViewSpec
from .types import CellPos
from .util.performance import enable_performance_tracking, get_performance_report

logger = logging.getLogger(__name__)


def default_start(grid: Grid) -> CellPos:
    """The open cell closest to the centre of the map."""
    cx, cy = grid.width // 2, grid.height // 2
    open_cells = [
        (x, y)
        for y in range(grid.height)
        for x in range(grid.width)
        if not grid.obstructs(x, y)
    ]
    if not open_cells:
        raise LoadError("Map has no open cell to start on")
    return min(open_cells, key=lambda c: (c[0] - cx) ** 2 + (c[1] - cy) ** 2)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Explore a map with a limited field of view"
    )
    parser.add_argument(
        "map",
        nargs="?",
        type=Path,
        default=config.DEFAULT_MAP_PATH,
        help="Text map to load (default: bundled demo map)",
    )
    parser.add_argument(
        "--empty-char",
        default=config.EMPTY_TILE_CHAR,
        help="Character marking open cells in the map file",
    )
    parser.add_argument(
        "--start",
        type=int,
        nargs=2,
        metavar=("X", "Y"),
        help="Starting cell (default: open cell nearest the centre)",
    )
    parser.add_argument(
        "--radius",
        type=float,
        default=config.DEFAULT_SIGHT_RADIUS,
        help="Sight radius in cells",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=math.degrees(config.DEFAULT_FOV_WIDTH),
        help="Field of view width in degrees",
    )
    parser.add_argument(
        "--facing",
        type=float,
        default=math.degrees(config.DEFAULT_FACING),
        help="Initial facing in degrees (0 = east, 90 = up)",
    )
    parser.add_argument(
        "--dark", action="store_true", help="Start without a light source"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=config.VISIBILITY_WORKERS,
        help="Worker threads for visibility evaluation",
    )
    parser.add_argument("--tileset", type=Path, help="CP437 16x16 tilesheet image")
    parser.add_argument(
        "--perf", action="store_true", help="Log a performance report on exit"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def build_observer(args: argparse.Namespace, grid: Grid) -> Observer:
    x, y = args.start if args.start is not None else default_start(grid)
    if not grid.in_bounds(x, y):
        raise LoadError(f"Start cell ({x}, {y}) is outside the map")
    view = None if args.dark else ViewSpec(args.radius, math.radians(args.fov))
    return Observer(x, y, facing=math.radians(args.facing), view=view)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    if args.perf:
        enable_performance_tracking()

    try:
        grid = load_grid(args.map, empty=args.empty_char)
        observer = build_observer(args, grid)
    except LoadError as e:
        logger.error(f"{e}")
        return 1

    controller = Controller(grid, observer, workers=args.workers)

    tileset = None
    if args.tileset is not None:
        tileset = tcod.tileset.load_tilesheet(
            args.tileset, columns=16, rows=16, charmap=tcod.tileset.CHARMAP_CP437
        )

    root_console = Console(
        max(grid.width, config.MIN_CONSOLE_WIDTH),
        grid.height + config.STATUS_HEIGHT,
        order="F",
    )
    with tcod.context.new(
        console=root_console,
        tileset=tileset,
        title=config.WINDOW_TITLE,
        vsync=config.VSYNC,
    ) as context:
        controller.run(context, root_console)

    if args.perf:
        logger.warning("\n" + get_performance_report())
    return 0


if __name__ == "__main__":
    sys.exit(main())
