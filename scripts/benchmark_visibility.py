#!/usr/bin/env python3
"""Benchmark the visibility field: sequential vs threaded, with tcod as a yardstick.

Runs every variant on identical maps and prints a timing table. tcod's
symmetric shadowcasting is a different algorithm (full circle, no facing), so
the agreement check at the end reports how closely a full-circle field
matches it rather than expecting identical output.

Usage:
    python scripts/benchmark_visibility.py
    python scripts/benchmark_visibility.py --workers 8
"""

# ruff: noqa: E402  # Allow path setup before importing project modules

from __future__ import annotations

import argparse
import math
import sys
import timeit
from pathlib import Path

import numpy as np
import tcod.constants
import tcod.map

# Add the project root to Python path so running as a script works.
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from sightline.environment.grid import Grid
from sightline.environment.visibility import (
    compute_visibility_field,
    new_visibility_buffer,
)
from sightline.game.observer import Observer, ViewSpec


def _make_open_field(width: int, height: int) -> np.ndarray:
    """No walls at all (worst case - every ray runs to its target)."""
    return np.zeros((width, height), dtype=np.bool_)


def _make_dungeon(
    width: int, height: int, wall_fraction: float, seed: int
) -> np.ndarray:
    """Randomly scatter walls to simulate a dungeon layout."""
    rng = np.random.default_rng(seed)
    return rng.random((width, height)) < wall_fraction


def _time_ms(func) -> float:
    func()  # Warm up.
    number, total = timeit.Timer(func).autorange()
    return (total / number) * 1000


def _benchmark_ours(grid: Grid, observer: Observer, workers: int) -> float:
    out = new_visibility_buffer(grid)
    return _time_ms(
        lambda: compute_visibility_field(grid, observer, out, workers=workers)
    )


def _benchmark_tcod(opaque: np.ndarray, origin: tuple[int, int], radius: int) -> float:
    return _time_ms(
        lambda: tcod.map.compute_fov(
            ~opaque,
            origin,
            radius=radius,
            light_walls=True,
            algorithm=tcod.constants.FOV_SYMMETRIC_SHADOWCAST,
        )
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Visibility field benchmark")
    parser.add_argument(
        "--workers", type=int, default=4, help="Worker threads for the threaded run"
    )
    args = parser.parse_args(argv)

    scenarios: list[tuple[str, np.ndarray, tuple[int, int], int, float]] = [
        ("Open field, 360°", _make_open_field(60, 40), (30, 20), 25, math.tau),
        (
            "Dungeon (~40% walls)",
            _make_dungeon(60, 40, 0.40, seed=42),
            (30, 20),
            25,
            math.tau,
        ),
        ("Open field, 90° cone", _make_open_field(60, 40), (30, 20), 25, math.pi / 2),
        ("Small radius", _make_open_field(60, 40), (30, 20), 5, math.tau),
    ]

    print(f"Visibility Benchmark: sequential vs {args.workers} threads vs tcod (C)")
    print("=" * 72)
    print(f"{'Scenario':<24} {'tcod (C)':>10} {'sequential':>12} {'threaded':>12}")
    print("-" * 72)

    for name, opaque, origin, radius, fov in scenarios:
        opaque[origin] = False
        grid = Grid.from_opaque_mask(opaque)
        observer = Observer(*origin, view=ViewSpec(radius, fov))
        tcod_ms = _benchmark_tcod(opaque, origin, radius)
        seq_ms = _benchmark_ours(grid, observer, workers=1)
        par_ms = _benchmark_ours(grid, observer, workers=args.workers)
        print(f"{name:<24} {tcod_ms:>9.3f}ms {seq_ms:>10.3f}ms {par_ms:>10.3f}ms")

    print("-" * 72)
    print()

    # Agreement check against tcod on a full-circle field.
    print("Agreement with tcod shadowcasting (full circle)...")
    opaque = _make_dungeon(60, 40, 0.25, seed=123)
    origin = (30, 20)
    opaque[origin] = False
    radius = 20

    grid = Grid.from_opaque_mask(opaque)
    observer = Observer(*origin, view=ViewSpec(radius, math.tau))
    ours = compute_visibility_field(grid, observer).reshape(opaque.shape, order="F")
    theirs = tcod.map.compute_fov(
        ~opaque,
        origin,
        radius=radius,
        light_walls=True,
        algorithm=tcod.constants.FOV_SYMMETRIC_SHADOWCAST,
    )

    match_count = int(np.sum(ours == theirs))
    total_tiles = ours.size
    print(
        f"  Agreement: {match_count / total_tiles * 100:.2f}% "
        f"({match_count}/{total_tiles} tiles)"
    )

    sequential = compute_visibility_field(grid, observer, workers=1)
    threaded = compute_visibility_field(grid, observer, workers=args.workers)
    print(f"  Sequential == threaded: {bool(np.array_equal(sequential, threaded))}")


if __name__ == "__main__":
    main()
