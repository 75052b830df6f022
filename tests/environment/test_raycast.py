"""Tests for the line-of-sight ray caster."""

from __future__ import annotations

import numpy as np
import pytest

from sightline.environment.errors import BoundsError
from sightline.environment.grid import Grid
from sightline.environment.raycast import cast_ray, ray_cells
from tests.helpers import make_grid


def test_same_cell_samples_nothing() -> None:
    assert ray_cells((2, 2), (2, 2)) == []
    # Even an opaque cell: nothing is sampled.
    grid = make_grid("#")
    assert cast_ray((0, 0), (0, 0), grid)


def test_straight_lines() -> None:
    assert ray_cells((0, 0), (3, 0)) == [(0, 0), (1, 0), (2, 0)]
    assert ray_cells((2, 4), (2, 1)) == [(2, 4), (2, 3), (2, 2)]


def test_pure_diagonal_steps_both_axes() -> None:
    assert ray_cells((0, 0), (3, 3)) == [(0, 0), (1, 1), (2, 2)]
    assert ray_cells((3, 0), (0, 3)) == [(3, 0), (2, 1), (1, 2)]


def test_shallow_line_rounds_half_up() -> None:
    # Minor offset 0.5 at step 1 rounds to the next cell.
    assert ray_cells((0, 0), (2, 1)) == [(0, 0), (1, 1)]
    assert ray_cells((2, 1), (0, 0)) == [(2, 1), (1, 1)]
    assert ray_cells((0, 0), (4, 1)) == [(0, 0), (1, 0), (2, 1), (3, 1)]


def test_major_axis_advances_one_cell_per_step() -> None:
    cells = ray_cells((1, 1), (8, 4))
    assert [x for x, _ in cells] == list(range(1, 8))
    ys = [y for _, y in cells]
    assert ys == sorted(ys)
    assert all(abs(b - a) <= 1 for a, b in zip(ys, ys[1:], strict=False))


def test_no_float_drift_on_repeating_fractions() -> None:
    # 3/10 per step: step 5 sits exactly on 1.5 and must round up.
    cells = ray_cells((0, 0), (10, 3))
    assert cells[5] == (5, 2)


def test_empty_grid_is_symmetric() -> None:
    grid = Grid.open_field(12, 9)
    rng = np.random.default_rng(3)
    for _ in range(200):
        ax, bx = rng.integers(0, 12, size=2)
        ay, by = rng.integers(0, 9, size=2)
        a, b = (int(ax), int(ay)), (int(bx), int(by))
        assert cast_ray(a, b, grid)
        assert cast_ray(b, a, grid)


def test_wall_between_blocks() -> None:
    grid = make_grid(
        ".....",
        "..#..",
        ".....",
    )
    assert not cast_ray((0, 1), (4, 1), grid)
    assert not cast_ray((4, 1), (0, 1), grid)


def test_target_wall_is_not_sampled() -> None:
    grid = make_grid("..#")
    assert cast_ray((0, 0), (2, 0), grid)


def test_origin_cell_is_sampled() -> None:
    grid = make_grid("#..")
    assert not cast_ray((0, 0), (2, 0), grid)


def test_diagonal_slit_lets_ray_through() -> None:
    # (0,1) and (1,2) touch only at a corner; the ray between (0,2) and (2,0)
    # squeezes through the gap at (1,1).
    grid = make_grid(
        "...",
        "#..",
        ".#.",
    )
    assert ray_cells((0, 2), (2, 0)) == [(0, 2), (1, 1)]
    assert cast_ray((0, 2), (2, 0), grid)
    assert cast_ray((2, 0), (0, 2), grid)


def test_out_of_bounds_endpoint_raises() -> None:
    grid = Grid.open_field(3, 3)
    with pytest.raises(BoundsError):
        cast_ray((5, 5), (0, 0), grid)
