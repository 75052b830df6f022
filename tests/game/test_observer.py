"""Tests for observer movement and view parameter updates."""

from __future__ import annotations

import math

import pytest

from sightline.game.observer import Observer, ViewSpec
from sightline.util.angles import TAU


def test_cell_rounds_continuous_position() -> None:
    observer = Observer(2.4, 3.5)
    assert observer.position == (2.4, 3.5)
    assert observer.cell == (2, 4)


def test_move_by_steps_whole_cells() -> None:
    observer = Observer(2, 2)
    observer.move_by(1, 0)
    observer.move_by(0, -1)
    assert observer.cell == (3, 1)


def test_move_by_does_not_check_bounds() -> None:
    observer = Observer(0, 0)
    observer.move_by(-1, -1)
    assert observer.cell == (-1, -1)


@pytest.mark.parametrize(
    ("facing", "expected_cell"),
    [
        (0.0, (3, 2)),  # east
        (math.pi / 2, (2, 1)),  # up the screen
        (math.pi, (1, 2)),  # west
        (3 * math.pi / 2, (2, 3)),  # down the screen
    ],
)
def test_move_forward_follows_facing(
    facing: float, expected_cell: tuple[int, int]
) -> None:
    observer = Observer(2, 2, facing=facing)
    observer.move_forward()
    assert observer.cell == expected_cell


def test_move_backward_reverses_forward() -> None:
    observer = Observer(5, 5, facing=0.7)
    observer.move_forward(2.0)
    observer.move_backward(2.0)
    assert observer.x == pytest.approx(5.0)
    assert observer.y == pytest.approx(5.0)


def test_fractional_moves_accumulate() -> None:
    # Facing 45° up-right: each step moves ~0.707 on both axes.
    observer = Observer(2, 2, facing=math.pi / 4)
    observer.move_forward()
    assert observer.cell == (3, 1)
    observer.move_forward()
    assert observer.position == pytest.approx((2 + math.sqrt(2), 2 - math.sqrt(2)))
    assert observer.cell == (3, 1)


def test_forward_position_does_not_mutate() -> None:
    observer = Observer(1, 1, facing=0.0)
    assert observer.forward_position(3.0) == pytest.approx((4.0, 1.0))
    assert observer.position == (1.0, 1.0)


def test_rotate_wraps_both_ways() -> None:
    observer = Observer(0, 0, facing=math.radians(350))
    observer.rotate(math.radians(20))
    assert observer.facing == pytest.approx(math.radians(10))

    observer.rotate(-math.radians(30))
    assert observer.facing == pytest.approx(math.radians(340))


def test_rotate_onto_east_folds_to_zero() -> None:
    observer = Observer(0, 0, facing=math.pi)
    observer.rotate(math.pi)
    assert observer.facing == 0.0
    assert 0.0 <= observer.facing < TAU


def test_initial_facing_is_normalized() -> None:
    assert Observer(0, 0, facing=TAU + 1.0).facing == pytest.approx(1.0)
    assert Observer(0, 0, facing=-1.0).facing == pytest.approx(TAU - 1.0)


def test_adjust_radius_clamps_at_zero() -> None:
    observer = Observer(0, 0, view=ViewSpec(radius=2, fov_width=1.0))
    observer.adjust_radius(3)
    assert observer.view is not None
    assert observer.view.radius == 5
    observer.adjust_radius(-10)
    assert observer.view.radius == 0


def test_adjust_fov_width_clamps_to_full_circle() -> None:
    observer = Observer(0, 0, view=ViewSpec(radius=5, fov_width=1.0))
    observer.adjust_fov_width(10.0)
    assert observer.view is not None
    assert observer.view.fov_width == TAU
    observer.adjust_fov_width(-10.0)
    assert observer.view.fov_width == 0.0


def test_view_adjustments_without_light_are_noops() -> None:
    observer = Observer(0, 0, view=None)
    observer.adjust_radius(5)
    observer.adjust_fov_width(1.0)
    assert observer.view is None


def test_negative_radius_rejected() -> None:
    with pytest.raises(ValueError):
        ViewSpec(radius=-1, fov_width=1.0)
