from __future__ import annotations

import pytest
import tcod.event

from sightline import config
from sightline.commands import (
    AdjustFovWidthCommand,
    AdjustRadiusCommand,
    MoveBackwardCommand,
    MoveCommand,
    MoveForwardCommand,
    QuitCommand,
    RotateCommand,
)
from tests.helpers import make_controller


def key(sym: tcod.event.KeySym, mod: int = 0) -> tcod.event.KeyDown:
    return tcod.event.KeyDown(0, sym, mod)


@pytest.mark.parametrize(
    ("sym", "delta"),
    [
        (tcod.event.KeySym.UP, (0, -1)),
        (tcod.event.KeySym.K, (0, -1)),
        (tcod.event.KeySym.DOWN, (0, 1)),
        (tcod.event.KeySym.J, (0, 1)),
        (tcod.event.KeySym.LEFT, (-1, 0)),
        (tcod.event.KeySym.H, (-1, 0)),
        (tcod.event.KeySym.RIGHT, (1, 0)),
        (tcod.event.KeySym.L, (1, 0)),
    ],
)
def test_cardinal_movement_keys(
    sym: tcod.event.KeySym, delta: tuple[int, int]
) -> None:
    controller = make_controller()
    command = controller.input_handler.dispatch(key(sym))
    assert isinstance(command, MoveCommand)
    assert (command.dx, command.dy) == delta


def test_forward_backward_keys() -> None:
    handler = make_controller().input_handler
    assert isinstance(handler.dispatch(key(tcod.event.KeySym.W)), MoveForwardCommand)
    assert isinstance(handler.dispatch(key(tcod.event.KeySym.S)), MoveBackwardCommand)


def test_rotation_keys() -> None:
    handler = make_controller().input_handler
    left = handler.dispatch(key(tcod.event.KeySym.A))
    right = handler.dispatch(key(tcod.event.KeySym.D))
    assert isinstance(left, RotateCommand)
    assert isinstance(right, RotateCommand)
    assert left.delta == config.ROTATION_STEP
    assert right.delta == -config.ROTATION_STEP


def test_radius_keys() -> None:
    handler = make_controller().input_handler
    grow = handler.dispatch(key(tcod.event.KeySym.KP_PLUS))
    shifted_equals = handler.dispatch(
        key(tcod.event.KeySym.EQUALS, tcod.event.Modifier.LSHIFT)
    )
    shrink = handler.dispatch(key(tcod.event.KeySym.MINUS))
    assert isinstance(grow, AdjustRadiusCommand) and grow.delta > 0
    assert isinstance(shifted_equals, AdjustRadiusCommand)
    assert isinstance(shrink, AdjustRadiusCommand) and shrink.delta < 0


def test_plain_equals_does_nothing() -> None:
    handler = make_controller().input_handler
    assert handler.dispatch(key(tcod.event.KeySym.EQUALS)) is None


def test_fov_width_keys() -> None:
    handler = make_controller().input_handler
    wider = handler.dispatch(key(tcod.event.KeySym.RIGHTBRACKET))
    narrower = handler.dispatch(key(tcod.event.KeySym.LEFTBRACKET))
    assert isinstance(wider, AdjustFovWidthCommand) and wider.delta > 0
    assert isinstance(narrower, AdjustFovWidthCommand) and narrower.delta < 0


@pytest.mark.parametrize(
    "event",
    [
        tcod.event.Quit(),
        key(tcod.event.KeySym.Q),
        key(tcod.event.KeySym.ESCAPE),
    ],
)
def test_quit_events(event: tcod.event.Event) -> None:
    handler = make_controller().input_handler
    assert isinstance(handler.dispatch(event), QuitCommand)


def test_unmapped_key_is_ignored() -> None:
    handler = make_controller().input_handler
    assert handler.dispatch(key(tcod.event.KeySym.Z)) is None


def test_arrow_key_drives_controller() -> None:
    controller = make_controller()
    command = controller.input_handler.dispatch(key(tcod.event.KeySym.RIGHT))
    assert command is not None
    assert controller.execute(command)
    assert controller.observer.cell == (3, 2)
