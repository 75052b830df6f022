from __future__ import annotations

from typing import TYPE_CHECKING

import tcod.event

from sightline import config

from .commands import (
    AdjustFovWidthCommand,
    AdjustRadiusCommand,
    Command,
    MoveBackwardCommand,
    MoveCommand,
    MoveForwardCommand,
    QuitCommand,
    RotateCommand,
)

if TYPE_CHECKING:
    from .controller import Controller


class InputHandler:
    """Translates tcod events into observer commands."""

    def __init__(self, controller: Controller) -> None:
        self.controller = controller

    def dispatch(self, event: tcod.event.Event) -> Command | None:
        c = self.controller

        match event:
            case tcod.event.Quit():
                return QuitCommand(c)
            case (
                tcod.event.KeyDown(sym=tcod.event.KeySym.Q)
                | tcod.event.KeyDown(sym=tcod.event.KeySym.ESCAPE)
            ):
                return QuitCommand(c)

            # Cardinal movement (Arrows and VIM)
            case (
                tcod.event.KeyDown(sym=tcod.event.KeySym.UP)
                | tcod.event.KeyDown(sym=tcod.event.KeySym.K)
            ):
                return MoveCommand(c, 0, -1)
            case (
                tcod.event.KeyDown(sym=tcod.event.KeySym.DOWN)
                | tcod.event.KeyDown(sym=tcod.event.KeySym.J)
            ):
                return MoveCommand(c, 0, 1)
            case (
                tcod.event.KeyDown(sym=tcod.event.KeySym.LEFT)
                | tcod.event.KeyDown(sym=tcod.event.KeySym.H)
            ):
                return MoveCommand(c, -1, 0)
            case (
                tcod.event.KeyDown(sym=tcod.event.KeySym.RIGHT)
                | tcod.event.KeyDown(sym=tcod.event.KeySym.L)
            ):
                return MoveCommand(c, 1, 0)

            # Movement along the facing angle
            case tcod.event.KeyDown(sym=tcod.event.KeySym.W):
                return MoveForwardCommand(c)
            case tcod.event.KeyDown(sym=tcod.event.KeySym.S):
                return MoveBackwardCommand(c)

            # Turning (a = counter-clockwise, d = clockwise)
            case tcod.event.KeyDown(sym=tcod.event.KeySym.A):
                return RotateCommand(c, config.ROTATION_STEP)
            case tcod.event.KeyDown(sym=tcod.event.KeySym.D):
                return RotateCommand(c, -config.ROTATION_STEP)

            # View parameters
            case tcod.event.KeyDown(sym=key_sym, mod=key_mod) if (
                key_sym in (tcod.event.KeySym.PLUS, tcod.event.KeySym.KP_PLUS)
                or (
                    key_sym == tcod.event.KeySym.EQUALS
                    and (key_mod & tcod.event.Modifier.SHIFT)
                )
            ):
                return AdjustRadiusCommand(c, config.RADIUS_STEP)
            case tcod.event.KeyDown(sym=key_sym) if key_sym in (
                tcod.event.KeySym.MINUS,
                tcod.event.KeySym.KP_MINUS,
            ):
                return AdjustRadiusCommand(c, -config.RADIUS_STEP)
            case tcod.event.KeyDown(sym=tcod.event.KeySym.RIGHTBRACKET):
                return AdjustFovWidthCommand(c, config.FOV_WIDTH_STEP)
            case tcod.event.KeyDown(sym=tcod.event.KeySym.LEFTBRACKET):
                return AdjustFovWidthCommand(c, -config.FOV_WIDTH_STEP)

            case _:
                return None
