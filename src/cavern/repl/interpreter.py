"""Turns keyboard input into one game action per turn."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from cavern.debug import turnlog
from cavern.engine.game_state import Status
from cavern.repl import keymap, reader
from cavern.repl.dispatch import Dispatch
from cavern.services import player_state as pstate
from cavern.util.directions import WALK_KEYS
from cavern.util.keys import ILLEGAL, SPACE

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)

__all__ = ["CommandInterpreter", "build_dispatch"]

MOVE_WITHOUT_PICKUP = "-"


def build_dispatch(ctx: "SimulationContext") -> Dispatch:
    from cavern.commands.register_all import register_all

    dispatch = Dispatch()
    register_all(dispatch, ctx)
    return dispatch


class CommandInterpreter:
    """Read, remap and dispatch player commands for the current turn."""

    def __init__(self, ctx: "SimulationContext", dispatch: Optional[Dispatch] = None) -> None:
        self._ctx = ctx
        self.dispatch = dispatch if dispatch is not None else build_dispatch(ctx)
        # The key repeated while a count is worked off.
        self.last_key = SPACE

    def execute_input_commands(self) -> None:
        """Run commands until one uses the turn, a new level is due or input ends."""

        ctx = self._ctx
        command = ctx.player.command
        while True:
            if Status.REPEAT in ctx.player.status:
                ctx.redraw("state")
            command.use_last_direction = False
            command.free_turn = False

            if ctx.running:
                self._continue_run()
            else:
                key = self._next_key()
                self.last_key = key
                self.do_command(key)

                if ctx.running:
                    # A run takes over the count; without one it goes on
                    # until something interrupts it.
                    ctx.find_count = command.count - 1
                    command.count = 0
                elif command.free_turn:
                    command.count = 0
                elif command.count:
                    command.count -= 1
                if command.count == 0:
                    ctx.player.status.clear(Status.REPEAT)

            if not self._wants_another_command():
                break

    def do_command(self, key: str) -> None:
        ctx = self._ctx
        command = ctx.player.command
        key, pickup = self._move_without_pickup(key)
        command.skip_pickup = not pickup
        if not self.dispatch.call(ctx, key):
            command.free_turn = True
        command.last_command = key

    # Internal helpers -------------------------------------------------
    def _wants_another_command(self) -> bool:
        ctx = self._ctx
        return (
            ctx.player.command.free_turn
            and not ctx.level.generate_new_level
            and not ctx.end_of_input
            and not ctx.exit_requested
        )

    def _next_key(self) -> str:
        ctx = self._ctx
        command = ctx.player.command
        if command.count > 0:
            command.use_last_direction = True
            return self.last_key

        parsed = reader.read_command(ctx)
        key = parsed.key
        if not ctx.roguelike_keys:
            key = keymap.remap_original(key, lambda: reader.get_direction(ctx))

        if parsed.count > 0:
            if not keymap.count_allowed(key):
                turnlog.emit(ctx, "CMD/INVALID_COUNT", key=key, count=parsed.count)
                command.free_turn = True
                ctx.message("Invalid command with a count.")
                return SPACE
            command.count = parsed.count
            ctx.player.status.set(Status.REPEAT)
            ctx.redraw("state")
        return key

    def _move_without_pickup(self, key: str) -> tuple[str, bool]:
        if key != MOVE_WITHOUT_PICKUP:
            return key, True
        command = self._ctx.player.command
        # The direction prompt reads a key, which clears the count.
        saved = command.count
        direction = reader.get_direction(self._ctx)
        if direction is None:
            return SPACE, False
        command.count = saved
        return WALK_KEYS.get(direction, ILLEGAL), False

    def _continue_run(self) -> None:
        ctx = self._ctx
        direction = ctx.world.run_step(ctx, ctx.run_direction)
        if direction is None:
            pstate.end_find(ctx)
            return
        ctx.run_direction = direction
        ctx.find_count -= 1
        if ctx.find_count == 0:
            pstate.end_find(ctx)
