"""Walking, running, staying in place and tunnelling."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cavern.constants import KEYPAD_DIRECTIONS
from cavern.services import player_state as pstate
from cavern.util.directions import WALK_KEYS
from cavern.util.keys import ctrl_key

from .rest import start_rest

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)

STAY = 5


def _confused_direction(ctx: "SimulationContext", direction: int) -> int:
    if ctx.player.timers.confused > 0 and direction != STAY:
        if ctx.rng.randint("confusion", 4) > 1:
            return ctx.rng.get_rng("confusion").choice(KEYPAD_DIRECTIONS)
    return direction


def move(ctx: "SimulationContext", direction: int, pickup: bool = True) -> bool:
    """Step the player; bumping into something uses no turn."""

    direction = _confused_direction(ctx, direction)
    position = ctx.world.move_player(ctx, direction, pickup)
    if position is None:
        pstate.end_find(ctx)
        return False
    ctx.player.position = position
    return True


def start_run(ctx: "SimulationContext", direction: int) -> bool:
    ctx.running = 1
    ctx.run_direction = direction
    return move(ctx, direction)


def stay(ctx: "SimulationContext") -> bool:
    command = ctx.player.command
    move(ctx, STAY, not command.skip_pickup)
    if command.count > 1:
        command.count -= 1
        start_rest(ctx)
    return True


def tunnel(ctx: "SimulationContext", direction: int) -> bool:
    direction = _confused_direction(ctx, direction)
    return bool(ctx.world.tunnel(ctx, direction))


def _walker(direction: int):
    def handler(ctx: "SimulationContext") -> bool:
        return move(ctx, direction, not ctx.player.command.skip_pickup)

    handler.__name__ = f"walk_{direction}"
    return handler


def _runner(direction: int):
    def handler(ctx: "SimulationContext") -> bool:
        return start_run(ctx, direction)

    handler.__name__ = f"run_{direction}"
    return handler


def _digger(direction: int):
    def handler(ctx: "SimulationContext") -> bool:
        return tunnel(ctx, direction)

    handler.__name__ = f"tunnel_{direction}"
    return handler


def register(dispatch, ctx) -> None:
    for direction, key in WALK_KEYS.items():
        dispatch.register(key, _walker(direction))
        dispatch.register(key.upper(), _runner(direction))
        dispatch.register(ctrl_key(key), _digger(direction))
    dispatch.register(".", stay, name="stay")
    # Carriage return tunnels like line feed.
    dispatch.alias(ctrl_key("m"), ctrl_key("j"))
