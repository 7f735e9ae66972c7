from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)


def _take_stairs(ctx: "SimulationContext", kind: str, delta: int) -> bool:
    level = ctx.level
    found = ctx.world.stairs_at(ctx, ctx.player.position)
    if found != kind:
        ctx.message(f"I see no {kind} staircase here.")
        return False
    level.depth = max(0, level.depth + delta)
    ctx.message(f"You enter a maze of {kind} staircases.")
    ctx.message("You pass through a one-way door.")
    level.generate_new_level = True
    LOG.info("took %s stairs to depth %d", kind, level.depth)
    return True


def go_up(ctx: "SimulationContext") -> bool:
    return _take_stairs(ctx, "up", -1)


def go_down(ctx: "SimulationContext") -> bool:
    return _take_stairs(ctx, "down", 1)


def register(dispatch, ctx) -> None:
    dispatch.register("<", go_up)
    dispatch.register(">", go_down)
