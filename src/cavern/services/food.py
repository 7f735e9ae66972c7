"""Digestion, hunger warnings and starvation."""

from __future__ import annotations

from enum import IntEnum
import logging
from typing import TYPE_CHECKING

from cavern.constants import PLAYER_REGEN_FAINT, PLAYER_REGEN_NORMAL, PLAYER_REGEN_WEAK
from cavern.engine.game_state import Status
from cavern.engine.interrupts import Disturb, disturb
from cavern.services import player_state as pstate

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)

__all__ = ["RegenRate", "consume_food", "starvation_damage"]


class RegenRate(IntEnum):
    """Regeneration multiplier granted by the current food level."""

    NONE = 0
    FAINT = PLAYER_REGEN_FAINT
    WEAK = PLAYER_REGEN_WEAK
    NORMAL = PLAYER_REGEN_NORMAL


def starvation_damage(food: int) -> int:
    """Hit points lost for a food counter of *food* (< 0); never below 1."""

    return max(1, -food // 16)


def consume_food(ctx: "SimulationContext") -> RegenRate:
    """Digest one turn's worth of food and return the regeneration class."""

    cfg = ctx.config
    player = ctx.player
    flags = player.flags
    status = player.status
    rate = RegenRate.NORMAL

    if flags.food < cfg.food_alert:
        if flags.food < cfg.food_weak:
            if flags.food < 0:
                rate = RegenRate.NONE
            elif flags.food < cfg.food_faint:
                rate = RegenRate.FAINT
            else:
                rate = RegenRate.WEAK

            if status.activate(Status.WEAK):
                ctx.message("You are getting weak from hunger.")
                disturb(ctx)
                ctx.redraw("hunger")

            if flags.food < cfg.food_faint and ctx.rng.one_in("food", 8):
                player.timers.paralysis += ctx.rng.randint("food", 5)
                ctx.message("You faint from the lack of food.")
                disturb(ctx, Disturb.MAJOR)
        else:
            if status.deactivate(Status.WEAK):
                ctx.redraw("hunger")
            if status.activate(Status.HUNGRY):
                ctx.message("You are getting hungry.")
                disturb(ctx)
                ctx.redraw("hunger")
    else:
        cleared = status.deactivate(Status.WEAK)
        cleared = status.deactivate(Status.HUNGRY) or cleared
        if cleared:
            ctx.redraw("hunger")

    # Moving fast burns extra food.
    if flags.speed < 0:
        flags.food -= flags.speed * flags.speed
    flags.food -= flags.food_digested

    if flags.food < 0:
        damage = starvation_damage(flags.food)
        LOG.debug("starving: food=%d damage=%d", flags.food, damage)
        pstate.take_hit(ctx, damage, "starvation")
        disturb(ctx, Disturb.MAJOR)

    return rate
