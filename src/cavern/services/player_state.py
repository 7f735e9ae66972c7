"""Operations on the live player shared by effects and commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cavern.constants import MAX_SHORT
from cavern.engine.game_state import Stats, Status

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)


def constitution_adjustment(stats: Stats) -> int:
    """Hit point / poison resistance modifier for the constitution stat.

    Ranges from ``-4`` for the feeblest constitution to ``4`` at 18/100 and
    above.
    """

    con = stats.constitution
    if con < 7:
        return max(-4, con - 7)
    if con < 17:
        return 0
    if con == 17:
        return 1
    if con < 94:
        return 2
    if con < 117:
        return 3
    return 4


def take_hit(ctx: "SimulationContext", damage: int, cause: str) -> None:
    """Apply *damage* to the player; below zero HP the character dies."""

    player = ctx.player
    if player.timers.invuln > 0:
        damage = 0
    if damage <= 0:
        return
    player.vitals.chp -= damage
    ctx.redraw("chp")
    LOG.debug("player hit for %d by %s, chp=%d", damage, cause, player.vitals.chp)

    if player.vitals.chp < 0 and not ctx.character_is_dead:
        player.died_from = cause
        ctx.character_is_dead = True
        ctx.level.generate_new_level = True
        LOG.info("player died from %s on turn %d", cause, ctx.level.turn)


def change_speed(ctx: "SimulationContext", amount: int) -> None:
    ctx.player.flags.speed += amount
    ctx.player.status.set(Status.SPEED)


def search_on(ctx: "SimulationContext") -> None:
    player = ctx.player
    if not player.status.activate(Status.SEARCH):
        return
    change_speed(ctx, 1)
    player.flags.food_digested += 1
    ctx.redraw("state")
    ctx.redraw("speed")


def search_off(ctx: "SimulationContext") -> None:
    player = ctx.player
    if not player.status.deactivate(Status.SEARCH):
        return
    change_speed(ctx, -1)
    player.flags.food_digested -= 1
    ctx.redraw("state")
    ctx.redraw("speed")


def rest_on(ctx: "SimulationContext", turns: int) -> bool:
    """Start resting for *turns* (negative: until HP and mana are full).

    Returns ``False`` when *turns* is zero and nothing started.
    """

    if turns == 0:
        return False
    turns = max(-MAX_SHORT, min(MAX_SHORT, turns))
    player = ctx.player
    if Status.SEARCH in player.status:
        search_off(ctx)
    player.timers.rest = turns
    if player.status.activate(Status.REST):
        player.flags.food_digested -= 1
    ctx.redraw("state")
    ctx.terminal.show_prompt("Press any key to stop resting...")
    return True


def rest_off(ctx: "SimulationContext") -> None:
    player = ctx.player
    player.timers.rest = 0
    if player.status.deactivate(Status.REST):
        player.flags.food_digested += 1
    ctx.redraw("state")


def end_find(ctx: "SimulationContext") -> None:
    """Leave run mode."""

    if ctx.running:
        ctx.running = 0
        ctx.find_count = 0
