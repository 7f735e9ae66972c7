"""Door and light-source commands that touch engine state directly."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cavern.constants import TV_FLASK, TV_SPIKE

from ._helpers import target_cell, timed_action

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)


def spike_strength(strength: int) -> int:
    """Door strength after one more spike; locked doors become stuck.

    Successive spikes have a shrinking effect: 0, -20, -27, -33, -38 ...
    """

    if strength > 0:
        strength = -strength
    return strength - (1 + 190 // (10 - strength))


def jam_door(ctx: "SimulationContext") -> bool:
    cell = target_cell(ctx)
    if cell is None:
        return False
    door = ctx.world.door_at(ctx, cell)
    if door is None:
        ctx.message("That isn't a door!")
        return False
    if not door.closed:
        ctx.message("The door must be closed first.")
        return False
    if door.monster:
        ctx.message(f"The {door.monster} is in your way!")
        return True

    inventory = ctx.player.inventory
    index = inventory.find(TV_SPIKE)
    if index is None:
        ctx.message("But you have no spikes.")
        return False
    ctx.message("You jam the door with a spike.")
    door.strength = spike_strength(door.strength)
    inventory.destroy(index)
    LOG.debug("door at %s spiked to %d", cell, door.strength)
    return True


def refill_lamp(ctx: "SimulationContext") -> bool:
    inventory = ctx.player.inventory
    lamp = inventory.light
    if lamp.empty or lamp.subval != 0:
        ctx.message("But you are not using a lamp.")
        return False
    index = inventory.find(TV_FLASK)
    if index is None:
        ctx.message("You have no oil.")
        return False

    lamp_max = ctx.config.lamp_max
    lamp.p1 += inventory[index].p1
    if lamp.p1 > lamp_max:
        lamp.p1 = lamp_max
        ctx.message("Your lamp overflows, spilling oil on the ground.")
        ctx.message("Your lamp is full.")
    elif lamp.p1 > lamp_max // 2:
        ctx.message("Your lamp is more than half full.")
    elif lamp.p1 == lamp_max // 2:
        ctx.message("Your lamp is half full.")
    else:
        ctx.message("Your lamp is less than half full.")

    remaining = inventory[index].number - 1
    if remaining > 0:
        ctx.message(f"You have {remaining} more flask{'s' if remaining > 1 else ''} of oil.")
    else:
        ctx.message("You have no more flasks of oil.")
    inventory.destroy(index)
    return True


def register(dispatch, ctx) -> None:
    dispatch.register("S", jam_door, name="spike")
    dispatch.register("F", refill_lamp, name="fill")
    dispatch.register("o", timed_action("open"))
    dispatch.register("c", timed_action("close"))
    dispatch.register("D", timed_action("disarm"))
    dispatch.register("f", timed_action("bash"))
