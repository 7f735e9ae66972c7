"""Periodic sensing of magical items the player carries."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cavern.constants import (
    INVENTORY_CAPACITY,
    TR_CURSED,
    TR_GOOD_MASK,
    TR_PVAL_MASK,
    TV_MAX_ENCHANT,
    TV_MIN_ENCHANT,
)
from cavern.engine.game_state import Inventory, Item
from cavern.engine.interrupts import disturb

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)

__all__ = ["is_enchanted", "sense_chance", "maybe_sense_enchantment", "sense_enchantment"]

_PACK_CHANCE = 50
_EQUIPMENT_CHANCE = 10


def is_enchanted(item: Item) -> bool:
    """True for a weapon or armour piece with an unknown beneficial enchantment."""

    if item.tval < TV_MIN_ENCHANT or item.tval > TV_MAX_ENCHANT:
        return False
    if item.flags & TR_CURSED or item.identified or item.sensed:
        return False
    if item.tohit > 0 or item.todam > 0 or item.toac > 0:
        return True
    if item.flags & TR_PVAL_MASK and item.p1 > 0:
        return True
    return bool(item.flags & TR_GOOD_MASK)


def sense_chance(level: int) -> int:
    """Return N for the 1-in-N chance of a scan at character *level*."""

    return 10 + 750 // (5 + level)


def maybe_sense_enchantment(ctx: "SimulationContext") -> int:
    """Run the scan on every 16th turn when the dice allow it."""

    if ctx.level.turn & 0xF:
        return 0
    if ctx.player.timers.confused > 0:
        return 0
    if not ctx.rng.one_in("enchant", sense_chance(ctx.player.vitals.lev)):
        return 0
    return sense_enchantment(ctx)


def sense_enchantment(ctx: "SimulationContext") -> int:
    """Roll for each candidate item; return how many were sensed."""

    inventory = ctx.player.inventory
    found = 0
    for index in inventory.scan_slots():
        item = inventory[index]
        if item.empty or not is_enchanted(item):
            continue
        chance = _PACK_CHANCE if index < INVENTORY_CAPACITY else _EQUIPMENT_CHANCE
        if not ctx.rng.one_in("enchant", chance):
            continue
        disturb(ctx)
        ctx.message(f"There's something about what you are {Inventory.describe_use(index)}...")
        item.sensed = True
        found += 1
        LOG.debug("sensed enchantment on %s in slot %d", item.name or item.tval, index)
    return found
