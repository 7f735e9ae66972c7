"""Item, spell and inventory commands resolved by the world."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cavern.constants import TV_MAGIC_BOOK, TV_PRAYER_BOOK

from ._helpers import perform, timed_action

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

_TIMED = {
    "E": "eat",
    "G": "gain_spells",
    "z": "aim",
    "t": "throw",
    "m": "cast",
    "p": "pray",
    "q": "quaff",
    "r": "read",
    "Z": "use_staff",
}

# Inventory screens; the world decides whether an action was taken.
_INVENTORY = {
    "d": "drop",
    "e": "equipment",
    "i": "inventory",
    "T": "take_off",
    "w": "wear",
    "X": "exchange",
}


def browse_book(ctx: "SimulationContext") -> bool:
    player = ctx.player
    inventory = player.inventory
    if inventory.find(TV_MAGIC_BOOK) is None and inventory.find(TV_PRAYER_BOOK) is None:
        ctx.message("You are not carrying any books.")
    elif player.timers.blind > 0:
        ctx.message("You can't see to read your spell book!")
    elif player.timers.confused > 0:
        ctx.message("You are too confused.")
    else:
        perform(ctx, "browse")
    return False


def register(dispatch, ctx) -> None:
    for key, action in _TIMED.items():
        dispatch.register(key, timed_action(action))
    for key, action in _INVENTORY.items():
        dispatch.register(key, timed_action("inventory_command", mode=action), name=action)
    dispatch.register("P", browse_book, name="browse")
