"""Debugging commands available only in wizard mode."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cavern.constants import MAX_DUNGEON_LEVEL
from cavern.util.keys import ctrl_key

from ._helpers import perform

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)

# Timers cut to 1 so the normal expiry message fires next turn.
_CURABLE = ("blind", "confused", "poisoned", "afraid", "slow", "image")


def cure_all(ctx: "SimulationContext") -> None:
    perform(ctx, "remove_curse")
    timers = ctx.player.timers
    for name in _CURABLE:
        if timers.get(name) > 1:
            timers.set(name, 1)
    perform(ctx, "restore_stats")


def create_treasure(ctx: "SimulationContext") -> None:
    command = ctx.player.command
    amount = 1
    if command.count > 0:
        amount = command.count
        command.count = 0
    perform(ctx, "create_treasure", count=amount)
    ctx.redraw("map")


def change_level(ctx: "SimulationContext") -> None:
    command = ctx.player.command
    if command.count > 0:
        depth = 0 if command.count > MAX_DUNGEON_LEVEL else command.count
        command.count = 0
    else:
        text = ctx.terminal.get_string("Go to which level (0-99) ? ")
        try:
            depth = int(text) if text else -1
        except ValueError:
            depth = -1
    if depth < 0:
        return
    ctx.level.depth = min(depth, MAX_DUNGEON_LEVEL)
    ctx.level.generate_new_level = True
    LOG.info("wizard jump to depth %d", ctx.level.depth)


def teleport(ctx: "SimulationContext") -> None:
    ctx.world.teleport(ctx, ctx.config.queued_teleport_distance)


def experience(ctx: "SimulationContext") -> None:
    command = ctx.player.command
    vitals = ctx.player.vitals
    if command.count > 0:
        vitals.exp = command.count
        command.count = 0
    elif vitals.exp == 0:
        vitals.exp = 1
    else:
        vitals.exp *= 2
    ctx.redraw("exp")


def summon(ctx: "SimulationContext") -> None:
    perform(ctx, "summon_monster")
    ctx.world.update_monsters(ctx, False)


def _world(action: str):
    def handler(ctx: "SimulationContext") -> None:
        perform(ctx, action, roguelike=ctx.roguelike_keys)

    handler.__name__ = action
    return handler


def register(dispatch, ctx) -> None:
    table = {
        ctrl_key("a"): cure_all,
        ctrl_key("e"): _world("edit_character"),
        ctrl_key("f"): _world("mass_genocide"),
        ctrl_key("g"): create_treasure,
        ctrl_key("d"): change_level,
        ctrl_key("o"): _world("dump_objects"),
        "\\": _world("wizard_help"),
        ctrl_key("i"): _world("identify"),
        "*": _world("wizard_light"),
        ":": _world("map_area"),
        ctrl_key("t"): teleport,
        "+": experience,
        "&": summon,
        "@": _world("wizard_create"),
    }
    for key, fn in table.items():
        dispatch.register(key, fn, wizard=True)
