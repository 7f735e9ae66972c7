"""Quit, save, wizard mode and message recall."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cavern.constants import MAX_SAVE_MSG
from cavern.util.keys import ctrl_key

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)

WIZARD_WARNING = (
    "Wizard mode is for debugging and experimenting. "
    "The game will not be scored if you enter wizard mode. Are you sure?"
)


def quit_game(ctx: "SimulationContext") -> bool:
    if ctx.terminal.confirm("Do you really want to quit?"):
        ctx.character_is_dead = True
        ctx.level.generate_new_level = True
        ctx.player.died_from = "Quitting"
        LOG.info("player quit on turn %d", ctx.level.turn)
    return False


def previous_messages(ctx: "SimulationContext") -> bool:
    """Show the last message, or the last *count* of them."""

    command = ctx.player.command
    wanted = MAX_SAVE_MSG
    if command.count > 0:
        wanted = min(command.count, MAX_SAVE_MSG)
        command.count = 0
    elif command.last_command != ctrl_key("p"):
        wanted = 1

    history = ctx.terminal.message_history()[-wanted:]
    if wanted > 1:
        for line in history:
            ctx.terminal.show_prompt(line)
    elif history:
        # Recalled messages are marked so they are not mistaken for new ones.
        ctx.terminal.show_prompt(">" + history[-1])
    return False


def enter_wizard_mode(ctx: "SimulationContext") -> bool:
    if not ctx.wizard_allowed:
        ctx.message("Wizard mode is not available.")
        return False
    return ctx.terminal.confirm(WIZARD_WARNING)


def toggle_wizard(ctx: "SimulationContext") -> bool:
    if ctx.wizard_mode:
        ctx.wizard_mode = False
        ctx.message("Wizard mode off.")
    elif enter_wizard_mode(ctx):
        ctx.wizard_mode = True
        ctx.message("Wizard mode on.")
        LOG.warning("wizard mode entered on turn %d", ctx.level.turn)
    ctx.redraw("winner")
    return False


def save_and_exit(ctx: "SimulationContext") -> bool:
    player = ctx.player
    if player.total_winner:
        ctx.message("You are a Total Winner,  your character must be retired.")
        if ctx.roguelike_keys:
            ctx.message("Use 'Q' to when you are ready to quit.")
        else:
            ctx.message("Use <Control>-K when you are ready to quit.")
        return False

    player.died_from = "(saved)"
    ctx.message("Saving game...")
    saved = False
    try:
        saved = bool(ctx.world.save_character(ctx))
    except Exception:
        LOG.exception("save failed")
    if saved:
        ctx.character_saved = True
        ctx.exit_requested = True
        ctx.level.generate_new_level = True
        return False
    player.died_from = "(alive and well)"
    return False


def register(dispatch, ctx) -> None:
    dispatch.register("Q", quit_game, name="quit")
    dispatch.register(ctrl_key("p"), previous_messages, name="messages")
    dispatch.register(ctrl_key("w"), toggle_wizard, name="wizard")
    dispatch.register(ctrl_key("x"), save_and_exit, name="save")
