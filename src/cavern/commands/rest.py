"""Resting and searching."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cavern.constants import MAX_SHORT
from cavern.engine.game_state import Status
from cavern.services import player_state as pstate

from ._helpers import timed_action

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

REST_PROMPT = "Rest (0-9999): '*' for HP/SP, '&' as needed: "


def parse_rest_turns(text: str | None) -> int:
    """Turn the rest prompt answer into a turn count (0 cancels)."""

    if not text:
        return 0
    text = text.strip()
    if text[:1] in ("*", "&"):
        return -MAX_SHORT
    try:
        return int(text)
    except ValueError:
        return 0


def start_rest(ctx: "SimulationContext") -> bool:
    command = ctx.player.command
    if command.count > 0:
        turns = command.count
        command.count = 0
    else:
        turns = parse_rest_turns(ctx.terminal.get_string(REST_PROMPT))
    return pstate.rest_on(ctx, turns)


def toggle_search(ctx: "SimulationContext") -> bool:
    if Status.SEARCH in ctx.player.status:
        pstate.search_off(ctx)
    else:
        pstate.search_on(ctx)
    return False


def register(dispatch, ctx) -> None:
    dispatch.register("R", start_rest, name="rest")
    dispatch.register("#", toggle_search, name="search_mode")
    dispatch.register("s", timed_action("search"))
