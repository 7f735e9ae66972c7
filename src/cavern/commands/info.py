"""Commands that only show information and never take game time."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cavern.util.keys import ESCAPE, SPACE, ctrl_key, describe_key

from ._helpers import free_action

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext
    from cavern.repl.dispatch import Dispatch

_FREE = {
    "/": "identify_symbol",
    "C": "character",
    "V": "scores",
    "W": "locate",
    "M": "map",
    "x": "look",
    "=": "options",
    "{": "inscribe",
    "v": "version",
}


def nothing(ctx: "SimulationContext") -> bool:
    return False


def render_help(dispatch: "Dispatch", *, wizard: bool = False) -> list[str]:
    """Return one ``key  name`` line per registered command."""

    return [f"{describe_key(key):>4}  {name}" for key, name in dispatch.list_commands(wizard=wizard)]


def register(dispatch, ctx) -> None:
    for key, action in _FREE.items():
        dispatch.register(key, free_action(action))
    dispatch.register(ctrl_key("v"), free_action("licence"), name="licence")
    # Shell escapes are disabled.
    dispatch.register("!", nothing, name="shell")
    dispatch.register("$", nothing, name="shell")
    dispatch.register(ESCAPE, nothing)
    dispatch.register(SPACE, nothing)

    def show_help(ctx: "SimulationContext") -> bool:
        for line in render_help(dispatch):
            ctx.terminal.show_prompt(line)
        return False

    dispatch.register("?", show_help, name="help")
