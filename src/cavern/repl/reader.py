"""Key reading for the command interpreter.

:func:`read_command` assembles one logical command: an optional repeat
count, an optional ``^`` + letter control-code entry, then the command key.
Every key goes through :func:`inkey`, which owns end-of-input escalation
and always drops the pending repeat count.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Optional

from cavern.debug import turnlog
from cavern.engine.game_state import InputState
from cavern.engine.interrupts import Disturb, disturb
from cavern.util.directions import KEY_TO_DIR, WALK_KEYS
from cavern.util.keys import (
    CONTROL_PREFIX,
    DELETE,
    ESCAPE,
    REPEAT_PREFIX,
    SPACE,
    ctrl_key,
)

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)

__all__ = ["ParsedCommand", "get_direction", "inkey", "panic_save", "read_command"]

_DIGITS = "0123456789"
_BACKSPACES = (DELETE, ctrl_key("h"))
_REFRESH = ctrl_key("r")


@dataclass(frozen=True)
class ParsedCommand:
    key: str
    count: int = 0


def panic_save(ctx: "SimulationContext") -> None:
    """Save the character after input ran dry and end the session."""

    player = ctx.player
    player.died_from = "(end of input: panic saved)"
    LOG.error("end of input %d times; panic saving", ctx.eof_count)
    saved = False
    try:
        saved = ctx.world.save_character(ctx)
    except Exception:
        LOG.exception("panic save failed")
    if saved:
        ctx.character_saved = True
    else:
        player.died_from = "panic: unexpected eof"
        ctx.character_is_dead = True
    ctx.level.generate_new_level = True
    ctx.exit_requested = True


def _end_of_input(ctx: "SimulationContext") -> str:
    ctx.eof_count += 1
    turnlog.emit(ctx, "INPUT/EOF", count=ctx.eof_count)
    if ctx.character_saved:
        ctx.exit_requested = True
        return ESCAPE
    disturb(ctx, Disturb.MAJOR)
    if ctx.eof_count > ctx.config.eof_panic_threshold:
        panic_save(ctx)
    return ESCAPE


def inkey(ctx: "SimulationContext") -> str:
    """Return the next key; end of input reads as ESCAPE."""

    ctx.player.command.count = 0
    while True:
        key = ctx.terminal.read_key()
        if key is None:
            return _end_of_input(ctx)
        if key == _REFRESH:
            ctx.redraw("screen")
            continue
        return key


def get_direction(ctx: "SimulationContext", prompt: Optional[str] = None) -> Optional[int]:
    """Ask for a compass direction; ``None`` if the player escaped.

    While a repeat count is being worked off the previous direction is
    reused without asking.
    """

    command = ctx.player.command
    if command.use_last_direction and command.last_direction:
        return command.last_direction

    while True:
        ctx.terminal.show_prompt(prompt or "Which direction?")
        key = inkey(ctx)
        if key == ESCAPE:
            return None
        direction: Optional[int] = None
        if key in _DIGITS and int(key) in WALK_KEYS:
            direction = int(key)
        elif ctx.roguelike_keys and key in KEY_TO_DIR:
            direction = KEY_TO_DIR[key]
        if direction is not None:
            command.last_direction = direction
            return direction
        ctx.terminal.bell()


def _read_count(ctx: "SimulationContext", key: str) -> tuple[int, str]:
    cap = ctx.config.max_repeat_count
    terminal = ctx.terminal
    terminal.show_prompt("Repeat count:")
    if key == REPEAT_PREFIX:
        key = "0"

    counter = 0
    while True:
        if key in _BACKSPACES:
            counter //= 10
            terminal.show_prompt(str(counter))
        elif len(key) == 1 and key in _DIGITS:
            grown = counter * 10 + int(key)
            if grown > cap:
                terminal.bell()
            else:
                counter = grown
                terminal.show_prompt(str(counter))
        else:
            break
        key = inkey(ctx)

    if counter == 0:
        counter = cap
        terminal.show_prompt(str(counter))
    # A space lets digits themselves be used as commands.
    if key == SPACE:
        terminal.show_prompt("Command:")
        key = inkey(ctx)
    return counter, key


def _read_control_letter(ctx: "SimulationContext") -> str:
    ctx.terminal.show_prompt("Control-")
    key = inkey(ctx)
    if key == ESCAPE:
        return SPACE
    if len(key) == 1 and key.isascii() and key.isalpha():
        return ctrl_key(key)
    ctx.message("Type ^ <letter> for a control char")
    return SPACE


def read_command(ctx: "SimulationContext") -> ParsedCommand:
    """Read one command key together with any repeat count typed before it."""

    command = ctx.player.command
    command.input_state = InputState.IDLE
    key = inkey(ctx)

    counter = 0
    starts_count = key == REPEAT_PREFIX if not ctx.roguelike_keys else key in _DIGITS
    if len(key) == 1 and starts_count:
        command.input_state = InputState.COUNT
        counter, key = _read_count(ctx, key)

    if key == CONTROL_PREFIX:
        command.input_state = InputState.CONTROL
        key = _read_control_letter(ctx)

    command.input_state = InputState.DISPATCHED
    LOG.debug("read command %r count=%d", key, counter)
    return ParsedCommand(key, counter)
