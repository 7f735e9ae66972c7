from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from cavern.debug import turnlog
from cavern.util.keys import describe_key

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

# A handler returns True when the command used up the game turn.
Handler = Callable[["SimulationContext"], bool]


class Dispatch:
    """
    Command router keyed by the single-character roguelike command code.
    A second table holds the wizard commands; it is consulted only in wizard
    mode and only for codes the main table does not know.
    """

    def __init__(self) -> None:
        self._cmds: Dict[str, Handler] = {}
        self._wizard: Dict[str, Handler] = {}
        self._names: Dict[str, str] = {}
        self._aliases: Dict[str, str] = {}
        self._log = logging.getLogger(__name__)

    def register(self, key: str, fn: Handler, *, name: str = "", wizard: bool = False) -> None:
        if len(key) != 1:
            raise ValueError(f"command codes are single characters, got {key!r}")
        table = self._wizard if wizard else self._cmds
        if key in table:
            raise ValueError(f"command {describe_key(key)} registered twice")
        table[key] = fn
        self._names[key] = name or getattr(fn, "__name__", "?")

    def alias(self, alias: str, target: str) -> None:
        """Make *alias* run whatever *target* runs in the main table."""
        if target not in self._cmds:
            raise ValueError(f"cannot alias {describe_key(alias)} to unknown {describe_key(target)}")
        self._aliases[alias] = target

    def lookup(self, key: str, *, wizard_mode: bool = False) -> Optional[Handler]:
        key = self._aliases.get(key, key)
        handler = self._cmds.get(key)
        if handler is None and wizard_mode:
            handler = self._wizard.get(key)
        return handler

    def list_commands(self, *, wizard: bool = False) -> List[Tuple[str, str]]:
        """Return ``(key, name)`` pairs in key order."""
        table = self._wizard if wizard else self._cmds
        return sorted((key, self._names.get(key, "?")) for key in table)

    def call(self, ctx: "SimulationContext", key: str) -> bool:
        """Run the handler for *key*; return True if a game turn was used."""

        handler = self.lookup(key)
        if handler is not None:
            used = bool(handler(ctx))
            turnlog.emit(ctx, "CMD/DISPATCH", key=describe_key(key), free=not used)
            return used

        # Wizard commands never take game time.
        if ctx.wizard_mode and key in self._wizard:
            self._wizard[key](ctx)
            turnlog.emit(ctx, "CMD/DISPATCH", key=describe_key(key), free=True, wizard=True)
            return False

        self._log.debug("unknown command %s", describe_key(key))
        if ctx.wizard_mode:
            if ctx.roguelike_keys:
                ctx.terminal.show_prompt("Type '?' or '\\' for help.")
            else:
                ctx.terminal.show_prompt("Type '?' or ^H for help.")
        else:
            ctx.terminal.show_prompt("Type '?' for help.")
        return False
