"""The disturb signal that interrupts resting, searching, running and counts."""

from __future__ import annotations

from enum import IntEnum
import logging
from typing import TYPE_CHECKING, Optional

from cavern.engine.game_state import Status
from cavern.services import player_state as pstate

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)

__all__ = ["Disturb", "InterruptSignal", "disturb"]


class Disturb(IntEnum):
    # Stop resting, searching and running.
    MINOR = 1
    # MINOR plus drop any pending repeat count.
    MAJOR = 2


class InterruptSignal:
    """Latest disturb raised since the scheduler last looked."""

    def __init__(self) -> None:
        self._pending: Optional[Disturb] = None
        self.raised = 0

    @property
    def pending(self) -> Optional[Disturb]:
        return self._pending

    def raise_signal(self, severity: Disturb) -> None:
        self.raised += 1
        if self._pending is None or severity > self._pending:
            self._pending = severity

    def take(self) -> Optional[Disturb]:
        pending = self._pending
        self._pending = None
        return pending


def disturb(
    ctx: "SimulationContext",
    severity: Disturb = Disturb.MINOR,
    *,
    relight: bool = False,
) -> None:
    """Interrupt whatever the player is repeating.

    The effects are applied immediately; the signal also stays pending on
    ``ctx.interrupts`` until the scheduler takes it after the key poll,
    before command acceptance or at the end of the turn. ``relight`` asks for the
    view around the player to be refreshed even when not running.
    """

    ctx.interrupts.raise_signal(severity)
    player = ctx.player

    if severity >= Disturb.MAJOR and player.command.count:
        player.command.count = 0
        player.status.clear(Status.REPEAT)
    if Status.SEARCH in player.status:
        pstate.search_off(ctx)
    if player.timers.rest != 0:
        pstate.rest_off(ctx)
    if relight or ctx.running:
        pstate.end_find(ctx)
        try:
            ctx.world.check_view(ctx)
        except Exception:
            LOG.exception("check_view failed during disturb")
