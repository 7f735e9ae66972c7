from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from cavern.debug.turnlog import TurnObserver
from cavern.engine.context import build_context
from cavern.services.sandbox import SandboxWorld, starter_character
from cavern.services.turn_scheduler import SchedulerState, TurnScheduler
from cavern.ui.terminal import StdinTerminal

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)


class Game:
    """Play level after level until the character dies or the session ends."""

    def __init__(self, ctx: "SimulationContext", scheduler: Optional[TurnScheduler] = None) -> None:
        self.ctx = ctx
        self.scheduler = scheduler if scheduler is not None else TurnScheduler(ctx)
        self.levels_played = 0

    def run(self) -> str:
        """Return why the session ended (the ``died_from`` text)."""

        ctx = self.ctx
        while True:
            state = self.scheduler.play_level()
            self.levels_played += 1
            if state is SchedulerState.TERMINATED:
                break
            if state is SchedulerState.INPUT_ENDED:
                # No new level is due; play this one again.
                continue
            try:
                ctx.world.generate_level(ctx)
            except Exception:
                LOG.exception("level generation failed; ending session")
                ctx.exit_requested = True
                break

        reason = ctx.player.died_from or "(alive and well)"
        LOG.info(
            "session over after %d levels, %d turns: %s",
            self.levels_played,
            ctx.level.turn,
            reason,
        )
        return reason


def main() -> None:
    terminal = StdinTerminal()
    world = SandboxWorld()
    ctx = build_context(terminal, world, player=starter_character())
    ctx.turn_observer = TurnObserver()
    ctx.message("Welcome to the caverns. Type '?' for help.")

    try:
        reason = Game(ctx).run()
    except KeyboardInterrupt:
        print()
        return
    print(f"\nGoodbye: {reason}")
