from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from cavern.repl import reader
from cavern.util.directions import step

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)


def perform(ctx: "SimulationContext", action: str, **params: Any) -> bool:
    """Hand *action* to the world; a failing collaborator costs no turn."""

    try:
        return bool(ctx.world.perform(ctx, action, **params))
    except Exception:
        LOG.exception("world action %s failed", action)
        return False


def free_action(action: str, **params: Any):
    """Handler that runs *action* in the world and never uses a turn."""

    def handler(ctx: "SimulationContext") -> bool:
        perform(ctx, action, **params)
        return False

    handler.__name__ = action
    return handler


def timed_action(action: str, **params: Any):
    """Handler that uses a turn unless the world reports otherwise."""

    def handler(ctx: "SimulationContext") -> bool:
        return perform(ctx, action, **params)

    handler.__name__ = action
    return handler


def target_cell(ctx: "SimulationContext") -> Optional[tuple[int, int]]:
    """Prompt for a direction and return the neighbouring cell."""

    direction = reader.get_direction(ctx)
    if direction is None:
        return None
    return step(ctx.player.position, direction)
