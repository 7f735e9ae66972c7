"""A small self-contained world used by the headless REPL and tests.

The sandbox is one rectangular room with a staircase each way and a
door in the east wall. It is enough to walk, run, rest, spike doors and
change levels without a real dungeon generator.
"""

from __future__ import annotations

from dataclasses import asdict
import json
import logging
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from cavern import env
from cavern.constants import INVEN_LIGHT, TV_FLASK, TV_LIGHT, TV_SPIKE
from cavern.engine.game_state import Item, PlayerState
from cavern.interfaces import Door
from cavern.util.directions import step

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)

Position = Tuple[int, int]

# Actions that take a turn when the sandbox "performs" them.
_TIMED_ACTIONS = {
    "search",
    "open",
    "close",
    "disarm",
    "bash",
    "eat",
    "quaff",
    "read",
    "aim",
    "throw",
    "use_staff",
    "cast",
    "pray",
    "gain_spells",
}


def starter_character() -> PlayerState:
    """A fresh character with a lit lantern, oil and a few spikes."""

    player = PlayerState()
    player.position = (2, 2)
    player.inventory[INVEN_LIGHT] = Item(name="Brass Lantern", tval=TV_LIGHT, subval=0, p1=7500)
    player.inventory.add(Item(name="Flask of oil", tval=TV_FLASK, p1=7500, number=5, weight=10))
    player.inventory.add(Item(name="Iron Spike", tval=TV_SPIKE, number=4, weight=10))
    player.vitals.mhp = player.vitals.chp = 20
    return player


class SandboxWorld:
    """Single-room :class:`~cavern.interfaces.World` implementation."""

    def __init__(self, height: int = 9, width: int = 20) -> None:
        self.height = height
        self.width = width
        self.levels_generated = 0
        self.monsters = 0
        self.actions: list[str] = []
        self.doors: Dict[Position, Door] = {}
        self.stairs: Dict[Position, str] = {}
        self._layout()

    def _layout(self) -> None:
        self.doors = {(self.height // 2, self.width - 1): Door(closed=True)}
        self.stairs = {(1, 1): "up", (self.height - 2, self.width - 2): "down"}

    def _inside(self, position: Position) -> bool:
        row, col = position
        return 0 < row < self.height - 1 and 0 < col < self.width - 1

    def move_player(self, ctx: "SimulationContext", direction: int, pickup: bool) -> Optional[Position]:
        target = step(ctx.player.position, direction)
        if self._inside(target):
            return target
        door = self.doors.get(target)
        if door is not None and door.closed:
            ctx.message("There is a closed door blocking your way.")
        else:
            ctx.message("There is a wall in the way!")
        return None

    def run_step(self, ctx: "SimulationContext", direction: int) -> Optional[int]:
        target = step(ctx.player.position, direction)
        if not self._inside(target):
            return None
        ctx.player.position = target
        return direction

    def tunnel(self, ctx: "SimulationContext", direction: int) -> bool:
        target = step(ctx.player.position, direction)
        if self._inside(target):
            ctx.message("You are not tunneling through anything.")
            return False
        ctx.message("You tunnel into the granite wall.")
        return True

    def stairs_at(self, ctx: "SimulationContext", position: Position) -> Optional[str]:
        return self.stairs.get(tuple(position))

    def door_at(self, ctx: "SimulationContext", position: Position) -> Optional[Door]:
        return self.doors.get(tuple(position))

    def update_monsters(self, ctx: "SimulationContext", move: bool) -> None:
        pass

    def alloc_monster(self, ctx: "SimulationContext", count: int, distance: int) -> None:
        self.monsters += count

    def store_maint(self, ctx: "SimulationContext") -> None:
        LOG.debug("store maintenance on turn %d", ctx.level.turn)

    def teleport(self, ctx: "SimulationContext", distance: int) -> None:
        rng = ctx.rng.get_rng("teleport")
        ctx.player.position = (rng.randint(1, self.height - 2), rng.randint(1, self.width - 2))

    def compact_monsters(self, ctx: "SimulationContext") -> bool:
        removed = min(self.monsters, 20)
        self.monsters -= removed
        return removed > 0

    def monster_count(self, ctx: "SimulationContext") -> int:
        return self.monsters

    def check_strength(self, ctx: "SimulationContext") -> None:
        pass

    def calc_bonuses(self, ctx: "SimulationContext") -> None:
        pass

    def check_view(self, ctx: "SimulationContext") -> None:
        pass

    def save_character(self, ctx: "SimulationContext") -> bool:
        path = env.state_path("saves", "character.json")
        player = ctx.player
        payload: Dict[str, Any] = {
            "died_from": player.died_from,
            "depth": ctx.level.depth,
            "max_depth": ctx.level.max_depth,
            "turn": ctx.level.turn,
            "vitals": asdict(player.vitals),
            "timers": player.timers.as_dict(),
            "food": player.flags.food,
        }
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError:
            LOG.exception("could not write %s", path)
            return False
        LOG.info("character saved to %s", path)
        return True

    def generate_level(self, ctx: "SimulationContext") -> None:
        self.levels_generated += 1
        self.monsters = 0
        self._layout()
        ctx.player.position = (self.height // 2, self.width // 2)

    def perform(self, ctx: "SimulationContext", action: str, **params: Any) -> bool:
        self.actions.append(action)
        if action in _TIMED_ACTIONS:
            ctx.message("Nothing happens.")
            return True
        LOG.debug("sandbox has nothing to show for %s %s", action, params)
        return False
