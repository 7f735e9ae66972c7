from __future__ import annotations

import random
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import pytest

from cavern.engine.context import SimulationContext
from cavern.engine.game_state import PlayerState
from cavern.interfaces import Door
from cavern.services.engine_config import EngineConfig
from cavern.ui.terminal import ScriptedTerminal
from cavern.util.directions import step


class DummyRNG:
    """Scripted stand-in for :class:`RandomPool`.

    Unscripted rolls return the top of the range so 1-in-N chances miss.
    """

    seed = "dummy"

    def __init__(self, rolls: Optional[Dict[str, Iterable[int]]] = None) -> None:
        self.rolls: Dict[str, List[int]] = {k: list(v) for k, v in (rolls or {}).items()}
        self.calls: List[Tuple[str, int]] = []

    def randint(self, name: str, high: int) -> int:
        self.calls.append((name, high))
        queue = self.rolls.get(name)
        if queue:
            return queue.pop(0)
        return max(1, high)

    def one_in(self, name: str, chance: int) -> bool:
        return self.randint(name, chance) == 1

    def get_rng(self, name: str) -> random.Random:
        return random.Random(0)


class RecordingWorld:
    """World collaborator that records calls and opens onto an empty floor."""

    def __init__(
        self,
        *,
        stairs: Optional[Dict[Tuple[int, int], str]] = None,
        doors: Optional[Dict[Tuple[int, int], Door]] = None,
        walls: Iterable[Tuple[int, int]] = (),
        run_length: int = 100,
        save_ok: bool = True,
        monsters: int = 0,
        perform_result: bool = True,
    ) -> None:
        self.stairs = dict(stairs or {})
        self.doors = dict(doors or {})
        self.walls = set(walls)
        self.run_length = run_length
        self.save_ok = save_ok
        self.monsters = monsters
        self.perform_result = perform_result
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.moves: List[Tuple[int, bool]] = []
        self.run_steps = 0

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def called(self, name: str) -> List[Tuple[Any, ...]]:
        return [args for call, args in self.calls if call == name]

    def move_player(self, ctx, direction, pickup):
        self.moves.append((direction, pickup))
        target = step(ctx.player.position, direction)
        if target in self.walls or target in self.doors:
            return None
        return target

    def run_step(self, ctx, direction):
        self._record("run_step", direction)
        self.run_steps += 1
        if self.run_steps >= self.run_length:
            return None
        ctx.player.position = step(ctx.player.position, direction)
        return direction

    def tunnel(self, ctx, direction):
        self._record("tunnel", direction)
        return True

    def stairs_at(self, ctx, position):
        return self.stairs.get(tuple(position))

    def door_at(self, ctx, position):
        return self.doors.get(tuple(position))

    def update_monsters(self, ctx, move):
        self._record("update_monsters", move)

    def alloc_monster(self, ctx, count, distance):
        self._record("alloc_monster", count, distance)

    def store_maint(self, ctx):
        self._record("store_maint")

    def teleport(self, ctx, distance):
        self._record("teleport", distance)

    def compact_monsters(self, ctx):
        self._record("compact_monsters")
        return True

    def monster_count(self, ctx):
        return self.monsters

    def check_strength(self, ctx):
        self._record("check_strength")

    def calc_bonuses(self, ctx):
        self._record("calc_bonuses")

    def check_view(self, ctx):
        self._record("check_view")

    def save_character(self, ctx):
        self._record("save_character")
        return self.save_ok

    def generate_level(self, ctx):
        self._record("generate_level")

    def perform(self, ctx, action, **params):
        self._record("perform", action, params)
        return self.perform_result


@pytest.fixture(autouse=True)
def _isolated_state(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("GAME_STATE_ROOT", str(tmp_path / "state"))
    for name in ("CAVERN_ROGUELIKE_KEYS", "CAVERN_WIZARD", "CAVERN_RNG_SEED", "CAVERN_DEBUG", "CAVERN_LOGGING"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_ctx() -> Callable[..., SimulationContext]:
    def _make(
        keys: Iterable[str] = (),
        *,
        roguelike: bool = True,
        world: Optional[RecordingWorld] = None,
        rng: Optional[DummyRNG] = None,
        player: Optional[PlayerState] = None,
        config: Optional[EngineConfig] = None,
        **world_kwargs: Any,
    ) -> SimulationContext:
        return SimulationContext(
            terminal=ScriptedTerminal(keys),
            world=world if world is not None else RecordingWorld(**world_kwargs),
            player=player if player is not None else PlayerState(),
            config=config if config is not None else EngineConfig(),
            rng=rng if rng is not None else DummyRNG(),
            roguelike_keys=roguelike,
        )

    return _make


@pytest.fixture
def dummy_rng() -> Callable[..., DummyRNG]:
    return DummyRNG
