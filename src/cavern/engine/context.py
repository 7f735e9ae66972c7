"""The simulation context handed to every engine component."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Optional

from cavern import env
from cavern.engine.game_state import DungeonLevel, PlayerState
from cavern.engine.interrupts import InterruptSignal
from cavern.services.engine_config import EngineConfig, load_engine_config
from cavern.services.random_pool import RandomPool

if TYPE_CHECKING:
    from cavern.debug.turnlog import TurnObserver
    from cavern.interfaces import Terminal, World

LOG = logging.getLogger(__name__)


@dataclass
class SimulationContext:
    """Everything one play session mutates, passed explicitly."""

    terminal: "Terminal"
    world: "World"
    player: PlayerState = field(default_factory=PlayerState)
    level: DungeonLevel = field(default_factory=DungeonLevel)
    config: EngineConfig = field(default_factory=EngineConfig)
    rng: RandomPool = field(default_factory=RandomPool)
    roguelike_keys: bool = False
    wizard_allowed: bool = False
    wizard_mode: bool = False
    character_is_dead: bool = False
    character_saved: bool = False
    exit_requested: bool = False
    # End-of-input occurrences seen by the key reader.
    eof_count: int = 0
    # Non-zero while a run is in progress.
    running: int = 0
    run_direction: int = 0
    # Turns left in the current run; negative runs until interrupted.
    find_count: int = 0
    interrupts: InterruptSignal = field(default_factory=InterruptSignal)
    turn_observer: Optional["TurnObserver"] = None

    @property
    def end_of_input(self) -> bool:
        return self.eof_count > 0

    def message(self, text: str) -> None:
        self.terminal.show_message(text)

    def redraw(self, field_name: str) -> None:
        self.terminal.redraw(field_name)


def build_context(
    terminal: "Terminal",
    world: "World",
    *,
    player: Optional[PlayerState] = None,
    config: Optional[EngineConfig] = None,
    seed: Optional[str] = None,
) -> SimulationContext:
    """Build a context from the environment and the engine config file."""

    env.log_configuration_once()
    ctx = SimulationContext(
        terminal=terminal,
        world=world,
        player=player if player is not None else PlayerState(),
        config=config if config is not None else load_engine_config(),
        rng=RandomPool(seed),
        roguelike_keys=env.roguelike_keys_enabled(),
        wizard_allowed=env.wizard_mode_allowed(),
    )
    LOG.debug(
        "context built: roguelike=%s wizard_allowed=%s seed=%s",
        ctx.roguelike_keys,
        ctx.wizard_allowed,
        ctx.rng.seed,
    )
    return ctx
