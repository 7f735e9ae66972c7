"""Protocol definitions for the engine's external collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Tuple


class Terminal(Protocol):
    """Display and keyboard service."""

    def read_key(self) -> Optional[str]:
        """Block for one key; ``None`` signals end of input."""

    def poll_key(self, timeout_micros: int) -> bool:
        """Return ``True`` if a key is waiting, without consuming it."""

    def show_message(self, text: str) -> None:
        """Print *text* on the message line and record it in the history."""

    def show_prompt(self, text: str) -> None:
        """Show *text* on the prompt line without recording it."""

    def redraw(self, field: str) -> None:
        """Refresh one status readout (``"chp"``, ``"map"``, ``"speed"`` ...)."""

    def confirm(self, prompt: str) -> bool:
        """Ask a yes/no question."""

    def get_string(self, prompt: str) -> Optional[str]:
        """Read a line of text; ``None`` if the player escaped."""

    def bell(self) -> None:
        """Ring the terminal bell."""

    def message_history(self) -> List[str]:
        """Return recent messages, oldest first."""


@dataclass
class Door:
    """What the engine needs to know about a door cell."""

    closed: bool
    # >0 locked, <0 stuck (spiked), 0 plain.
    strength: int = 0
    monster: Optional[str] = None


class World(Protocol):
    """Dungeon, monster and item services outside the engine."""

    def move_player(self, ctx: Any, direction: int, pickup: bool) -> Optional[Tuple[int, int]]:
        """Try to step; return the new position or ``None`` if blocked."""

    def run_step(self, ctx: Any, direction: int) -> Optional[int]:
        """Advance a run; return the next direction or ``None`` to stop."""

    def tunnel(self, ctx: Any, direction: int) -> bool:
        """Dig in *direction*; ``False`` if no turn was used."""

    def stairs_at(self, ctx: Any, position: Tuple[int, int]) -> Optional[str]:
        """Return ``"up"``, ``"down"`` or ``None``."""

    def door_at(self, ctx: Any, position: Tuple[int, int]) -> Optional[Door]:
        """Return the live door at *position*, if any; spiking mutates it."""

    def update_monsters(self, ctx: Any, move: bool) -> None:
        """Relight monsters, and move them when *move* is true."""

    def alloc_monster(self, ctx: Any, count: int, distance: int) -> None:
        """Place wandering monsters at least *distance* away."""

    def store_maint(self, ctx: Any) -> None:
        """Turn over the store inventories."""

    def teleport(self, ctx: Any, distance: int) -> None:
        """Move the player up to *distance* cells away."""

    def compact_monsters(self, ctx: Any) -> bool:
        """Delete distant monsters to free list slots."""

    def monster_count(self, ctx: Any) -> int:
        """Return how many monster list entries are in use."""

    def check_strength(self, ctx: Any) -> None:
        """Recompute weapon/pack weight penalties."""

    def calc_bonuses(self, ctx: Any) -> None:
        """Recompute bonuses granted by worn equipment."""

    def check_view(self, ctx: Any) -> None:
        """Refresh the lit area around the player."""

    def save_character(self, ctx: Any) -> bool:
        """Persist the character; ``False`` on failure."""

    def generate_level(self, ctx: Any) -> None:
        """Build the level for ``ctx.level.depth``."""

    def perform(self, ctx: Any, action: str, **params: Any) -> bool:
        """Run an out-of-engine action; ``False`` if it used no game turn."""
