from __future__ import annotations

import random
import secrets
from dataclasses import dataclass
from typing import Dict, Optional

from cavern.env import get_runtime_seed
from cavern.util import derive_seed_value

__all__ = ["RandomPool"]


@dataclass
class _RNGState:
    seed: str
    rng: random.Random
    draws: int = 0


class RandomPool:
    """Named, independently seeded random streams.

    Every stream is derived from one session seed, so a fixed
    ``CAVERN_RNG_SEED`` replays the same game. Streams are kept apart so
    that, for example, adding a spawn roll does not shift poison damage.
    """

    def __init__(self, seed: Optional[str] = None) -> None:
        if seed is None:
            seed = get_runtime_seed()
        self._seed = seed or secrets.token_hex(16)
        self._streams: Dict[str, _RNGState] = {}

    @property
    def seed(self) -> str:
        return self._seed

    def get_rng(self, name: str) -> random.Random:
        """Return the ``random.Random`` backing stream *name*."""

        return self._state(name).rng

    def randint(self, name: str, high: int) -> int:
        """Return a number in ``1..high`` from stream *name*."""

        if high <= 1:
            return 1
        state = self._state(name)
        state.draws += 1
        return state.rng.randint(1, high)

    def one_in(self, name: str, chance: int) -> bool:
        return self.randint(name, chance) == 1

    def draws(self, name: str) -> int:
        return self._state(name).draws

    def _state(self, name: str) -> _RNGState:
        state = self._streams.get(name)
        if state is None:
            state = _RNGState(seed=self._seed, rng=random.Random(derive_seed_value(self._seed, name)))
            self._streams[name] = state
        return state
