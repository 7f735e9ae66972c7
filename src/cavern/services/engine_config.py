"""Engine configuration loader and defaults.

The configuration centralises the numerical knobs of the turn loop. Values
default to the classic game constants in :mod:`cavern.constants` and may be
overridden at runtime via ``state/config/engine.json``. Downstream code
receives a frozen :class:`EngineConfig` through the simulation context.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields as dataclass_fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from cavern import constants as C
from cavern.env import get_engine_config_path

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """Container for turn-loop configuration knobs."""

    monster_spawn_chance: int = C.MAX_MALLOC_CHANCE
    monster_spawn_distance: int = C.MAX_SIGHT
    monster_list_size: int = C.MAX_MALLOC
    compact_margin: int = C.COMPACT_MARGIN
    store_turns: int = C.STORE_TURNS
    key_poll_micros: int = C.KEY_POLL_MICROS
    eof_panic_threshold: int = C.EOF_PANIC_THRESHOLD
    random_teleport_chance: int = 100
    random_teleport_distance: int = 40
    queued_teleport_distance: int = 100
    lamp_max: int = C.OBJ_LAMP_MAX
    light_faint_warning: int = C.LIGHT_FAINT_WARNING
    regen_hp_base: int = C.PLAYER_REGEN_HPBASE
    regen_mana_base: int = C.PLAYER_REGEN_MNBASE
    food_alert: int = C.PLAYER_FOOD_ALERT
    food_weak: int = C.PLAYER_FOOD_WEAK
    food_faint: int = C.PLAYER_FOOD_FAINT
    max_repeat_count: int = C.MAX_REPEAT_COUNT
    override_path: Optional[Path] = None


__all__ = ["EngineConfig", "load_engine_config"]

_DEFAULT_CONFIG = EngineConfig()
_INT_FIELDS = {f.name for f in dataclass_fields(EngineConfig) if f.name != "override_path"}
# Divisors and 1-in-N chances.
_POSITIVE_FIELDS = {
    "store_turns",
    "monster_spawn_chance",
    "random_teleport_chance",
    "max_repeat_count",
}


def load_engine_config(path: Path | str | None = None) -> EngineConfig:
    """Load engine configuration overrides.

    Parameters
    ----------
    path:
        JSON file to read; defaults to ``state/config/engine.json`` under the
        configured state root.

    Returns
    -------
    EngineConfig
        Frozen dataclass with defaults merged with any JSON overrides.
        ``override_path`` always points at the expected JSON file, even when
        no overrides are present.
    """

    override_path = Path(path) if path is not None else get_engine_config_path()
    overrides = _load_overrides(override_path)

    config = _DEFAULT_CONFIG
    if overrides:
        config = replace(config, **overrides)
        LOG.info(
            "engine config overrides applied from %s: %s",
            override_path,
            ", ".join(sorted(overrides)),
        )

    return replace(config, override_path=override_path)


def _load_overrides(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        LOG.warning("engine config override unreadable: %s", path, exc_info=True)
        return {}

    if not isinstance(raw, Mapping):
        LOG.warning("engine config override must be a mapping: %s", path)
        return {}

    overrides: Dict[str, Any] = {}
    for field_name in _INT_FIELDS:
        if field_name not in raw:
            continue
        value = raw[field_name]
        try:
            overrides[field_name] = int(value)
        except (TypeError, ValueError):
            LOG.warning("engine config override for %s is not an int: %r", field_name, value)
            continue
        minimum = 1 if field_name in _POSITIVE_FIELDS else 0
        if overrides[field_name] < minimum:
            LOG.warning(
                "engine config override for %s must be at least %d: %r", field_name, minimum, value
            )
            del overrides[field_name]

    unused = sorted(set(raw) - _INT_FIELDS)
    if unused:
        LOG.debug("engine config override ignored keys: %s", ", ".join(unused))

    return overrides
