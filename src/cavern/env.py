from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Final, Optional

from cavern.util import parse_int

_LOG = logging.getLogger(__name__)

_STATE_ROOT_ENV: Final[str] = "GAME_STATE_ROOT"
_ROGUELIKE_ENV: Final[str] = "CAVERN_ROGUELIKE_KEYS"
_WIZARD_ENV: Final[str] = "CAVERN_WIZARD"
_RNG_SEED_ENV: Final[str] = "CAVERN_RNG_SEED"
_DEBUG_ENV: Final[str] = "CAVERN_DEBUG"
_LOGGING_ENV: Final[str] = "CAVERN_LOGGING"
_ENGINE_CONFIG_FILENAME: Final[tuple[str, str]] = ("config", "engine.json")
_CONFIG_LOGGED = False


def _parse_bool(raw: Optional[str], *, default: bool = False) -> bool:
    if raw is None:
        return default
    token = raw.strip().lower()
    if token in {"1", "true", "yes", "on"}:
        return True
    if token in {"0", "false", "no", "off"}:
        return False
    return default


def default_repo_state() -> Path:
    """Return the bundled ``state`` directory next to the source tree."""

    return Path(__file__).resolve().parents[2] / "state"


def state_root() -> Path:
    """Return the directory holding logs and configuration overrides.

    ``GAME_STATE_ROOT`` wins when set; relative values are anchored on the
    current working directory.
    """

    raw = os.getenv(_STATE_ROOT_ENV)
    if not raw:
        return default_repo_state()
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    return path


def state_path(*parts: os.PathLike[str] | str) -> Path:
    """Join ``parts`` onto :func:`state_root`."""

    return state_root().joinpath(*parts)


def get_engine_config_path() -> Path:
    """Return the resolved path to the engine configuration override file."""

    return state_path(*_ENGINE_CONFIG_FILENAME)


def roguelike_keys_enabled() -> bool:
    """Return ``True`` when the roguelike key layout is selected."""

    return _parse_bool(os.getenv(_ROGUELIKE_ENV), default=False)


def wizard_mode_allowed() -> bool:
    """Return ``True`` when the wizard (debug) command set may be entered."""

    return _parse_bool(os.getenv(_WIZARD_ENV), default=False)


def debug_enabled() -> bool:
    return os.getenv(_DEBUG_ENV) == "1"


def logging_enabled() -> bool:
    return _parse_bool(os.getenv(_LOGGING_ENV), default=False)


def get_runtime_seed() -> Optional[str]:
    """Return the configured runtime RNG seed, if provided."""

    raw = os.getenv(_RNG_SEED_ENV)
    if raw is None:
        return None

    candidate = raw.strip()
    if not candidate:
        return None

    try:
        # Normalise numeric seeds so ``42`` and ``0x2A`` resolve identically.
        return str(parse_int(candidate))
    except ValueError:
        return candidate


def log_configuration_once() -> None:
    global _CONFIG_LOGGED

    if _CONFIG_LOGGED:
        return

    _LOG.info(
        "state_root=%s engine_config=%s roguelike=%s wizard=%s rng_seed=%s",
        state_root(),
        get_engine_config_path(),
        roguelike_keys_enabled(),
        wizard_mode_allowed(),
        get_runtime_seed(),
    )
    _CONFIG_LOGGED = True
