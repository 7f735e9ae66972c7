from __future__ import annotations

from pathlib import Path

import pytest

from cavern import env


def test_state_root_honours_env(tmp_path: Path) -> None:
    assert env.state_root() == tmp_path / "state"
    assert env.state_path("logs", "game.log") == tmp_path / "state" / "logs" / "game.log"


def test_relative_state_root_is_anchored_on_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GAME_STATE_ROOT", "runtime")
    assert env.state_root() == tmp_path / "runtime"


def test_default_state_root_without_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GAME_STATE_ROOT", raising=False)
    assert env.state_root() == env.default_repo_state()


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("yes", True), ("ON", True), ("0", False), ("off", False), ("maybe", False)],
)
def test_boolean_switches(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("CAVERN_ROGUELIKE_KEYS", raw)
    monkeypatch.setenv("CAVERN_WIZARD", raw)
    assert env.roguelike_keys_enabled() is expected
    assert env.wizard_mode_allowed() is expected


def test_switches_default_off() -> None:
    assert not env.roguelike_keys_enabled()
    assert not env.wizard_mode_allowed()
    assert not env.debug_enabled()


def test_runtime_seed(monkeypatch: pytest.MonkeyPatch) -> None:
    assert env.get_runtime_seed() is None
    monkeypatch.setenv("CAVERN_RNG_SEED", "  ")
    assert env.get_runtime_seed() is None
    monkeypatch.setenv("CAVERN_RNG_SEED", "dungeon")
    assert env.get_runtime_seed() == "dungeon"
