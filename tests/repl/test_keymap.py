from __future__ import annotations

import pytest

from cavern.repl import keymap
from cavern.util.keys import ESCAPE, ILLEGAL, ctrl_key


def test_translation_is_total_over_ascii() -> None:
    for code in range(128):
        key = chr(code)
        if key in (keymap.RUN_PREFIX, keymap.TUNNEL_PREFIX):
            continue
        result = keymap.translate_original(key)
        assert isinstance(result, str) and len(result) == 1, repr(key)


@pytest.mark.parametrize(
    "key, expected",
    [
        ("1", "b"),
        ("8", "k"),
        ("5", "."),
        ("a", "z"),
        ("t", "T"),
        (ctrl_key("k"), "Q"),
        (ctrl_key("h"), "\\"),
        ("i", "i"),
        ("O", ILLEGAL),
        (ESCAPE, ILLEGAL),
    ],
)
def test_translate_original(key: str, expected: str) -> None:
    assert keymap.translate_original(key) == expected


def test_run_and_tunnel_ask_for_direction() -> None:
    assert keymap.remap_original(".", lambda: 4) == "H"
    assert keymap.remap_original("T", lambda: 8) == ctrl_key("k")
    assert keymap.remap_original(".", lambda: None) == " "


def test_plain_keys_do_not_prompt() -> None:
    def fail():
        raise AssertionError("direction prompt should not be shown")

    assert keymap.remap_original("2", fail) == "j"


def test_count_allowed() -> None:
    assert keymap.count_allowed("h")
    assert keymap.count_allowed(ctrl_key("p"))
    assert keymap.count_allowed("s")
    assert not keymap.count_allowed("Q")
    assert not keymap.count_allowed("i")
