"""Key codes shared by the terminal and the command interpreter."""

from __future__ import annotations

ESCAPE = "\x1b"
DELETE = "\x7f"
SPACE = " "
# Returned by the original-layout remap for anything it does not know.
ILLEGAL = "~"
CONTROL_PREFIX = "^"
REPEAT_PREFIX = "#"


def ctrl_key(letter: str) -> str:
    """Return the control code for *letter* (either case)."""

    if len(letter) != 1 or not letter.isalpha() or not letter.isascii():
        raise ValueError(f"ctrl_key expects a single ASCII letter, got {letter!r}")
    return chr(ord(letter) & 0x1F)


def is_control(key: str) -> bool:
    return len(key) == 1 and ord(key) < 0x20


def describe_key(key: str) -> str:
    """Return a printable rendering of *key* (``^A`` for control codes)."""

    if key == ESCAPE:
        return "ESC"
    if key == DELETE:
        return "DEL"
    if is_control(key):
        return "^" + chr(ord(key) + 0x40)
    return key
