"""Key tables: original-layout remapping and the repeat-count allow-list.

Commands are dispatched by their roguelike code. Under the original layout
each key read from the terminal is first translated through
:data:`ORIGINAL_TO_ROGUELIKE`; ``.`` and ``T`` additionally ask for a
direction and become a run or a tunnel.
"""

from __future__ import annotations

from typing import Callable, Dict, FrozenSet, Optional

from cavern.util.directions import WALK_KEYS
from cavern.util.keys import ESCAPE, ILLEGAL, ctrl_key

C = ctrl_key

# Keys that keep their meaning in both layouts.
_SHARED = (
    C("p"), C("w"), C("x"), C("v"),
    " ", "!", "$", "/", "<", ">", "-", "=", "{", "?",
    "A", "C", "D", "E", "F", "G", "M", "R", "V",
    "c", "d", "e", "i", "m", "o", "p", "q", "r", "s", "v", "w",
    # Wizard commands.
    C("a"), C("d"), C("i"), ":", C("t"), C("e"), C("f"), C("g"), "@", "+",
)

ORIGINAL_TO_ROGUELIKE: Dict[str, str] = {key: key for key in _SHARED}
ORIGINAL_TO_ROGUELIKE.update(
    {
        C("k"): "Q",
        C("j"): "+",
        C("m"): "+",
        "1": "b",
        "2": "j",
        "3": "n",
        "4": "h",
        "5": ".",
        "6": "l",
        "7": "y",
        "8": "k",
        "9": "u",
        "B": "f",
        "L": "W",
        "S": "#",
        "a": "z",
        "b": "P",
        "f": "t",
        "h": "?",
        "j": "S",
        "l": "x",
        "t": "T",
        "u": "Z",
        "x": "X",
        C("b"): C("o"),
        C("h"): "\\",
        C("l"): "*",
        C("u"): "&",
    }
)

# Original-layout keys followed by a direction prompt.
RUN_PREFIX = "."
TUNNEL_PREFIX = "T"

RUN_KEYS: Dict[int, str] = {d: key.upper() for d, key in WALK_KEYS.items()}
TUNNEL_KEYS: Dict[int, str] = {d: ctrl_key(key) for d, key in WALK_KEYS.items()}

_DIRECTED: Dict[str, Dict[int, str]] = {RUN_PREFIX: RUN_KEYS, TUNNEL_PREFIX: TUNNEL_KEYS}

# Commands a repeat count may be attached to (roguelike codes).
COUNT_ALLOWED: FrozenSet[str] = frozenset(
    [
        C("p"), ESCAPE, " ", "-", "+", ".",
        "b", "f", "j", "n", "h", "l", "y", "k", "u",
        "B", "J", "N", "H", "L", "Y", "K", "U",
        C("y"), C("k"), C("u"), C("l"), C("n"), C("j"), C("b"), C("h"),
        "D", "R", "S", "o", "s",
        C("d"), C("g"),
    ]
)


def translate_original(key: str) -> str:
    """Map one original-layout key to its roguelike code (``~`` if unknown).

    ``.`` and ``T`` need a direction and are handled by
    :func:`remap_original`.
    """

    return ORIGINAL_TO_ROGUELIKE.get(key, ILLEGAL)


def remap_original(key: str, ask_direction: Callable[[], Optional[int]]) -> str:
    """Translate *key*, prompting through *ask_direction* for run/tunnel.

    An escaped direction prompt yields a space, which is a free no-op.
    """

    table = _DIRECTED.get(key)
    if table is None:
        return translate_original(key)
    direction = ask_direction()
    if direction is None:
        return " "
    return table.get(direction, ILLEGAL)


def count_allowed(key: str) -> bool:
    return key in COUNT_ALLOWED


__all__ = [
    "COUNT_ALLOWED",
    "ORIGINAL_TO_ROGUELIKE",
    "RUN_KEYS",
    "RUN_PREFIX",
    "TUNNEL_KEYS",
    "TUNNEL_PREFIX",
    "count_allowed",
    "remap_original",
    "translate_original",
]
