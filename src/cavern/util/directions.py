from __future__ import annotations

# Keypad direction -> (drow, dcol). Rows grow downwards on the dungeon grid.
DELTA = {
    1: (1, -1),
    2: (1, 0),
    3: (1, 1),
    4: (0, -1),
    5: (0, 0),
    6: (0, 1),
    7: (-1, -1),
    8: (-1, 0),
    9: (-1, 1),
}

# Roguelike movement letters for each keypad direction.
WALK_KEYS = {
    1: "b",
    2: "j",
    3: "n",
    4: "h",
    6: "l",
    7: "y",
    8: "k",
    9: "u",
}

KEY_TO_DIR = {key: direction for direction, key in WALK_KEYS.items()}


def vec(direction: int) -> tuple[int, int]:
    """Return ``(drow, dcol)`` for a keypad direction."""
    return DELTA.get(direction, (0, 0))


def step(position: tuple[int, int], direction: int) -> tuple[int, int]:
    """Return the grid cell one step from *position* in *direction*."""
    drow, dcol = vec(direction)
    return position[0] + drow, position[1] + dcol
