"""
Shared constants for the cavern engine.

This file should have NO local imports to avoid circular dependencies.
"""

from __future__ import annotations

# Saturation point for hit points, mana and the rest counter.
MAX_SHORT = 32767

# Regeneration factors (multiplied by 2**16) keyed by how well fed the
# player is, plus the minimum amount added per turn.
PLAYER_REGEN_FAINT = 33
PLAYER_REGEN_WEAK = 98
PLAYER_REGEN_NORMAL = 197
PLAYER_REGEN_HPBASE = 1442
PLAYER_REGEN_MNBASE = 524

# Food counter thresholds.
PLAYER_FOOD_FULL = 10000
PLAYER_FOOD_FAINT = 300
PLAYER_FOOD_WEAK = 1000
PLAYER_FOOD_ALERT = 2000

OBJ_LAMP_MAX = 15000
LIGHT_FAINT_WARNING = 40

# Monster list sizing and the 1-in-N chance of a wandering monster per turn.
MAX_MALLOC = 125 + 1
MAX_MALLOC_CHANCE = 160
MAX_SIGHT = 20
COMPACT_MARGIN = 10

MAX_SAVE_MSG = 22
MAX_REPEAT_COUNT = 99
EOF_PANIC_THRESHOLD = 100
STORE_TURNS = 1000
KEY_POLL_MICROS = 10000
MAX_DUNGEON_LEVEL = 99

# Pack slots come first; equipment slots start at INVENTORY_CAPACITY.
INVENTORY_CAPACITY = 22
INVEN_WIELD = 22
INVEN_HEAD = 23
INVEN_NECK = 24
INVEN_BODY = 25
INVEN_ARM = 26
INVEN_HANDS = 27
INVEN_RIGHT = 28
INVEN_LEFT = 29
INVEN_FEET = 30
INVEN_OUTER = 31
INVEN_LIGHT = 32
INVEN_AUX = 33
INVEN_ARRAY_SIZE = 34

# Item categories (tval) the engine cares about.
TV_NOTHING = 0
TV_MIN_ENCHANT = 10
TV_SPIKE = 13
TV_LIGHT = 15
TV_MAX_ENCHANT = 39
TV_FLASK = 77
TV_MAGIC_BOOK = 90
TV_PRAYER_BOOK = 91

# Item flag bits.
TR_CURSED = 0x80000000
# Stat, searching, stealth, infravision, tunneling and speed bonuses that
# only count as an enchantment when p1 is positive.
TR_PVAL_MASK = 0x4000107F
# Resistances, sustains, slays, free action, see invisible and similar.
TR_GOOD_MASK = 0x07FFE980

# Compass directions as laid out on the numeric keypad; 5 means "stay".
KEYPAD_DIRECTIONS = (1, 2, 3, 4, 6, 7, 8, 9)
