"""In-memory data structures for the live player and dungeon level."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Set

from cavern import constants as C
from cavern.constants import (
    INVEN_ARRAY_SIZE,
    INVEN_LIGHT,
    INVENTORY_CAPACITY,
    PLAYER_FOOD_FULL,
    TV_NOTHING,
)


class Status(Enum):
    """Independent player status flags."""

    HERO = "hero"
    SHERO = "shero"
    BLIND = "blind"
    CONFUSED = "confused"
    FEAR = "fear"
    POISONED = "poisoned"
    FAST = "fast"
    SLOW = "slow"
    WEAK = "weak"
    HUNGRY = "hungry"
    REST = "rest"
    SEARCH = "search"
    INVULN = "invuln"
    BLESSED = "blessed"
    DET_INV = "det_inv"
    TIM_INFRA = "tim_infra"
    PARALYSED = "paralysed"
    REPEAT = "repeat"
    STR_WGT = "str_wgt"
    STUDY = "study"
    # Redraw requests.
    SPEED = "speed"
    ARMOR = "armor"
    HP = "hp"
    MANA = "mana"
    STR = "str"
    INT = "int"
    WIS = "wis"
    DEX = "dex"
    CON = "con"
    CHR = "chr"


STAT_REDRAW = (Status.STR, Status.INT, Status.WIS, Status.DEX, Status.CON, Status.CHR)


class StatusFlags:
    """Set of :class:`Status` flags with edge-triggered helpers.

    :meth:`activate` and :meth:`deactivate` report whether the call crossed
    the boundary, so one-time side effects run exactly once.
    """

    def __init__(self, initial: Iterable[Status] = ()) -> None:
        self._flags: Set[Status] = set(initial)

    def __contains__(self, flag: object) -> bool:
        return flag in self._flags

    def __iter__(self) -> Iterator[Status]:
        return iter(sorted(self._flags, key=lambda s: s.value))

    def __len__(self) -> int:
        return len(self._flags)

    def __repr__(self) -> str:
        return f"StatusFlags({[s.name for s in self]})"

    def set(self, flag: Status) -> None:
        self._flags.add(flag)

    def clear(self, flag: Status) -> None:
        self._flags.discard(flag)

    def activate(self, flag: Status) -> bool:
        if flag in self._flags:
            return False
        self._flags.add(flag)
        return True

    def deactivate(self, flag: Status) -> bool:
        if flag not in self._flags:
            return False
        self._flags.discard(flag)
        return True

    def any_of(self, flags: Iterable[Status]) -> bool:
        return any(flag in self._flags for flag in flags)


@dataclass
class Timers:
    """Turns remaining for each timed effect; ``0`` means inactive."""

    hero: int = 0
    shero: int = 0
    blind: int = 0
    confused: int = 0
    afraid: int = 0
    poisoned: int = 0
    fast: int = 0
    slow: int = 0
    # Signed: negative rests until HP and mana are full.
    rest: int = 0
    image: int = 0
    paralysis: int = 0
    protevil: int = 0
    invuln: int = 0
    blessed: int = 0
    resist_heat: int = 0
    resist_cold: int = 0
    detect_inv: int = 0
    tim_infra: int = 0
    word_recall: int = 0

    @classmethod
    def names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    def get(self, name: str) -> int:
        if name not in self.names():
            raise ValueError(f"Unknown timer {name!r}")
        return getattr(self, name)

    def set(self, name: str, turns: int) -> None:
        if name not in self.names():
            raise ValueError(f"Unknown timer {name!r}")
        setattr(self, name, int(turns))

    def as_dict(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in self.names()}


@dataclass
class Vitals:
    chp: int = 10
    mhp: int = 10
    chp_frac: int = 0
    cmana: int = 0
    mana: int = 0
    cmana_frac: int = 0
    # Base armour class and the displayed total.
    pac: int = 0
    dis_ac: int = 0
    # Melee and missile to-hit.
    bth: int = 0
    bthb: int = 0
    exp: int = 0
    lev: int = 1


@dataclass
class Stats:
    """Current stat values using the 3..118 (18/100 = 118) encoding."""

    strength: int = 10
    intelligence: int = 10
    wisdom: int = 10
    dexterity: int = 10
    constitution: int = 10
    charisma: int = 10


@dataclass
class PlayerFlags:
    food: int = PLAYER_FOOD_FULL
    food_digested: int = 2
    # Negative is faster.
    speed: int = 0
    regenerate: bool = False
    teleport: bool = False
    see_inv: bool = False
    see_infra: int = 0


class InputState(Enum):
    """Where the key reader is while assembling a command."""

    IDLE = "idle"
    COUNT = "count"
    CONTROL = "control"
    DISPATCHED = "dispatched"


@dataclass
class CommandState:
    count: int = 0
    last_command: str = " "
    last_direction: int = 0
    free_turn: bool = False
    skip_pickup: bool = False
    use_last_direction: bool = False
    input_state: InputState = InputState.IDLE


@dataclass
class Item:
    """The subset of an item the engine reads."""

    name: str = ""
    tval: int = TV_NOTHING
    subval: int = 0
    # Charges, fuel or enchantment magnitude depending on the item.
    p1: int = 0
    number: int = 1
    weight: int = 0
    flags: int = 0
    tohit: int = 0
    todam: int = 0
    toac: int = 0
    # Flavour/bonuses already known to the player.
    identified: bool = False
    # Sensed as magical without being identified.
    sensed: bool = False

    @property
    def empty(self) -> bool:
        return self.tval == TV_NOTHING


_USE_DESCRIPTIONS = {
    C.INVEN_WIELD: "wielding",
    C.INVEN_HEAD: "wearing on your head",
    C.INVEN_NECK: "wearing around your neck",
    C.INVEN_BODY: "wearing on your body",
    C.INVEN_ARM: "wearing on your arm",
    C.INVEN_HANDS: "wearing on your hands",
    C.INVEN_RIGHT: "wearing on your right hand",
    C.INVEN_LEFT: "wearing on your left hand",
    C.INVEN_FEET: "wearing on your feet",
    C.INVEN_OUTER: "wearing about your body",
    C.INVEN_LIGHT: "using to light the way",
    C.INVEN_AUX: "holding ready by your side",
}


class Inventory:
    """Pack slots ``0..INVENTORY_CAPACITY-1`` followed by the equipment slots."""

    def __init__(self) -> None:
        self._slots: List[Item] = [Item() for _ in range(INVEN_ARRAY_SIZE)]

    def __getitem__(self, index: int) -> Item:
        return self._slots[index]

    def __setitem__(self, index: int, item: Item) -> None:
        self._slots[index] = item

    @property
    def count(self) -> int:
        """Number of occupied pack slots (the pack is kept packed)."""
        return sum(1 for item in self._slots[:INVENTORY_CAPACITY] if not item.empty)

    @property
    def light(self) -> Item:
        return self._slots[INVEN_LIGHT]

    def pack(self) -> List[Item]:
        return [item for item in self._slots[:INVENTORY_CAPACITY] if not item.empty]

    def add(self, item: Item) -> int:
        """Put *item* in the first free pack slot and return its index."""
        for index in range(INVENTORY_CAPACITY):
            if self._slots[index].empty:
                self._slots[index] = item
                return index
        raise ValueError("pack is full")

    def destroy(self, index: int) -> None:
        """Remove one of the item in *index*, closing the gap in the pack."""
        item = self._slots[index]
        if item.number > 1:
            item.number -= 1
            return
        if index >= INVENTORY_CAPACITY:
            self._slots[index] = Item()
            return
        del self._slots[index]
        self._slots.insert(INVENTORY_CAPACITY - 1, Item())

    def find(self, tval: int) -> Optional[int]:
        """Return the first pack slot holding an item of category *tval*."""
        for index, item in enumerate(self._slots[:INVENTORY_CAPACITY]):
            if item.tval == tval and not item.empty:
                return index
        return None

    def scan_slots(self) -> Iterator[int]:
        """Occupied pack slots, then every equipment slot."""
        yield from range(self.count)
        yield from range(INVENTORY_CAPACITY, INVEN_ARRAY_SIZE)

    @staticmethod
    def describe_use(index: int) -> str:
        return _USE_DESCRIPTIONS.get(index, "carrying in your pack")


@dataclass
class PlayerState:
    """Mutable live state for the player."""

    position: tuple[int, int] = (0, 0)
    status: StatusFlags = field(default_factory=StatusFlags)
    timers: Timers = field(default_factory=Timers)
    vitals: Vitals = field(default_factory=Vitals)
    stats: Stats = field(default_factory=Stats)
    flags: PlayerFlags = field(default_factory=PlayerFlags)
    command: CommandState = field(default_factory=CommandState)
    inventory: Inventory = field(default_factory=Inventory)
    carrying_light: bool = False
    total_winner: bool = False
    died_from: str = ""

    def clamp(self) -> None:
        """Keep current HP and mana within their maxima."""

        v = self.vitals
        if v.chp > v.mhp:
            v.chp = v.mhp
            v.chp_frac = 0
        if v.cmana > v.mana:
            v.cmana = v.mana
            v.cmana_frac = 0


@dataclass
class DungeonLevel:
    """Depth bookkeeping and per-level flags owned by the scheduler."""

    depth: int = 0
    max_depth: int = 0
    turn: int = 0
    generate_new_level: bool = False
    teleport_player: bool = False
    monster_multiply_total: int = 0

    def record_depth(self) -> None:
        if self.depth > self.max_depth:
            self.max_depth = self.depth
