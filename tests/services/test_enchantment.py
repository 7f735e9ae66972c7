from __future__ import annotations

from cavern.constants import INVEN_WIELD, TR_CURSED, TV_FLASK
from cavern.engine.game_state import Item
from cavern.services import enchantment


def _sword(**kwargs) -> Item:
    return Item(name="Long Sword", tval=23, **kwargs)


def test_is_enchanted() -> None:
    assert enchantment.is_enchanted(_sword(tohit=2))
    assert not enchantment.is_enchanted(_sword())
    assert not enchantment.is_enchanted(_sword(tohit=2, flags=TR_CURSED))
    assert not enchantment.is_enchanted(_sword(tohit=2, identified=True))
    assert not enchantment.is_enchanted(Item(tval=TV_FLASK, tohit=2))


def test_pval_bonus_needs_positive_p1() -> None:
    assert enchantment.is_enchanted(_sword(flags=0x1, p1=2))
    assert not enchantment.is_enchanted(_sword(flags=0x1, p1=-1))


def test_sense_chance_falls_with_level() -> None:
    assert enchantment.sense_chance(1) == 135
    assert enchantment.sense_chance(45) == 25


def test_scan_only_runs_every_sixteenth_turn(make_ctx, dummy_rng) -> None:
    rng = dummy_rng()
    ctx = make_ctx(rng=rng)
    ctx.level.turn = 15
    assert enchantment.maybe_sense_enchantment(ctx) == 0
    assert rng.calls == []


def test_confused_player_senses_nothing(make_ctx, dummy_rng) -> None:
    rng = dummy_rng({"enchant": [1, 1]})
    ctx = make_ctx(rng=rng)
    ctx.level.turn = 16
    ctx.player.timers.confused = 3
    ctx.player.inventory.add(_sword(tohit=1))
    assert enchantment.maybe_sense_enchantment(ctx) == 0
    assert rng.calls == []


def test_sensing_pack_and_equipment(make_ctx, dummy_rng) -> None:
    ctx = make_ctx(rng=dummy_rng({"enchant": [1, 1, 1]}))
    ctx.level.turn = 32
    inventory = ctx.player.inventory
    inventory.add(_sword(tohit=3))
    inventory.add(_sword())
    inventory[INVEN_WIELD] = Item(name="Dagger", tval=23, toac=2)

    assert enchantment.maybe_sense_enchantment(ctx) == 2
    assert inventory[0].sensed
    assert inventory[INVEN_WIELD].sensed
    assert ctx.terminal.messages() == [
        "There's something about what you are carrying in your pack...",
        "There's something about what you are wielding...",
    ]


def test_sensed_item_is_not_reported_twice(make_ctx, dummy_rng) -> None:
    ctx = make_ctx(rng=dummy_rng({"enchant": [1, 1]}))
    ctx.player.inventory.add(_sword(tohit=3))
    assert enchantment.sense_enchantment(ctx) == 1
    assert enchantment.sense_enchantment(ctx) == 0
