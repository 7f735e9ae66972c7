from __future__ import annotations

from cavern.constants import MAX_SHORT
from cavern.services import regen
from cavern.services.regen import Fixed16, Regen, regenerate


def test_fixed16_parts_and_carry() -> None:
    value = Fixed16.from_parts(3, 5)
    assert value.whole == 3
    assert value.fraction == 5

    carried = Fixed16.from_parts(0, 0xFFFF) + Fixed16(1)
    assert carried.whole == 1
    assert carried.fraction == 0


def test_rate_zero_never_regenerates() -> None:
    assert regenerate(5, 10, 123, 0, 1442) == Regen(5, 123, False)


def test_fraction_accumulates_into_whole_points() -> None:
    # 10 * 197 + 1442 = 3412 raw units per turn.
    current, fraction = 5, 0
    for _ in range(19):
        result = regenerate(current, 10, fraction, 197, 1442)
        current, fraction = result.current, result.fraction
    assert current == 5
    assert fraction == 19 * 3412

    result = regenerate(current, 10, fraction, 197, 1442)
    assert result == Regen(6, 20 * 3412 - 65536, True)


def test_reaching_maximum_zeroes_fraction() -> None:
    result = regenerate(9, 10, 65000, 197, 1442)
    assert result == Regen(10, 0, True)


def test_large_rate_is_clamped_to_maximum() -> None:
    result = regenerate(9, 10, 0, 2 * regen.ONE, 0)
    assert result == Regen(10, 0, True)


def test_saturates_at_max_short() -> None:
    result = regenerate(32760, 40000, 0, regen.ONE, 0)
    assert result.current == MAX_SHORT
    assert result.fraction == 0


def test_value_above_maximum_is_pulled_back() -> None:
    assert regenerate(12, 10, 5, 197, 1442) == Regen(10, 0, True)


def test_stale_fraction_at_maximum_is_dropped() -> None:
    assert regenerate(10, 10, 40000, 197, 1442) == Regen(10, 0, False)
    assert regenerate(10, 10, 40000, 0, 1442) == Regen(10, 0, False)


def test_regen_hp_restores_a_point_within_five_turns(make_ctx) -> None:
    ctx = make_ctx()
    vitals = ctx.player.vitals
    vitals.mhp = 100
    vitals.chp = 50
    for _ in range(5):
        regen.regen_hp(ctx, 197)
    assert vitals.chp >= 51
    assert "chp" in ctx.terminal.redraws


def test_regen_hp_without_whole_point_skips_redraw(make_ctx) -> None:
    ctx = make_ctx()
    vitals = ctx.player.vitals
    vitals.mhp = 10
    vitals.chp = 5
    regen.regen_hp(ctx, 197)
    assert vitals.chp == 5
    assert vitals.chp_frac == 3412
    assert ctx.terminal.redraws == []


def test_regen_mana_uses_mana_base(make_ctx) -> None:
    ctx = make_ctx()
    vitals = ctx.player.vitals
    vitals.mana = 10
    vitals.cmana = 0
    regen.regen_mana(ctx, 197)
    assert vitals.cmana_frac == 10 * 197 + ctx.config.regen_mana_base
