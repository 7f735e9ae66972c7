from __future__ import annotations

from cavern.engine.game_state import Status
from cavern.services.food import RegenRate, consume_food, starvation_damage


def _fed(make_ctx, food: int, **kwargs):
    ctx = make_ctx(**kwargs)
    ctx.player.flags.food = food
    return ctx


def test_well_fed_player_regenerates_normally(make_ctx) -> None:
    ctx = _fed(make_ctx, 10000)
    assert consume_food(ctx) is RegenRate.NORMAL
    assert ctx.player.flags.food == 9998


def test_hunger_warning_is_given_once(make_ctx) -> None:
    ctx = _fed(make_ctx, 1999)
    consume_food(ctx)
    consume_food(ctx)
    assert Status.HUNGRY in ctx.player.status
    assert ctx.terminal.messages() == ["You are getting hungry."]


def test_weak_from_hunger_slows_regeneration(make_ctx) -> None:
    ctx = _fed(make_ctx, 999)
    assert consume_food(ctx) is RegenRate.WEAK
    assert Status.WEAK in ctx.player.status
    assert ctx.terminal.messages() == ["You are getting weak from hunger."]


def test_fainting_from_hunger(make_ctx, dummy_rng) -> None:
    ctx = _fed(make_ctx, 299, rng=dummy_rng({"food": [1, 3]}))
    assert consume_food(ctx) is RegenRate.FAINT
    assert ctx.player.timers.paralysis == 3
    assert "You faint from the lack of food." in ctx.terminal.messages()


def test_empty_stomach_costs_one_hit_point_per_turn(make_ctx) -> None:
    ctx = _fed(make_ctx, 0)
    consume_food(ctx)
    assert ctx.player.flags.food == -2
    assert ctx.player.vitals.chp == 9

    assert consume_food(ctx) is RegenRate.NONE
    assert ctx.player.vitals.chp == 8


def test_starvation_can_kill(make_ctx) -> None:
    ctx = _fed(make_ctx, -400)
    consume_food(ctx)
    assert ctx.character_is_dead
    assert ctx.player.died_from == "starvation"


def test_starvation_damage_scale() -> None:
    assert starvation_damage(-1) == 1
    assert starvation_damage(-160) == 10


def test_fast_players_digest_more(make_ctx) -> None:
    ctx = _fed(make_ctx, 5000)
    ctx.player.flags.speed = -2
    consume_food(ctx)
    assert ctx.player.flags.food == 5000 - 4 - 2


def test_eating_clears_hunger_flags(make_ctx) -> None:
    ctx = _fed(make_ctx, 5000)
    ctx.player.status.set(Status.HUNGRY)
    ctx.player.status.set(Status.WEAK)
    consume_food(ctx)
    assert Status.HUNGRY not in ctx.player.status
    assert Status.WEAK not in ctx.player.status
    assert "hunger" in ctx.terminal.redraws
