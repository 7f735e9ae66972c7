from __future__ import annotations

import pytest

from cavern.commands import rest
from cavern.constants import MAX_SHORT
from cavern.engine.game_state import Status


@pytest.mark.parametrize(
    "text, turns",
    [("20", 20), (" 7 ", 7), ("*", -MAX_SHORT), ("&", -MAX_SHORT), ("", 0), (None, 0), ("lots", 0)],
)
def test_parse_rest_turns(text, turns) -> None:
    assert rest.parse_rest_turns(text) == turns


def test_rest_prompt(make_ctx) -> None:
    ctx = make_ctx("15\r")
    assert rest.start_rest(ctx) is True
    assert ctx.player.timers.rest == 15
    assert Status.REST in ctx.player.status
    assert ctx.player.flags.food_digested == 1


def test_rest_prompt_cancelled(make_ctx) -> None:
    ctx = make_ctx(["\x1b"])
    assert rest.start_rest(ctx) is False
    assert ctx.player.timers.rest == 0


def test_rest_uses_repeat_count(make_ctx) -> None:
    ctx = make_ctx()
    ctx.player.command.count = 9
    rest.start_rest(ctx)
    assert ctx.player.timers.rest == 9
    assert ctx.player.command.count == 0


def test_rest_stops_searching(make_ctx) -> None:
    ctx = make_ctx("&\r")
    rest.toggle_search(ctx)
    rest.start_rest(ctx)
    assert Status.SEARCH not in ctx.player.status
    assert ctx.player.timers.rest == -MAX_SHORT


def test_search_mode_toggles_for_free(make_ctx) -> None:
    ctx = make_ctx()
    assert rest.toggle_search(ctx) is False
    assert Status.SEARCH in ctx.player.status
    assert ctx.player.flags.speed == 1
    assert ctx.player.flags.food_digested == 3

    rest.toggle_search(ctx)
    assert Status.SEARCH not in ctx.player.status
    assert ctx.player.flags.speed == 0
    assert ctx.player.flags.food_digested == 2
