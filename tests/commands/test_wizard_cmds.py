from __future__ import annotations

from cavern.commands import wizard
from cavern.repl.interpreter import CommandInterpreter
from cavern.util.keys import ctrl_key


def test_cure_all_lets_timers_expire_next_turn(make_ctx) -> None:
    ctx = make_ctx()
    timers = ctx.player.timers
    timers.blind = 20
    timers.poisoned = 1
    timers.hero = 30
    wizard.cure_all(ctx)
    assert timers.blind == 1
    assert timers.poisoned == 1
    assert timers.hero == 30
    assert [call[0] for call in ctx.world.called("perform")] == ["remove_curse", "restore_stats"]


def test_change_level_from_count(make_ctx) -> None:
    ctx = make_ctx()
    ctx.player.command.count = 12
    wizard.change_level(ctx)
    assert ctx.level.depth == 12
    assert ctx.level.generate_new_level
    assert ctx.player.command.count == 0


def test_change_level_prompt(make_ctx) -> None:
    ctx = make_ctx("7\r")
    wizard.change_level(ctx)
    assert ctx.level.depth == 7

    cancelled = make_ctx(["\x1b"])
    wizard.change_level(cancelled)
    assert not cancelled.level.generate_new_level


def test_experience_doubles(make_ctx) -> None:
    ctx = make_ctx()
    wizard.experience(ctx)
    assert ctx.player.vitals.exp == 1
    wizard.experience(ctx)
    wizard.experience(ctx)
    assert ctx.player.vitals.exp == 4


def test_create_treasure_uses_count(make_ctx) -> None:
    ctx = make_ctx()
    ctx.player.command.count = 3
    wizard.create_treasure(ctx)
    assert ctx.world.called("perform") == [("create_treasure", {"count": 3})]


def test_wizard_commands_take_no_time(make_ctx) -> None:
    ctx = make_ctx([ctrl_key("t"), "l"])
    ctx.wizard_mode = True
    CommandInterpreter(ctx).execute_input_commands()
    assert ctx.world.called("teleport") == [(100,)]
    assert ctx.player.position == (0, 1)
