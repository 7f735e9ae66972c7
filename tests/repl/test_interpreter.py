from __future__ import annotations

from cavern.engine.game_state import Status
from cavern.repl.interpreter import CommandInterpreter
from cavern.services.turn_scheduler import TurnScheduler


def _interpreter(make_ctx, keys, **kwargs):
    ctx = make_ctx(keys, **kwargs)
    return ctx, CommandInterpreter(ctx)


def test_counted_move_repeats_once_per_turn(make_ctx) -> None:
    ctx = make_ctx("12h")
    scheduler = TurnScheduler(ctx)

    scheduler.tick()
    assert ctx.player.position == (0, -1)
    assert ctx.player.command.count == 11
    assert Status.REPEAT in ctx.player.status

    for _ in range(11):
        scheduler.tick()
    assert ctx.player.position == (0, -12)
    assert ctx.player.command.count == 0
    assert Status.REPEAT not in ctx.player.status
    assert ctx.eof_count == 0
    assert ctx.world.moves == [(4, True)] * 12


def test_keypress_interrupts_counted_move(make_ctx) -> None:
    ctx = make_ctx("12hx")
    scheduler = TurnScheduler(ctx)
    scheduler.tick()
    scheduler.tick()
    assert ctx.player.position == (0, -1)
    assert ctx.player.command.count == 0
    assert ctx.world.called("perform")[0] == ("look", {})


def test_invalid_count_is_rejected_without_a_turn(make_ctx) -> None:
    ctx, interpreter = _interpreter(make_ctx, "5i")
    interpreter.execute_input_commands()
    assert ctx.terminal.messages() == ["Invalid command with a count."]
    assert ctx.world.called("perform") == []
    assert ctx.player.command.count == 0
    # The rejected command was free, so the reader went on to end of input.
    assert ctx.end_of_input


def test_free_commands_keep_reading(make_ctx) -> None:
    ctx, interpreter = _interpreter(make_ctx, "xCl")
    interpreter.execute_input_commands()
    assert [call[0] for call in ctx.world.called("perform")] == ["look", "character"]
    assert ctx.player.position == (0, 1)
    assert not ctx.end_of_input


def test_move_without_pickup(make_ctx) -> None:
    ctx, interpreter = _interpreter(make_ctx, "-6")
    interpreter.execute_input_commands()
    assert ctx.world.moves == [(6, False)]


def test_counted_move_without_pickup_reuses_direction(make_ctx) -> None:
    ctx, interpreter = _interpreter(make_ctx, "3-6")
    for _ in range(3):
        interpreter.execute_input_commands()
    assert ctx.world.moves == [(6, False)] * 3
    assert ctx.player.command.count == 0
    assert not ctx.end_of_input


def test_escaped_direction_is_free(make_ctx) -> None:
    ctx, interpreter = _interpreter(make_ctx, ["-", "\x1b", "l"])
    interpreter.execute_input_commands()
    assert ctx.world.moves == [(6, True)]


def test_blocked_move_is_free(make_ctx) -> None:
    ctx, interpreter = _interpreter(make_ctx, "lj", walls=[(0, 1)])
    interpreter.execute_input_commands()
    assert ctx.world.moves == [(6, True), (2, True)]
    assert ctx.player.position == (1, 0)


def test_run_continues_until_interrupted(make_ctx) -> None:
    ctx, interpreter = _interpreter(make_ctx, "L", run_length=3)
    interpreter.execute_input_commands()
    assert ctx.running
    assert ctx.find_count == -1

    interpreter.execute_input_commands()
    interpreter.execute_input_commands()
    assert ctx.running
    interpreter.execute_input_commands()
    assert not ctx.running
    assert ctx.world.run_steps == 3


def test_counted_run_stops_after_count(make_ctx) -> None:
    ctx, interpreter = _interpreter(make_ctx, "3L")
    interpreter.execute_input_commands()
    assert ctx.find_count == 2
    interpreter.execute_input_commands()
    interpreter.execute_input_commands()
    assert not ctx.running
    assert ctx.world.run_steps == 2
    assert ctx.player.position == (0, 3)


def test_original_layout_run_prompts_for_direction(make_ctx) -> None:
    ctx, interpreter = _interpreter(make_ctx, ".4", roguelike=False)
    interpreter.execute_input_commands()
    assert ctx.running
    assert ctx.run_direction == 4
    assert ctx.world.moves == [(4, True)]


def test_original_layout_digits_walk(make_ctx) -> None:
    ctx, interpreter = _interpreter(make_ctx, "2", roguelike=False)
    interpreter.execute_input_commands()
    assert ctx.player.position == (1, 0)


def test_original_layout_tunnel(make_ctx) -> None:
    ctx, interpreter = _interpreter(make_ctx, "T8", roguelike=False)
    interpreter.execute_input_commands()
    assert ctx.world.called("tunnel") == [(8,)]


def test_loop_stops_when_new_level_is_due(make_ctx) -> None:
    ctx, interpreter = _interpreter(make_ctx, "><h", stairs={(0, 0): "down"})
    interpreter.execute_input_commands()
    assert ctx.level.depth == 1
    assert ctx.level.generate_new_level
    assert ctx.terminal.pending == 2


def test_stay_with_count_rests(make_ctx) -> None:
    ctx, interpreter = _interpreter(make_ctx, "5.")
    interpreter.execute_input_commands()
    assert ctx.player.timers.rest == 4
    assert Status.REST in ctx.player.status
    assert ctx.player.command.count == 0


def test_last_command_is_recorded(make_ctx) -> None:
    ctx, interpreter = _interpreter(make_ctx, "l")
    interpreter.execute_input_commands()
    assert ctx.player.command.last_command == "l"
    assert interpreter.last_key == "l"
