from __future__ import annotations

from cavern.repl.loop import Game
from cavern.services.sandbox import SandboxWorld, starter_character
from cavern.services.turn_scheduler import TurnScheduler
from cavern.util.keys import ctrl_key


def test_end_of_input_escalates_to_panic_save(make_ctx) -> None:
    ctx = make_ctx(world=SandboxWorld(), player=starter_character())
    game = Game(ctx)
    reason = game.run()
    assert reason == "(end of input: panic saved)"
    assert ctx.character_saved
    assert ctx.eof_count == ctx.config.eof_panic_threshold + 1
    assert game.levels_played == ctx.eof_count
    # The same level is replayed; no new levels are generated.
    assert ctx.world.levels_generated == 0
    assert ctx.level.depth == 0


def test_stairs_lead_to_a_new_level_then_quit(make_ctx) -> None:
    world = SandboxWorld()
    player = starter_character()
    player.position = (world.height - 2, world.width - 2)
    ctx = make_ctx([">", "Q", "y"], world=world, player=player)

    reason = Game(ctx).run()

    assert reason == "Quitting"
    assert ctx.level.depth == 1
    assert ctx.level.max_depth == 1
    assert world.levels_generated == 1


def test_save_command_ends_session(make_ctx) -> None:
    ctx = make_ctx([ctrl_key("x")], world=SandboxWorld(), player=starter_character())
    assert Game(ctx).run() == "(saved)"
    assert ctx.exit_requested


def test_sandbox_walk_into_wall_is_free(make_ctx) -> None:
    world = SandboxWorld()
    player = starter_character()
    player.position = (1, 1)
    ctx = make_ctx(["k", "j"], world=world, player=player)
    scheduler = TurnScheduler(ctx)
    scheduler.tick()
    assert ctx.player.position == (2, 1)
    assert "There is a wall in the way!" in ctx.terminal.messages()
    assert ctx.level.turn == 1
