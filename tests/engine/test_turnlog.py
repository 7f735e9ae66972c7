import logging

from cavern.debug import turnlog


def test_turn_observer_logs_summary(make_ctx, caplog) -> None:
    ctx = make_ctx()
    observer = turnlog.TurnObserver(enabled=True)
    ctx.turn_observer = observer
    ctx.level.turn = 7

    observer.begin_turn(ctx)
    turnlog.emit(ctx, "CMD/DISPATCH", key="h", free=False)
    ctx.player.vitals.chp -= 3
    turnlog.emit(ctx, "WORLD/SPAWN")

    with caplog.at_level(logging.INFO, logger="cavern.turndbg"):
        observer.finish_turn(ctx)

    assert observer.turns == 1
    assert observer.last_summary == "turn=7 | HPΔ=-3 (7/10) | cmd='h' | spawn"
    assert "[turndbg] TURN turn=7" in caplog.text
    assert observer.events() == []


def test_disabled_observer_records_nothing(make_ctx) -> None:
    ctx = make_ctx()
    observer = turnlog.TurnObserver(enabled=False)
    ctx.turn_observer = observer
    observer.begin_turn(ctx)
    turnlog.emit(ctx, "INPUT/EOF", count=1)
    assert observer.events() == []
    observer.finish_turn(ctx)
    assert observer.turns == 0


def test_emit_formats_meta(make_ctx, caplog) -> None:
    ctx = make_ctx()
    with caplog.at_level(logging.DEBUG, logger="cavern.turndbg"):
        turnlog.emit(ctx, "WORLD/COMPACT", used=120, skipped=None, tags=("a", "b"))
    assert "WORLD/COMPACT tags=a,b used=120" in caplog.text
