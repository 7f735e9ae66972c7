from __future__ import annotations

from enum import Enum
import logging
from typing import TYPE_CHECKING, Optional

from cavern.debug import turnlog
from cavern.engine.game_state import Status
from cavern.engine.interrupts import Disturb, disturb
from cavern.services import enchantment, food, regen
from cavern.services import player_state as pstate
from cavern.services.status_effects import StatusEffectEngine

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext
    from cavern.repl.interpreter import CommandInterpreter

LOG = logging.getLogger(__name__)

__all__ = ["SchedulerState", "TurnScheduler"]


class SchedulerState(Enum):
    RUNNING = "running"
    GENERATE_NEW_LEVEL = "generate_new_level"
    INPUT_ENDED = "input_ended"
    TERMINATED = "terminated"


class TurnScheduler:
    """Advance game time one turn at a time for the current level."""

    def __init__(
        self,
        ctx: "SimulationContext",
        *,
        effects: Optional[StatusEffectEngine] = None,
        interpreter: Optional["CommandInterpreter"] = None,
    ) -> None:
        self._ctx = ctx
        self.effects = effects if effects is not None else StatusEffectEngine(ctx)
        if interpreter is None:
            from cavern.repl.interpreter import CommandInterpreter as _CommandInterpreter

            interpreter = _CommandInterpreter(ctx)
        self.interpreter = interpreter

    @property
    def state(self) -> SchedulerState:
        ctx = self._ctx
        if ctx.exit_requested or ctx.character_is_dead:
            return SchedulerState.TERMINATED
        if ctx.level.generate_new_level:
            if ctx.end_of_input:
                return SchedulerState.TERMINATED
            return SchedulerState.GENERATE_NEW_LEVEL
        if ctx.end_of_input:
            return SchedulerState.INPUT_ENDED
        return SchedulerState.RUNNING

    def start_level(self) -> None:
        """Reset per-level flags before the first turn on a level."""

        ctx = self._ctx
        player = ctx.player
        level = ctx.level

        player.carrying_light = player.inventory.light.p1 > 0
        level.record_depth()
        player.command.count = 0
        player.status.clear(Status.REPEAT)
        level.generate_new_level = False
        level.teleport_player = False
        level.monster_multiply_total = 0
        pstate.end_find(ctx)

        self._call_world("check_view")
        if Status.SEARCH in player.status:
            pstate.search_off(ctx)
        self._call_world("update_monsters", False)
        ctx.redraw("depth")
        turnlog.emit(ctx, "LEVEL/START", depth=level.depth)
        LOG.info("entering depth %d (deepest %d)", level.depth, level.max_depth)

    def play_level(self) -> SchedulerState:
        """Run turns until a new level is due or input has ended.

        At least one turn is played, even when input already ran out, so
        that every level pass reads (and escalates) end of input.
        """

        ctx = self._ctx
        self.start_level()
        while True:
            self.tick()
            if ctx.level.generate_new_level or ctx.end_of_input or ctx.exit_requested:
                break
        return self.state

    def tick(self) -> None:
        """Play one game turn."""

        ctx = self._ctx
        cfg = ctx.config
        level = ctx.level
        player = ctx.player
        observer = turnlog.get_observer(ctx)

        level.turn += 1
        if observer:
            observer.begin_turn(ctx)

        if level.depth != 0 and level.turn % cfg.store_turns == 0:
            self._call_world("store_maint")

        if ctx.rng.one_in("spawn", cfg.monster_spawn_chance):
            turnlog.emit(ctx, "WORLD/SPAWN")
            self._call_world("alloc_monster", 1, cfg.monster_spawn_distance)

        self.effects.update_light()
        # Heroism first: it raises max HP before anything can hurt.
        self.effects.update_heroism()
        rate = food.consume_food(ctx)
        self._regenerate(rate)
        self.effects.tick_before_poll()

        self._check_for_interrupt()
        self._take_disturb("poll")

        self.effects.tick_after_poll()
        self.effects.update_random_teleport()

        if Status.STR_WGT in player.status:
            self._call_world("check_strength")
            player.status.clear(Status.STR_WGT)
        if Status.STUDY in player.status:
            ctx.redraw("study")

        self.effects.update_status_flags()
        enchantment.maybe_sense_enchantment(ctx)
        self._compact_monsters()

        self._take_disturb("command")
        if player.timers.paralysis < 1 and player.timers.rest == 0 and not ctx.character_is_dead:
            self.interpreter.execute_input_commands()

        if level.teleport_player:
            level.teleport_player = False
            turnlog.emit(ctx, "WORLD/TELEPORT", distance=cfg.queued_teleport_distance)
            self._call_world("teleport", cfg.queued_teleport_distance)

        if not level.generate_new_level:
            self._call_world("update_monsters", True)

        self._take_disturb("end")
        if observer:
            observer.finish_turn(ctx)

    # Internal helpers -------------------------------------------------
    def _regenerate(self, rate: int) -> None:
        ctx = self._ctx
        player = ctx.player
        amount = int(rate)
        if player.flags.regenerate:
            amount = amount * 3 // 2
        if Status.SEARCH in player.status or player.timers.rest != 0:
            amount *= 2
        vitals = player.vitals
        if player.timers.poisoned < 1 and vitals.chp < vitals.mhp:
            regen.regen_hp(ctx, amount)
        if vitals.cmana < vitals.mana:
            regen.regen_mana(ctx, amount)

    def _check_for_interrupt(self) -> None:
        ctx = self._ctx
        player = ctx.player
        if not (player.command.count > 0 or ctx.running or player.timers.rest != 0):
            return
        micros = 0 if ctx.running else ctx.config.key_poll_micros
        try:
            pending = ctx.terminal.poll_key(micros)
        except Exception:
            LOG.exception("key poll failed")
            return
        if pending:
            turnlog.emit(ctx, "INPUT/INTERRUPT")
            disturb(ctx, Disturb.MAJOR)

    def _take_disturb(self, point: str) -> None:
        severity = self._ctx.interrupts.take()
        if severity is not None:
            turnlog.emit(self._ctx, "INPUT/DISTURB", severity=severity.name, point=point)

    def _compact_monsters(self) -> None:
        ctx = self._ctx
        try:
            used = ctx.world.monster_count(ctx)
        except Exception:
            LOG.exception("monster_count failed")
            return
        if ctx.config.monster_list_size - used < ctx.config.compact_margin:
            turnlog.emit(ctx, "WORLD/COMPACT", used=used)
            self._call_world("compact_monsters")

    def _call_world(self, name: str, *args) -> None:
        ctx = self._ctx
        try:
            getattr(ctx.world, name)(ctx, *args)
        except Exception:
            LOG.exception("world.%s failed", name)
