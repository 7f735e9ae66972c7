"""Per-turn bookkeeping for the player's timed effects.

Each timer counts down once per game turn. The matching :class:`Status`
bit is raised the first turn a timer is seen positive and dropped the turn
it reaches zero, so the one-time side effects (messages, stat bumps, speed
changes, redraws) run exactly once per activation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cavern.engine.game_state import STAT_REDRAW, Status
from cavern.engine.interrupts import Disturb, disturb
from cavern.services import player_state as pstate

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)

__all__ = ["StatusEffectEngine", "poison_damage"]


def poison_damage(con_adjustment: int, turn: int) -> int:
    """Damage dealt by poison this turn.

    Feeble constitutions take several points a turn; robust ones are hurt
    only every second, third or fourth turn.
    """

    if con_adjustment <= -4:
        return 4
    if con_adjustment <= -2:
        return 3
    if con_adjustment == -1:
        return 2
    if con_adjustment == 0:
        return 1
    if con_adjustment <= 3:
        return int(turn % 2 == 0)
    if con_adjustment <= 5:
        return int(turn % 3 == 0)
    return int(turn % 4 == 0)


class StatusEffectEngine:
    """Advance every timed effect on ``ctx.player`` by one turn."""

    def __init__(self, ctx: "SimulationContext") -> None:
        self._ctx = ctx

    # The scheduler polls the keyboard between these two groups.
    def tick_before_poll(self) -> None:
        self.update_blindness()
        self.update_confusion()
        self.update_fear()
        self.update_poison()
        self.update_fast()
        self.update_slow()
        self.update_resting()

    def tick_after_poll(self) -> None:
        self.update_hallucination()
        self.update_paralysis()
        self.update_protection_from_evil()
        self.update_invulnerability()
        self.update_blessing()
        self.update_resist_heat()
        self.update_resist_cold()
        self.update_detect_invisible()
        self.update_infravision()
        self.update_word_recall()

    # Light ------------------------------------------------------------
    def update_light(self) -> None:
        ctx = self._ctx
        player = ctx.player
        light = player.inventory.light

        if player.carrying_light:
            if light.p1 > 0:
                light.p1 -= 1
                if light.p1 == 0:
                    player.carrying_light = False
                    ctx.message("Your light has gone out!")
                    disturb(ctx, relight=True)
                    ctx.world.update_monsters(ctx, False)
                elif (
                    light.p1 < ctx.config.light_faint_warning
                    and ctx.rng.one_in("light", 5)
                    and player.timers.blind < 1
                ):
                    disturb(ctx)
                    ctx.message("Your light is growing faint.")
            else:
                player.carrying_light = False
                disturb(ctx, relight=True)
                ctx.world.update_monsters(ctx, False)
        elif light.p1 > 0:
            light.p1 -= 1
            player.carrying_light = True
            disturb(ctx, relight=True)
            ctx.world.update_monsters(ctx, False)

    # Heroism ----------------------------------------------------------
    def update_heroism(self) -> None:
        ctx = self._ctx
        player = ctx.player
        timers = player.timers
        vitals = player.vitals

        if timers.hero > 0:
            if player.status.activate(Status.HERO):
                disturb(ctx)
                vitals.mhp += 10
                vitals.chp += 10
                vitals.bth += 12
                vitals.bthb += 12
                ctx.message("You feel like a HERO!")
                ctx.redraw("mhp")
                ctx.redraw("chp")
            timers.hero -= 1
            if timers.hero == 0:
                player.status.clear(Status.HERO)
                disturb(ctx)
                vitals.mhp -= 10
                vitals.bth -= 12
                vitals.bthb -= 12
                player.clamp()
                ctx.message("The heroism wears off.")
                ctx.redraw("mhp")
                ctx.redraw("chp")

        if timers.shero > 0:
            if player.status.activate(Status.SHERO):
                disturb(ctx)
                vitals.mhp += 20
                vitals.chp += 20
                vitals.bth += 24
                vitals.bthb += 24
                ctx.message("You feel like a SUPER HERO!")
                ctx.redraw("mhp")
                ctx.redraw("chp")
            timers.shero -= 1
            if timers.shero == 0:
                player.status.clear(Status.SHERO)
                disturb(ctx)
                vitals.mhp -= 20
                vitals.bth -= 24
                vitals.bthb -= 24
                player.clamp()
                ctx.message("The super heroism wears off.")
                ctx.redraw("mhp")
                ctx.redraw("chp")

    # Senses -----------------------------------------------------------
    def update_blindness(self) -> None:
        ctx = self._ctx
        player = ctx.player
        if player.timers.blind <= 0:
            return
        if player.status.activate(Status.BLIND):
            ctx.redraw("map")
            ctx.redraw("blind")
            disturb(ctx, relight=True)
            ctx.world.update_monsters(ctx, False)
        player.timers.blind -= 1
        if player.timers.blind == 0:
            player.status.clear(Status.BLIND)
            ctx.redraw("blind")
            ctx.redraw("map")
            disturb(ctx, relight=True)
            ctx.world.update_monsters(ctx, False)
            ctx.message("The veil of darkness lifts.")

    def update_confusion(self) -> None:
        ctx = self._ctx
        player = ctx.player
        if player.timers.confused <= 0:
            return
        if player.status.activate(Status.CONFUSED):
            ctx.redraw("confused")
        player.timers.confused -= 1
        if player.timers.confused == 0:
            player.status.clear(Status.CONFUSED)
            ctx.redraw("confused")
            ctx.message("You feel less confused now.")
            if player.timers.rest != 0:
                pstate.rest_off(ctx)

    def update_fear(self) -> None:
        ctx = self._ctx
        player = ctx.player
        timers = player.timers
        if timers.afraid <= 0:
            return
        heroic = timers.hero + timers.shero > 0
        if Status.FEAR not in player.status:
            if heroic:
                timers.afraid = 0
                return
            player.status.set(Status.FEAR)
            ctx.redraw("afraid")
        elif heroic:
            timers.afraid = 1
        timers.afraid -= 1
        if timers.afraid == 0:
            player.status.clear(Status.FEAR)
            ctx.redraw("afraid")
            ctx.message("You feel bolder now.")
            disturb(ctx)

    def update_poison(self) -> None:
        ctx = self._ctx
        player = ctx.player
        if player.timers.poisoned <= 0:
            return
        if player.status.activate(Status.POISONED):
            ctx.redraw("poisoned")
        player.timers.poisoned -= 1
        if player.timers.poisoned == 0:
            player.status.clear(Status.POISONED)
            ctx.redraw("poisoned")
            ctx.message("You feel better.")
            disturb(ctx)
            return
        damage = poison_damage(pstate.constitution_adjustment(player.stats), ctx.level.turn)
        pstate.take_hit(ctx, damage, "poison")
        disturb(ctx, Disturb.MAJOR)

    # Speed ------------------------------------------------------------
    def update_fast(self) -> None:
        ctx = self._ctx
        player = ctx.player
        if player.timers.fast <= 0:
            return
        if player.status.activate(Status.FAST):
            pstate.change_speed(ctx, -1)
            ctx.message("You feel yourself moving faster.")
            disturb(ctx)
        player.timers.fast -= 1
        if player.timers.fast == 0:
            player.status.clear(Status.FAST)
            pstate.change_speed(ctx, 1)
            ctx.message("You feel yourself slow down.")
            disturb(ctx)

    def update_slow(self) -> None:
        ctx = self._ctx
        player = ctx.player
        if player.timers.slow <= 0:
            return
        if player.status.activate(Status.SLOW):
            pstate.change_speed(ctx, 1)
            ctx.message("You feel yourself moving slower.")
            disturb(ctx)
        player.timers.slow -= 1
        if player.timers.slow == 0:
            player.status.clear(Status.SLOW)
            pstate.change_speed(ctx, -1)
            ctx.message("You feel yourself speed up.")
            disturb(ctx)

    def update_resting(self) -> None:
        ctx = self._ctx
        player = ctx.player
        timers = player.timers
        if timers.rest > 0:
            timers.rest -= 1
            if timers.rest == 0:
                pstate.rest_off(ctx)
        elif timers.rest < 0:
            timers.rest += 1
            vitals = player.vitals
            if (vitals.chp == vitals.mhp and vitals.cmana == vitals.mana) or timers.rest == 0:
                pstate.rest_off(ctx)

    # After the keyboard poll -----------------------------------------
    def update_hallucination(self) -> None:
        ctx = self._ctx
        timers = ctx.player.timers
        if timers.image <= 0:
            return
        pstate.end_find(ctx)
        timers.image -= 1
        if timers.image == 0:
            ctx.redraw("map")

    def update_paralysis(self) -> None:
        ctx = self._ctx
        timers = ctx.player.timers
        if timers.paralysis <= 0:
            return
        timers.paralysis -= 1
        disturb(ctx, Disturb.MAJOR)

    def update_protection_from_evil(self) -> None:
        ctx = self._ctx
        timers = ctx.player.timers
        if timers.protevil <= 0:
            return
        timers.protevil -= 1
        if timers.protevil == 0:
            ctx.message("You no longer feel safe from evil.")

    def update_invulnerability(self) -> None:
        ctx = self._ctx
        player = ctx.player
        if player.timers.invuln <= 0:
            return
        if player.status.activate(Status.INVULN):
            disturb(ctx)
            player.vitals.pac += 100
            player.vitals.dis_ac += 100
            ctx.redraw("ac")
            ctx.message("Your skin turns into steel!")
        player.timers.invuln -= 1
        if player.timers.invuln == 0:
            player.status.clear(Status.INVULN)
            disturb(ctx)
            player.vitals.pac -= 100
            player.vitals.dis_ac -= 100
            ctx.redraw("ac")
            ctx.message("Your skin returns to normal.")

    def update_blessing(self) -> None:
        ctx = self._ctx
        player = ctx.player
        vitals = player.vitals
        if player.timers.blessed <= 0:
            return
        if player.status.activate(Status.BLESSED):
            disturb(ctx)
            vitals.bth += 5
            vitals.bthb += 5
            vitals.pac += 2
            vitals.dis_ac += 2
            ctx.message("You feel righteous!")
            ctx.redraw("ac")
        player.timers.blessed -= 1
        if player.timers.blessed == 0:
            player.status.clear(Status.BLESSED)
            disturb(ctx)
            vitals.bth -= 5
            vitals.bthb -= 5
            vitals.pac -= 2
            vitals.dis_ac -= 2
            ctx.message("The prayer has expired.")
            ctx.redraw("ac")

    def update_resist_heat(self) -> None:
        ctx = self._ctx
        timers = ctx.player.timers
        if timers.resist_heat <= 0:
            return
        timers.resist_heat -= 1
        if timers.resist_heat == 0:
            ctx.message("You no longer feel safe from flame.")

    def update_resist_cold(self) -> None:
        ctx = self._ctx
        timers = ctx.player.timers
        if timers.resist_cold <= 0:
            return
        timers.resist_cold -= 1
        if timers.resist_cold == 0:
            ctx.message("You no longer feel safe from cold.")

    def update_detect_invisible(self) -> None:
        ctx = self._ctx
        player = ctx.player
        if player.timers.detect_inv <= 0:
            return
        if player.status.activate(Status.DET_INV):
            player.flags.see_inv = True
            ctx.world.update_monsters(ctx, False)
        player.timers.detect_inv -= 1
        if player.timers.detect_inv == 0:
            player.status.clear(Status.DET_INV)
            player.flags.see_inv = False
            # Worn items may still grant see invisible.
            ctx.world.calc_bonuses(ctx)
            ctx.world.update_monsters(ctx, False)

    def update_infravision(self) -> None:
        ctx = self._ctx
        player = ctx.player
        if player.timers.tim_infra <= 0:
            return
        if player.status.activate(Status.TIM_INFRA):
            player.flags.see_infra += 1
            ctx.world.update_monsters(ctx, False)
        player.timers.tim_infra -= 1
        if player.timers.tim_infra == 0:
            player.status.clear(Status.TIM_INFRA)
            player.flags.see_infra -= 1
            ctx.world.update_monsters(ctx, False)

    def update_word_recall(self) -> None:
        ctx = self._ctx
        player = ctx.player
        level = ctx.level
        timers = player.timers
        if timers.word_recall <= 0:
            return
        if timers.word_recall > 1:
            timers.word_recall -= 1
            return

        timers.word_recall = 0
        level.generate_new_level = True
        timers.paralysis += 1
        if level.depth > 0:
            level.depth = 0
            ctx.message("You feel yourself yanked upwards!")
        elif level.max_depth != 0:
            level.depth = level.max_depth
            ctx.message("You feel yourself yanked downwards!")
        LOG.debug("word of recall fired; new depth %d", level.depth)

    # Random teleportation --------------------------------------------
    def update_random_teleport(self) -> None:
        ctx = self._ctx
        if not ctx.player.flags.teleport:
            return
        if ctx.rng.one_in("teleport", ctx.config.random_teleport_chance):
            disturb(ctx)
            ctx.world.teleport(ctx, ctx.config.random_teleport_distance)

    # Redraw pass ------------------------------------------------------
    def update_status_flags(self) -> None:
        """Flush pending redraw requests and keep ``PARALYSED`` in sync."""

        ctx = self._ctx
        player = ctx.player
        status = player.status

        if status.deactivate(Status.SPEED):
            ctx.redraw("speed")

        if Status.PARALYSED in status and player.timers.paralysis < 1:
            ctx.redraw("state")
            status.clear(Status.PARALYSED)
        elif player.timers.paralysis > 0:
            ctx.redraw("state")
            status.set(Status.PARALYSED)
        elif player.timers.rest != 0:
            ctx.redraw("state")

        if status.deactivate(Status.ARMOR):
            ctx.redraw("ac")

        for flag in STAT_REDRAW:
            if status.deactivate(flag):
                ctx.redraw(flag.value)

        if status.deactivate(Status.HP):
            ctx.redraw("mhp")
            ctx.redraw("chp")

        if status.deactivate(Status.MANA):
            ctx.redraw("cmana")
