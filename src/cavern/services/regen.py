"""Hit point and mana regeneration in 16.16 fixed point.

A regeneration rate is a fraction of the maximum expressed in units of
``1/65536``: a rate of 197 restores ``max * 197 / 65536`` points per turn.
The whole part is added straight away; the 16-bit remainder is carried in a
per-value fraction accumulator so that small maxima still regenerate
deterministically over several turns.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

from cavern.constants import MAX_SHORT

if TYPE_CHECKING:
    from cavern.engine.context import SimulationContext

LOG = logging.getLogger(__name__)

FRAC_BITS = 16
ONE = 1 << FRAC_BITS
FRAC_MASK = ONE - 1


@dataclass(frozen=True)
class Fixed16:
    """Non-negative 16.16 fixed-point number stored as a raw integer."""

    raw: int

    @classmethod
    def from_parts(cls, whole: int, fraction: int = 0) -> "Fixed16":
        return cls((whole << FRAC_BITS) + (fraction & FRAC_MASK))

    @property
    def whole(self) -> int:
        return self.raw >> FRAC_BITS

    @property
    def fraction(self) -> int:
        return self.raw & FRAC_MASK

    def __add__(self, other: "Fixed16") -> "Fixed16":
        return Fixed16(self.raw + other.raw)

    def saturate(self, limit: int) -> "Fixed16":
        """Clamp the whole part to *limit*, dropping the fraction at the cap."""
        if self.whole >= limit:
            return Fixed16.from_parts(limit)
        return self


@dataclass(frozen=True)
class Regen:
    current: int
    fraction: int
    changed: bool


def regenerate(current: int, maximum: int, fraction: int, rate: int, base: int) -> Regen:
    """Return the value and fraction after one turn of regeneration.

    ``base`` is added to ``maximum * rate`` so that a tiny maximum still
    regenerates. A ``rate`` of zero means no regeneration. The result never
    exceeds ``maximum`` (the fraction is zeroed exactly at the clamp) and
    never wraps past ``MAX_SHORT``.
    """

    if current >= maximum:
        return Regen(maximum, 0, current > maximum)
    if rate <= 0:
        return Regen(current, fraction, False)

    gain = Fixed16(maximum * rate + base)
    total = Fixed16.from_parts(current) + Fixed16(fraction & FRAC_MASK) + gain
    total = total.saturate(MAX_SHORT)

    new_current = total.whole
    new_fraction = total.fraction
    if new_current >= maximum:
        new_current = maximum
        new_fraction = 0

    return Regen(new_current, new_fraction, new_current != current)


def regen_hp(ctx: "SimulationContext", rate: int) -> None:
    vitals = ctx.player.vitals
    result = regenerate(vitals.chp, vitals.mhp, vitals.chp_frac, rate, ctx.config.regen_hp_base)
    vitals.chp, vitals.chp_frac = result.current, result.fraction
    if result.changed:
        ctx.redraw("chp")


def regen_mana(ctx: "SimulationContext", rate: int) -> None:
    vitals = ctx.player.vitals
    result = regenerate(
        vitals.cmana, vitals.mana, vitals.cmana_frac, rate, ctx.config.regen_mana_base
    )
    vitals.cmana, vitals.cmana_frac = result.current, result.fraction
    if result.changed:
        ctx.redraw("cmana")
