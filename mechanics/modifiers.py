"""Arena and launch effects applied to a fighter's dynamic stats.

Every function here returns a new CombatStats; inputs are never mutated.
Values are floored to whole numbers so the same build always yields the
same dynamic stats.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from models import DEFAULT_STAT, ArenaSide, CombatStats, LaunchType
from mechanics.constants import ARENA_BOOST, ARENA_PENALTY, LAUNCH_VARIANCE

RNG = Callable[[], float]

_STAT_FIELDS = tuple(CombatStats.model_fields)


def _or_default(value: float | None) -> float:
    if value is None or not math.isfinite(value):
        return DEFAULT_STAT
    return value


def _scaled(value: float | None, mult: float) -> float:
    scaled = _or_default(value) * mult
    if not math.isfinite(scaled):
        return DEFAULT_STAT
    return math.floor(scaled)


def apply_arena_modifiers(stats: CombatStats, side: ArenaSide) -> CombatStats:
    """Side X boosts propulsion and costs stamina; side B does the reverse."""
    if ArenaSide(side) is ArenaSide.X:
        prop_mult, stam_mult = ARENA_BOOST, ARENA_PENALTY
    else:
        prop_mult, stam_mult = ARENA_PENALTY, ARENA_BOOST
    return stats.model_copy(update={
        "propulsion": _scaled(stats.propulsion, prop_mult),
        "stamina": _scaled(stats.stamina, stam_mult),
    })


def apply_launch_modifiers(stats: CombatStats, launch: LaunchType) -> CombatStats:
    """Scale attack, defense, stamina and propulsion by the launch multipliers.

    The launch's finish multipliers are not applied here.
    """
    return stats.model_copy(update={
        "attack": _scaled(stats.attack, launch.attack_modifier),
        "defense": _scaled(stats.defense, launch.defense_modifier),
        "stamina": _scaled(stats.stamina, launch.stamina_modifier),
        "propulsion": _scaled(stats.propulsion, launch.propulsion_modifier),
    })


def random_launch(rng: RNG) -> LaunchType:
    """Draw an opponent launch with each stat multiplier within +/-10%."""

    def jitter() -> float:
        return 1 + (rng() * 2 * LAUNCH_VARIANCE - LAUNCH_VARIANCE)

    return LaunchType(
        id="rand",
        name="Random Launch",
        level=1,
        attack_modifier=jitter(),
        defense_modifier=jitter(),
        stamina_modifier=jitter(),
        propulsion_modifier=jitter(),
    )


def flip_arena_side(rng: RNG) -> ArenaSide:
    """Coin toss for which arena half the player starts on."""
    return ArenaSide.X if rng() < 0.5 else ArenaSide.B


def combine_stats(*parts: CombatStats) -> CombatStats:
    """Field-wise sum of several stat blocks; a missing or non-finite value counts as 0."""
    totals = {name: 0.0 for name in _STAT_FIELDS}
    for part in parts:
        for name in _STAT_FIELDS:
            value = getattr(part, name)
            if value is not None and math.isfinite(value):
                totals[name] += value
    return CombatStats(**totals)
