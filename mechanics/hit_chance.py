"""Probability that an attack connects."""

from __future__ import annotations

import math

from models import DEFAULT_STAT, CombatStats, FighterMeta
from mechanics.constants import (
    BIT_BASE_HIT,
    BIT_VS_BIT_HIT_MULT,
    HEIGHT_FACTOR_RANGE,
    HIT_CHANCE_RANGE,
    PROPULSION_FACTOR_RANGE,
)


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def calculate_hit_chance(
    attacker_stats: CombatStats,
    defender_stats: CombatStats,
    attacker_meta: FighterMeta,
    defender_meta: FighterMeta,
) -> float:
    """Return the attacker's chance to connect, always within [0.05, 0.95].

    Base rate by the attacker's bit archetype, then multiplied in order by
    the archetype matchup, the height advantage and the propulsion
    advantage. Consumes no randomness.
    """
    hit = BIT_BASE_HIT[attacker_meta.bit_type]
    hit *= BIT_VS_BIT_HIT_MULT.get(attacker_meta.bit_type, {}).get(defender_meta.bit_type, 1.0)

    hit *= clamp(
        attacker_meta.height / max(defender_meta.height, 1),
        *HEIGHT_FACTOR_RANGE,
    )

    a_prop = max(_stat(attacker_stats.propulsion), 1)
    d_prop = max(_stat(defender_stats.propulsion), 1)
    hit *= clamp(a_prop / d_prop, *PROPULSION_FACTOR_RANGE)

    return clamp(hit, *HIT_CHANCE_RANGE)


def _stat(value: float | None) -> float:
    if value is None or not math.isfinite(value):
        return DEFAULT_STAT
    return value
