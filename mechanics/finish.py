"""Finish resolution for an attack that has already connected.

A connecting hit ends the bout with a special finish 40% of the time. That
budget is split between over, burst and xtreme in proportion to three
weights, each a product of stat ratios normalised against DEFAULT_STAT:

- over rewards the attacker's defense, stamina, weight and propulsion and is
  helped by a tall defender;
- burst rewards attacker propulsion and is resisted by the defender's
  defense, weight and burst resistance;
- xtreme rewards attacker weight and a sustained propulsion advantage
  (the momentum term).

The roll is partitioned xtreme first, then over, then burst.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from models import DEFAULT_STAT, CombatStats, FinishType
from mechanics.constants import (
    BURST_BASE,
    BURST_WEIGHT_CAP,
    FINISH_PROBABILITY_BUDGET,
    MOMENTUM_SCALE,
    NO_FINISH_PROBABILITY,
    OVER_BASE,
    OVER_WEIGHT_CAP,
    XTREME_BASE,
    XTREME_WEIGHT_CAP,
)
from mechanics.hit_chance import clamp

RNG = Callable[[], float]

D = DEFAULT_STAT


@dataclass(frozen=True)
class FinishWeights:
    """Relative (or, once scaled, absolute) chances of each finish."""
    over: float
    burst: float
    xtreme: float

    @property
    def total(self) -> float:
        return self.over + self.burst + self.xtreme

    def to_dict(self) -> dict:
        return {"over": self.over, "burst": self.burst, "xtreme": self.xtreme}


def _read(value: float | None) -> float:
    if value is None or not math.isfinite(value):
        return D
    return value


def _floored(value: float | None) -> float:
    return max(_read(value), 1)


def finish_weights(attacker: CombatStats, defender: CombatStats) -> FinishWeights:
    """Compute the clamped over/burst/xtreme weights for a hit."""
    atk = _floored(attacker.attack)
    dfn = _floored(defender.defense)
    ratio = atk / dfn

    a_prop = _floored(attacker.propulsion)
    d_prop = _floored(defender.propulsion)
    a_height = _floored(attacker.height)
    d_height = _floored(defender.height)
    a_weight = _floored(attacker.weight)
    d_weight = _floored(defender.weight)
    d_burst = _floored(defender.burst)

    over = (
        OVER_BASE * ratio
        * (_read(attacker.defense) / D)
        * (_read(attacker.stamina) / D)
        * (a_weight / D)
        * (a_prop / D)
        * (D / a_height)
        * (d_height / D)
        * (D / _floored(defender.attack))
        * (D / dfn)
        * (D / _floored(defender.stamina))
        * (D / d_weight)
        * (D / d_prop)
    )

    burst = (
        BURST_BASE * ratio
        * (a_prop / D)
        * (D / a_height)
        * (d_height / D)
        * (d_prop / D)
        * (D / dfn)
        * (D / d_weight)
        * (D / d_burst)
    )

    momentum = clamp((a_prop / d_prop - 1) * MOMENTUM_SCALE, 0, 1)
    xtreme = (
        XTREME_BASE * ratio
        * (1 + momentum)
        * (a_prop / D)
        * (a_weight / D)
        * (D / a_height)
        * (D / dfn)
        * (D / d_height)
        * (D / d_weight)
    )

    return FinishWeights(
        over=clamp(over, 0, OVER_WEIGHT_CAP),
        burst=clamp(burst, 0, BURST_WEIGHT_CAP),
        xtreme=clamp(xtreme, 0, XTREME_WEIGHT_CAP),
    )


def finish_probabilities(weights: FinishWeights) -> FinishWeights:
    """Scale weights to shares of the 0.40 finish budget.

    Returns all zeros when the total weight is not positive.
    """
    total = weights.total
    if total <= 0:
        return FinishWeights(over=0.0, burst=0.0, xtreme=0.0)
    return FinishWeights(
        over=FINISH_PROBABILITY_BUDGET * (weights.over / total),
        burst=FINISH_PROBABILITY_BUDGET * (weights.burst / total),
        xtreme=FINISH_PROBABILITY_BUDGET * (weights.xtreme / total),
    )


def calculate_finish(attacker: CombatStats, defender: CombatStats, rng: RNG) -> FinishType:
    """Resolve which finish (if any) a connecting hit produces.

    Draws exactly one value from ``rng`` unless the total weight is zero,
    in which case no value is drawn and the result is NONE.
    """
    weights = finish_weights(attacker, defender)
    if weights.total <= 0:
        return FinishType.NONE

    probs = finish_probabilities(weights)

    roll = rng()
    if roll < NO_FINISH_PROBABILITY:
        return FinishType.NONE
    r = roll - NO_FINISH_PROBABILITY

    if r < probs.xtreme:
        return FinishType.XTREME
    if r < probs.xtreme + probs.over:
        return FinishType.OVER
    if r <= probs.xtreme + probs.over + probs.burst:
        return FinishType.BURST
    return FinishType.NONE
