"""Tuning tables for hit chance, finish weights and round resolution."""

from models import BitType, FinishType

# ---------------------------------------------------------------------------
# Hit chance
# ---------------------------------------------------------------------------

BIT_BASE_HIT: dict[BitType, float] = {
    BitType.ATTACK: 0.70,
    BitType.BALANCE: 0.68,
    BitType.DEFENSE: 0.66,
    BitType.STAMINA: 0.64,
}

# attacker archetype -> defender archetype -> multiplier (missing pair = 1.0)
BIT_VS_BIT_HIT_MULT: dict[BitType, dict[BitType, float]] = {
    BitType.ATTACK: {
        BitType.DEFENSE: 1.15,
        BitType.BALANCE: 1.0,
        BitType.STAMINA: 0.9,
        BitType.ATTACK: 1.2,
    },
    BitType.DEFENSE: {
        BitType.STAMINA: 0.9,
        BitType.ATTACK: 1.15,
        BitType.BALANCE: 1.0,
        BitType.DEFENSE: 1.2,
    },
    BitType.BALANCE: {
        BitType.ATTACK: 1.0,
        BitType.DEFENSE: 1.0,
        BitType.STAMINA: 1.0,
        BitType.BALANCE: 1.0,
    },
    BitType.STAMINA: {
        BitType.BALANCE: 1.0,
        BitType.ATTACK: 1.1,
        BitType.DEFENSE: 0.95,
        BitType.STAMINA: 1.2,
    },
}

HEIGHT_FACTOR_RANGE = (0.85, 1.15)
PROPULSION_FACTOR_RANGE = (0.9, 1.1)
HIT_CHANCE_RANGE = (0.05, 0.95)

# ---------------------------------------------------------------------------
# Finish resolution
# ---------------------------------------------------------------------------

OVER_BASE = 0.07
BURST_BASE = 0.05
XTREME_BASE = 0.03

OVER_WEIGHT_CAP = 0.6
BURST_WEIGHT_CAP = 0.5
XTREME_WEIGHT_CAP = 0.4

MOMENTUM_SCALE = 0.5

# Share of the roll reserved for "no finish" and the share split across finishes
NO_FINISH_PROBABILITY = 0.60
FINISH_PROBABILITY_BUDGET = 0.40

FINISH_POINTS: dict[FinishType, int] = {
    FinishType.SPIN: 1,
    FinishType.OVER: 2,
    FinishType.BURST: 2,
    FinishType.XTREME: 3,
}

# ---------------------------------------------------------------------------
# Arena / launch
# ---------------------------------------------------------------------------

ARENA_BOOST = 1.2
ARENA_PENALTY = 0.8
LAUNCH_VARIANCE = 0.1

# ---------------------------------------------------------------------------
# Round / match flow
# ---------------------------------------------------------------------------

PROPULSION_DRAIN_RATE = 0.2
STAMINA_DRAIN_RATE = 0.2
MAX_ROUND_STEPS = 100

MATCH_TARGET_SCORE = 7
MAX_MATCH_ROUNDS = 100
