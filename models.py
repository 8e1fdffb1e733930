# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Data models for the blade battle engine."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Baseline reference value substituted for any missing stat.
DEFAULT_STAT = 50


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BitType(str, Enum):
    ATTACK = "attack"
    DEFENSE = "defense"
    BALANCE = "balance"
    STAMINA = "stamina"


class FinishType(str, Enum):
    NONE = "none"
    SPIN = "spin"
    OVER = "over"
    BURST = "burst"
    XTREME = "xtreme"

    @property
    def severity(self) -> int:
        return _FINISH_SEVERITY[self]

    @property
    def is_knockout(self) -> bool:
        """True for the finishes that end a bout on a hit (over/burst/xtreme)."""
        return self in (FinishType.OVER, FinishType.BURST, FinishType.XTREME)


_FINISH_SEVERITY = {
    FinishType.NONE: 0,
    FinishType.SPIN: 1,
    FinishType.OVER: 2,
    FinishType.BURST: 2,
    FinishType.XTREME: 3,
}


class ArenaSide(str, Enum):
    X = "X"
    B = "B"

    @property
    def opposite(self) -> ArenaSide:
        return ArenaSide.B if self is ArenaSide.X else ArenaSide.X


class Actor(str, Enum):
    SELF = "self"
    OPPONENT = "opponent"

    @property
    def other(self) -> Actor:
        return Actor.OPPONENT if self is Actor.SELF else Actor.SELF


class Winner(str, Enum):
    SELF = "self"
    OPPONENT = "opponent"
    DRAW = "draw"


class EventType(str, Enum):
    ATTACK = "attack"
    MISS = "miss"
    FINISH = "finish"
    STAMINA = "stamina"
    END = "end"


# ---------------------------------------------------------------------------
# Fighter models
# ---------------------------------------------------------------------------

class CombatStats(BaseModel):
    """Numeric battle stats. Missing values read as DEFAULT_STAT at use."""
    attack: Optional[float] = None
    defense: Optional[float] = None
    stamina: Optional[float] = None
    height: Optional[float] = None
    propulsion: Optional[float] = None
    burst: Optional[float] = None
    weight: Optional[float] = None


class FighterMeta(BaseModel):
    """Static descriptors derived from the unmodified build."""
    bit_type: BitType = BitType.BALANCE
    height: float = Field(default=DEFAULT_STAT, gt=0)
    display_name: str = ""


class Fighter(BaseModel):
    """Canonical combatant handed to the battle engine."""
    stats: CombatStats = Field(default_factory=CombatStats)
    meta: FighterMeta = Field(default_factory=FighterMeta)


class LaunchType(BaseModel):
    """A launch technique applying multipliers to the dynamic stats.

    The finish multipliers are carried for completeness but the engine
    does not consume them.
    """
    id: str = ""
    name: str = ""
    level: int = 1
    attack_modifier: float = 1.0
    defense_modifier: float = 1.0
    stamina_modifier: float = 1.0
    propulsion_modifier: float = 1.0
    spin_modifier: float = 1.0
    over_modifier: float = 1.0
    burst_modifier: float = 1.0
    xtreme_modifier: float = 1.0
    selfko_modifier: float = 1.0
    skill_id: Optional[str] = None


# ---------------------------------------------------------------------------
# Outcome models
# ---------------------------------------------------------------------------

class FinishFlags(BaseModel):
    spin: bool = False
    over: bool = False
    burst: bool = False
    xtreme: bool = False

    @classmethod
    def from_finish(cls, finish: FinishType) -> FinishFlags:
        if finish is FinishType.NONE:
            return cls()
        return cls(**{finish.value: True})


class BattleOutcome(BaseModel):
    """Scored result of a single round."""
    model_config = ConfigDict(frozen=True)

    winner: Winner
    self_result: FinishFlags
    opponent_result: FinishFlags
    self_score: int = Field(ge=0)
    opponent_score: int = Field(ge=0)


class MatchResult(BaseModel):
    """Accumulated result of a first-to-target match."""
    self_score: int = 0
    opponent_score: int = 0
    rounds: list[BattleOutcome] = Field(default_factory=list)

    @property
    def winner(self) -> Winner:
        if self.self_score > self.opponent_score:
            return Winner.SELF
        if self.opponent_score > self.self_score:
            return Winner.OPPONENT
        return Winner.DRAW
