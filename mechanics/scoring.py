"""Turns the two sides' finishes for a round into a scored BattleOutcome."""

from __future__ import annotations

from models import Actor, BattleOutcome, FinishFlags, FinishType, Winner
from mechanics.constants import FINISH_POINTS


def score_round(self_finish: FinishType, opponent_finish: FinishType) -> BattleOutcome:
    """Score a round from the finish recorded for each side.

    A spin marks the side that spun out, so it credits 1 point to the other
    side. Over/burst/xtreme credit their own side 2/2/3. A double spin, or
    no finish at all, is a 0-0 draw.
    """
    winner: Actor | None = None
    points = 0

    if self_finish is FinishType.SPIN and opponent_finish is not FinishType.SPIN:
        winner, points = Actor.OPPONENT, FINISH_POINTS[FinishType.SPIN]
    elif opponent_finish is FinishType.SPIN and self_finish is not FinishType.SPIN:
        winner, points = Actor.SELF, FINISH_POINTS[FinishType.SPIN]
    elif self_finish.is_knockout:
        winner, points = Actor.SELF, FINISH_POINTS[self_finish]
    elif opponent_finish.is_knockout:
        winner, points = Actor.OPPONENT, FINISH_POINTS[opponent_finish]

    return BattleOutcome(
        winner=Winner.DRAW if winner is None else Winner(winner.value),
        self_result=FinishFlags.from_finish(self_finish),
        opponent_result=FinishFlags.from_finish(opponent_finish),
        self_score=points if winner is Actor.SELF else 0,
        opponent_score=points if winner is Actor.OPPONENT else 0,
    )
