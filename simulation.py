# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Blade battle simulation engine.

Resolves a round turn by turn from two fighters' modifier-adjusted stats:
who attacks, whether the attack connects, which finish (if any) it
produces, and how propulsion and stamina drain between attempts. Rounds
are chained into a first-to-seven match.

All randomness comes from an injected RNG callable so that a fixed
sequence of draws replays the same round and the same event log.
"""

from __future__ import annotations

import logging
import math
import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from models import (
    Actor,
    ArenaSide,
    BattleOutcome,
    CombatStats,
    EventType,
    Fighter,
    FighterMeta,
    FinishType,
    LaunchType,
    MatchResult,
)
from mechanics.constants import (
    MATCH_TARGET_SCORE,
    MAX_MATCH_ROUNDS,
    MAX_ROUND_STEPS,
    PROPULSION_DRAIN_RATE,
    STAMINA_DRAIN_RATE,
)
from mechanics.finish import calculate_finish
from mechanics.hit_chance import calculate_hit_chance
from mechanics.modifiers import (
    apply_arena_modifiers,
    apply_launch_modifiers,
    flip_arena_side,
    random_launch,
)
from mechanics.scoring import score_round

logger = logging.getLogger(__name__)

RNG = Callable[[], float]

DEFAULT_NAMES = {Actor.SELF: "You", Actor.OPPONENT: "Opponent"}


# ---------------------------------------------------------------------------
# Round events and results
# ---------------------------------------------------------------------------

@dataclass
class BattleEvent:
    """One line of a round's narrative log."""
    type: EventType
    actor: Actor
    text: str

    def to_dict(self) -> dict:
        return {"type": self.type.value, "actor": self.actor.value, "text": self.text}


@dataclass
class RoundResult:
    """Everything a single round produced."""
    outcome: BattleOutcome
    events: list[BattleEvent] = field(default_factory=list)
    self_finish: FinishType = FinishType.NONE
    opponent_finish: FinishType = FinishType.NONE
    steps: int = 0

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.model_dump(mode="json"),
            "events": [e.to_dict() for e in self.events],
            "self_finish": self.self_finish.value,
            "opponent_finish": self.opponent_finish.value,
            "steps": self.steps,
        }


@dataclass
class _Side:
    """Per-round resources of one fighter."""
    name: str
    stats: CombatStats
    meta: FighterMeta
    propulsion: float
    stamina: float
    baseline: float
    finish: FinishType = FinishType.NONE

    @classmethod
    def start(cls, name: str, stats: CombatStats, meta: FighterMeta) -> _Side:
        prop = stats.propulsion
        stam = stats.stamina
        return cls(
            name=name,
            stats=stats,
            meta=meta,
            propulsion=max(prop, 0),
            stamina=max(stam, 0),
            baseline=max(prop, 1),
        )

    @property
    def exhausted(self) -> bool:
        return self.stamina <= 0

    def consume(self) -> bool:
        """Spend one attempt's worth of energy. Returns True if stamina was drained."""
        if self.propulsion > 0:
            self.propulsion = max(0, self.propulsion - math.ceil(self.baseline * PROPULSION_DRAIN_RATE))
            return False
        self.stamina = max(0, self.stamina - math.floor(self.stamina * STAMINA_DRAIN_RATE))
        return True


def dynamic_stats(stats: CombatStats, side: ArenaSide, launch: LaunchType) -> CombatStats:
    """Arena effects first, then the launch multipliers."""
    return apply_launch_modifiers(apply_arena_modifiers(stats, side), launch)


# ---------------------------------------------------------------------------
# Round engine
# ---------------------------------------------------------------------------

def compute_round(
    fighter: Fighter,
    opponent: Fighter,
    side: ArenaSide,
    launch: LaunchType,
    rng: RNG,
    opponent_launch: LaunchType | None = None,
) -> RoundResult:
    """Play one round between ``fighter`` (self) and ``opponent``.

    The opponent fights on the other arena side. When ``opponent_launch`` is
    not given, a random one is drawn from ``rng`` before the first turn.
    """
    side = ArenaSide(side)
    if opponent_launch is None:
        opponent_launch = random_launch(rng)

    sides = {
        Actor.SELF: _Side.start(
            fighter.meta.display_name or DEFAULT_NAMES[Actor.SELF],
            dynamic_stats(fighter.stats, side, launch),
            fighter.meta,
        ),
        Actor.OPPONENT: _Side.start(
            opponent.meta.display_name or DEFAULT_NAMES[Actor.OPPONENT],
            dynamic_stats(opponent.stats, side.opposite, opponent_launch),
            opponent.meta,
        ),
    }
    me, them = sides[Actor.SELF], sides[Actor.OPPONENT]
    logger.debug(
        "Round start: %s %s vs %s %s",
        me.name, me.stats.model_dump(), them.name, them.stats.model_dump(),
    )

    events: list[BattleEvent] = []

    def log(event_type: EventType, actor: Actor, text: str) -> None:
        events.append(BattleEvent(type=event_type, actor=actor, text=text))

    turn = Actor.SELF if me.propulsion >= them.propulsion else Actor.OPPONENT
    steps = 0

    while steps < MAX_ROUND_STEPS:
        steps += 1

        if me.exhausted or them.exhausted:
            if me.exhausted and them.exhausted:
                me.finish = them.finish = FinishType.SPIN
                log(EventType.END, Actor.SELF, "Both blades run out of stamina! Double spin.")
            else:
                spent = Actor.SELF if me.exhausted else Actor.OPPONENT
                sides[spent].finish = FinishType.SPIN
                log(
                    EventType.FINISH, spent.other,
                    f"{sides[spent].name} spins out -- spin finish for {sides[spent.other].name}!",
                )
            break

        attacker, defender = sides[turn], sides[turn.other]
        hit_chance = calculate_hit_chance(attacker.stats, defender.stats, attacker.meta, defender.meta)
        log(EventType.ATTACK, turn, f"{attacker.name} attacks! (accuracy {hit_chance * 100:.0f}%)")

        if rng() < hit_chance:
            finish = calculate_finish(attacker.stats, defender.stats, rng)
            if finish is not FinishType.NONE:
                attacker.finish = finish
                log(EventType.FINISH, turn, f"{attacker.name} lands a {finish.value.upper()} FINISH!")
                break
            log(EventType.ATTACK, turn, f"{attacker.name} connects, but no finish.")
        else:
            log(EventType.MISS, turn, f"{attacker.name} misses!")

        if attacker.consume():
            log(EventType.STAMINA, turn, f"{attacker.name} is out of propulsion (stamina {attacker.stamina:g}).")
        turn = turn.other
    else:
        # Degenerate builds can trade misses forever; call it a double spin.
        me.finish = them.finish = FinishType.SPIN
        log(EventType.END, Actor.SELF, "Round stopped: too long! Double spin.")
        logger.warning("Round hit the %d step limit; scoring as a double spin", MAX_ROUND_STEPS)

    outcome = score_round(me.finish, them.finish)
    logger.debug(
        "Round end after %d steps: %s (%d-%d)",
        steps, outcome.winner.value, outcome.self_score, outcome.opponent_score,
    )
    return RoundResult(
        outcome=outcome,
        events=events,
        self_finish=me.finish,
        opponent_finish=them.finish,
        steps=steps,
    )


# ---------------------------------------------------------------------------
# Match orchestrator
# ---------------------------------------------------------------------------

def compute_match(
    fighter: Fighter,
    opponent: Fighter,
    side: ArenaSide,
    launch: LaunchType,
    rng: RNG,
    on_round: Callable[[int, RoundResult], None] | None = None,
    target_score: int = MATCH_TARGET_SCORE,
    round_delay: float = 0.0,
    max_rounds: int = MAX_MATCH_ROUNDS,
) -> MatchResult:
    """Play rounds until either side reaches ``target_score``.

    The player's launch and arena side are fixed for the whole match; the
    opponent draws a fresh random launch every round. ``on_round`` is called
    after each round with its 1-based number, and ``round_delay`` seconds
    pass between rounds.
    """
    result = MatchResult()

    while result.self_score < target_score and result.opponent_score < target_score:
        if len(result.rounds) >= max_rounds:
            # Safety valve for fighters that can only draw
            logger.warning(
                "Match stopped after %d rounds at %d-%d",
                max_rounds, result.self_score, result.opponent_score,
            )
            break

        if result.rounds and round_delay > 0:
            time.sleep(round_delay)

        round_result = compute_round(fighter, opponent, side, launch, rng)
        result.rounds.append(round_result.outcome)
        result.self_score += round_result.outcome.self_score
        result.opponent_score += round_result.outcome.opponent_score

        if on_round is not None:
            on_round(len(result.rounds), round_result)

    logger.info(
        "Match over after %d rounds: %d-%d (%s)",
        len(result.rounds), result.self_score, result.opponent_score, result.winner.value,
    )
    return result


class BattleEngine:
    """Seeded front end for rounds and matches.

    Owns a ``random.Random`` so a seed replays a whole match. A custom RNG
    callable can be supplied instead, which tests use to script draws.
    """

    def __init__(self, seed: int | None = None, rng: RNG | None = None):
        if seed is None:
            seed = random.randint(0, 2**31 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.draw: RNG = rng if rng is not None else self.rng.random

    def flip_arena_side(self) -> ArenaSide:
        return flip_arena_side(self.draw)

    def compute_round(
        self,
        fighter: Fighter,
        opponent: Fighter,
        side: ArenaSide,
        launch: LaunchType,
        opponent_launch: LaunchType | None = None,
    ) -> RoundResult:
        return compute_round(fighter, opponent, side, launch, self.draw, opponent_launch)

    def compute_match(
        self,
        fighter: Fighter,
        opponent: Fighter,
        side: ArenaSide,
        launch: LaunchType,
        on_round: Callable[[int, RoundResult], None] | None = None,
        target_score: int = MATCH_TARGET_SCORE,
        round_delay: float = 0.0,
    ) -> MatchResult:
        return compute_match(
            fighter, opponent, side, launch, self.draw,
            on_round=on_round,
            target_score=target_score,
            round_delay=round_delay,
        )
