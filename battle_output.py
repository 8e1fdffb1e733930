# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Battle output formatting.

Turns round results and match results into plain text for the console
runner, builds the display labels for a fighter's build, and paces the
pre-battle countdown.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from typing import Any

from models import BattleOutcome, FinishFlags, MatchResult, Winner
from simulation import BattleEvent, RoundResult

# Display order for a build's parts
PART_KEYS = ("bit", "assist", "ratchet", "lockchip")

COUNTDOWN_STEPS = ["3", "2", "1", "GO SHOOT!"]
COUNTDOWN_DELAY = 0.8  # seconds per step

EMPTY_LABEL = "-"


# ---------------------------------------------------------------------------
# Build labels
# ---------------------------------------------------------------------------

def _name_of(part: Any) -> str | None:
    if isinstance(part, Mapping):
        name = part.get("name")
        if isinstance(name, str) and name:
            return name
    return None


def part_names(record: Mapping) -> list[str]:
    """Names of a fighter's bit, assist, ratchet and lock chip, in that order.

    Each part is looked up under ``build`` first, then at the top level of
    the record. Parts without a name are skipped.
    """
    build = record.get("build")
    if not isinstance(build, Mapping):
        build = {}

    names = []
    for key in PART_KEYS:
        part = build.get(key)
        if part is None:
            part = record.get(key)
        name = _name_of(part)
        if name:
            names.append(name)
    return names


def full_label(blade_name: str | None, parts: list[str] | None = None) -> str:
    """Label like "Dran Sword (Flat · 3-60)".

    Args:
        blade_name: The blade's display name, may be empty.
        parts: Part names from :func:`part_names`.

    Returns:
        The blade name with its parts in parentheses, the parts alone when
        there is no blade name, or "-" when there is nothing to show.
    """
    parts = parts or []
    if not blade_name:
        return " · ".join(parts) if parts else EMPTY_LABEL
    return f"{blade_name} ({' · '.join(parts)})" if parts else blade_name


# ---------------------------------------------------------------------------
# Round and match text
# ---------------------------------------------------------------------------

def format_event(event: BattleEvent) -> str:
    return f"[{event.type.value:<7}] {event.text}"


def _finish_name(flags: FinishFlags) -> str:
    for name in ("xtreme", "over", "burst", "spin"):
        if getattr(flags, name):
            return name.upper()
    return "-"


def format_outcome(outcome: BattleOutcome, self_name: str = "You", opponent_name: str = "Opponent") -> str:
    """One-line summary of a scored round."""
    if outcome.winner is Winner.DRAW:
        return f"Draw ({_finish_name(outcome.self_result)} / {_finish_name(outcome.opponent_result)})"
    if outcome.winner is Winner.SELF:
        return f"{self_name} +{outcome.self_score} ({_finish_name(outcome.self_result)} / {_finish_name(outcome.opponent_result)})"
    return f"{opponent_name} +{outcome.opponent_score} ({_finish_name(outcome.self_result)} / {_finish_name(outcome.opponent_result)})"


def format_round(
    round_number: int,
    result: RoundResult,
    self_name: str = "You",
    opponent_name: str = "Opponent",
    include_events: bool = True,
) -> str:
    """Format a round's event log followed by its scored outcome.

    Args:
        round_number: 1-based round number.
        result: The round to format.
        self_name: Display name for the player's fighter.
        opponent_name: Display name for the opponent.
        include_events: When False only the header and outcome are shown.

    Returns:
        Multi-line text block.
    """
    lines = [f"--- Round {round_number} ---"]
    if include_events:
        lines.extend(f"  {format_event(e)}" for e in result.events)
    lines.append(f"  => {format_outcome(result.outcome, self_name, opponent_name)}")
    return "\n".join(lines)


def format_match_report(
    result: MatchResult,
    self_name: str = "You",
    opponent_name: str = "Opponent",
) -> str:
    """Final scoreboard with the per-round outcomes."""
    lines = [
        "=" * 40,
        f"{self_name} {result.self_score} - {result.opponent_score} {opponent_name}",
        "=" * 40,
    ]
    for i, outcome in enumerate(result.rounds, 1):
        lines.append(f"  R{i:<3} {format_outcome(outcome, self_name, opponent_name)}")

    if result.winner is Winner.SELF:
        lines.append(f"Winner: {self_name}")
    elif result.winner is Winner.OPPONENT:
        lines.append(f"Winner: {opponent_name}")
    else:
        lines.append("No winner (match stopped)")
    return "\n".join(lines)


def match_to_dict(result: MatchResult, rounds: list[RoundResult] | None = None) -> dict:
    """JSON-serializable match summary, with full round logs when given."""
    data = {
        "self_score": result.self_score,
        "opponent_score": result.opponent_score,
        "winner": result.winner.value,
        "rounds": [o.model_dump(mode="json") for o in result.rounds],
    }
    if rounds is not None:
        data["round_logs"] = [r.to_dict() for r in rounds]
    return data


# ---------------------------------------------------------------------------
# Pacing
# ---------------------------------------------------------------------------

def countdown(
    steps: list[str],
    on_step: Callable[[str | None], None],
    delay: float = COUNTDOWN_DELAY,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Show each countdown step, waiting ``delay`` seconds after each one.

    ``on_step(None)`` is called once the countdown is over so the caller
    can clear the display.
    """
    for step in steps:
        on_step(step)
        if delay > 0:
            sleep(delay)
    on_step(None)
