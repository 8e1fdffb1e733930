# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Play a solo blade battle from the sample catalog.

Usage:
    uv run battle.py                                   # random opponent, random side
    uv run battle.py --fighter u-wizard-rod --opponent u-knight-shield
    uv run battle.py --side X --launch "Power Shot" --seed 42
    uv run battle.py --json                            # machine-readable result
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from battle_output import (
    COUNTDOWN_STEPS,
    countdown,
    format_match_report,
    format_round,
    full_label,
    match_to_dict,
    part_names,
)
from config import get_log_level, get_round_delay, get_seed
from data.opponents import PartsCatalog, generate_opponent
from data.records import (
    RecordError,
    find_fighter,
    find_launch,
    load_catalog,
    load_launches,
    to_fighter,
)
from models import ArenaSide
from simulation import BattleEngine, RoundResult

DEFAULT_FIGHTER = "u-dran-sword"
DEFAULT_LAUNCH = "Standard"
RANDOM_OPPONENT = "random"
PACED_ROUND_DELAY = 0.5  # seconds, when --pace is set and no delay is configured


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Play a first-to-7 blade battle between two catalog fighters."
    )
    parser.add_argument(
        "--fighter", default=DEFAULT_FIGHTER,
        help=f"Catalog id of your fighter (default: {DEFAULT_FIGHTER}).",
    )
    parser.add_argument(
        "--opponent", default=RANDOM_OPPONENT,
        help='Catalog id of the opponent, or "random" to assemble one from parts.',
    )
    parser.add_argument(
        "--side", choices=[s.value for s in ArenaSide], default=None,
        help="Arena side for your fighter (default: coin toss).",
    )
    parser.add_argument(
        "--launch", default=DEFAULT_LAUNCH,
        help=f"Launch id or name (default: {DEFAULT_LAUNCH}).",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed for a reproducible battle.",
    )
    parser.add_argument(
        "--catalog", type=Path, default=None,
        help="Path to a catalog JSON file (default: bundled sample).",
    )
    parser.add_argument(
        "--pace", action="store_true",
        help="Show the countdown and pause between rounds.",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print the result as JSON instead of text.",
    )
    parser.add_argument(
        "--quiet", action="store_true",
        help="Only print the final report.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=get_log_level(),
        format="%(levelname)s: %(message)s",
    )

    seed = args.seed if args.seed is not None else get_seed()
    engine = BattleEngine(seed=seed)

    try:
        catalog = load_catalog(args.catalog)
        launch = find_launch(load_launches(catalog), args.launch)
        fighter_record = find_fighter(catalog, args.fighter)
        if args.opponent == RANDOM_OPPONENT:
            opponent_record = generate_opponent(PartsCatalog.from_catalog(catalog), engine.draw)
        else:
            opponent_record = find_fighter(catalog, args.opponent)
        fighter = to_fighter(fighter_record, "You")
        opponent = to_fighter(opponent_record, "Opponent")
    except (OSError, json.JSONDecodeError, RecordError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    side = ArenaSide(args.side) if args.side else engine.flip_arena_side()
    self_name = fighter.meta.display_name
    opponent_name = opponent.meta.display_name
    verbose = not args.quiet and not args.json

    if verbose:
        print(f"{full_label(self_name, part_names(fighter_record))} [{side.value} side, {launch.name}]")
        print(f"  vs {full_label(opponent_name, part_names(opponent_record))}")
        print(f"  seed {engine.seed}")
        if args.pace:
            countdown(COUNTDOWN_STEPS, lambda step: print(f"  {step}") if step else None)

    round_logs: list[RoundResult] = []

    def on_round(number: int, result: RoundResult) -> None:
        round_logs.append(result)
        if verbose:
            print(format_round(number, result, self_name, opponent_name))

    result = engine.compute_match(
        fighter, opponent, side, launch,
        on_round=on_round,
        round_delay=get_round_delay(PACED_ROUND_DELAY) if args.pace else 0.0,
    )

    if args.json:
        print(json.dumps(match_to_dict(result, round_logs), indent=2))
    else:
        print(format_match_report(result, self_name, opponent_name))
    return 0


if __name__ == "__main__":
    sys.exit(main())
