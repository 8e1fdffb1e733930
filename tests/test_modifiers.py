# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0", "pydantic>=2.0"]
# ///
"""Tests for the arena and launch modifier pipeline."""

import itertools
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from models import DEFAULT_STAT, ArenaSide, CombatStats, LaunchType
from mechanics.modifiers import (
    apply_arena_modifiers,
    apply_launch_modifiers,
    combine_stats,
    flip_arena_side,
    random_launch,
)


def make_rng(*values):
    it = itertools.cycle(values)
    return lambda: next(it)


def make_stats(**overrides):
    defaults = dict(attack=100, defense=100, stamina=100, height=50,
                    propulsion=100, burst=50, weight=50)
    defaults.update(overrides)
    return CombatStats(**defaults)


# ===========================================================================
# Arena
# ===========================================================================

def test_side_x_boosts_propulsion_and_costs_stamina():
    out = apply_arena_modifiers(make_stats(), ArenaSide.X)
    assert out.propulsion == 120
    assert out.stamina == 80
    print("  test_side_x_boosts_propulsion_and_costs_stamina: PASSED")


def test_side_b_is_the_inverse():
    out = apply_arena_modifiers(make_stats(), ArenaSide.B)
    assert out.propulsion == 80
    assert out.stamina == 120


def test_arena_floors_results():
    out = apply_arena_modifiers(make_stats(propulsion=33, stamina=33), ArenaSide.X)
    assert out.propulsion == 39  # 39.6
    assert out.stamina == 26  # 26.4


def test_arena_leaves_other_stats_alone():
    stats = make_stats(attack=77, weight=12)
    out = apply_arena_modifiers(stats, ArenaSide.B)
    assert out.attack == 77
    assert out.weight == 12
    assert out.height == 50


def test_arena_missing_values_use_default():
    out = apply_arena_modifiers(CombatStats(), ArenaSide.X)
    assert out.propulsion == 60
    assert out.stamina == 40
    assert out.attack is None


def test_arena_non_finite_values_use_default():
    out = apply_arena_modifiers(CombatStats(propulsion=float("inf"), stamina=float("nan")), ArenaSide.X)
    assert out.propulsion == 60
    assert out.stamina == 40


def test_arena_accepts_side_string():
    out = apply_arena_modifiers(make_stats(), "B")
    assert out.propulsion == 80


def test_arena_does_not_mutate_input():
    stats = make_stats()
    apply_arena_modifiers(stats, ArenaSide.X)
    assert stats.propulsion == 100
    assert stats.stamina == 100


def test_opposite_side():
    assert ArenaSide.X.opposite is ArenaSide.B
    assert ArenaSide.B.opposite is ArenaSide.X


# ===========================================================================
# Launch
# ===========================================================================

def test_launch_scales_four_stats():
    launch = LaunchType(attack_modifier=1.5, defense_modifier=0.5,
                        stamina_modifier=1.25, propulsion_modifier=0.75)
    out = apply_launch_modifiers(make_stats(), launch)
    assert out.attack == 150
    assert out.defense == 50
    assert out.stamina == 125
    assert out.propulsion == 75
    assert out.weight == 50
    print("  test_launch_scales_four_stats: PASSED")


def test_launch_floors_results():
    launch = LaunchType(attack_modifier=1.07)
    out = apply_launch_modifiers(make_stats(attack=33), launch)
    assert out.attack == 35  # 35.31


def test_default_launch_is_identity_on_whole_numbers():
    stats = make_stats(attack=61, defense=47, stamina=38, propulsion=55)
    out = apply_launch_modifiers(stats, LaunchType())
    assert (out.attack, out.defense, out.stamina, out.propulsion) == (61, 47, 38, 55)


def test_launch_missing_values_use_default():
    out = apply_launch_modifiers(CombatStats(), LaunchType())
    assert out.attack == DEFAULT_STAT
    assert out.defense == DEFAULT_STAT
    assert out.stamina == DEFAULT_STAT
    assert out.propulsion == DEFAULT_STAT


def test_launch_non_finite_values_use_default():
    launch = LaunchType(attack_modifier=float("inf"), defense_modifier=float("nan"))
    out = apply_launch_modifiers(make_stats(stamina=float("inf")), launch)
    assert out.attack == DEFAULT_STAT
    assert out.defense == DEFAULT_STAT
    assert out.stamina == DEFAULT_STAT
    assert out.propulsion == 100


def test_launch_finish_modifiers_are_not_applied():
    launch = LaunchType(over_modifier=5.0, burst_modifier=5.0, xtreme_modifier=5.0,
                        spin_modifier=5.0, selfko_modifier=5.0)
    stats = make_stats()
    out = apply_launch_modifiers(stats, launch)
    assert out == apply_launch_modifiers(stats, LaunchType())


def test_launch_does_not_mutate_input():
    stats = make_stats()
    apply_launch_modifiers(stats, LaunchType(attack_modifier=2.0))
    assert stats.attack == 100


# ===========================================================================
# Random launch / coin toss
# ===========================================================================

def test_random_launch_midpoint_is_neutral():
    launch = random_launch(make_rng(0.5))
    assert launch.attack_modifier == pytest.approx(1.0)
    assert launch.defense_modifier == pytest.approx(1.0)
    assert launch.stamina_modifier == pytest.approx(1.0)
    assert launch.propulsion_modifier == pytest.approx(1.0)


def test_random_launch_stays_within_ten_percent():
    launch = random_launch(make_rng(0.0, 0.999999, 0.25, 0.75))
    assert launch.attack_modifier == pytest.approx(0.9)
    assert launch.defense_modifier == pytest.approx(1.1, abs=1e-5)
    assert launch.stamina_modifier == pytest.approx(0.95)
    assert launch.propulsion_modifier == pytest.approx(1.05)
    print("  test_random_launch_stays_within_ten_percent: PASSED")


def test_random_launch_finish_modifiers_are_neutral():
    launch = random_launch(make_rng(0.1))
    assert launch.over_modifier == 1.0
    assert launch.burst_modifier == 1.0
    assert launch.xtreme_modifier == 1.0
    assert launch.spin_modifier == 1.0
    assert launch.selfko_modifier == 1.0


def test_random_launch_draws_four_values():
    calls = []

    def rng():
        calls.append(1)
        return 0.5

    random_launch(rng)
    assert len(calls) == 4


@pytest.mark.parametrize("roll,expected", [
    (0.0, ArenaSide.X),
    (0.4999, ArenaSide.X),
    (0.5, ArenaSide.B),
    (0.99, ArenaSide.B),
])
def test_flip_arena_side(roll, expected):
    assert flip_arena_side(make_rng(roll)) is expected


# ===========================================================================
# Stat aggregation
# ===========================================================================

def test_combine_stats_sums_fields():
    blade = CombatStats(attack=40, defense=20, height=30)
    ratchet = CombatStats(attack=5, defense=8, burst=10)
    bit = CombatStats(attack=8, propulsion=25)
    out = combine_stats(blade, ratchet, bit)
    assert out.attack == 53
    assert out.defense == 28
    assert out.height == 30
    assert out.burst == 10
    assert out.propulsion == 25
    print("  test_combine_stats_sums_fields: PASSED")


def test_combine_stats_missing_counts_as_zero():
    out = combine_stats(CombatStats(), CombatStats(weight=3))
    assert out.attack == 0
    assert out.weight == 3


def test_combine_stats_skips_non_finite_values():
    out = combine_stats(CombatStats(attack=float("nan")), CombatStats(attack=5, defense=float("-inf")))
    assert out.attack == 5
    assert out.defense == 0


def test_combine_stats_of_nothing_is_all_zero():
    out = combine_stats()
    assert out.model_dump() == {name: 0 for name in CombatStats.model_fields}
