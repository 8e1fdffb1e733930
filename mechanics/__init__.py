"""Battle mechanics -- pure functions that resolve hits, finishes and scores."""

from mechanics.fighter_meta import make_meta, read_bit_type, read_height, read_name
from mechanics.modifiers import (
    apply_arena_modifiers,
    apply_launch_modifiers,
    combine_stats,
    flip_arena_side,
    random_launch,
)
from mechanics.hit_chance import calculate_hit_chance
from mechanics.finish import (
    FinishWeights,
    calculate_finish,
    finish_probabilities,
    finish_weights,
)
from mechanics.scoring import score_round

__all__ = [
    "make_meta",
    "read_bit_type",
    "read_height",
    "read_name",
    "apply_arena_modifiers",
    "apply_launch_modifiers",
    "combine_stats",
    "flip_arena_side",
    "random_launch",
    "calculate_hit_chance",
    "FinishWeights",
    "calculate_finish",
    "finish_probabilities",
    "finish_weights",
    "score_round",
]
