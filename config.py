"""Centralized configuration for environment variables."""

import logging
import os

logger = logging.getLogger(__name__)

SEED_ENV = "BLADE_BATTLE_SEED"
ROUND_DELAY_ENV = "BLADE_BATTLE_ROUND_DELAY"
LOG_LEVEL_ENV = "BLADE_BATTLE_LOG_LEVEL"

DEFAULT_ROUND_DELAY = 0.0
DEFAULT_LOG_LEVEL = logging.WARNING


def get_seed() -> int | None:
    """Return the configured RNG seed, or None to seed randomly."""
    raw = os.environ.get(SEED_ENV, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", SEED_ENV, raw)
        return None


def get_round_delay(default: float = DEFAULT_ROUND_DELAY) -> float:
    """Return the pause between rounds in seconds (never negative).

    ``default`` is used when the variable is unset or not a number; an
    explicit 0 is kept.
    """
    raw = os.environ.get(ROUND_DELAY_ENV, "").strip()
    if not raw:
        return default
    try:
        return max(0.0, float(raw))
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", ROUND_DELAY_ENV, raw)
        return default


def get_log_level() -> int:
    """Return the logging level named by the environment (default WARNING)."""
    raw = os.environ.get(LOG_LEVEL_ENV, "").strip()
    if not raw:
        return DEFAULT_LOG_LEVEL
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    if isinstance(level, int):
        return level
    logger.warning("Ignoring %s=%r: unknown log level", LOG_LEVEL_ENV, raw)
    return DEFAULT_LOG_LEVEL
