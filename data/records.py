# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Adapter between raw fighter records and the battle engine.

Records come from the roster store in several shapes. Flat rows keep
their stats at the root. Hydrated builds carry a ``blade`` object plus
``build.assist`` / ``build.bit`` / ``build.ratchet`` parts whose stats
add up. Everything the engine needs is read here, once, into a
canonical ``Fighter``.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from models import CombatStats, Fighter, LaunchType
from mechanics.fighter_meta import make_meta
from mechanics.modifiers import combine_stats

logger = logging.getLogger(__name__)

_CATALOG_PATH = Path(__file__).resolve().parent / "sample_catalog.json"

_STAT_FIELDS = tuple(CombatStats.model_fields)

BUILD_PART_KEYS = ("assist", "bit", "ratchet")


class RecordError(ValueError):
    """A fighter, part or launch record could not be used."""


# ---------------------------------------------------------------------------
# Stat reads
# ---------------------------------------------------------------------------

def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return value


def read_stats(source: Any) -> CombatStats:
    """Read the numeric stat fields at the top level of a record."""
    if not isinstance(source, Mapping):
        return CombatStats()
    return CombatStats(**{name: _number(source.get(name)) for name in _STAT_FIELDS})


def aggregate_build_stats(record: Mapping) -> CombatStats:
    """Sum the blade's stats with those of its assist, bit and ratchet."""
    build = record.get("build")
    if not isinstance(build, Mapping):
        build = {}
    parts = [read_stats(record.get("blade"))]
    parts.extend(read_stats(build.get(key)) for key in BUILD_PART_KEYS)
    return combine_stats(*parts)


def to_fighter(record: Any, fallback_name: str = "") -> Fighter:
    """Map a raw record to the canonical Fighter the engine accepts.

    Raises:
        RecordError: if the record is not a mapping.
    """
    if not isinstance(record, Mapping):
        raise RecordError(f"Fighter record must be an object, got {type(record).__name__}")

    if isinstance(record.get("blade"), Mapping):
        stats = aggregate_build_stats(record)
    else:
        stats = read_stats(record)

    return Fighter(stats=stats, meta=make_meta(record, fallback_name))


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

def load_catalog(path: Path | None = None) -> dict:
    """Load fighters, parts and launches from JSON."""
    p = path or _CATALOG_PATH
    with open(p) as f:
        catalog = json.load(f)
    if not isinstance(catalog, dict):
        raise RecordError(f"Catalog {p} must be a JSON object")
    logger.debug("Loaded catalog %s (%d fighters)", p, len(catalog.get("fighters", [])))
    return catalog


def load_launches(catalog: Mapping) -> list[LaunchType]:
    return [LaunchType.model_validate(entry) for entry in catalog.get("launches", [])]


def find_launch(launches: list[LaunchType], key: str) -> LaunchType:
    """Find a launch by id, or by name ignoring case."""
    for launch in launches:
        if launch.id == key or launch.name.lower() == key.lower():
            return launch
    known = ", ".join(launch.name for launch in launches) or "none"
    raise RecordError(f"Unknown launch '{key}' (available: {known})")


def record_id(record: Mapping) -> str:
    return str(record.get("id") or record.get("enemy_id") or "")


def find_fighter(catalog: Mapping, fighter_id: str) -> dict:
    for record in catalog.get("fighters", []):
        if isinstance(record, Mapping) and record_id(record) == fighter_id:
            return dict(record)
    raise RecordError(f"No fighter with id '{fighter_id}' in the catalog")
