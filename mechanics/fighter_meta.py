"""Resolves a fighter's static descriptors (bit archetype, height, name).

Fighter records arrive in several shapes: flat rows with the fields at the
root, rows carrying a nested ``bit``/``blade`` object, or full builds nested
under ``build``. Each reader walks a fixed lookup order, takes the first
value that is present, and falls back to a default when that value is not
usable. None of these functions raise.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from models import DEFAULT_STAT, BitType, FighterMeta

_MISSING = object()


def _lookup(source: Any, *path: str) -> Any:
    """Walk a dotted path through nested mappings or attributes."""
    node = source
    for key in path:
        if node is None:
            return _MISSING
        if isinstance(node, Mapping):
            node = node.get(key, _MISSING)
        else:
            node = getattr(node, key, _MISSING)
        if node is _MISSING:
            return _MISSING
    return node


def _first_present(source: Any, paths: list[tuple[str, ...]]) -> Any:
    for path in paths:
        value = _lookup(source, *path)
        if value is not _MISSING and value is not None:
            return value
    return None


_BIT_TYPE_PATHS = [
    ("bit_type",),
    ("bitType",),
    ("bit", "type"),
    ("build", "bit", "type"),
    ("build", "bit_type"),
]

_HEIGHT_PATHS = [
    ("height",),
    ("blade", "height"),
    ("build", "blade", "height"),
]

_NAME_PATHS = [
    ("blade", "name"),
    ("build", "blade", "name"),
    ("name",),
]


def read_bit_type(source: Any) -> BitType:
    """Return the fighter's bit archetype, defaulting to balance."""
    raw = _first_present(source, _BIT_TYPE_PATHS)
    if raw is None:
        return BitType.BALANCE
    if isinstance(raw, BitType):
        return raw
    try:
        return BitType(str(raw).lower())
    except ValueError:
        return BitType.BALANCE


def read_height(source: Any) -> float:
    """Return a positive height, or DEFAULT_STAT when none is usable."""
    raw = _first_present(source, _HEIGHT_PATHS)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return DEFAULT_STAT
    if not math.isfinite(raw) or raw <= 0:
        return DEFAULT_STAT
    return raw


def read_name(source: Any, fallback: str = "") -> str:
    raw = _first_present(source, _NAME_PATHS)
    if raw is None:
        return fallback
    return str(raw)


def make_meta(source: Any, fallback_name: str = "") -> FighterMeta:
    """Build the FighterMeta for a raw fighter record."""
    return FighterMeta(
        bit_type=read_bit_type(source),
        height=read_height(source),
        display_name=read_name(source, fallback_name),
    )
