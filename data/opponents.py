# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Random opponent generation from the parts catalog.

An opponent is assembled like a player build: a random blade, an assist
when the blade belongs to the CX line, then a random ratchet and bit. The
parts' stats are summed into a flat opponent record that the record
adapter reads like any other fighter.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from models import CombatStats
from mechanics.modifiers import combine_stats
from data.records import RecordError

logger = logging.getLogger(__name__)

RNG = Callable[[], float]

ASSIST_LINE = "CX"
DEFAULT_IMAGE = "/blades/enemy-default.png"
IMAGE_PREFIX = "/blades/"


class Part(BaseModel):
    """A blade, assist, ratchet or bit as stored in the catalog."""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(
        default="",
        validation_alias=AliasChoices("id", "blade_id", "assist_id", "ratchet_id", "bit_id"),
    )
    name: str
    line: Optional[str] = None
    type: Optional[str] = None
    image_url: Optional[str] = None
    attack: Optional[float] = None
    defense: Optional[float] = None
    stamina: Optional[float] = None
    height: Optional[float] = None
    propulsion: Optional[float] = None
    burst: Optional[float] = None
    weight: Optional[float] = None

    def stats(self) -> CombatStats:
        return CombatStats(**self.model_dump(include=set(CombatStats.model_fields)))


class PartsCatalog(BaseModel):
    blades: list[Part] = Field(default_factory=list)
    assists: list[Part] = Field(default_factory=list)
    ratchets: list[Part] = Field(default_factory=list)
    bits: list[Part] = Field(default_factory=list)

    @classmethod
    def from_catalog(cls, catalog: Mapping) -> PartsCatalog:
        return cls.model_validate(catalog.get("parts", {}))


def _pick(parts: list[Part], rng: RNG) -> Part | None:
    if not parts:
        return None
    return parts[int(rng() * len(parts))]


def resolve_image_url(image_url: str | None) -> str:
    if not image_url:
        return DEFAULT_IMAGE
    if image_url.startswith("http"):
        return image_url
    return f"{IMAGE_PREFIX}{image_url}"


def generate_opponent(catalog: PartsCatalog, rng: RNG) -> dict:
    """Assemble a random opponent record from the catalog.

    Raises:
        RecordError: if the catalog has no blades.
    """
    if not catalog.blades:
        raise RecordError("No blades available to generate an opponent")

    blade = _pick(catalog.blades, rng)
    assist = _pick(catalog.assists, rng) if blade.line == ASSIST_LINE else None
    ratchet = _pick(catalog.ratchets, rng)
    bit = _pick(catalog.bits, rng)

    chosen = [p for p in (blade, assist, ratchet, bit) if p is not None]
    totals = combine_stats(*(p.stats() for p in chosen))

    name_parts = [blade.name]
    if assist:
        name_parts.append(f"+{assist.name}")
    if ratchet:
        name_parts.append(f"-{ratchet.name}")
    if bit:
        name_parts.append(f"-{bit.name}")

    opponent = {
        "enemy_id": blade.id,
        "name": " ".join(name_parts),
        "image_url": resolve_image_url(blade.image_url),
        **totals.model_dump(),
    }
    logger.debug("Generated opponent: %s", opponent)
    return opponent
