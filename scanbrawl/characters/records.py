"""Conversion of external character records into :class:`Character` values.

Records arrive camel-cased from the character-creation service. They are
checked against ``schema/character.schema.json`` and then against the combat
invariants in :func:`validate_character`; nothing missing is ever defaulted
into arithmetic.
"""
from __future__ import annotations
import json
from functools import lru_cache
from typing import Any, Dict, Mapping

import jsonschema

from scanbrawl.core.errors import CharacterValidationError
from scanbrawl.core.paths import SCHEMA
from .models import (
    Character, CharacterStats, Collaboration, CollaborationProduct, validate_character,
)

_SCHEMA_FILE = SCHEMA / "character.schema.json"

@lru_cache(maxsize=1)
def _schema() -> Dict[str, Any]:
    return json.loads(_SCHEMA_FILE.read_text(encoding="utf-8"))

def _field_path(err: jsonschema.ValidationError) -> str:
    return ".".join(str(p) for p in err.absolute_path) or "<record>"

def character_from_record(record: Mapping[str, Any]) -> Character:
    if not isinstance(record, Mapping):
        raise CharacterValidationError("<record>", f"expected an object, got {type(record).__name__}")
    try:
        jsonschema.validate(dict(record), _schema())
    except jsonschema.ValidationError as e:
        raise CharacterValidationError(_field_path(e), e.message) from e
    raw_stats = record["stats"]
    stats = CharacterStats(
        hp=raw_stats["hp"],
        attack=raw_stats["attack"],
        defense=raw_stats["defense"],
        speed=raw_stats.get("speed"),
        miss_chance=raw_stats["missChance"],
        crit_chance=raw_stats["critChance"],
        heal=raw_stats["heal"],
    )
    collab = None
    raw_collab = record.get("collaboration")
    if raw_collab:
        collab = Collaboration(
            products=tuple(
                CollaborationProduct(p.get("productName", ""), p.get("category", ""))
                for p in raw_collab.get("products", [])
            ),
            synergy_score=raw_collab.get("synergyScore", 0),
            grade=raw_collab.get("grade", ""),
            multiplier=raw_collab["multiplier"],
        )
    character = Character(
        id=record["id"],
        name=record["name"],
        product_name=record.get("productName", ""),
        rarity=record.get("rarity", "common"),
        stats=stats,
        element=record.get("element", ""),
        category=record.get("category", ""),
        description=record.get("description", ""),
        image_url=record.get("imageUrl", ""),
        name_jp=record.get("nameJp"),
        collaboration=collab,
    )
    return validate_character(character)

__all__ = ["character_from_record"]
