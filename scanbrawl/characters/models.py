"""Character data model shared by the generator, the collection and battles."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple, Dict, Any, Literal
import math

from scanbrawl.core.errors import CharacterValidationError

Rarity = Literal["common", "rare", "epic", "legendary"]

# Combat defaults for characters built from the product table, which only
# carries hp/attack/defense/speed.
DEFAULT_MISS_CHANCE = 10
DEFAULT_CRIT_CHANCE = 15
DEFAULT_HEAL = 20

@dataclass(frozen=True)
class CharacterStats:
    hp: float
    attack: float
    defense: float
    speed: Optional[float] = None
    miss_chance: float = DEFAULT_MISS_CHANCE  # %
    crit_chance: float = DEFAULT_CRIT_CHANCE  # %
    heal: float = DEFAULT_HEAL                # % of max HP per heal action

@dataclass(frozen=True)
class CollaborationProduct:
    product_name: str
    category: str = ""

@dataclass(frozen=True)
class Collaboration:
    products: Tuple[CollaborationProduct, ...]
    synergy_score: float
    grade: str
    multiplier: float

@dataclass(frozen=True)
class Character:
    id: str
    name: str
    product_name: str
    rarity: Rarity
    stats: CharacterStats
    element: str = ""
    category: str = ""
    description: str = ""
    image_url: str = ""
    jan_code: Optional[str] = None
    is_campaign: bool = False
    multiplier: float = 1.0
    name_jp: Optional[str] = None
    collaboration: Optional[Collaboration] = None

    # Identity is the id alone; structural equality is never used for dedup.
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Character):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def tag(self) -> str:
        """Element when present, else the free-form category."""
        return self.element or self.category

    def to_record(self) -> Dict[str, Any]:
        """Camel-cased dict in the shape the character service returns."""
        s = self.stats
        rec: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "productName": self.product_name,
            "category": self.category,
            "element": self.element,
            "rarity": self.rarity,
            "description": self.description,
            "imageUrl": self.image_url,
            "stats": {
                "hp": s.hp, "attack": s.attack, "defense": s.defense,
                "missChance": s.miss_chance, "critChance": s.crit_chance, "heal": s.heal,
            },
        }
        if s.speed is not None:
            rec["stats"]["speed"] = s.speed
        if self.name_jp:
            rec["nameJp"] = self.name_jp
        if self.collaboration:
            c = self.collaboration
            rec["collaboration"] = {
                "products": [{"productName": p.product_name, "category": p.category} for p in c.products],
                "synergyScore": c.synergy_score,
                "grade": c.grade,
                "multiplier": c.multiplier,
            }
        return rec

def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)

def validate_character(character: Character) -> Character:
    """Raise CharacterValidationError unless the combat numbers are usable."""
    s = character.stats
    for name in ("hp", "attack"):
        v = getattr(s, name)
        if not _is_number(v):
            raise CharacterValidationError(name, f"expected a number, got {v!r}")
        if v <= 0:
            raise CharacterValidationError(name, f"must be positive, got {v}")
    if not _is_number(s.defense) or s.defense < 0:
        raise CharacterValidationError("defense", f"expected a non-negative number, got {s.defense!r}")
    for name in ("miss_chance", "crit_chance", "heal"):
        v = getattr(s, name)
        if not _is_number(v) or not 0 <= v <= 100:
            raise CharacterValidationError(name, f"expected a percentage in [0,100], got {v!r}")
    if character.collaboration is not None and not _is_number(character.collaboration.multiplier):
        raise CharacterValidationError("collaboration.multiplier", f"expected a number, got {character.collaboration.multiplier!r}")
    return character

__all__ = [
    "Rarity","CharacterStats","CollaborationProduct","Collaboration","Character",
    "validate_character","DEFAULT_MISS_CHANCE","DEFAULT_CRIT_CHANCE","DEFAULT_HEAL",
]
