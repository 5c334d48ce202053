"""Deterministic character generation from a product barcode.

Stats, element, rarity and multiplier depend only on the identifier (and the
catalog record it matches). The display name is drawn from an unseeded RNG,
so two scans of the same product can be named differently while fighting
identically.
"""
from __future__ import annotations
import random
from typing import Dict, List, Mapping, Optional, Tuple

from scanbrawl.core.elements import ELEMENTS
from scanbrawl.core.logging import logger
from scanbrawl.core.numbers import round_half_up
from scanbrawl.data.products import Product, find_product
from .models import Character, CharacterStats, Rarity

CAMPAIGN_MULTIPLIER = 1.5
STAT_FLOOR = 50
SEED_DIGITS = 6

CATEGORY_ELEMENTS: Dict[str, str] = {
    "Alcohol": "water",
    "Snacks": "earth",
    "Food": "fire",
    "Beverage": "water",
    "Electronics": "electric",
}
DEFAULT_ELEMENT = "earth"

# hp, attack, defense, speed
CATEGORY_BASE_STATS: Dict[str, Tuple[int, int, int, int]] = {
    "Food": (120, 85, 70, 75),
    "Alcohol": (80, 95, 60, 90),
    "Snacks": (90, 75, 85, 80),
    "Beverage": (100, 70, 75, 85),
    "Electronics": (70, 90, 95, 65),
}
DEFAULT_BASE_STATS = (100, 80, 80, 80)

NAME_PREFIXES: Dict[str, List[str]] = {
    "fire": ["Inferno", "Blazing", "Scorching", "Volcanic"],
    "water": ["Aquatic", "Frost", "Tidal", "Sparkling"],
    "earth": ["Stone", "Terra", "Crystal", "Boulder"],
    "electric": ["Thunder", "Volt", "Lightning", "Plasma"],
    "wind": ["Gale", "Tempest", "Storm", "Cyclone"],
}
NAME_SUFFIXES: Dict[str, List[str]] = {
    "fire": ["Demon", "Beast", "Dragon", "Fiend"],
    "water": ["Demon", "Leviathan", "Kraken", "Serpent"],
    "earth": ["Golem", "Titan", "Behemoth", "Giant"],
    "electric": ["Demon", "Elemental", "Wyrm", "Spirit"],
    "wind": ["Djinn", "Wraith", "Phantom", "Elemental"],
}

# Electric has no artwork yet; callers must cope with an empty reference.
ELEMENT_IMAGES: Dict[str, str] = {
    "fire": "/assets/characters/fire.jpg",
    "water": "/assets/characters/water.jpg",
    "earth": "/assets/characters/earth.jpg",
    "electric": "",
    "wind": "/assets/characters/wind.jpg",
}

# Mystery characters never roll legendary.
MYSTERY_RARITIES: Tuple[Rarity, ...] = ("common", "rare", "epic")

_name_rng = random.Random()

def rarity_for_price(price: float) -> Rarity:
    if price > 300:
        return "legendary"
    if price > 200:
        return "epic"
    if price > 150:
        return "rare"
    return "common"

def element_for_category(category: str) -> str:
    return CATEGORY_ELEMENTS.get(category, DEFAULT_ELEMENT)

def seed_from_identifier(identifier: str) -> int:
    """Leading digits of the trailing SEED_DIGITS characters, 0 when there are none."""
    tail = identifier[-SEED_DIGITS:] if identifier else ""
    digits = ""
    for ch in tail.lstrip():
        if ch not in "0123456789":
            break
        digits += ch
    return int(digits) if digits else 0

def digit_checksum(identifier: str) -> int:
    return sum(int(ch) for ch in identifier if ch in "0123456789")

def character_name(product_name: str, element: str, rng: Optional[random.Random] = None) -> str:
    rng = rng or _name_rng
    prefix = rng.choice(NAME_PREFIXES[element])
    suffix = rng.choice(NAME_SUFFIXES[element])
    parts = product_name.split()
    base = parts[0] if parts else product_name
    return f"{prefix} {base} {suffix}"

def _product_character(identifier: str, product: Product, rng: Optional[random.Random]) -> Character:
    element = element_for_category(product.category)
    seed = seed_from_identifier(identifier)
    variance = seed % 20 - 10
    base = CATEGORY_BASE_STATS.get(product.category, DEFAULT_BASE_STATS)
    hp, attack, defense, speed = (max(STAT_FLOOR, v + variance) for v in base)
    multiplier = CAMPAIGN_MULTIPLIER if product.is_campaign else 1.0
    stats = CharacterStats(
        hp=round_half_up(hp * multiplier),
        attack=round_half_up(attack * multiplier),
        defense=round_half_up(defense * multiplier),
        speed=round_half_up(speed * multiplier),
    )
    return Character(
        id=f"char_{identifier}",
        jan_code=identifier,
        name=character_name(product.name, element, rng),
        product_name=product.name,
        element=element,
        category=product.category,
        rarity=rarity_for_price(product.price),
        stats=stats,
        description=f"Born from {product.name}. {product.description}".strip(),
        image_url=product.image_url,
        is_campaign=product.is_campaign,
        multiplier=multiplier,
    )

def _mystery_character(identifier: str) -> Character:
    checksum = digit_checksum(identifier)
    element = ELEMENTS[checksum % len(ELEMENTS)]
    rarity = MYSTERY_RARITIES[checksum % len(MYSTERY_RARITIES)]
    stats = CharacterStats(
        hp=80 + checksum % 30,
        attack=70 + checksum % 25,
        defense=70 + checksum % 25,
        speed=75 + checksum % 20,
    )
    return Character(
        id=f"char_{identifier}",
        jan_code=identifier,
        name=f"Mystery {element.capitalize()} Warrior",
        product_name="Unknown Product",
        element=element,
        rarity=rarity,
        stats=stats,
        description="A mysterious warrior from an unknown product.",
        image_url=ELEMENT_IMAGES[element],
    )

def generate_character(identifier: str, *, rng: Optional[random.Random] = None,
                       catalog: Optional[Mapping[str, Product]] = None) -> Character:
    """Map a barcode to a character. Total over all strings.

    ``rng`` only affects the name; ``catalog`` overrides the bundled product table.
    """
    product = find_product(identifier, catalog)
    if product is None:
        logger.debug("MysteryCharacter", identifier=identifier)
        return _mystery_character(identifier)
    character = _product_character(identifier, product, rng)
    logger.debug("CharacterGenerated", id=character.id, element=character.element, rarity=character.rarity)
    return character

__all__ = [
    "generate_character","rarity_for_price","element_for_category","seed_from_identifier",
    "digit_checksum","character_name","CAMPAIGN_MULTIPLIER","STAT_FLOOR",
]
