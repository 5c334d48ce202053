"""Global element & rarity metadata: colors, abbreviations, stars.

Provides:
  ELEMENTS: the closed set of generated elements, in index order
  RARITIES: rarity tiers from lowest to highest
  ELEMENT_COLORS_HEX: mapping element -> hex color string (#RRGGBB), used as rich styles
  ELEMENT_ABBREVIATIONS: mapping element -> 3-letter abbreviation (upper)
  RARITY_COLORS: mapping rarity -> rich color name
"""
from __future__ import annotations
from typing import Dict, Tuple

ELEMENTS: Tuple[str, ...] = ("fire", "water", "earth", "electric", "wind")
RARITIES: Tuple[str, ...] = ("common", "rare", "epic", "legendary")

ELEMENT_COLORS_HEX: Dict[str, str] = {
    "fire": "#EE8130",
    "water": "#6390F0",
    "earth": "#E2BF65",
    "electric": "#F7D02C",
    "wind": "#A98FF3",
}

ELEMENT_ABBREVIATIONS: Dict[str, str] = {
    "fire": "FIR",
    "water": "WTR",
    "earth": "ETH",
    "electric": "ELE",
    "wind": "WND",
}

RARITY_COLORS: Dict[str, str] = {
    "common": "grey62",
    "rare": "dodger_blue1",
    "epic": "medium_purple1",
    "legendary": "gold1",
}

def element_abbreviation(element: str) -> str:
    return ELEMENT_ABBREVIATIONS.get(element.lower(), element[:3].upper())

def rarity_stars(rarity: str) -> int:
    """Star count shown on cards: common 1 ... legendary 4 (unknown -> 1)."""
    try:
        return RARITIES.index(rarity) + 1
    except ValueError:
        return 1

__all__ = [
    'ELEMENTS','RARITIES','ELEMENT_COLORS_HEX','ELEMENT_ABBREVIATIONS','RARITY_COLORS',
    'element_abbreviation','rarity_stars',
]
