"""Scan Brawl: barcode-generated characters and turn-based battles."""
from scanbrawl.characters import Character, Collection, generate_character, character_from_record
from scanbrawl.battle import start_battle, simulate_battle

__version__ = "0.1.0"

__all__ = [
    "Character","Collection","generate_character","character_from_record",
    "start_battle","simulate_battle","__version__",
]
