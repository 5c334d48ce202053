"""Characters: data model, barcode generator, external records, collection."""
from .models import Character, CharacterStats, Collaboration, CollaborationProduct
from .generator import generate_character
from .records import character_from_record
from .collection import Collection

__all__ = [
    "Character","CharacterStats","Collaboration","CollaborationProduct",
    "generate_character","character_from_record","Collection",
]
