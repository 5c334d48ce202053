"""In-memory character collection for one play session."""
from __future__ import annotations
import random
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from scanbrawl.core.logging import logger
from .models import Character

@dataclass
class Collection:
    _members: Dict[str, Character] = field(default_factory=dict, init=False, repr=False)

    def add(self, character: Character) -> bool:
        """Store a character unless one with the same id is already present."""
        if character.id in self._members:
            logger.debug("CollectionDuplicate", id=character.id)
            return False
        self._members[character.id] = character
        logger.debug("CollectionAdd", id=character.id, size=len(self._members))
        return True

    def get(self, character_id: str) -> Optional[Character]:
        return self._members.get(character_id)

    def __contains__(self, character: object) -> bool:
        return isinstance(character, Character) and character.id in self._members

    def __iter__(self) -> Iterator[Character]:
        return iter(self._members.values())

    def __len__(self) -> int:
        return len(self._members)

    def opponents_for(self, character: Character) -> List[Character]:
        return [c for c in self._members.values() if c.id != character.id]

    def random_opponent(self, character: Character, rng: Optional[random.Random] = None) -> Optional[Character]:
        pool = self.opponents_for(character)
        if not pool:
            return None
        return (rng or random).choice(pool)

__all__ = ["Collection"]
