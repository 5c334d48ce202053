from __future__ import annotations
from typing import Literal
from scanbrawl.battle.mechanics import RandomSource

Action = Literal["attack", "heal"]

LOW_HP_THRESHOLD = 40      # % of max HP
HEAL_CHANCE_LOW = 0.55
HEAL_CHANCE_NORMAL = 0.2

def choose_opponent_action(current_hp: int, max_hp: int, rng: RandomSource) -> Action:
    """Memoryless policy: heal more often when below LOW_HP_THRESHOLD, otherwise attack."""
    hp_pct = current_hp / max_hp * 100 if max_hp > 0 else 0
    chance = HEAL_CHANCE_LOW if hp_pct < LOW_HP_THRESHOLD else HEAL_CHANCE_NORMAL
    return "heal" if rng.random() < chance else "attack"
