"""Battle arithmetic: effective stats, damage and heal resolution.

One formula set is used throughout (multiplicative defense mitigation with a
flat damage floor):

    mitigation = 100 / (100 + defense * 10)
    damage     = max(DAMAGE_FLOOR, round(attack * crit_mult * mitigation))

A miss is rolled before the crit and short-circuits it.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol

from scanbrawl.characters.models import Character
from scanbrawl.core.numbers import round_half_up, clamp

CRIT_MULTIPLIER = 1.75
DAMAGE_FLOOR = 50
DEFENSE_WEIGHT = 10

class RandomSource(Protocol):
    def random(self) -> float: ...

@dataclass(frozen=True)
class EffectiveStats:
    hp: int
    attack: int
    defense: int
    miss_chance: float
    crit_chance: float
    heal: float

@dataclass(frozen=True)
class DamageResult:
    damage: int
    missed: bool = False
    crit: bool = False

@dataclass(frozen=True)
class HealResult:
    amount: int   # nominal heal before the max-HP cap
    actual: int   # HP actually restored
    new_hp: int

def effective_multiplier(character: Character) -> float:
    collab = character.collaboration
    if collab is not None and collab.multiplier > 0:
        return collab.multiplier
    return 1.0

def effective_stats(character: Character) -> EffectiveStats:
    m = effective_multiplier(character)
    s = character.stats
    return EffectiveStats(
        hp=max(0, round_half_up(s.hp * m)),
        attack=max(0, round_half_up(s.attack * m)),
        defense=max(0, round_half_up(s.defense * m)),
        miss_chance=s.miss_chance,
        crit_chance=s.crit_chance,
        heal=s.heal,
    )

def roll(rng: RandomSource, pct: float) -> bool:
    return rng.random() * 100 < pct

def mitigation_factor(defense: float) -> float:
    return 100 / (100 + defense * DEFENSE_WEIGHT)

def compute_damage(attacker: EffectiveStats, defender: EffectiveStats, rng: RandomSource) -> DamageResult:
    if roll(rng, attacker.miss_chance):
        return DamageResult(0, missed=True)
    crit = roll(rng, attacker.crit_chance)
    raw = attacker.attack * (CRIT_MULTIPLIER if crit else 1)
    dmg = max(DAMAGE_FLOOR, round_half_up(raw * mitigation_factor(defender.defense)))
    return DamageResult(dmg, crit=crit)

def apply_damage(current_hp: int, max_hp: int, damage: int) -> int:
    return int(clamp(current_hp - damage, 0, max_hp))

def compute_heal(max_hp: int, current_hp: int, heal_pct: float) -> HealResult:
    amount = max(1, round_half_up(max_hp * heal_pct / 100))
    actual = max(0, min(amount, max_hp - current_hp))
    return HealResult(amount, actual, int(clamp(current_hp + amount, 0, max_hp)))

__all__ = [
    "CRIT_MULTIPLIER","DAMAGE_FLOOR","EffectiveStats","DamageResult","HealResult",
    "effective_multiplier","effective_stats","roll","mitigation_factor",
    "compute_damage","apply_damage","compute_heal",
]
