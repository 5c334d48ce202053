import random

from scanbrawl.battle.mechanics import (
    effective_stats, compute_damage, compute_heal, apply_damage, mitigation_factor,
    DAMAGE_FLOOR, CRIT_MULTIPLIER,
)
from tests.helpers import make_char, FixedRng, SeqRng


def test_example_scenario_floor_damage():
    player = effective_stats(make_char(attack=100, miss=0, crit=0))
    opponent = effective_stats(make_char("char_o", hp=200, defense=40))
    assert mitigation_factor(40) == 0.2
    res = compute_damage(player, opponent, FixedRng(0.5))
    assert res.damage == 50
    assert not res.missed and not res.crit


def test_zero_defense_means_no_mitigation():
    attacker = effective_stats(make_char(attack=300))
    defender = effective_stats(make_char("char_o", defense=0))
    assert compute_damage(attacker, defender, FixedRng(0.99)).damage == 300


def test_crit_multiplier():
    attacker = effective_stats(make_char(attack=1000, crit=100))
    defender = effective_stats(make_char("char_o", defense=0))
    res = compute_damage(attacker, defender, FixedRng(0.5))
    assert res.crit
    assert res.damage == int(1000 * CRIT_MULTIPLIER)


def test_miss_precedes_crit():
    attacker = effective_stats(make_char(miss=100, crit=100))
    defender = effective_stats(make_char("char_o"))
    rng = SeqRng([0.0, 0.0])
    res = compute_damage(attacker, defender, rng)
    assert res.damage == 0 and res.missed and not res.crit
    assert rng.calls == 1  # crit never rolled


def test_hits_never_below_floor():
    rng = random.Random(5)
    attacker = effective_stats(make_char(attack=1, miss=0, crit=50))
    defender = effective_stats(make_char("char_o", defense=10_000))
    for _ in range(200):
        assert compute_damage(attacker, defender, rng).damage == DAMAGE_FLOOR


def test_apply_damage_never_negative():
    assert apply_damage(30, 200, 50) == 0
    assert apply_damage(200, 200, 0) == 200


def test_heal_at_full_hp_is_zero():
    res = compute_heal(200, 200, 20)
    assert res.amount == 40
    assert res.actual == 0
    assert res.new_hp == 200


def test_heal_is_capped_at_max():
    res = compute_heal(200, 190, 20)
    assert res.actual == 10
    assert res.new_hp == 200


def test_heal_minimum_one():
    res = compute_heal(3, 1, 10)
    assert res.amount == 1
    assert res.new_hp == 2


def test_collaboration_multiplier_scales_big_stats_only():
    eff = effective_stats(make_char(hp=101, attack=80, defense=41, miss=5, crit=10, heal=20, multiplier=1.5))
    assert (eff.hp, eff.attack, eff.defense) == (152, 120, 62)
    assert (eff.miss_chance, eff.crit_chance, eff.heal) == (5, 10, 20)


def test_fractional_multiplier_scales_down():
    eff = effective_stats(make_char(hp=200, attack=100, defense=40, multiplier=0.5))
    assert (eff.hp, eff.attack, eff.defense) == (100, 50, 20)


def test_non_positive_multiplier_is_no_boost():
    for m in (0, -2):
        eff = effective_stats(make_char(hp=101, multiplier=m))
        assert eff.hp == 101
