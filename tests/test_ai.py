from scanbrawl.battle.ai import choose_opponent_action
from tests.helpers import FixedRng


def test_low_hp_heals_more_often():
    # 0.5 is under the low-HP heal chance (0.55) but over the normal one (0.2)
    assert choose_opponent_action(30, 100, FixedRng(0.5)) == "heal"
    assert choose_opponent_action(80, 100, FixedRng(0.5)) == "attack"


def test_threshold_is_strictly_below_forty_percent():
    assert choose_opponent_action(40, 100, FixedRng(0.3)) == "attack"
    assert choose_opponent_action(39, 100, FixedRng(0.3)) == "heal"


def test_normal_heal_chance():
    assert choose_opponent_action(100, 100, FixedRng(0.1)) == "heal"
    assert choose_opponent_action(100, 100, FixedRng(0.2)) == "attack"
