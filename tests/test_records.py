import math
import pytest

from scanbrawl.characters.records import character_from_record
from scanbrawl.core.errors import CharacterValidationError
from scanbrawl.battle.session import BattleSession
from tests.helpers import make_char


def _record(**stats):
    base = {"hp": 120, "attack": 90, "defense": 40, "missChance": 10, "critChance": 20, "heal": 25}
    base.update(stats)
    return {
        "id": "svc_1",
        "name": "Highball Knight",
        "productName": "Suntory Premium Highball",
        "category": "Alcohol",
        "rarity": "epic",
        "stats": base,
        "collaboration": {
            "products": [{"productName": "Highball", "category": "Alcohol"},
                         {"productName": "Pocky", "category": "Snacks"}],
            "synergyScore": 88,
            "grade": "S",
            "multiplier": 1.5,
        },
    }


def test_valid_record_roundtrips_fields():
    c = character_from_record(_record())
    assert c.id == "svc_1"
    assert c.tag == "Alcohol"
    assert c.stats.crit_chance == 20
    assert c.collaboration.multiplier == 1.5
    assert len(c.collaboration.products) == 2
    assert c.to_record()["collaboration"]["grade"] == "S"


def test_missing_hp_rejected():
    rec = _record()
    del rec["stats"]["hp"]
    with pytest.raises(CharacterValidationError):
        character_from_record(rec)


@pytest.mark.parametrize("field", ["missChance", "critChance", "heal"])
def test_missing_combat_stat_rejected(field):
    rec = _record()
    del rec["stats"][field]
    with pytest.raises(CharacterValidationError) as exc:
        character_from_record(rec)
    assert field in str(exc.value)


@pytest.mark.parametrize("bad", [{"hp": 0}, {"hp": "100"}, {"attack": -5}, {"missChance": 150}, {"hp": True}])
def test_bad_numbers_rejected(bad):
    with pytest.raises(CharacterValidationError):
        character_from_record(_record(**bad))


def test_nan_rejected():
    with pytest.raises(CharacterValidationError):
        character_from_record(_record(hp=math.nan))


def test_non_mapping_rejected():
    with pytest.raises(CharacterValidationError):
        character_from_record(["not", "a", "record"])


def test_battle_refuses_malformed_character():
    with pytest.raises(CharacterValidationError):
        BattleSession(make_char(hp=math.nan), make_char("char_b"))
    with pytest.raises(CharacterValidationError):
        BattleSession(make_char(), make_char("char_b", attack=None))
