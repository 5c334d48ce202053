import random

from scanbrawl.characters.collection import Collection
from scanbrawl.characters.generator import generate_character
from tests.helpers import make_char


def test_dedup_by_id_only():
    col = Collection()
    assert col.add(make_char("char_1", hp=100))
    # Same id, different stats: still a duplicate
    assert not col.add(make_char("char_1", hp=999))
    assert len(col) == 1
    assert col.get("char_1").stats.hp == 100


def test_rescanning_same_barcode_is_duplicate():
    col = Collection()
    assert col.add(generate_character("4902102119917"))
    assert not col.add(generate_character("4902102119917"))


def test_random_opponent_excludes_self():
    col = Collection()
    for i in range(4):
        col.add(make_char(f"char_{i}"))
    me = col.get("char_0")
    rng = random.Random(3)
    for _ in range(20):
        assert col.random_opponent(me, rng).id != "char_0"
    assert [c.id for c in col.opponents_for(me)] == ["char_1", "char_2", "char_3"]


def test_random_opponent_none_when_alone():
    col = Collection()
    me = make_char("char_solo")
    col.add(me)
    assert col.random_opponent(me) is None
    assert me in col
