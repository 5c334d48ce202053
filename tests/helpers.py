from scanbrawl.characters.models import Character, CharacterStats, Collaboration


def make_char(cid="char_test", hp=200, attack=100, defense=40, miss=0, crit=0, heal=20,
              multiplier=None, name=None):
    collab = None
    if multiplier is not None:
        collab = Collaboration(products=(), synergy_score=80, grade="A", multiplier=multiplier)
    return Character(
        id=cid,
        name=name or cid,
        product_name="Test Product",
        rarity="common",
        stats=CharacterStats(hp=hp, attack=attack, defense=defense,
                             miss_chance=miss, crit_chance=crit, heal=heal),
        element="fire",
        collaboration=collab,
    )


class FixedRng:
    """random()-only stub returning one value forever."""
    def __init__(self, value):
        self.value = value
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.value

    def choice(self, seq):
        return seq[0]


class SeqRng:
    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.values.pop(0)
