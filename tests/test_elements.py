from scanbrawl.core.elements import element_abbreviation, rarity_stars


def test_element_abbreviations():
    assert element_abbreviation('earth') == 'ETH'
    assert element_abbreviation('Electric') == 'ELE'
    assert element_abbreviation('Snacks') == 'SNA'


def test_rarity_stars():
    assert [rarity_stars(r) for r in ("common", "rare", "epic", "legendary")] == [1, 2, 3, 4]
    assert rarity_stars("mythic") == 1
