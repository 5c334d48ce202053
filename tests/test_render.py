from rich.console import Console

from scanbrawl.battle.render import hp_bar, character_card, battle_panel
from scanbrawl.battle.scheduler import TurnScheduler
from scanbrawl.battle.session import BattleSession
from scanbrawl.characters.generator import generate_character
from tests.helpers import make_char, FixedRng


def _text(renderable):
    console = Console(record=True, width=100, color_system=None)
    console.print(renderable)
    return console.export_text()


def test_hp_bar_widths():
    assert hp_bar(50, 100, width=10).plain == "█" * 5 + "░" * 5
    assert hp_bar(0, 100, width=4).plain == "░" * 4
    assert hp_bar(500, 100, width=4).plain == "█" * 4


def test_character_card_shows_stats_and_bonus():
    c = generate_character("4901777289628")
    out = _text(character_card(c))
    assert c.name in out
    assert "HP" in out and str(c.stats.hp) in out
    assert "1.5x sponsor bonus" in out
    assert "★★" in out


def test_card_handles_missing_image_and_speed():
    c = make_char("char_x")
    out = _text(character_card(c))
    assert "SPD" not in out


def test_battle_panel_reflects_session():
    s = BattleSession(make_char("char_p"), make_char("char_o", hp=50), rng=FixedRng(0.99),
                      scheduler=TurnScheduler())
    s.start()
    out = _text(battle_panel(s))
    assert "Turn: 0" in out
    assert "Battle Start!" in out
    s.perform_player_action("attack")
    out = _text(battle_panel(s))
    assert "VICTORY" in out
    assert "0/50" in out
