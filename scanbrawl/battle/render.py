"""Rich renderables for character cards and the battle screen."""
from __future__ import annotations
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.box import ROUNDED, HEAVY

from scanbrawl.characters.models import Character
from scanbrawl.core.elements import ELEMENT_COLORS_HEX, RARITY_COLORS, element_abbreviation, rarity_stars
from .mechanics import effective_multiplier
from .session import BattleSession

def hp_bar(current: int, max_hp: int, width: int = 20) -> Text:
    if max_hp <= 0:
        return Text("█" * width, style="red")
    current = max(0, min(current, max_hp))
    ratio = current / max_hp
    filled = int(round(ratio * width))
    if ratio > 0.5:
        color = "green"
    elif ratio > 0.2:
        color = "yellow"
    else:
        color = "red"
    bar = Text("█" * filled, style=color)
    bar.append("░" * (width - filled), style="grey37")
    return bar

def _tag_text(character: Character) -> Text:
    tag = character.tag or "?"
    color = ELEMENT_COLORS_HEX.get(tag.lower(), "white")
    return Text(element_abbreviation(tag), style=f"bold {color}")

def _stars(character: Character) -> Text:
    return Text("★" * rarity_stars(character.rarity), style=RARITY_COLORS.get(character.rarity, "white"))

def character_card(character: Character) -> Panel:
    s = character.stats
    table = Table.grid(padding=(0, 2))
    table.add_column(style="cyan")
    table.add_column(justify="right")
    table.add_row("HP", str(s.hp))
    table.add_row("ATK", str(s.attack))
    table.add_row("DEF", str(s.defense))
    if s.speed is not None:
        table.add_row("SPD", str(s.speed))
    table.add_row("Miss", f"{s.miss_chance}%")
    table.add_row("Crit", f"{s.crit_chance}%")
    table.add_row("Heal", f"{s.heal}%")
    header = Text.assemble(_stars(character), " ", _tag_text(character), " ", (character.rarity.upper(), "bold"))
    body = [header, Text(character.product_name, style="dim"), table]
    if character.multiplier > 1:
        body.append(Text(f"{character.multiplier}x sponsor bonus", style="bold yellow"))
    m = effective_multiplier(character)
    if character.collaboration is not None and m > 1:
        c = character.collaboration
        body.append(Text(f"Collab {c.grade} ({c.synergy_score}) x{m}", style="bold magenta"))
    if character.description:
        body.append(Text(character.description, style="italic"))
    return Panel(Group(*body), title=Text(character.name), box=ROUNDED,
                 border_style=RARITY_COLORS.get(character.rarity, "white"))

def _fighter_row(label: str, character: Character, hp: int, max_hp: int, active: bool) -> Text:
    line = Text(("▶ " if active else "  ") + f"{label}: ", style="bold" if active else "")
    line.append(character.name)
    line.append(" ")
    line.append_text(hp_bar(hp, max_hp))
    line.append(f" {hp}/{max_hp}")
    return line

def battle_panel(session: BattleSession) -> Panel:
    rows = [
        Text(f"Turn: {session.turn_count}", style="cyan"),
        _fighter_row("Foe", session.opponent, session.opponent_hp, session.opponent_max_hp,
                     session.phase == "opponent_turn"),
        _fighter_row("You", session.player, session.player_hp, session.player_max_hp,
                     session.phase == "player_turn"),
        Text(""),
    ]
    rows.extend(Text(line) for line in session.log)
    if session.winner == "player":
        title = "VICTORY"
    elif session.winner == "opponent":
        title = "DEFEAT"
    else:
        title = "BATTLE"
    return Panel(Group(*rows), title=title, box=HEAVY, border_style="cyan")

__all__ = ["hp_bar","character_card","battle_panel"]
