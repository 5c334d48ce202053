import json
import random
from rich.console import Console

from scanbrawl.cli import GameContext, run
from scanbrawl.system.settings import Settings, SettingsData
from scanbrawl.battle.session import BattleTiming
from scanbrawl.core.logging import logger


def _ctx(tmp_path, inputs=(), seed=1):
    script = list(inputs)
    def fake_input(prompt):
        if prompt.startswith("[A]ttack"):
            return "a"
        if not script:
            raise EOFError
        return script.pop(0)
    settings = Settings(SettingsData(), tmp_path / "s.json")
    out = Console(record=True, width=120, color_system=None)
    return GameContext(settings, rng=random.Random(seed), sleep=None, input_fn=fake_input, out=out)


def test_scan_prints_card_and_collects(tmp_path):
    ctx = _ctx(tmp_path)
    assert run(["scan", "4902102119917", "4902102119917"], ctx=ctx) == 0
    text = ctx.out.export_text()
    assert "Pocky" in text
    assert "Already in your collection." in text
    assert len(ctx.collection) == 1


def test_products_table(tmp_path):
    ctx = _ctx(tmp_path)
    assert run(["products"], ctx=ctx) == 0
    text = ctx.out.export_text()
    assert "4901777289628" in text
    assert "legendary" in text


def test_auto_battle_finishes(tmp_path):
    ctx = _ctx(tmp_path)
    assert run(["battle", "4901005510111", "4902430625937", "--auto"], ctx=ctx) == 0
    session = ctx.arena.active
    assert session.phase == "finished"
    assert session.winner in ("player", "opponent")


def test_simulate_prints_outcome(tmp_path):
    ctx = _ctx(tmp_path)
    assert run(["simulate", "4901005510111", "12345"], ctx=ctx) == 0
    text = ctx.out.export_text()
    assert "PLAYER_WIN" in text or "PLAYER_LOSS" in text


def test_interactive_play_session(tmp_path):
    ctx = _ctx(tmp_path, inputs=[
        "scan 4901005510111",
        "battle char_4901005510111",         # nobody else to fight yet
        "scan 4902102119917",
        "list",
        "battle char_4901005510111",
        "quit",
    ])
    assert run(["play"], ctx=ctx) == 0
    text = ctx.out.export_text()
    assert "Scan at least one other character to battle." in text
    assert "char_4902102119917" in text
    assert "VICTORY" in text or "DEFEAT" in text


def test_battle_prints_outcome(tmp_path):
    ctx = _ctx(tmp_path)
    assert run(["battle", "4901005510111", "4902430625937", "--auto"], ctx=ctx) == 0
    assert ctx.arena.active.outcome() in ctx.out.export_text()


def test_settings_command_updates_and_saves(tmp_path):
    ctx = _ctx(tmp_path)
    assert run(["settings", "--speed", "1", "--log-capacity", "6"], ctx=ctx) == 0
    saved = json.loads((tmp_path / "s.json").read_text())
    assert saved["battle_speed"] == 1
    assert saved["log_capacity"] == 6
    assert ctx.arena.timing == BattleTiming().scaled(0.5)
    assert ctx.arena.log_capacity == 6
    assert "battle_speed" in ctx.out.export_text()
    logger.set_level("INFO")


def test_settings_command_without_flags_only_shows(tmp_path):
    ctx = _ctx(tmp_path)
    assert run(["settings"], ctx=ctx) == 0
    assert not (tmp_path / "s.json").exists()
    assert "log_capacity" in ctx.out.export_text()


def test_speed_command_in_play(tmp_path):
    ctx = _ctx(tmp_path, inputs=["speed 3", "quit"])
    assert run(["play"], ctx=ctx) == 0
    assert ctx.settings.data.battle_speed == 3
    assert ctx.arena.timing == BattleTiming().scaled(1.5)
    assert "Battle speed set to 3." in ctx.out.export_text()
    logger.set_level("INFO")
