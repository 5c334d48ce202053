from __future__ import annotations
import argparse
import random
import time
from dataclasses import asdict
from typing import Callable, Optional, Sequence

from rich.console import Console
from rich.table import Table

from scanbrawl.system.settings import Settings, SettingsData
from scanbrawl.core.logging import logger
from scanbrawl.core.errors import ScanBrawlError
from scanbrawl.characters.models import Character
from scanbrawl.characters.generator import generate_character, rarity_for_price, element_for_category
from scanbrawl.characters.collection import Collection
from scanbrawl.data.products import get_catalog
from scanbrawl.battle.scheduler import TurnScheduler
from scanbrawl.battle.session import BattleArena, BattleSession, BattleTiming
from scanbrawl.battle.service import simulate_battle
from scanbrawl.battle.render import character_card, battle_panel

console = Console()

_ACTION_KEYS = {"a": "attack", "attack": "attack", "h": "heal", "heal": "heal"}

class GameContext:
    """Per-run state: settings, the session collection and the battle arena."""

    def __init__(self, settings: Settings, *, rng: Optional[random.Random] = None,
                 sleep: Optional[Callable[[float], None]] = time.sleep,
                 input_fn: Callable[[str], str] = input,
                 out: Optional[Console] = None):
        self.settings = settings
        self.collection = Collection()
        self.rng = rng or random.Random()
        self.sleep = sleep
        self.input = input_fn
        self.out = out or console
        timing = BattleTiming().scaled(settings.data.delay_scale)
        self.arena = BattleArena(TurnScheduler(), rng=self.rng, timing=timing,
                                 log_capacity=settings.data.log_capacity)
        settings.on_change(self._settings_changed)

    def _settings_changed(self, data: SettingsData):
        # Takes effect from the next battle; a running one keeps its pacing.
        self.arena.timing = BattleTiming().scaled(data.delay_scale)
        self.arena.log_capacity = data.log_capacity
        self.settings.apply_log_level()

    def scan(self, code: str) -> Character:
        character = generate_character(code)
        added = self.collection.add(character)
        self.out.print(character_card(character))
        if not added:
            self.out.print("[dim]Already in your collection.[/dim]")
        return character

    def play_battle(self, player: Character, opponent: Character, auto: bool = False) -> BattleSession:
        session = self.arena.start_battle(player, opponent)
        session.start()
        self.out.print(battle_panel(session))
        while not session.is_over():
            if session.phase != "player_turn":
                if self.arena.scheduler.run_until_idle(sleep=self.sleep) == 0:
                    break
                self.out.print(battle_panel(session))
                continue
            if auto:
                action = "attack"
            else:
                raw = self.input("[A]ttack / [H]eal / [Q]uit > ").strip().lower()
                if raw in {"q", "quit"}:
                    self.arena.close()
                    self.out.print("[yellow]You fled the battle.[/yellow]")
                    return session
                action = _ACTION_KEYS.get(raw)
                if action is None:
                    continue
            session.perform_player_action(action)  # type: ignore[arg-type]
            self.out.print(battle_panel(session))
        return session

def _products_table() -> Table:
    table = Table(title="Known products")
    for col in ("JAN", "Name", "Category", "Price", "Element", "Rarity", "Campaign"):
        table.add_column(col)
    for code, p in sorted(get_catalog().items()):
        table.add_row(code, p.name, p.category, str(p.price), element_for_category(p.category),
                      rarity_for_price(p.price), "yes" if p.is_campaign else "")
    return table

def _settings_table(data: SettingsData) -> Table:
    table = Table(title="Settings")
    table.add_column("Key")
    table.add_column("Value")
    for key, value in asdict(data).items():
        table.add_row(key, str(value))
    return table

def _interactive(ctx: GameContext):
    ctx.out.print("Commands: scan CODE | list | battle ID (OPPONENT_ID) | speed 1-3 | quit")
    while True:
        try:
            line = ctx.input("> ").strip()
        except EOFError:
            break
        if not line:
            continue
        cmd, *args = line.split()
        cmd = cmd.lower()
        if cmd in {"quit", "q", "exit"}:
            break
        if cmd == "scan" and args:
            ctx.scan(args[0])
        elif cmd == "list":
            if not len(ctx.collection):
                ctx.out.print("Your collection is empty.")
            for c in ctx.collection:
                ctx.out.print(f"{c.id}  {c.name}  ({c.rarity}, HP {c.stats.hp})", markup=False)
        elif cmd == "battle" and args:
            player = ctx.collection.get(args[0])
            if player is None:
                ctx.out.print(f"No character {args[0]} in the collection.", markup=False)
                continue
            if len(args) > 1:
                opponent = ctx.collection.get(args[1])
            else:
                opponent = ctx.collection.random_opponent(player, ctx.rng)
            if opponent is None or opponent.id == player.id:
                ctx.out.print("Scan at least one other character to battle.")
                continue
            ctx.play_battle(player, opponent)
        elif cmd == "speed" and args and args[0] in {"1", "2", "3"}:
            ctx.settings.update(battle_speed=int(args[0]))
            ctx.settings.save()
            ctx.out.print(f"Battle speed set to {args[0]}.")
        else:
            ctx.out.print(f"Unknown command: {line}", markup=False)
    ctx.arena.close()

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scanbrawl", description="Scan product barcodes, collect characters, battle them.")
    parser.add_argument("--seed", type=int, default=None, help="Seed battle randomness")
    sub = parser.add_subparsers(dest="command")
    p_scan = sub.add_parser("scan", help="Generate characters from barcodes")
    p_scan.add_argument("codes", nargs="+")
    sub.add_parser("products", help="List the bundled product catalog")
    p_battle = sub.add_parser("battle", help="Fight one barcode against another")
    p_battle.add_argument("player")
    p_battle.add_argument("opponent")
    p_battle.add_argument("--auto", action="store_true", help="Always attack, no prompts")
    p_sim = sub.add_parser("simulate", help="Auto-play a battle and print the result")
    p_sim.add_argument("player")
    p_sim.add_argument("opponent")
    p_sim.add_argument("--max-turns", type=int, default=200)
    sub.add_parser("play", help="Interactive session with an in-memory collection")
    p_set = sub.add_parser("settings", help="Show or change saved settings")
    p_set.add_argument("--speed", type=int, choices=(1, 2, 3), dest="battle_speed",
                       help="Battle pacing: 1 fast, 2 normal, 3 slow")
    p_set.add_argument("--log-level", choices=("DEBUG", "INFO", "WARN", "ERROR"))
    p_set.add_argument("--debug", action=argparse.BooleanOptionalAction, default=None)
    p_set.add_argument("--log-capacity", type=int, help="Battle log lines kept on screen")
    return parser

def run(argv: Optional[Sequence[str]] = None, *, ctx: Optional[GameContext] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = ctx.settings if ctx else Settings.load()
    settings.apply_log_level()
    rng = random.Random(args.seed) if args.seed is not None else None
    ctx = ctx or GameContext(settings, rng=rng)
    try:
        if args.command == "scan":
            for code in args.codes:
                ctx.scan(code)
        elif args.command == "products":
            ctx.out.print(_products_table())
        elif args.command == "battle":
            player = generate_character(args.player)
            opponent = generate_character(args.opponent)
            session = ctx.play_battle(player, opponent, auto=args.auto)
            logger.info("BattleOutcome", outcome=session.outcome(), turns=session.turn_count)
            ctx.out.print(f"[bold]{session.outcome()}[/bold] after {session.turn_count} turns")
        elif args.command == "settings":
            changes = {k: getattr(args, k) for k in ("battle_speed", "log_level", "debug", "log_capacity")
                       if getattr(args, k) is not None}
            if changes:
                ctx.settings.update(**changes)
                ctx.settings.save()
            ctx.out.print(_settings_table(ctx.settings.data))
        elif args.command == "simulate":
            result = simulate_battle(generate_character(args.player), generate_character(args.opponent),
                                     rng=ctx.rng, max_turns=args.max_turns)
            for line in result["log"]:
                ctx.out.print(line, markup=False)
            ctx.out.print(f"[bold]{result['outcome']}[/bold] after {result['turns']} turns "
                          f"(you {result['player_hp']} HP, foe {result['opponent_hp']} HP)")
        else:
            _interactive(ctx)
    except ScanBrawlError as e:
        logger.error("CommandFailed", command=args.command, error=str(e))
        return 1
    return 0

if __name__ == "__main__":
    raise SystemExit(run())
