"""Battle service: the entry points the CLI (or any shell) talks to.

``start_battle`` hands back an interactive :class:`BattleSession` in the
``ready`` phase; ``simulate_battle`` plays one out automatically.
"""
from __future__ import annotations
from typing import Literal, TypedDict, List, Optional, Callable
import random

from scanbrawl.characters.models import Character
from scanbrawl.core.logging import logger
from .scheduler import TurnScheduler
from .session import BattleArena, BattleSession, BattleTiming, DEFAULT_LOG_CAPACITY

DEFAULT_MAX_TURNS = 200

class BattleResult(TypedDict):
    outcome: Literal["PLAYER_WIN","PLAYER_LOSS","STALEMATE"]
    battle_id: str
    turns: int
    player_hp: int
    opponent_hp: int
    log: List[str]

def battle_id_for(player: Character, opponent: Character) -> str:
    return f"{player.id}_vs_{opponent.id}"

class BattleService:
    def __init__(self, arena: Optional[BattleArena] = None):
        self.arena = arena or BattleArena()

    def start(self, player: Character, opponent: Character,
              message_cb: Optional[Callable[[str], None]] = None) -> BattleSession:
        logger.debug("BattleCreate", battle_id=battle_id_for(player, opponent))
        return self.arena.start_battle(player, opponent, message_cb=message_cb)

    def simulate(self, player: Character, opponent: Character, *,
                 rng: Optional[random.Random] = None,
                 max_turns: int = DEFAULT_MAX_TURNS,
                 log_capacity: int = DEFAULT_LOG_CAPACITY) -> BattleResult:
        """Auto-play on a private virtual clock; the player always attacks."""
        full_log: List[str] = []
        session = BattleSession(player, opponent, rng=rng, scheduler=TurnScheduler(),
                                timing=BattleTiming(), log_capacity=log_capacity,
                                message_cb=full_log.append)
        outcome = session.run_auto(max_turns=max_turns)
        bid = battle_id_for(player, opponent)
        logger.info("BattleSimulated", battle_id=bid, outcome=outcome, turns=session.turn_count)
        return {
            "outcome": "STALEMATE" if outcome == "ONGOING" else outcome,
            "battle_id": bid,
            "turns": session.turn_count,
            "player_hp": session.player_hp,
            "opponent_hp": session.opponent_hp,
            "log": full_log,
        }

battle_service = BattleService()

def start_battle(player: Character, opponent: Character,
                 message_cb: Optional[Callable[[str], None]] = None) -> BattleSession:
    return battle_service.start(player, opponent, message_cb=message_cb)

def simulate_battle(player: Character, opponent: Character, *,
                    rng: Optional[random.Random] = None,
                    max_turns: int = DEFAULT_MAX_TURNS) -> BattleResult:
    return battle_service.simulate(player, opponent, rng=rng, max_turns=max_turns)

__all__ = ["BattleResult","BattleService","battle_service","start_battle","simulate_battle"]
