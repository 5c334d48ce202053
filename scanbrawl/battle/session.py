"""Battle session orchestration for 1v1 character battles.

A session owns the mutable battle state (phase, HP, turn counter, log,
winner). Opponent turns are paced through a :class:`TurnScheduler`; every
deferred step is bound to the session's generation token and re-reads HP from
the session when it fires, so a closed or finished battle is never touched.

Phases::

    ready -> player_turn -> opponent_turn -> player_turn -> ... -> finished
"""
from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Literal, Optional, Tuple
import itertools
import random

from scanbrawl.characters.models import Character, validate_character
from scanbrawl.core.errors import CharacterValidationError
from scanbrawl.core.logging import logger
from .ai import Action, choose_opponent_action
from .mechanics import EffectiveStats, effective_stats, compute_damage, apply_damage, compute_heal
from .scheduler import TimerHandle, TurnScheduler

Phase = Literal["ready", "player_turn", "opponent_turn", "finished"]
Side = Literal["player", "opponent"]
Outcome = Literal["PLAYER_WIN", "PLAYER_LOSS", "STALEMATE", "ONGOING"]

ACTIONS: Tuple[Action, ...] = ("attack", "heal")
DEFAULT_LOG_CAPACITY = 4

@dataclass(frozen=True)
class BattleTiming:
    opponent_delay: float = 1.0   # player action -> opponent turn begins
    action_delay: float = 0.7     # opponent "thinks" before acting
    handoff_delay: float = 0.9    # opponent action -> back to the player

    def scaled(self, factor: float) -> "BattleTiming":
        return BattleTiming(self.opponent_delay * factor, self.action_delay * factor, self.handoff_delay * factor)

_generations = itertools.count(1)

class BattleSession:
    def __init__(self, player: Character, opponent: Character, *,
                 rng: Optional[random.Random] = None,
                 scheduler: Optional[TurnScheduler] = None,
                 timing: Optional[BattleTiming] = None,
                 log_capacity: int = DEFAULT_LOG_CAPACITY,
                 message_cb: Optional[Callable[[str], None]] = None):
        validate_character(player)
        validate_character(opponent)
        self.player = player
        self.opponent = opponent
        self.player_stats: EffectiveStats = effective_stats(player)
        self.opponent_stats: EffectiveStats = effective_stats(opponent)
        for who, st in (("player", self.player_stats), ("opponent", self.opponent_stats)):
            if st.hp <= 0:
                raise CharacterValidationError("hp", f"{who} effective hp rounds to {st.hp}")
        self.rng = rng or random.Random()
        self.scheduler = scheduler or TurnScheduler()
        self.timing = timing or BattleTiming()
        self.message_cb = message_cb
        self.generation = next(_generations)
        self._phase: Phase = "ready"
        self._player_hp = self.player_stats.hp
        self._opponent_hp = self.opponent_stats.hp
        self._turn_count = 0
        self._log: Deque[str] = deque(maxlen=max(1, log_capacity))
        self._winner: Optional[Side] = None
        self._closed = False
        self._timers: List[TimerHandle] = []

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    @property
    def phase(self) -> Phase: return self._phase

    @property
    def player_hp(self) -> int: return self._player_hp

    @property
    def opponent_hp(self) -> int: return self._opponent_hp

    @property
    def player_max_hp(self) -> int: return self.player_stats.hp

    @property
    def opponent_max_hp(self) -> int: return self.opponent_stats.hp

    @property
    def turn_count(self) -> int: return self._turn_count

    @property
    def log(self) -> Tuple[str, ...]: return tuple(self._log)

    @property
    def winner(self) -> Optional[Side]: return self._winner

    @property
    def closed(self) -> bool: return self._closed

    def is_over(self) -> bool:
        return self._phase == "finished"

    def outcome(self) -> Outcome:
        if self._winner == "player":
            return "PLAYER_WIN"
        if self._winner == "opponent":
            return "PLAYER_LOSS"
        if self._closed:
            return "STALEMATE"
        return "ONGOING"

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------
    def start(self) -> bool:
        if self._closed or self._phase != "ready":
            return False
        self._phase = "player_turn"
        self._msg("Battle Start!")
        logger.info("BattleStart", player=self.player.id, opponent=self.opponent.id, generation=self.generation)
        return True

    def perform_player_action(self, action: Action) -> bool:
        """Resolve one player action. Returns False (and changes nothing) when not accepted."""
        if action not in ACTIONS:
            raise ValueError(f"Unknown action {action!r}; expected one of {ACTIONS}")
        if self._closed or self._phase != "player_turn" or self._winner is not None:
            logger.debug("ActionIgnored", action=action, phase=self._phase)
            return False
        self._phase = "opponent_turn"
        self._turn_count += 1
        if action == "attack":
            res = compute_damage(self.player_stats, self.opponent_stats, self.rng)
            self._opponent_hp = apply_damage(self._opponent_hp, self.opponent_stats.hp, res.damage)
            if res.missed:
                self._msg("You missed!")
            elif res.crit:
                self._msg(f"CRIT! You dealt {res.damage} damage!")
            else:
                self._msg(f"You dealt {res.damage} damage!")
        else:
            heal = compute_heal(self.player_stats.hp, self._player_hp, self.player_stats.heal)
            self._player_hp = heal.new_hp
            self._msg(f"You healed {heal.actual} HP!")
        logger.debug("PlayerAction", action=action, turn=self._turn_count,
                     player_hp=self._player_hp, opponent_hp=self._opponent_hp)
        if not self._check_end():
            self._schedule(self.timing.opponent_delay, self._begin_opponent_turn)
        return True

    def close(self):
        """Discard the session: pending steps are cancelled and can never fire."""
        if self._closed:
            return
        self._closed = True
        self.generation = next(_generations)
        self._cancel_timers()
        logger.debug("BattleClosed", player=self.player.id, opponent=self.opponent.id)

    # ------------------------------------------------------------------
    # Opponent turn
    # ------------------------------------------------------------------
    def _begin_opponent_turn(self):
        self._phase = "opponent_turn"
        self._schedule(self.timing.action_delay, self._resolve_opponent_action)

    def _resolve_opponent_action(self):
        action = choose_opponent_action(self._opponent_hp, self.opponent_stats.hp, self.rng)
        if action == "heal":
            heal = compute_heal(self.opponent_stats.hp, self._opponent_hp, self.opponent_stats.heal)
            self._opponent_hp = heal.new_hp
            self._msg(f"Opponent healed {heal.actual} HP!")
        else:
            res = compute_damage(self.opponent_stats, self.player_stats, self.rng)
            self._player_hp = apply_damage(self._player_hp, self.player_stats.hp, res.damage)
            if res.missed:
                self._msg("Opponent missed!")
            elif res.crit:
                self._msg(f"Opponent CRIT! {res.damage} damage!")
            else:
                self._msg(f"Opponent dealt {res.damage} damage!")
        logger.debug("OpponentAction", action=action, player_hp=self._player_hp, opponent_hp=self._opponent_hp)
        if not self._check_end():
            self._schedule(self.timing.handoff_delay, self._hand_back)

    def _hand_back(self):
        if self._player_hp > 0 and self._opponent_hp > 0:
            self._phase = "player_turn"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _schedule(self, delay: float, step: Callable[[], None]):
        token = self.generation
        def guarded():
            if self._is_live(token):
                step()
            else:
                logger.debug("StaleStepSkipped", step=step.__name__, token=token, generation=self.generation)
        self._timers = [t for t in self._timers if t.active]
        self._timers.append(self.scheduler.call_later(delay, guarded))

    def _is_live(self, token: int) -> bool:
        return not self._closed and token == self.generation and self._winner is None

    def _check_end(self) -> bool:
        # Only one side's HP changes per action, so at most one branch can apply.
        if self._opponent_hp <= 0:
            self._finish("player", "Victory!")
            return True
        if self._player_hp <= 0:
            self._finish("opponent", "Defeat...")
            return True
        return False

    def _finish(self, winner: Side, message: str):
        if self._winner is not None:
            return
        self._winner = winner
        self._phase = "finished"
        self._cancel_timers()
        self._msg(message)
        logger.info("BattleFinished", winner=winner, turns=self._turn_count)

    def _cancel_timers(self):
        for t in self._timers:
            t.cancel()
        self._timers.clear()

    def _msg(self, text: str):
        self._log.append(text)
        if self.message_cb:
            self.message_cb(text)

    # ------------------------------------------------------------------
    # Auto play
    # ------------------------------------------------------------------
    def run_auto(self, max_turns: int = 200,
                 choose: Optional[Callable[["BattleSession"], Action]] = None,
                 sleep: Optional[Callable[[float], None]] = None) -> Outcome:
        """Play the player side automatically (attack unless ``choose`` says otherwise)."""
        self.start()
        while not self.is_over() and not self._closed and self._turn_count < max_turns:
            if self._phase != "player_turn":
                if self.scheduler.run_until_idle(sleep=sleep) == 0:
                    break
                continue
            self.perform_player_action(choose(self) if choose else "attack")
            self.scheduler.run_until_idle(sleep=sleep)
        if not self.is_over():
            self.close()
        return self.outcome()

class BattleArena:
    """Holds the single active battle; starting a new one discards the old."""

    def __init__(self, scheduler: Optional[TurnScheduler] = None, *,
                 rng: Optional[random.Random] = None,
                 timing: Optional[BattleTiming] = None,
                 log_capacity: int = DEFAULT_LOG_CAPACITY):
        self.scheduler = scheduler or TurnScheduler()
        self.rng = rng
        self.timing = timing
        self.log_capacity = log_capacity
        self.active: Optional[BattleSession] = None

    def start_battle(self, player: Character, opponent: Character,
                     message_cb: Optional[Callable[[str], None]] = None) -> BattleSession:
        session = BattleSession(player, opponent, rng=self.rng, scheduler=self.scheduler,
                                timing=self.timing, log_capacity=self.log_capacity,
                                message_cb=message_cb)
        self.close()
        self.active = session
        return session

    def is_active(self, session: BattleSession) -> bool:
        return self.active is session and not session.closed

    def close(self):
        if self.active is not None:
            self.active.close()
            self.active = None

__all__ = ["BattleSession","BattleArena","BattleTiming","Phase","Side","Outcome","ACTIONS"]
