"""Cooperative delayed-callback queue driving battle pacing.

Nothing runs in the background: time only moves when the owner calls
:meth:`TurnScheduler.advance` or :meth:`TurnScheduler.run_until_idle`. Tests
advance the virtual clock directly; the CLI passes ``time.sleep`` so pauses
are felt in real time.
"""
from __future__ import annotations
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional

@dataclass(order=True)
class TimerHandle:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    def cancel(self):
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

class TurnScheduler:
    def __init__(self):
        self.now = 0.0
        self._queue: List[TimerHandle] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(self.now + max(0.0, delay), next(self._seq), callback)
        heapq.heappush(self._queue, handle)
        return handle

    def pending(self) -> int:
        return sum(1 for h in self._queue if h.active)

    def next_due(self) -> Optional[float]:
        self._drop_cancelled()
        return self._queue[0].due if self._queue else None

    def _drop_cancelled(self):
        while self._queue and not self._queue[0].active:
            heapq.heappop(self._queue)

    def _fire_next(self):
        handle = heapq.heappop(self._queue)
        self.now = max(self.now, handle.due)
        handle.fired = True
        handle.callback()

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing every timer that falls due (in order)."""
        target = self.now + seconds
        fired = 0
        while True:
            due = self.next_due()
            if due is None or due > target:
                break
            self._fire_next()
            fired += 1
        self.now = target
        return fired

    def run_until_idle(self, sleep: Optional[Callable[[float], None]] = None, max_callbacks: int = 10_000) -> int:
        """Fire timers until the queue is empty; ``sleep`` receives each wait."""
        fired = 0
        while fired < max_callbacks:
            due = self.next_due()
            if due is None:
                break
            wait = due - self.now
            if sleep is not None and wait > 0:
                sleep(wait)
            self._fire_next()
            fired += 1
        return fired

__all__ = ["TimerHandle","TurnScheduler"]
