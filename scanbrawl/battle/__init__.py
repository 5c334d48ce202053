"""
Battle system package.
Modules:
- mechanics.py (effective stats, damage, heal)
- ai.py (opponent decision policy)
- scheduler.py (cooperative turn pacing)
- session.py (phase state machine, arena)
- service.py (start / simulate entry points)
- render.py (rich panels)
"""
from .service import battle_service, start_battle, simulate_battle
__all__ = ["battle_service","start_battle","simulate_battle"]
