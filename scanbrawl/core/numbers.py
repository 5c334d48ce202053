"""Numeric helpers shared by stat generation and battle resolution."""
from __future__ import annotations
import math

def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves toward +inf (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(x + 0.5))

def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))
