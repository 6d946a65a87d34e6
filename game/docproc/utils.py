"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Callable, Optional, Tuple

RandomSource = Callable[[], float]


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds (NaN saturates to lo)"""
    if x != x:
        return lo
    return lo if x < lo else hi if x > hi else x


def approach(x: float, target: float, step: float) -> float:
    """Move x towards target by at most step, never overshooting"""
    if x < target:
        return min(x + step, target)
    if x > target:
        return max(x - step, target)
    return x


def normalize(
    x: float,
    y: float,
    default: Tuple[float, float] = (0.0, -1.0),
    eps: float = 1e-8,
) -> Tuple[float, float]:
    """Normalize a vector to unit length, falling back to default when degenerate"""
    l = math.hypot(x, y)
    if l < eps or not math.isfinite(l):
        return default
    return x / l, y / l


def aabb_collide(a, b) -> bool:
    """Check if two axis-aligned boxes overlap"""
    return (
        a.left < b.right
        and a.right > b.left
        and a.top < b.bottom
        and a.bottom > b.top
    )


def make_rng(seed: Optional[int] = None) -> RandomSource:
    """Uniform [0, 1) source, seeded for reproducible matches"""
    return random.Random(seed).random


def uniform(rng: RandomSource, lo: float, hi: float) -> float:
    return lo + (hi - lo) * rng()


def randint(rng: RandomSource, lo: int, hi: int) -> int:
    """Uniform integer in [lo, hi] drawn from a [0, 1) source"""
    if hi <= lo:
        return lo
    return min(hi, lo + int(math.floor(rng() * (hi - lo + 1))))


def choice(rng: RandomSource, items):
    return items[min(len(items) - 1, int(rng() * len(items)))]
