"""
Progressive difficulty: spawn rate and fall speed ramp up linearly
over the course of a match.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from .config import GameConfig
from .utils import clamp


class Difficulty(NamedTuple):
    spawn_multiplier: float
    fall_speed_multiplier: float


def scale(elapsed_fraction: float, config: Optional[GameConfig] = None) -> Difficulty:
    """Multipliers for a given fraction of the match elapsed (clamped to [0, 1])"""
    config = config or GameConfig()
    if not config.difficulty_scaling:
        return Difficulty(1.0, 1.0)

    t = clamp(elapsed_fraction, 0.0, 1.0)
    s_lo, s_hi = config.spawn_multiplier_range
    f_lo, f_hi = config.fall_multiplier_range
    return Difficulty(s_lo + (s_hi - s_lo) * t, f_lo + (f_hi - f_lo) * t)
