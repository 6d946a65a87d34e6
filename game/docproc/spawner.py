"""
Document spawner
"""

from __future__ import annotations

from typing import Optional

from .config import GameConfig
from .difficulty import Difficulty
from .entities import Category, FallingItem, Mode
from .utils import RandomSource, choice, randint, uniform

CATEGORIES = tuple(Category)


def roll_value(category: Category, rng: RandomSource) -> int:
    if category is Category.NO_VALUE:
        return 0
    return randint(rng, category.min_value, category.max_value)


def maybe_spawn(
    config: GameConfig,
    difficulty: Difficulty,
    mode: Mode,
    rng: RandomSource,
    uid: int = 0,
) -> Optional[FallingItem]:
    """Roll once; return a new document if the roll is under the current spawn rate"""
    if rng() >= config.spawn_rate * difficulty.spawn_multiplier:
        return None

    x = uniform(rng, 0.0, config.width - config.item_width)
    category = choice(rng, CATEGORIES)
    value = roll_value(category, rng)
    speed = uniform(rng, *config.item_speed_range) * difficulty.fall_speed_multiplier

    return FallingItem(
        x=x,
        y=-config.item_height,
        width=config.item_width,
        height=config.item_height,
        category=category,
        value=value,
        speed=speed,
        classified=mode is Mode.AUTONOMOUS,
        uid=uid,
    )
