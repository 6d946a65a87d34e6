"""
Simulation configuration

One GameConfig carries every tuning constant. Two presets reproduce the
two tunings the game shipped with:

- "arcade": wide field, progressive difficulty, fast player, the precision
  agent covers the left quarter and works through every category
- "classic": narrow field, flat difficulty, slower player and documents,
  the precision agent only picks off low-value documents
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Dict, Tuple

from .entities import Category, ConfigError


@dataclass
class GameConfig:
    # Field
    width: float = 1200.0
    height: float = 600.0
    frame_time: float = 1 / 60  # dt that equals one unit of per-tick motion

    # Match
    match_duration: float = 60.0  # seconds
    miss_threshold: int = 20  # match ends once misses exceed this

    # Spawning / difficulty
    spawn_rate: float = 0.02  # spawn probability per tick
    difficulty_scaling: bool = True
    spawn_multiplier_range: Tuple[float, float] = (1.0, 3.0)
    fall_multiplier_range: Tuple[float, float] = (1.0, 2.5)

    # Documents
    item_width: float = 50.0
    item_height: float = 60.0
    item_speed_range: Tuple[float, float] = (2.0, 5.0)
    lane_speed: float = 12.0
    lanes: Dict[Category, float] = field(default_factory=lambda: {
        Category.NO_VALUE: 100.0,
        Category.LOW: 200.0,
        Category.MEDIUM: 400.0,
        Category.HIGH: 600.0,
    })

    # Player
    player_width: float = 60.0
    player_height: float = 40.0
    player_speed: float = 12.0
    player_bottom_offset: float = 50.0
    manual_fire_cooldown: float = 0.5  # seconds
    autonomous_fire_cooldown: float = 0.1
    manual_spread: float = 3.0

    # Projectiles
    projectile_width: float = 4.0
    projectile_height: float = 10.0
    projectile_speed: float = 8.0
    projectile_margin: float = 10.0  # off-field distance before removal

    # Particles
    particle_life: float = 30.0
    particle_speed: float = 4.0
    hit_particles: int = 10
    miss_particles: int = 5
    miss_color: str = "#FF0000"

    # Capture agent (sorter)
    capture_pos: Tuple[float, float] = (400.0, 100.0)
    capture_size: Tuple[float, float] = (40.0, 40.0)
    capture_interval: float = 0.3
    capture_band: Tuple[float, float] = (50.0, 300.0)
    beam_step: float = 4.0
    beam_max_progress: float = 100.0

    # Precision agent (sniper)
    precision_pos: Tuple[float, float] = (50.0, 550.0)
    precision_size: Tuple[float, float] = (40.0, 30.0)
    precision_interval: float = 0.15
    precision_zone_right: float = 300.0
    precision_zone_y: Tuple[float, float] = (0.0, 500.0)
    precision_priority: Tuple[Category, ...] = (
        Category.LOW,
        Category.MEDIUM,
        Category.HIGH,
        Category.NO_VALUE,
    )

    def validate(self) -> "GameConfig":
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"Field must be positive, got {self.width}x{self.height}")
        if self.frame_time <= 0:
            raise ConfigError("frame_time must be positive")
        if self.match_duration <= 0:
            raise ConfigError("match_duration must be positive")
        if self.miss_threshold < 0:
            raise ConfigError("miss_threshold must be >= 0")
        if self.spawn_rate < 0:
            raise ConfigError("spawn_rate must be >= 0")
        if self.item_width > self.width or self.player_width > self.width:
            raise ConfigError("Entities must fit inside the field")
        for name in ("spawn_multiplier_range", "fall_multiplier_range",
                     "item_speed_range", "capture_band", "precision_zone_y"):
            lo, hi = getattr(self, name)
            if lo > hi:
                raise ConfigError(f"{name} is inverted: {lo} > {hi}")
        for name in ("manual_fire_cooldown", "autonomous_fire_cooldown",
                     "capture_interval", "precision_interval"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0")
        if self.beam_step <= 0 or self.beam_max_progress <= 0:
            raise ConfigError("Capture beam step and length must be positive")
        missing = [c for c in Category if c not in self.lanes]
        if missing:
            raise ConfigError(f"No lane for {', '.join(c.value for c in missing)}")
        for c, lane in self.lanes.items():
            if not 0.0 <= lane <= self.width - self.item_width:
                raise ConfigError(f"Lane for {c.value} at {lane} lies outside the field")
        return self

    def with_overrides(self, **overrides) -> "GameConfig":
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return replace(self, **{"lanes": dict(self.lanes), **overrides}).validate()


PRESETS: Dict[str, Dict] = {
    "arcade": {},
    "classic": {
        "width": 800.0,
        "difficulty_scaling": False,
        "item_speed_range": (1.0, 3.0),
        "lane_speed": 8.0,
        "player_speed": 5.0,
        "precision_interval": 0.5,
        "precision_zone_right": 800.0,
        "precision_zone_y": (0.0, 400.0),
        "precision_priority": (Category.LOW,),
    },
}


def get_preset(name: str = "arcade", **overrides) -> GameConfig:
    """Fresh config for a named preset, optionally overridden"""
    try:
        base = PRESETS[name]
    except KeyError:
        raise ConfigError(
            f"Unknown preset {name!r}, expected one of {sorted(PRESETS)}"
        ) from None
    return GameConfig().with_overrides(**{**base, **overrides})
