"""
Game entity dataclasses
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class ConfigError(ValueError):
    """Invalid mode, preset or configuration value"""


class MatchStateError(RuntimeError):
    """Lifecycle command issued in a phase that does not accept it"""


class Category(Enum):
    """Document category: (value, min value, max value, display colour)"""

    HIGH = ("high", 1000, 1499, "#4CAF50")
    MEDIUM = ("medium", 500, 998, "#FFC107")
    LOW = ("low", 100, 498, "#FF5722")
    NO_VALUE = ("no-value", 0, 0, "#9E9E9E")

    def __new__(cls, label: str, lo: int, hi: int, color: str):
        obj = object.__new__(cls)
        obj._value_ = label
        obj.min_value = lo
        obj.max_value = hi
        obj.color = color
        return obj

    def contains(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value

    @classmethod
    def for_value(cls, value: int) -> "Category":
        """Map a document value back to its band"""
        if value <= 0:
            return cls.NO_VALUE
        if value < cls.MEDIUM.min_value:
            return cls.LOW
        if value < cls.HIGH.min_value:
            return cls.MEDIUM
        return cls.HIGH


class Mode(Enum):
    MANUAL = "manual"
    AUTONOMOUS = "autonomous"

    @classmethod
    def parse(cls, mode) -> "Mode":
        """Accept a Mode, its value, or the legacy 'ai' alias"""
        if isinstance(mode, cls):
            return mode
        if isinstance(mode, str):
            key = mode.strip().lower()
            if key == "ai":
                return cls.AUTONOMOUS
            for m in cls:
                if m.value == key:
                    return m
        raise ConfigError(f"Unknown game mode: {mode!r}")


class MatchPhase(Enum):
    SETUP = "setup"
    ACTIVE = "active"
    OVER = "over"


@dataclass
class Rect:
    """Axis-aligned box anchored at its top-left corner"""
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width * 0.5, self.y + self.height * 0.5


@dataclass
class Player(Rect):
    """Player ship entity"""
    speed: float = 12.0
    last_shot: float = float("-inf")


@dataclass
class Projectile(Rect):
    """Projectile fired by the player or the precision agent"""
    vx: float = 0.0
    vy: float = -8.0
    alive: bool = True
    from_agent: bool = False


@dataclass
class FallingItem(Rect):
    """A falling document that carries a category and a value"""
    category: Category = Category.NO_VALUE
    value: int = 0
    speed: float = 2.0
    classified: bool = False
    captured: bool = False
    lane_x: Optional[float] = None  # set once a capture beam completes
    alive: bool = True
    uid: int = 0


@dataclass
class Particle:
    """Cosmetic hit/miss particle"""
    x: float
    y: float
    vx: float
    vy: float
    color: str
    life: float = 30.0
    max_life: float = 30.0

    @property
    def alpha(self) -> float:
        if self.max_life <= 0:
            return 0.0
        return max(0.0, min(1.0, self.life / self.max_life))


@dataclass
class CaptureBeam:
    """Capture-agent beam pulling one document towards its lane"""
    origin_x: float
    origin_y: float
    target: FallingItem
    progress: float = 0.0
    max_progress: float = 100.0
    active: bool = True


@dataclass
class CaptureAgent(Rect):
    """Sorter robot that captures the most valuable document in its band"""
    last_action: float = float("-inf")
    beams: List[CaptureBeam] = field(default_factory=list)


@dataclass
class PrecisionAgent(Rect):
    """Sniper robot that shoots documents in its zone"""
    last_action: float = float("-inf")


@dataclass
class MatchState:
    """Match lifecycle and running totals"""
    mode: Mode = Mode.MANUAL
    phase: MatchPhase = MatchPhase.SETUP
    start_time: float = 0.0
    elapsed: float = 0.0
    remaining: float = 60.0
    score: int = 0
    revenue: int = 0
    processed: int = 0
    missed: int = 0
    total_spawned: int = 0
    end_reason: Optional[str] = None  # "misses" or "time"

    @property
    def running(self) -> bool:
        return self.phase is MatchPhase.ACTIVE
