"""Document processing arcade - simulation core and gym environment"""

from .config import GameConfig, PRESETS, get_preset
from .clock import SimClock
from .engine import MatchEngine, MatchView, EntityView
from .entities import Category, ConfigError, MatchPhase, MatchStateError, Mode
from .intercept_env import InterceptEnv, run_random_episode

__all__ = [
    'GameConfig', 'PRESETS', 'get_preset',
    'SimClock',
    'MatchEngine', 'MatchView', 'EntityView',
    'Category', 'ConfigError', 'MatchPhase', 'MatchStateError', 'Mode',
    'InterceptEnv', 'run_random_episode',
]
