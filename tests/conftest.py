"""Shared fixtures: controllable clock and engine factory."""

import pytest

from game.docproc import GameConfig, MatchEngine, SimClock, get_preset
from tests.helpers import constant


@pytest.fixture
def clock():
    return SimClock()


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def make_engine(clock):
    """Build an engine on the shared SimClock; rng defaults to a constant 0.5."""
    def _make(preset="arcade", rng=None, **overrides):
        cfg = get_preset(preset, **overrides)
        return MatchEngine(cfg, clock=clock, rng=rng or constant(0.5))
    return _make
