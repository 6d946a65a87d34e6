"""
Tests for the difficulty scaler and the document spawner.
"""

import pytest

from game.docproc import Category, GameConfig, Mode, get_preset
from game.docproc.difficulty import Difficulty, scale
from game.docproc.spawner import maybe_spawn
from game.docproc.utils import make_rng
from tests.helpers import ScriptedRandom


class TestScale:

    def test_bounds(self):
        assert scale(0.0) == Difficulty(1.0, 1.0)
        assert scale(1.0) == Difficulty(pytest.approx(3.0), pytest.approx(2.5))

    def test_midpoint_is_linear(self):
        d = scale(0.5)
        assert d.spawn_multiplier == pytest.approx(2.0)
        assert d.fall_speed_multiplier == pytest.approx(1.75)

    def test_monotonic_non_decreasing(self):
        values = [scale(i / 100) for i in range(101)]
        for prev, cur in zip(values, values[1:]):
            assert cur.spawn_multiplier >= prev.spawn_multiplier
            assert cur.fall_speed_multiplier >= prev.fall_speed_multiplier

    def test_fraction_is_clamped(self):
        assert scale(-1.0) == scale(0.0)
        assert scale(7.0) == scale(1.0)

    def test_disabled_in_classic(self):
        cfg = get_preset("classic")
        assert scale(0.9, cfg) == Difficulty(1.0, 1.0)


class TestSpawner:

    def test_no_spawn_above_rate(self):
        rng = ScriptedRandom(0.5)
        assert maybe_spawn(GameConfig(), Difficulty(1.0, 1.0), Mode.MANUAL, rng) is None
        assert rng.calls == 1

    def test_spawn_rate_scales_with_difficulty(self):
        # 0.05 misses the base 0.02 rate but is under 0.02 * 3
        cfg = GameConfig()
        assert maybe_spawn(cfg, Difficulty(1.0, 1.0), Mode.MANUAL, ScriptedRandom(0.05)) is None
        assert maybe_spawn(cfg, Difficulty(3.0, 1.0), Mode.MANUAL, ScriptedRandom(0.05, 0.5)) is not None

    def test_scripted_spawn(self):
        cfg = GameConfig()
        # draw, x, category (first = high), value (band floor), speed (range floor)
        rng = ScriptedRandom(0.0, 0.5, 0.0, 0.0, 0.0)
        d = maybe_spawn(cfg, Difficulty(1.0, 2.0), Mode.AUTONOMOUS, rng, uid=7)

        assert d.category is Category.HIGH
        assert d.value == 1000
        assert d.speed == pytest.approx(4.0)
        assert d.x == pytest.approx(0.5 * (cfg.width - cfg.item_width))
        assert d.y == -cfg.item_height
        assert d.classified is True
        assert d.captured is False
        assert d.lane_x is None
        assert d.uid == 7

    def test_manual_documents_are_unclassified(self):
        d = maybe_spawn(GameConfig(), Difficulty(1.0, 1.0), Mode.MANUAL, ScriptedRandom(0.0, 0.5))
        assert d.classified is False

    def test_values_stay_in_band_and_field(self):
        cfg = GameConfig(spawn_rate=1.0)
        rng = make_rng(1234)
        seen = set()
        for _ in range(2000):
            d = maybe_spawn(cfg, Difficulty(1.0, 2.5), Mode.MANUAL, rng)
            seen.add(d.category)
            assert d.value >= 0
            assert d.category.contains(d.value)
            if d.category is Category.NO_VALUE:
                assert d.value == 0
            assert 0 <= d.x <= cfg.width - cfg.item_width
            assert 2.0 <= d.speed <= 5.0 * 2.5
        assert seen == set(Category)
