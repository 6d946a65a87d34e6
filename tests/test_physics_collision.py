"""
Tests for motion, lifecycle culling and collision resolution.
"""

import math

import pytest

from game.docproc import Category, Mode
from game.docproc.collision import resolve_hits
from game.docproc.entities import FallingItem, Particle, Projectile
from game.docproc.physics import (
    MOVE_LEFT, MOVE_RIGHT,
    advance, aimed_projectile, burst, cull_items, cull_particles,
    cull_projectiles, move_player, new_player, try_fire,
)
from game.docproc.utils import aabb_collide, approach, clamp, normalize
from tests.helpers import ScriptedRandom, constant


def doc(x=0.0, y=0.0, value=300, category=Category.LOW, speed=2.0, **kw):
    return FallingItem(x=x, y=y, width=50, height=60, category=category,
                       value=value, speed=speed, **kw)


def shot(x=0.0, y=0.0, vx=0.0, vy=-8.0):
    return Projectile(x=x, y=y, width=4, height=10, vx=vx, vy=vy)


class TestUtils:

    def test_clamp_saturates_nan(self):
        assert clamp(float("nan"), 0, 10) == 0
        assert clamp(15, 0, 10) == 10

    def test_approach_never_overshoots(self):
        assert approach(0, 5, 12) == 5
        assert approach(20, 5, 12) == 8
        assert approach(5, 5, 12) == 5

    def test_normalize_zero_vector_falls_back(self):
        assert normalize(0.0, 0.0) == (0.0, -1.0)
        assert normalize(3.0, 4.0) == pytest.approx((0.6, 0.8))

    def test_aabb_touching_edges_do_not_overlap(self):
        a = doc(x=0, y=0)
        b = doc(x=50, y=0)
        assert not aabb_collide(a, b)
        b.x = 49.9
        assert aabb_collide(a, b)


class TestPlayer:

    def test_starts_bottom_centre(self, config):
        p = new_player(config)
        assert (p.x, p.y) == (config.width / 2, config.height - 50)

    def test_move_clamps_to_field(self, config):
        p = new_player(config)
        for _ in range(500):
            move_player(p, {MOVE_LEFT: True}, config)
        assert p.x == 0
        for _ in range(500):
            move_player(p, {MOVE_RIGHT: True}, config)
        assert p.x == config.width - p.width

    def test_both_keys_cancel(self, config):
        p = new_player(config)
        x0 = p.x
        move_player(p, {MOVE_LEFT: True, MOVE_RIGHT: True}, config)
        assert p.x == x0

    def test_fire_respects_cooldown(self, config):
        p = new_player(config)
        rng = constant(0.5)
        assert try_fire(p, Mode.MANUAL, 1.0, config, rng) is not None
        assert try_fire(p, Mode.MANUAL, 1.4, config, rng) is None
        assert try_fire(p, Mode.MANUAL, 1.51, config, rng) is not None
        # autonomous mode fires five times as often
        assert try_fire(p, Mode.AUTONOMOUS, 1.62, config, rng) is not None

    def test_shot_leaves_player_nose(self, config):
        p = new_player(config)
        b = try_fire(p, Mode.AUTONOMOUS, 0.0, config, ScriptedRandom(0.9))
        assert b.x + b.width / 2 == pytest.approx(p.x + p.width / 2)
        assert b.y == p.y
        assert (b.vx, b.vy) == (0.0, -config.projectile_speed)

    def test_manual_spread(self, config):
        p = new_player(config)
        b = try_fire(p, Mode.MANUAL, 0.0, config, ScriptedRandom(1.0))
        assert b.vx == pytest.approx(config.manual_spread / 2)


class TestAim:

    def test_aims_at_target(self, config):
        b = aimed_projectile((70.0, 550.0), (370.0, 150.0), config)
        assert (b.vx, b.vy) == pytest.approx((0.6 * 8, -0.8 * 8))
        assert math.hypot(b.vx, b.vy) == pytest.approx(config.projectile_speed)
        assert b.from_agent

    def test_zero_length_aim_goes_straight_up(self, config):
        b = aimed_projectile((100.0, 100.0), (100.0, 100.0), config)
        assert (b.vx, b.vy) == (0.0, -config.projectile_speed)


class TestMotion:

    def test_advance_moves_everything(self, config):
        b = shot(x=10, y=100, vx=1, vy=-8)
        d = doc(x=0, y=0, speed=3)
        pt = Particle(x=0, y=0, vx=1, vy=1, color="#fff")
        advance([b], [d], [pt], config)
        assert (b.x, b.y) == (11, 92)
        assert d.y == 3
        assert (pt.x, pt.y, pt.life) == (1, 1, 29)

    def test_step_scales_motion(self, config):
        d = doc(speed=2)
        advance([], [d], [], config, step=2.5)
        assert d.y == 5

    def test_lane_homing_is_clamped(self, config):
        d = doc(x=0, lane_x=100.0)
        xs = []
        for _ in range(20):
            advance([], [d], [], config)
            xs.append(d.x)
        assert xs == sorted(xs)
        assert max(xs) == 100.0
        assert xs[-1] == 100.0

    def test_lane_homing_leftwards(self, config):
        d = doc(x=500, lane_x=100.0)
        for _ in range(100):
            advance([], [d], [], config)
            assert d.x >= 100.0
        assert d.x == 100.0

    def test_lane_homing_stays_inside_field(self, config):
        d = doc(x=1100.0, lane_x=1300.0)
        for _ in range(30):
            advance([], [d], [], config)
            assert 0.0 <= d.x and d.right <= config.width
        assert d.x == config.width - d.width


class TestCulling:

    def test_projectiles_removed_off_top(self, config):
        keep = shot(y=-5)
        gone = shot(y=-11)
        assert cull_projectiles([keep, gone], config) == [keep]

    def test_items_past_bottom_are_misses(self, config):
        falling = doc(y=config.height)
        out = doc(y=config.height + 0.1)
        live, missed = cull_items([falling, out], config)
        assert live == [falling]
        assert missed == [out]
        assert out.alive is False

    def test_dead_items_are_not_misses(self, config):
        d = doc(y=config.height + 50)
        d.alive = False
        assert cull_items([d], config) == ([], [])

    def test_particles_expire(self):
        a = Particle(0, 0, 0, 0, "#fff", life=1)
        b = Particle(0, 0, 0, 0, "#fff", life=0)
        assert cull_particles([a, b]) == [a]

    def test_burst(self, config):
        parts = burst(5, 6, "#123456", 10, config, constant(1.0))
        assert len(parts) == 10
        assert all(p.color == "#123456" and p.life == config.particle_life for p in parts)
        assert all(p.vx == pytest.approx(config.particle_speed / 2) for p in parts)


class TestCollision:

    def test_single_hit(self):
        b = shot(x=20, y=30)
        d = doc(x=0, y=0)
        hits = resolve_hits([b], [d])
        assert len(hits) == 1
        assert hits[0].item is d
        assert not b.alive and not d.alive

    def test_projectile_hits_first_item_only(self):
        b = shot(x=20, y=30)
        first = doc(x=0, y=0, value=100)
        second = doc(x=10, y=10, value=1200, category=Category.HIGH)
        hits = resolve_hits([b], [first, second])
        assert [h.item for h in hits] == [first]
        assert second.alive

    def test_item_consumed_by_one_projectile(self):
        a = shot(x=20, y=30)
        b = shot(x=22, y=31)
        d = doc(x=0, y=0)
        hits = resolve_hits([a, b], [d])
        assert len(hits) == 1
        assert hits[0].projectile is a
        assert b.alive

    def test_two_projectiles_two_items(self):
        a = shot(x=20, y=30)
        b = shot(x=220, y=30)
        d1 = doc(x=0, y=0)
        d2 = doc(x=200, y=0)
        hits = resolve_hits([a, b], [d1, d2])
        assert [(h.projectile, h.item) for h in hits] == [(a, d1), (b, d2)]

    def test_miss(self):
        assert resolve_hits([shot(x=500, y=500)], [doc()]) == []
