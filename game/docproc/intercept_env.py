"""
InterceptEnv - Gymnasium wrapper around the match engine
--------------------------------------------------------
- The agent controls the player ship: move left/right and fire
- Match time is driven by a SimClock advanced by dt every step, so
  episodes are reproducible from the reset seed
- In autonomous mode the capture and precision agents play alongside
- Vector observation: player state + match pressure + top-K lowest documents
- MultiDiscrete action space: [move(3), fire(2)]

Quick test:
    python -m game.docproc.intercept_env
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .clock import SimClock
from .config import get_preset
from .engine import END_MISSES, END_TIME, MatchEngine
from .entities import Category, Mode
from .physics import FIRE, MOVE_LEFT, MOVE_RIGHT, fire_cooldown
from .utils import clamp

MAX_VALUE = float(Category.HIGH.max_value)


class InterceptEnv(gym.Env):
    """Document interception environment"""

    metadata = {"render_modes": [], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        preset: str = "arcade",
        mode: str = "manual",
        dt: float = 1 / 60,
        k_items: int = 5,
        r_revenue: float = 1.0,  # per 1000 revenue
        r_miss: float = 0.5,
        r_shot: float = 0.0,
        config_overrides: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()

        assert render_mode is None, "InterceptEnv is headless; render elsewhere from snapshot()."
        self.render_mode = render_mode

        self.config = get_preset(preset, **(config_overrides or {}))
        self.mode = Mode.parse(mode)
        self.dt = dt
        self.k_items = k_items

        # Reward weights
        self.r_revenue = r_revenue
        self.r_miss = r_miss
        self.r_shot = r_shot

        # move: 0 stay, 1 left, 2 right; fire: 0/1
        self.action_space = spaces.MultiDiscrete([3, 2])

        # Player: x(1) fire-ready(1); match: remaining(1) miss pressure(1)
        # Each document: rel x(1) y(1) speed(1) value(1)
        obs_dim = 4 + self.k_items * 4
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.clock = SimClock()
        self.engine = MatchEngine(self.config, clock=self.clock, rng=self._draw)

        self._step_count = 0
        self._last_revenue = 0
        self._last_missed = 0

    def _draw(self) -> float:
        return float(self.np_random.random())

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        if options and "mode" in options:
            self.mode = Mode.parse(options["mode"])

        self.clock = SimClock()
        self.engine.clock = self.clock
        self.engine.restart(self.mode)

        self._step_count = 0
        self._last_revenue = 0
        self._last_missed = 0

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, fire = int(action[0]), int(action[1])
        inputs = {
            MOVE_LEFT: move == 1,
            MOVE_RIGHT: move == 2,
            FIRE: fire == 1,
        }

        shots_before = len(self.engine.projectiles)
        self.clock.advance(self.dt)
        self.engine.tick(self.dt, inputs)
        self._step_count += 1

        s = self.engine.state
        gained = s.revenue - self._last_revenue
        lost = s.missed - self._last_missed
        self._last_revenue = s.revenue
        self._last_missed = s.missed

        reward = self.r_revenue * gained / 1000.0 - self.r_miss * lost
        if fire and len(self.engine.projectiles) > shots_before:
            reward -= self.r_shot

        terminated = s.end_reason == END_MISSES
        truncated = s.end_reason == END_TIME

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        cfg = self.config
        s = self.engine.state
        p = self.engine.player

        px, _ = p.center
        span = max(1e-6, cfg.width - p.width)
        ready = self.clock() - p.last_shot > fire_cooldown(cfg, s.mode)

        obs_parts = [
            clamp(p.x / span * 2 - 1, -1, 1),
            1.0 if ready else -1.0,
            clamp(s.remaining / cfg.match_duration * 2 - 1, -1, 1),
            clamp(s.missed / max(1, cfg.miss_threshold + 1) * 2 - 1, -1, 1),
        ]

        max_speed = cfg.item_speed_range[1] * cfg.fall_multiplier_range[1]

        # Documents closest to the bottom edge first
        lowest = sorted(self.engine.items, key=lambda d: -d.y)
        for i in range(self.k_items):
            if i < len(lowest):
                d = lowest[i]
                dx, _ = d.center
                obs_parts += [
                    clamp((dx - px) / cfg.width, -1, 1),
                    clamp(d.y / cfg.height * 2 - 1, -1, 1),
                    clamp(d.speed / max(1e-6, max_speed), -1, 1),
                    # Value is only observable once documents are classified
                    clamp(d.value / MAX_VALUE, -1, 1) if d.classified else 0.0,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        view = self.engine.snapshot()
        return {
            "score": view.score,
            "revenue": view.revenue,
            "processed": view.processed,
            "missed": view.missed,
            "total_spawned": view.total_spawned,
            "remaining": view.remaining,
            "end_reason": view.end_reason,
            "step": self._step_count,
        }


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(mode: str = "manual", seed: int = 42, preset: str = "arcade"):
    """Play one headless match with random actions and return the final info"""
    env = InterceptEnv(preset=preset, mode=mode)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f}")
    print(f"Revenue: ${info['revenue']:,}  Processed: {info['processed']}  "
          f"Missed: {info['missed']}  Ended by: {info['end_reason']}")

    env.close()
    return info


if __name__ == "__main__":
    run_random_episode()
