"""
Autonomous-mode helper robots

CaptureAgent (the sorter) lassos the most valuable document passing
through its band and routes it to the lane for its value. PrecisionAgent
(the sniper) shoots documents in its zone, cheapest category first.

Both agents only keep their own cooldown stamp; every decision is made
from the live document list handed to them on each tick.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .config import GameConfig
from .entities import (
    CaptureAgent,
    CaptureBeam,
    Category,
    FallingItem,
    PrecisionAgent,
    Projectile,
)
from .physics import aimed_projectile

logger = logging.getLogger(__name__)


def new_capture_agent(config: GameConfig) -> CaptureAgent:
    (x, y), (w, h) = config.capture_pos, config.capture_size
    return CaptureAgent(x=x, y=y, width=w, height=h)


def new_precision_agent(config: GameConfig) -> PrecisionAgent:
    (x, y), (w, h) = config.precision_pos, config.precision_size
    return PrecisionAgent(x=x, y=y, width=w, height=h)


def lane_for(item: FallingItem, config: GameConfig) -> float:
    return config.lanes[Category.for_value(item.value)]


def update_capture(
    agent: CaptureAgent,
    items: List[FallingItem],
    now: float,
    config: GameConfig,
) -> Optional[CaptureBeam]:
    """Maybe start a new beam, then advance every beam one tick"""
    started = None
    if now - agent.last_action > config.capture_interval:
        top, bottom = config.capture_band
        candidates = [
            d for d in items
            if d.alive and not d.captured and top < d.y < bottom
        ]
        if candidates:
            # Stable ascending sort: ties go to the latest in list order
            target = sorted(candidates, key=lambda d: d.value)[-1]
            target.captured = True
            started = CaptureBeam(
                origin_x=agent.x,
                origin_y=agent.y,
                target=target,
                max_progress=config.beam_max_progress,
            )
            agent.beams.append(started)
            agent.last_action = now
            logger.debug("capture beam -> doc %d (%s, %d)",
                         target.uid, target.category.value, target.value)

    for beam in agent.beams:
        if not beam.active:
            continue
        beam.progress = min(beam.progress + config.beam_step, beam.max_progress)
        if beam.progress >= beam.max_progress:
            beam.target.lane_x = lane_for(beam.target, config)
            beam.active = False

    agent.beams = [b for b in agent.beams if b.active]
    return started


def drop_orphan_beams(agent: CaptureAgent):
    """Forget beams whose target was shot down or fell off the field"""
    agent.beams = [b for b in agent.beams if b.active and b.target.alive]


def pick_precision_target(
    items: List[FallingItem], config: GameConfig
) -> Optional[FallingItem]:
    y_lo, y_hi = config.precision_zone_y
    rank = {c: i for i, c in enumerate(config.precision_priority)}
    candidates = [
        d for d in items
        if d.alive
        and not d.captured
        and d.category in rank
        and d.x < config.precision_zone_right
        and y_lo < d.y < y_hi
    ]
    if not candidates:
        return None
    return sorted(candidates, key=lambda d: rank[d.category])[0]


def update_precision(
    agent: PrecisionAgent,
    items: List[FallingItem],
    now: float,
    config: GameConfig,
) -> Optional[Projectile]:
    """Fire one perfectly aimed shot if the cooldown allows and a target exists"""
    if now - agent.last_action <= config.precision_interval:
        return None

    target = pick_precision_target(items, config)
    if target is None:
        return None

    agent.last_action = now
    logger.debug("precision shot -> doc %d (%s)", target.uid, target.category.value)
    return aimed_projectile(
        (agent.x + agent.width / 2, agent.y),
        (target.x, target.y),
        config,
    )
