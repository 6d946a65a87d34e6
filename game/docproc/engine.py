"""
MatchEngine - the document processing arcade simulation
-------------------------------------------------------
- Documents of four categories fall down the field and must be intercepted
- The player slides along the bottom and fires projectiles
- In autonomous mode two helper robots join in:
    * the capture agent lassos valuable documents and routes them to lanes
    * the precision agent snipes documents on the left side of the field
- A match lasts a fixed time, or ends early once too many documents slip by

Time and randomness are injected: ``clock`` is any zero-argument callable
returning monotonic seconds, ``rng`` any zero-argument callable returning
uniform floats in [0, 1). Swap in ``SimClock`` and a seeded source for
reproducible runs.

Each tick runs in a fixed order:
spawn -> player -> motion -> agents -> collisions -> cleanup -> end check
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .agents import (
    drop_orphan_beams,
    new_capture_agent,
    new_precision_agent,
    update_capture,
    update_precision,
)
from .collision import resolve_hits
from .config import GameConfig
from .difficulty import scale
from .entities import (
    CaptureAgent,
    FallingItem,
    MatchPhase,
    MatchState,
    MatchStateError,
    Mode,
    Particle,
    PrecisionAgent,
    Projectile,
)
from .physics import (
    advance,
    burst,
    cull_items,
    cull_particles,
    cull_projectiles,
    move_player,
    new_player,
    try_fire,
    FIRE,
)
from .spawner import maybe_spawn
from .utils import RandomSource, clamp, make_rng

logger = logging.getLogger(__name__)

END_MISSES = "misses"
END_TIME = "time"


@dataclass(frozen=True)
class EntityView:
    """Read-only render record for one live entity"""
    kind: str  # player, projectile, document, particle, beam, capture_agent, precision_agent
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    category: Optional[str] = None
    value: Optional[int] = None
    classified: Optional[bool] = None
    captured: Optional[bool] = None
    color: Optional[str] = None
    alpha: Optional[float] = None
    progress: Optional[float] = None
    target: Optional[Tuple[float, float]] = None


@dataclass(frozen=True)
class MatchView:
    """Snapshot of a match for rendering and metrics panels"""
    phase: str
    running: bool
    mode: str
    elapsed: float
    remaining: float
    score: int
    revenue: int
    processed: int
    missed: int
    total_spawned: int
    live: int
    process_rate: float  # percent of spawned documents processed
    miss_rate: float
    end_reason: Optional[str]
    entities: Tuple[EntityView, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class MatchEngine:
    """Owns every entity collection; all mutation goes through tick()"""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
    ):
        self.config = (config or GameConfig()).validate()
        self.clock = clock
        self.rng = rng if rng is not None else make_rng(seed)

        self.state = MatchState(remaining=self.config.match_duration)

        # World state
        self.player = new_player(self.config)
        self.projectiles: List[Projectile] = []
        self.items: List[FallingItem] = []
        self.particles: List[Particle] = []
        self.capture_agent: Optional[CaptureAgent] = None
        self.precision_agent: Optional[PrecisionAgent] = None

        self._next_uid = 0

    # ----------------------------
    # Lifecycle
    # ----------------------------

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def phase(self) -> MatchPhase:
        return self.state.phase

    def set_mode(self, mode) -> Mode:
        """Change mode between matches"""
        if self.state.running:
            raise MatchStateError("Mode cannot change while a match is running")
        self.state.mode = Mode.parse(mode)
        logger.info("Mode set to %s", self.state.mode.value)
        return self.state.mode

    def toggle_mode(self) -> Mode:
        if self.state.mode is Mode.MANUAL:
            return self.set_mode(Mode.AUTONOMOUS)
        return self.set_mode(Mode.MANUAL)

    def start(self, mode) -> None:
        """Setup -> Active with the chosen mode"""
        mode = Mode.parse(mode)
        if self.state.running:
            raise MatchStateError("Match already running; use restart()")
        self._begin(mode)

    def restart(self, mode=None) -> None:
        """Fresh match, keeping the previous mode unless one is given"""
        mode = self.state.mode if mode is None else Mode.parse(mode)
        if self.state.running:
            logger.info("Abandoning running match at %.1fs", self.state.elapsed)
        self._begin(mode)

    def _begin(self, mode: Mode):
        cfg = self.config

        # Setup: clear entities, zero metrics
        self.state = MatchState(mode=mode, remaining=cfg.match_duration)
        self.player = new_player(cfg)
        self.projectiles = []
        self.items = []
        self.particles = []
        if mode is Mode.AUTONOMOUS:
            self.capture_agent = new_capture_agent(cfg)
            self.precision_agent = new_precision_agent(cfg)
        else:
            self.capture_agent = None
            self.precision_agent = None
        self._next_uid = 0

        # Active
        self.state.start_time = self.clock()
        self.state.phase = MatchPhase.ACTIVE
        logger.info("Match started in %s mode (%.0fs)", mode.value, cfg.match_duration)

    def _end(self, reason: str):
        s = self.state
        s.phase = MatchPhase.OVER
        s.end_reason = reason
        logger.info(
            "Match over (%s): score=%d revenue=%d processed=%d missed=%d spawned=%d",
            reason, s.score, s.revenue, s.processed, s.missed, s.total_spawned,
        )
        # Game objects are destroyed with the match; counters stay final
        self.items = []
        self.projectiles = []
        self.particles = []
        if self.capture_agent is not None:
            self.capture_agent.beams = []

    # ----------------------------
    # Simulation
    # ----------------------------

    def tick(self, dt: float, inputs: Optional[Mapping[str, bool]] = None) -> None:
        """Advance one step. Does nothing outside an active match."""
        if not self.state.running:
            return

        cfg = self.config
        s = self.state
        inputs = inputs or {}
        now = self.clock()
        step = max(0.0, dt) / cfg.frame_time

        # 1. Spawn
        difficulty = scale(s.elapsed / cfg.match_duration, cfg)
        item = maybe_spawn(cfg, difficulty, s.mode, self.rng, uid=self._next_uid)
        if item is not None:
            self._next_uid += 1
            self.items.append(item)
            s.total_spawned += 1

        # 2. Player
        move_player(self.player, inputs, cfg, step)
        if inputs.get(FIRE):
            shot = try_fire(self.player, s.mode, now, cfg, self.rng)
            if shot is not None:
                self.projectiles.append(shot)

        # 3. Motion
        advance(self.projectiles, self.items, self.particles, cfg, step)

        # 4. Agents
        if self.capture_agent is not None:
            update_capture(self.capture_agent, self.items, now, cfg)
        if self.precision_agent is not None:
            shot = update_precision(self.precision_agent, self.items, now, cfg)
            if shot is not None:
                self.projectiles.append(shot)

        # 5. Collisions
        for hit in resolve_hits(self.projectiles, self.items):
            d = hit.item
            s.processed += 1
            s.revenue += d.value
            s.score += d.value
            self.particles.extend(
                burst(d.x, d.y, d.category.color, cfg.hit_particles, cfg, self.rng)
            )

        # 6. Cleanup
        self.projectiles = cull_projectiles(self.projectiles, cfg)
        self.items, missed = cull_items(self.items, cfg)
        for d in missed:
            s.missed += 1
            self.particles.extend(
                burst(d.x, d.y, cfg.miss_color, cfg.miss_particles, cfg, self.rng)
            )
        self.particles = cull_particles(self.particles)
        if self.capture_agent is not None:
            drop_orphan_beams(self.capture_agent)

        # 7. Time and end conditions
        s.elapsed = clamp(now - s.start_time, 0.0, cfg.match_duration)
        s.remaining = max(0.0, cfg.match_duration - s.elapsed)
        if s.missed > cfg.miss_threshold:
            self._end(END_MISSES)
        elif s.remaining <= 0.0:
            self._end(END_TIME)

    # ----------------------------
    # Read access
    # ----------------------------

    @property
    def live_count(self) -> int:
        return len(self.items)

    def snapshot(self) -> MatchView:
        s = self.state
        total = s.total_spawned
        return MatchView(
            phase=s.phase.value,
            running=s.running,
            mode=s.mode.value,
            elapsed=s.elapsed,
            remaining=s.remaining,
            score=s.score,
            revenue=s.revenue,
            processed=s.processed,
            missed=s.missed,
            total_spawned=total,
            live=self.live_count,
            process_rate=(s.processed / total * 100.0) if total else 0.0,
            miss_rate=(s.missed / total * 100.0) if total else 0.0,
            end_reason=s.end_reason,
            entities=tuple(self._entity_views()),
        )

    def _entity_views(self):
        if self.state.phase is MatchPhase.SETUP:
            return

        p = self.player
        yield EntityView("player", p.x, p.y, p.width, p.height)

        for b in self.projectiles:
            yield EntityView("projectile", b.x, b.y, b.width, b.height)

        # Category and value are always reported; renderers hide them unless classified
        for d in self.items:
            yield EntityView(
                "document", d.x, d.y, d.width, d.height,
                category=d.category.value,
                value=d.value,
                classified=d.classified,
                captured=d.captured,
                color=d.category.color,
            )

        for pt in self.particles:
            yield EntityView("particle", pt.x, pt.y, color=pt.color, alpha=pt.alpha)

        if self.capture_agent is not None:
            a = self.capture_agent
            yield EntityView("capture_agent", a.x, a.y, a.width, a.height)
            for beam in a.beams:
                yield EntityView(
                    "beam", beam.origin_x, beam.origin_y,
                    progress=beam.progress / beam.max_progress,
                    target=(beam.target.x, beam.target.y),
                )

        if self.precision_agent is not None:
            a = self.precision_agent
            yield EntityView("precision_agent", a.x, a.y, a.width, a.height)
