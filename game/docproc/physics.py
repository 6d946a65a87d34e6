"""
Motion and lifecycle updates for every entity kind
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Tuple

from .config import GameConfig
from .entities import FallingItem, Mode, Particle, Player, Projectile
from .utils import RandomSource, approach, clamp, normalize

MOVE_LEFT = "move-left"
MOVE_RIGHT = "move-right"
FIRE = "fire"


def new_player(config: GameConfig) -> Player:
    return Player(
        x=config.width / 2,
        y=config.height - config.player_bottom_offset,
        width=config.player_width,
        height=config.player_height,
        speed=config.player_speed,
    )


def move_player(player: Player, inputs: Mapping[str, bool], config: GameConfig, step: float = 1.0):
    dx = 0.0
    if inputs.get(MOVE_LEFT):
        dx -= player.speed * step
    if inputs.get(MOVE_RIGHT):
        dx += player.speed * step
    player.x = clamp(player.x + dx, 0.0, config.width - player.width)


def fire_cooldown(config: GameConfig, mode: Mode) -> float:
    if mode is Mode.AUTONOMOUS:
        return config.autonomous_fire_cooldown
    return config.manual_fire_cooldown


def try_fire(
    player: Player,
    mode: Mode,
    now: float,
    config: GameConfig,
    rng: RandomSource,
) -> Optional[Projectile]:
    """Fire from the player's nose if the cooldown has elapsed"""
    if now - player.last_shot <= fire_cooldown(config, mode):
        return None

    # Manual shots wobble sideways, autonomous-mode shots fly straight
    spread = config.manual_spread if mode is Mode.MANUAL else 0.0
    vx = (rng() - 0.5) * spread if spread else 0.0

    player.last_shot = now
    return Projectile(
        x=player.x + player.width / 2 - config.projectile_width / 2,
        y=player.y,
        width=config.projectile_width,
        height=config.projectile_height,
        vx=vx,
        vy=-config.projectile_speed,
    )


def aimed_projectile(
    origin: Tuple[float, float],
    target: Tuple[float, float],
    config: GameConfig,
) -> Projectile:
    """Projectile locked onto a fixed point; straight up if origin and target coincide"""
    ox, oy = origin
    nx, ny = normalize(target[0] - ox, target[1] - oy)
    return Projectile(
        x=ox - config.projectile_width / 2,
        y=oy,
        width=config.projectile_width,
        height=config.projectile_height,
        vx=nx * config.projectile_speed,
        vy=ny * config.projectile_speed,
        from_agent=True,
    )


def burst(
    x: float,
    y: float,
    color: str,
    count: int,
    config: GameConfig,
    rng: RandomSource,
) -> List[Particle]:
    particles = []
    for _ in range(count):
        vx = (rng() - 0.5) * config.particle_speed
        vy = (rng() - 0.5) * config.particle_speed
        particles.append(Particle(
            x=x, y=y, vx=vx, vy=vy, color=color,
            life=config.particle_life, max_life=config.particle_life,
        ))
    return particles


def advance(
    projectiles: List[Projectile],
    items: List[FallingItem],
    particles: List[Particle],
    config: GameConfig,
    step: float = 1.0,
):
    """Integrate one tick of motion; step is dt in units of config.frame_time"""
    for p in projectiles:
        p.x += p.vx * step
        p.y += p.vy * step

    for d in items:
        d.y += d.speed * step
        if d.lane_x is not None:
            d.x = clamp(
                approach(d.x, d.lane_x, config.lane_speed * step),
                0.0, config.width - d.width,
            )

    for pt in particles:
        pt.x += pt.vx * step
        pt.y += pt.vy * step
        pt.life -= step


def cull_projectiles(projectiles: List[Projectile], config: GameConfig) -> List[Projectile]:
    top = -config.projectile_margin
    bottom = config.height + config.projectile_margin
    return [p for p in projectiles if p.alive and top < p.y < bottom]


def cull_items(
    items: List[FallingItem], config: GameConfig
) -> Tuple[List[FallingItem], List[FallingItem]]:
    """Split documents into (still falling, fell past the bottom edge)"""
    live, missed = [], []
    for d in items:
        if not d.alive:
            continue
        if d.y > config.height:
            d.alive = False
            missed.append(d)
        else:
            live.append(d)
    return live, missed


def cull_particles(particles: List[Particle]) -> List[Particle]:
    return [pt for pt in particles if pt.life > 0]
