"""
Projectile vs document collision resolution
"""

from __future__ import annotations

from typing import List, NamedTuple

from .entities import FallingItem, Projectile
from .utils import aabb_collide


class Hit(NamedTuple):
    projectile: Projectile
    item: FallingItem


def resolve_hits(projectiles: List[Projectile], items: List[FallingItem]) -> List[Hit]:
    """
    Pair projectiles with the documents they overlap.

    Projectiles are checked in firing order against documents in spawn
    order (oldest first). A projectile takes the first live document it
    overlaps and stops; both are marked dead so neither can be paired again
    this tick. Callers drop dead entities from their lists afterwards.
    """
    hits: List[Hit] = []
    for p in projectiles:
        if not p.alive:
            continue
        for d in items:
            if not d.alive:
                continue
            if aabb_collide(p, d):
                p.alive = False
                d.alive = False
                hits.append(Hit(p, d))
                break
    return hits
