"""
Controllable time source
"""

from __future__ import annotations


class SimClock:
    """Monotonic clock that only moves when told to.

    Pass an instance wherever a ``time.monotonic``-style callable is
    expected, then call ``advance(dt)`` once per tick.
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def __call__(self) -> float:
        return self._now

    @property
    def now(self) -> float:
        return self._now

    def advance(self, dt: float) -> float:
        if dt < 0:
            raise ValueError(f"Clock cannot run backwards (dt={dt})")
        self._now += dt
        return self._now
