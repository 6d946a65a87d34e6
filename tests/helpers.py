"""Deterministic stand-ins for the engine's injected collaborators."""

import itertools


class ScriptedRandom:
    """Replays a fixed list of draws, then repeats the last one."""

    def __init__(self, *values):
        self._values = list(values) or [0.5]
        self._iter = iter(self._values)
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        return next(self._iter, self._values[-1])


def constant(value: float):
    return lambda: value


def run_ticks(engine, clock, n, dt=1 / 60, inputs=None):
    """Advance clock and engine together for n ticks or until the match ends."""
    for _ in itertools.repeat(None, n):
        if not engine.state.running:
            break
        clock.advance(dt)
        engine.tick(dt, inputs or {})
