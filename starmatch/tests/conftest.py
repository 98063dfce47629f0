"""
Pytest fixtures for Star Match tests.
"""

import pytest

from ..engine_core.state import GameState, ALL_NUMBERS
from ..engine_core.generator import PuzzleGenerator
from ..engine_core.engine import GameEngine


class ManualHandle:
    """Timer handle that fires only when the scheduler is advanced."""

    def __init__(self, when, callback, args):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.callback(*self.args)


class ManualScheduler:
    """
    Fake-time scheduler with the asyncio call_later signature.

    Nothing happens until advance() is called.
    """

    def __init__(self):
        self.now = 0.0
        self._handles = []

    def call_later(self, delay, callback, *args):
        handle = ManualHandle(self.now + delay, callback, args)
        self._handles.append(handle)
        return handle

    @property
    def pending(self):
        return [h for h in self._handles if not h.cancelled]

    def advance(self, seconds):
        end = self.now + seconds
        while True:
            due = [h for h in self.pending if h.when <= end]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self._handles.remove(handle)
            self.now = handle.when
            handle.fire()
        self.now = end


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def generator() -> PuzzleGenerator:
    """Seeded generator so regenerated targets are reproducible."""
    return PuzzleGenerator.seeded(1234)


@pytest.fixture
def make_engine(generator):
    """Build an engine around a hand-written state."""
    def _make(target=7, pool=None, candidates=None, seconds=10):
        state = GameState(
            target_sum=target,
            available_pool=set(ALL_NUMBERS if pool is None else pool),
            candidates=list(candidates or []),
            seconds_remaining=seconds,
        )
        return GameEngine(generator, duration_seconds=10, state=state)
    return _make
