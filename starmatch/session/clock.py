"""
Countdown Clock - One-second ticks while the game is active.

The clock never owns a thread. It asks a scheduler for one-shot
callbacks; an asyncio event loop is a scheduler as-is:

    loop = asyncio.get_running_loop()
    clock = CountdownClock(state, scheduler=loop)
    clock.start()

Every armed tick remembers the generation it was armed in. cancel()
and stop() move to a new generation, so a callback that slips through
a cancelled handle finds a mismatch and does nothing.
"""

from __future__ import annotations
from typing import Any, Callable, Protocol
import logging

from ..engine_core.state import GameState, GameStatus
from ..engine_core.evaluator import evaluate_state

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class CountdownClock:
    """
    Decrements state.seconds_remaining once per interval, never below 0.

    Re-arms itself only while the game is active, so it stops on its own
    once the game is won or lost.
    """

    def __init__(
        self,
        state: GameState,
        scheduler: Scheduler,
        on_tick: Callable[[int], None] | None = None,
        is_active: Callable[[], bool] | None = None,
        interval: float = 1.0,
    ):
        self.state = state
        self.scheduler = scheduler
        self.on_tick = on_tick
        self.interval = interval
        self._is_active = is_active or (lambda: evaluate_state(self.state) == GameStatus.ACTIVE)
        self._handle: TimerHandle | None = None
        self._generation = 0
        self._cancelled = False

    @property
    def running(self) -> bool:
        return self._handle is not None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> None:
        """Arm the first tick. No-op if already running or cancelled."""
        if self.running:
            return
        self._arm()

    def stop(self) -> None:
        """Drop the pending tick if the game is no longer active."""
        if self._handle is not None and not self._is_active():
            self._disarm()
            logger.debug("Clock stopped at %ds", self.state.seconds_remaining)

    def cancel(self) -> None:
        """Tear down for good. Pending and future ticks never apply."""
        self._cancelled = True
        self._disarm()

    def _disarm(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _arm(self) -> None:
        if self._cancelled:
            return
        if not self._is_active():
            self._handle = None
            return
        self._handle = self.scheduler.call_later(self.interval, self._tick, self._generation)

    def _tick(self, generation: int) -> None:
        if self._cancelled or generation != self._generation:
            logger.debug("Dropped stale tick (generation %d)", generation)
            return
        self._handle = None
        if not self._is_active():
            return

        if self.state.seconds_remaining > 0:
            self.state.seconds_remaining -= 1
        logger.debug("Tick: %ds remaining", self.state.seconds_remaining)

        if self.on_tick:
            self.on_tick(self.state.seconds_remaining)
        self._arm()
