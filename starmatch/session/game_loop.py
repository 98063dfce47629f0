"""
Game Loop - Serializes presentation events with clock ticks.

The loop:
1. Presentation posts clicks / resets onto a queue
2. The loop applies them one at a time, in arrival order
3. Clock ticks run as callbacks on the same asyncio loop
4. Listeners get a snapshot after every change
5. Repeat until quit

Clicks and ticks never interleave: both run to completion on one thread.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable
import asyncio
import logging

from ..engine_core import ActionResult, GameSnapshot, NumberStatus
from .manager import Session, SessionState

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class EventKind(Enum):
    CLICK = "click"
    RESET = "reset"
    QUIT = "quit"


@dataclass(frozen=True)
class LoopEvent:
    """An event coming from the presentation."""
    kind: EventKind
    number: int | None = None
    current_status: NumberStatus | None = None


class GameLoop:
    """
    The asyncio driver for one session.

    Usage:
        session = manager.create_session(scheduler=asyncio.get_running_loop())
        loop = GameLoop(session)
        task = asyncio.create_task(loop.run())
        loop.post_click(3, NumberStatus.AVAILABLE)
        loop.post_quit()
        final = await task
    """

    def __init__(
        self,
        session: Session,
        on_result: Callable[[ActionResult], None] | None = None,
    ):
        self.session = session
        self.on_result = on_result
        self.state = LoopState.IDLE
        self._queue: asyncio.Queue[LoopEvent] = asyncio.Queue()

    def post(self, event: LoopEvent) -> None:
        self._queue.put_nowait(event)

    def post_click(self, number: int, current_status: NumberStatus) -> None:
        self.post(LoopEvent(EventKind.CLICK, number, NumberStatus(current_status)))

    def post_reset(self) -> None:
        self.post(LoopEvent(EventKind.RESET))

    def post_quit(self) -> None:
        self.post(LoopEvent(EventKind.QUIT))

    async def run(self) -> GameSnapshot:
        """Process events until quit. Returns the last snapshot."""
        self.state = LoopState.RUNNING
        if self.session.state == SessionState.CREATED:
            self.session.start()
        try:
            while True:
                event = await self._queue.get()
                if event.kind == EventKind.QUIT:
                    break
                result = self.handle(event)
                if self.on_result:
                    self.on_result(result)
        finally:
            self.state = LoopState.STOPPED
        return self.session.snapshot()

    def handle(self, event: LoopEvent) -> ActionResult:
        """Apply a single event to the session."""
        if event.kind == EventKind.RESET:
            return self.session.reset()
        result = self.session.click(event.number, event.current_status)
        if not result.success:
            logger.debug("Click on %s ignored: %s", event.number, result.error_code)
        return result
