"""
Session Manager - Creates and manages game sessions.

A session is one play-through:
- Created when the player starts a game
- Holds the engine (and its GameState) and the countdown clock
- Reset replaces the GameState and the clock together
- Closed when the player leaves

Sessions are EPHEMERAL: in-memory only, nothing is persisted.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
import logging
import time
import uuid

from ..config import GameSettings
from ..engine_core import (
    Action, ActionResult, GameEngine, GameSnapshot, GameStatus, NumberStatus, PuzzleGenerator,
)
from .clock import CountdownClock, Scheduler

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    CREATED = "created"  # Clock not started yet
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Won or lost, waiting for reset
    CLOSED = "closed"  # Torn down


@dataclass
class Session:
    """
    One game, its clock, and the listeners that re-render it.

    All calls must come from the thread that runs the scheduler.
    """
    session_id: str
    engine: GameEngine
    scheduler: Scheduler
    created_at: float = field(default_factory=time.time)

    state: SessionState = SessionState.CREATED
    clock: CountdownClock | None = None

    # Called with a fresh snapshot after every change
    listeners: list[Callable[[GameSnapshot], None]] = field(default_factory=list)

    def is_active(self) -> bool:
        return self.state in {SessionState.CREATED, SessionState.ACTIVE}

    @property
    def status(self) -> GameStatus:
        return self.engine.status

    def snapshot(self) -> GameSnapshot:
        return self.engine.snapshot()

    def start(self) -> None:
        """Arm the clock for the current game."""
        if self.state == SessionState.CLOSED:
            raise RuntimeError(f"Session {self.session_id} is closed")
        if self.clock is None or self.clock.cancelled:
            self.clock = CountdownClock(
                self.engine.state,
                self.scheduler,
                on_tick=self._on_tick,
            )
        self.clock.start()
        if self.engine.status == GameStatus.ACTIVE:
            self.state = SessionState.ACTIVE
        else:
            self.state = SessionState.GAME_OVER
        self._notify()

    def click(self, number: int, current_status: NumberStatus) -> ActionResult:
        """Apply a click. Ignored clicks leave the state untouched."""
        result = self.engine.apply(Action.select(number, current_status))
        if result.success:
            self._after_change()
        return result

    def reset(self) -> ActionResult:
        """Start over: new GameState, new clock. Old ticks never apply."""
        if self.clock is not None:
            self.clock.cancel()
            self.clock = None
        result = self.engine.apply(Action.reset())
        self.start()
        return result

    def close(self) -> None:
        """Tear down, cancelling any pending tick."""
        if self.clock is not None:
            self.clock.cancel()
        self.state = SessionState.CLOSED
        self.listeners.clear()

    def _on_tick(self, seconds_remaining: int) -> None:
        self._after_change()

    def _after_change(self) -> None:
        status = self.engine.status
        if status != GameStatus.ACTIVE and self.is_active():
            self.state = SessionState.GAME_OVER
            if self.clock is not None:
                self.clock.stop()
            logger.info(
                "Session %s: game %s after %d round(s)",
                self.session_id, status.value, self.engine.state.rounds_won,
            )
        self._notify()

    def _notify(self) -> None:
        if not self.listeners:
            return
        view = self.snapshot()
        for listener in list(self.listeners):
            listener(view)


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions from settings
    - Track active sessions
    - Tear down finished sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, settings: GameSettings | None = None):
        self.settings = settings or GameSettings()
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        scheduler: Scheduler,
        settings: GameSettings | None = None,
        generator: PuzzleGenerator | None = None,
        start: bool = True,
    ) -> Session:
        """
        Create a new game session.

        Args:
            scheduler: Source of one-shot timers (e.g. the asyncio loop)
            settings: Overrides the manager's settings for this session
            generator: Explicit generator (tests); seeded from settings otherwise
            start: Arm the clock immediately

        Returns:
            New Session
        """
        settings = settings or self.settings
        generator = generator or PuzzleGenerator.seeded(settings.seed, max_target=settings.max_target)
        engine = GameEngine(generator, duration_seconds=settings.duration_seconds)

        session = Session(
            session_id=str(uuid.uuid4()),
            engine=engine,
            scheduler=scheduler,
        )
        self._sessions[session.session_id] = session
        logger.info(
            "Created session %s (target %d, %ds)",
            session.session_id, engine.state.target_sum, settings.duration_seconds,
        )

        if start:
            session.start()
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Remove a session from memory, cancelling its clock."""
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.close()
        logger.info("Ended session %s", session_id)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions still in play."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.end_session(session_id)
