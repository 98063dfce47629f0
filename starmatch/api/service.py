"""
Game Service - Business logic layer between a presentation and the engine.

The service:
1. Translates requests to session calls
2. Manages sessions
3. Formats snapshots for rendering

This layer is framework-agnostic (a terminal, a GUI, or a web handler can sit on top).
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..config import GameSettings
from ..engine_core import NumberStatus
from ..session import Scheduler, Session, SessionManager
from .schemas import (
    ClickRequest,
    ClickResponse,
    EndGameResponse,
    NewGameRequest,
    SnapshotResponse,
)


class SessionNotFoundError(KeyError):
    """No session with that ID (never created, or already ended)."""


@dataclass
class GameService:
    """
    Main service for presentations.

    Usage:
        service = GameService(scheduler=asyncio.get_running_loop())
        view = service.new_game(NewGameRequest())
        response = service.click(view.session_id, ClickRequest(number=3, current_status="available"))
    """
    scheduler: Scheduler
    settings: GameSettings = field(default_factory=GameSettings)
    session_manager: SessionManager | None = None

    def __post_init__(self):
        if self.session_manager is None:
            self.session_manager = SessionManager(self.settings)

    def new_game(self, request: NewGameRequest | None = None) -> SnapshotResponse:
        request = request or NewGameRequest()
        overrides = request.model_dump(exclude_none=True)
        settings = self.settings.model_copy(update=overrides) if overrides else None
        session = self.session_manager.create_session(self.scheduler, settings=settings)
        return self._snapshot(session)

    def snapshot(self, session_id: str) -> SnapshotResponse:
        return self._snapshot(self._get(session_id))

    def click(self, session_id: str, request: ClickRequest) -> ClickResponse:
        session = self._get(session_id)
        result = session.click(request.number, NumberStatus(request.current_status.value))
        return ClickResponse(
            accepted=result.success,
            error_code=result.error_code,
            round_won=result.round_won,
            state_changes=result.state_changes,
            snapshot=self._snapshot(session),
        )

    def reset(self, session_id: str) -> SnapshotResponse:
        session = self._get(session_id)
        session.reset()
        return self._snapshot(session)

    def end_game(self, session_id: str) -> EndGameResponse:
        ended = self.session_manager.end_session(session_id)
        if not ended:
            raise SessionNotFoundError(session_id)
        return EndGameResponse(session_id=session_id, ended=True)

    def _get(self, session_id: str) -> Session:
        session = self.session_manager.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    @staticmethod
    def _snapshot(session: Session) -> SnapshotResponse:
        return SnapshotResponse.from_snapshot(session.session_id, session.snapshot())
