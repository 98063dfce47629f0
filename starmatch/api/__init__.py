"""
API Layer - The contract a presentation codes against.

The presentation sends:
    ClickRequest       A click on a number (with the status it showed)
    NewGameRequest     Start a session
    reset(session_id)  Start over in the same session

And renders from:
    SnapshotResponse   Target, number statuses, clock, overall status
"""

from .schemas import (
    ClickStatus,
    ClickRequest,
    NewGameRequest,
    NumberInfo,
    SnapshotResponse,
    ClickResponse,
    EndGameResponse,
)
from .service import GameService, SessionNotFoundError

__all__ = [
    "ClickStatus",
    "ClickRequest",
    "NewGameRequest",
    "NumberInfo",
    "SnapshotResponse",
    "ClickResponse",
    "EndGameResponse",
    "GameService",
    "SessionNotFoundError",
]
