"""
Pydantic Schemas - The contract between the engine and a presentation.

The presentation sends clicks and resets and re-renders from snapshots.
Everything is in-process; these models only validate and shape data.

Error Codes:
- GAME_OVER: Click arrived after the game was won or lost
- NUMBER_USED: Click on a number consumed by an earlier round
- STALE_STATUS: Click carried a status the number no longer has
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from ..engine_core import ErrorCode, GameSnapshot, GameStatus, NumberStatus


class ClickStatus(str, Enum):
    """Status a number had when it was clicked."""
    AVAILABLE = "available"
    CANDIDATE = "candidate"


# =============================================================================
# Requests
# =============================================================================

class ClickRequest(BaseModel):
    """A click on one of the number buttons."""
    number: int = Field(..., ge=1, le=9)
    current_status: ClickStatus


class NewGameRequest(BaseModel):
    """Start a session. Unset fields fall back to the service settings."""
    duration_seconds: Optional[int] = Field(None, ge=1)
    seed: Optional[int] = None


# =============================================================================
# Responses
# =============================================================================

class NumberInfo(BaseModel):
    """One number button."""
    number: int
    status: NumberStatus


class SnapshotResponse(BaseModel):
    """Everything a presentation needs to render the game."""
    session_id: str
    target_sum: int
    numbers: list[NumberInfo] = Field(default_factory=list)
    candidates: list[int] = Field(default_factory=list)
    candidate_sum: int = 0
    seconds_remaining: int
    status: GameStatus
    rounds_won: int = 0

    @classmethod
    def from_snapshot(cls, session_id: str, view: GameSnapshot) -> "SnapshotResponse":
        return cls(
            session_id=session_id,
            target_sum=view.target_sum,
            numbers=[
                NumberInfo(number=n, status=status)
                for n, status in sorted(view.number_statuses.items())
            ],
            candidates=list(view.candidates),
            candidate_sum=view.candidate_sum,
            seconds_remaining=view.seconds_remaining,
            status=view.status,
            rounds_won=view.rounds_won,
        )


class ClickResponse(BaseModel):
    """Outcome of a click. Rejected clicks are no-ops, not errors."""
    accepted: bool
    error_code: Optional[ErrorCode] = None
    round_won: bool = False
    state_changes: list[str] = Field(default_factory=list)
    snapshot: SnapshotResponse


class EndGameResponse(BaseModel):
    session_id: str
    ended: bool
