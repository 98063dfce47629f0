"""
Action System - Actions and results.

Actions represent the two events the presentation can emit:
1. A click on a number (select or deselect)
2. A reset (start a new game)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import NumberStatus


class ActionType(Enum):
    """Types of actions in the system."""
    SELECT_NUMBER = "select_number"
    RESET = "reset"


class ErrorCode(str, Enum):
    """Reasons a click is ignored."""
    GAME_OVER = "GAME_OVER"
    NUMBER_USED = "NUMBER_USED"
    STALE_STATUS = "STALE_STATUS"
    NO_HANDLER = "NO_HANDLER"


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    number and current_status are only set for SELECT_NUMBER.
    """
    action_type: ActionType
    number: int | None = None
    current_status: NumberStatus | None = None

    @classmethod
    def select(cls, number: int, current_status: NumberStatus) -> Action:
        """Factory for a click on a number."""
        return cls(
            action_type=ActionType.SELECT_NUMBER,
            number=number,
            current_status=NumberStatus(current_status),
        )

    @classmethod
    def reset(cls) -> Action:
        """Factory for a reset."""
        return cls(action_type=ActionType.RESET)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action was applied
    - The state after the action
    - Error code (if ignored)
    - Human-readable changes (for logs and text UIs)
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: ErrorCode | None = None

    state_changes: list[str] = field(default_factory=list)
    round_won: bool = False

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        round_won: bool = False,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            round_won=round_won,
        )
