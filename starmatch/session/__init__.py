"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through of a game:
- Created when the player starts a game
- Holds the engine and the countdown clock
- Reset swaps in a fresh game and clock
- Destroyed when the player leaves

Sessions are EPHEMERAL: nothing is persisted.
"""

from .clock import CountdownClock, Scheduler, TimerHandle
from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, LoopEvent, EventKind

__all__ = [
    "CountdownClock",
    "Scheduler",
    "TimerHandle",
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "LoopEvent",
    "EventKind",
]
