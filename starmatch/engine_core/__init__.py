"""
Engine Core - Puzzle state management and round resolution.

The engine is the runtime that:
1. Generates solvable targets
2. Manages GameState
3. Applies clicks via the engine
4. Evaluates game status
"""

from .state import (
    GameState,
    GameSnapshot,
    GameStatus,
    NumberStatus,
    GameInvariantError,
    ALL_NUMBERS,
)
from .action import Action, ActionType, ActionResult, ErrorCode
from .generator import PuzzleGenerator, random_int, int_range, sum_of, random_sum_in
from .evaluator import evaluate, evaluate_state, number_status, candidate_sum, snapshot
from .engine import GameEngine

__all__ = [
    "GameState",
    "GameSnapshot",
    "GameStatus",
    "NumberStatus",
    "GameInvariantError",
    "ALL_NUMBERS",
    "Action",
    "ActionType",
    "ActionResult",
    "ErrorCode",
    "PuzzleGenerator",
    "random_int",
    "int_range",
    "sum_of",
    "random_sum_in",
    "evaluate",
    "evaluate_state",
    "number_status",
    "candidate_sum",
    "snapshot",
    "GameEngine",
]
