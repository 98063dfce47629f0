"""
Status Evaluator - Pure functions deriving status from state.

Nothing here is cached; callers recompute after every mutation.
"""

from __future__ import annotations
from typing import Iterable

from .state import GameState, GameSnapshot, GameStatus, NumberStatus, ALL_NUMBERS
from .generator import sum_of


def evaluate(
    available_pool: Iterable[int],
    seconds_remaining: int,
    candidates: Iterable[int] = (),
) -> GameStatus:
    """
    Derive the game status.

    WON when nothing is left to play (empty pool, no pending candidates),
    LOST when the clock ran out with numbers left, ACTIVE otherwise.
    """
    if not set(available_pool) and not list(candidates):
        return GameStatus.WON
    if seconds_remaining <= 0:
        return GameStatus.LOST
    return GameStatus.ACTIVE


def evaluate_state(state: GameState) -> GameStatus:
    return evaluate(state.available_pool, state.seconds_remaining, state.candidates)


def candidate_sum(state: GameState) -> int:
    return sum_of(state.candidates)


def candidates_are_wrong(state: GameState) -> bool:
    """Candidates overshoot the target."""
    return candidate_sum(state) > state.target_sum


def number_status(state: GameState, number: int) -> NumberStatus:
    """Presentation status of one number."""
    if number in state.candidates:
        if candidates_are_wrong(state):
            return NumberStatus.WRONG_CANDIDATE
        return NumberStatus.VALID_CANDIDATE
    if number in state.available_pool:
        return NumberStatus.AVAILABLE
    return NumberStatus.USED


def click_status(state: GameState, number: int) -> NumberStatus:
    """Status a click on this number carries: AVAILABLE, CANDIDATE or USED."""
    status = number_status(state, number)
    if status.is_candidate:
        return NumberStatus.CANDIDATE
    return status


def snapshot(state: GameState) -> GameSnapshot:
    return GameSnapshot(
        target_sum=state.target_sum,
        number_statuses={n: number_status(state, n) for n in sorted(ALL_NUMBERS)},
        candidates=tuple(state.candidates),
        candidate_sum=candidate_sum(state),
        seconds_remaining=state.seconds_remaining,
        status=evaluate_state(state),
        rounds_won=state.rounds_won,
    )
