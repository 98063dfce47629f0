"""
Game State - The single mutable aggregate of a Star Match game.

Design principles:
- Exclusively owned: only the GameEngine mutates it
- Numbers are in exactly one place: available pool, candidates, or used
- Derived values (candidate sum, status) are never stored
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
from enum import Enum

MIN_NUMBER = 1
MAX_NUMBER = 9
ALL_NUMBERS = frozenset(range(MIN_NUMBER, MAX_NUMBER + 1))


class GameInvariantError(AssertionError):
    """A caller broke the engine contract. Not recoverable."""


class GameStatus(str, Enum):
    """Overall status of a game."""
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"


class NumberStatus(str, Enum):
    """
    Status of a single number.

    Clicks carry AVAILABLE or CANDIDATE. The presentation reads
    AVAILABLE, VALID_CANDIDATE, WRONG_CANDIDATE or USED.
    """
    AVAILABLE = "available"
    CANDIDATE = "candidate"
    VALID_CANDIDATE = "valid_candidate"
    WRONG_CANDIDATE = "wrong_candidate"
    USED = "used"

    @property
    def is_candidate(self) -> bool:
        return self in {
            NumberStatus.CANDIDATE,
            NumberStatus.VALID_CANDIDATE,
            NumberStatus.WRONG_CANDIDATE,
        }


@dataclass
class GameState:
    """
    Complete puzzle state at a point in time.

    seconds_remaining is written by the CountdownClock and read by the
    status evaluator; everything else changes only through the engine.
    """
    target_sum: int
    available_pool: set[int] = field(default_factory=lambda: set(ALL_NUMBERS))
    candidates: list[int] = field(default_factory=list)
    seconds_remaining: int = 10

    rounds_won: int = 0

    # History (for replay and logging)
    action_history: list[Any] = field(default_factory=list)

    @property
    def unused_numbers(self) -> set[int]:
        """Numbers not consumed by a won round."""
        return self.available_pool | set(self.candidates)

    @property
    def used_numbers(self) -> set[int]:
        return set(ALL_NUMBERS) - self.unused_numbers

    def check_invariants(self) -> None:
        """Raise GameInvariantError if the state is inconsistent."""
        if len(set(self.candidates)) != len(self.candidates):
            raise GameInvariantError(f"Duplicate candidates: {self.candidates}")
        overlap = self.available_pool & set(self.candidates)
        if overlap:
            raise GameInvariantError(f"Candidates still in pool: {sorted(overlap)}")
        if not self.unused_numbers <= ALL_NUMBERS:
            raise GameInvariantError(
                f"Numbers outside {MIN_NUMBER}-{MAX_NUMBER}: "
                f"{sorted(self.unused_numbers - ALL_NUMBERS)}"
            )
        if self.unused_numbers and not MIN_NUMBER <= self.target_sum <= MAX_NUMBER:
            raise GameInvariantError(f"Target out of range: {self.target_sum}")
        if self.seconds_remaining < 0:
            raise GameInvariantError(f"Negative clock: {self.seconds_remaining}")


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view handed to the presentation layer."""
    target_sum: int
    number_statuses: dict[int, NumberStatus]
    candidates: tuple[int, ...]
    candidate_sum: int
    seconds_remaining: int
    status: GameStatus
    rounds_won: int = 0

    def status_of(self, number: int) -> NumberStatus:
        return self.number_statuses[number]
