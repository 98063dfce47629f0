"""
Solver - Finds numbers that match the stars.

Used by the demo command to play a game on its own.
"""

from __future__ import annotations
from itertools import combinations
from typing import Iterable


def find_subset(pool: Iterable[int], target: int) -> list[int] | None:
    """Smallest subset of pool summing to target, or None."""
    numbers = sorted(pool)
    for size in range(1, len(numbers) + 1):
        for combo in combinations(numbers, size):
            if sum(combo) == target:
                return list(combo)
    return None
