"""
Puzzle Generator - Random numbers and solvable targets.

All randomness flows through a single random.Random instance so that
games are reproducible from a seed.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable
import random


def int_range(min_value: int, max_value: int) -> list[int]:
    """Ascending integers from min_value to max_value inclusive."""
    return list(range(min_value, max_value + 1))


def sum_of(values: Iterable[int]) -> int:
    """Arithmetic sum, 0 for an empty sequence."""
    return sum(values)


def random_int(min_value: int, max_value: int, rng: random.Random | None = None) -> int:
    """Uniform integer in [min_value, max_value]."""
    return (rng or random).randint(min_value, max_value)


def random_sum_in(
    pool: Iterable[int],
    max_value: int,
    rng: random.Random | None = None,
) -> int:
    """
    Pick the sum of a random non-empty subset of pool that is <= max_value.

    Every subset whose sum fits is enumerated and one of their sums is
    chosen uniformly, so sums reachable by more subsets are more likely.
    The result is always achievable with the given pool.

    Raises:
        ValueError: if no non-empty subset fits under max_value
    """
    subsets: list[list[int]] = [[]]
    sums: list[int] = []
    for value in sorted(pool):
        for existing in list(subsets):
            candidate = existing + [value]
            candidate_sum = sum_of(candidate)
            if candidate_sum <= max_value:
                subsets.append(candidate)
                sums.append(candidate_sum)

    if not sums:
        raise ValueError(f"No subset of {sorted(pool)} sums to at most {max_value}")

    return sums[random_int(0, len(sums) - 1, rng)]


@dataclass
class PuzzleGenerator:
    """
    Seedable source of targets.

    Usage:
        generator = PuzzleGenerator.seeded(42)
        target = generator.initial_target()
        target = generator.next_target({2, 5, 8})
    """
    rng: random.Random = field(default_factory=random.Random)
    min_target: int = 1
    max_target: int = 9

    @classmethod
    def seeded(cls, seed: int | None, max_target: int = 9) -> PuzzleGenerator:
        return cls(rng=random.Random(seed), max_target=max_target)

    def random_int(self, min_value: int, max_value: int) -> int:
        return random_int(min_value, max_value, self.rng)

    def random_sum_in(self, pool: Iterable[int], max_value: int | None = None) -> int:
        if max_value is None:
            max_value = self.max_target
        return random_sum_in(pool, max_value, self.rng)

    def initial_target(self) -> int:
        """Target for a fresh game, where the whole 1-9 pool is available."""
        return self.random_int(self.min_target, self.max_target)

    def next_target(self, pool: Iterable[int]) -> int:
        """
        Target for the next round, solvable with the given pool.

        The bound grows to the smallest number left so that numbers above
        max_target still get used up.
        """
        pool = set(pool)
        return self.random_sum_in(pool, max(self.max_target, min(pool)))
