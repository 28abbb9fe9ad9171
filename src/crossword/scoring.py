"""Difficulty score and clue placement for generated grids."""

from __future__ import annotations

import math
from typing import Dict, List, Sequence, Tuple

from lexicon.dictionary import RootDictionary

from .validator import SIZE

Position = Tuple[int, int]

RARITY_SCALE = 1000.0
MAX_DIFFICULTY = 100

# Clue counts per day tier; tiers outside the table fall back to the default.
PREFILLED_BY_TIER: Dict[int, int] = {1: 6, 2: 6, 3: 5, 4: 5, 5: 4, 6: 4}
DEFAULT_PREFILLED = 5

# Linear congruential generator used for clue shuffles.
_LCG_MULTIPLIER = 9301
_LCG_INCREMENT = 49297
_LCG_MODULUS = 233280


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_difficulty(dictionary: RootDictionary, grid: Sequence[Sequence[str]]) -> int:
    """Average letter rarity over the nine cells, clamped to ``[0, 100]``.

    Each cell contributes ``1000 / frequency`` where frequency is the number
    of times its letter occurs across all dictionary roots; an unseen letter
    counts as frequency 1.
    """

    total = 0.0
    for row in grid:
        for letter in row:
            frequency = dictionary.frequency_of(letter) or 1
            total += RARITY_SCALE / frequency
    score = _round_half_up(total / (SIZE * SIZE))
    return max(0, min(MAX_DIFFICULTY, score))


def prefilled_count(day_difficulty: int) -> int:
    return PREFILLED_BY_TIER.get(day_difficulty, DEFAULT_PREFILLED)


class ClueShuffler:
    """Seeded pseudo-random stream; reproducible, not cryptographic."""

    def __init__(self, seed: int) -> None:
        self.state = int(seed)

    def random(self) -> float:
        self.state = (self.state * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
        return self.state / _LCG_MODULUS


def all_positions() -> List[Position]:
    return [(row, col) for row in range(SIZE) for col in range(SIZE)]


def prefilled_cells(count: int, seed: int) -> List[Position]:
    """Pick *count* clue positions with a seeded Fisher–Yates shuffle."""

    if not 0 <= count <= SIZE * SIZE:
        raise ValueError(f"clue count must be between 0 and {SIZE * SIZE}, got {count}")

    positions = all_positions()
    stream = ClueShuffler(seed)
    for i in range(len(positions) - 1, 0, -1):
        j = int(stream.random() * (i + 1))
        positions[i], positions[j] = positions[j], positions[i]
    return positions[:count]


__all__ = [
    "DEFAULT_PREFILLED",
    "PREFILLED_BY_TIER",
    "ClueShuffler",
    "Position",
    "all_positions",
    "calculate_difficulty",
    "prefilled_cells",
    "prefilled_count",
]
