from __future__ import annotations

import itertools

import pytest

from crossword.bank import Puzzle, PuzzleBank
from lexicon.dictionary import RootDictionary

SCENARIO_GRID = [["א", "ב", "ד"], ["ב", "נ", "ה"], ["ד", "ה", "ש"]]


def make_puzzle(puzzle_id: int, rows, tier: int, clues=()) -> Puzzle:
    return Puzzle(
        id=puzzle_id,
        grid=tuple(tuple(row) for row in rows),
        difficulty=50,
        prefilled_cells=tuple(clues),
        day_difficulty=tier,
    )


@pytest.fixture
def scenario_dictionary() -> RootDictionary:
    return RootDictionary.from_mapping({"אבד": "to lose", "בנה": "to build", "דהש": "to thresh"})


@pytest.fixture
def binary_dictionary() -> RootDictionary:
    """Every three-letter word over {א, ב}; any grid of those letters is solved."""

    words = ["".join(letters) for letters in itertools.product("אב", repeat=3)]
    return RootDictionary.from_mapping({word: f"meaning of {word}" for word in words})


@pytest.fixture
def scenario_bank() -> PuzzleBank:
    """Three tier-1 puzzles and one puzzle for every other tier."""

    puzzles = []
    for tier in range(1, 8):
        for _ in range(3 if tier == 1 else 1):
            puzzles.append(make_puzzle(len(puzzles), SCENARIO_GRID, tier, [(0, 0)]))
    return PuzzleBank(generated="2024-01-01T00:00:00.000Z", roots_used=3, puzzles=tuple(puzzles))
