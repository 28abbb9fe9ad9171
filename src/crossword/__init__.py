"""Root crossword core: validation, generation, bank and daily selection."""

from __future__ import annotations

from .bank import Puzzle, PuzzleBank, check_bank, load_bank, save_bank
from .daily import DailyPuzzle, get_puzzle_for_date, get_todays_puzzle
from .generator import fill_grid
from .scoring import calculate_difficulty, prefilled_cells, prefilled_count
from .session import Cell, GameSession
from .validator import (
    get_hints_for_position,
    get_root_meaning,
    get_solution_key,
    is_valid_root,
    validate_grid,
)

__all__ = [
    "Cell",
    "DailyPuzzle",
    "GameSession",
    "Puzzle",
    "PuzzleBank",
    "calculate_difficulty",
    "check_bank",
    "fill_grid",
    "get_hints_for_position",
    "get_puzzle_for_date",
    "get_root_meaning",
    "get_solution_key",
    "get_todays_puzzle",
    "is_valid_root",
    "load_bank",
    "prefilled_cells",
    "prefilled_count",
    "save_bank",
    "validate_grid",
]
