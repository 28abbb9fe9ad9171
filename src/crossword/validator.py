"""Grid validation against the root dictionary.

Rows are read in storage order (index 0 first, the order roots are stored in
the dictionary) and columns top to bottom.  All functions are pure.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Set

from lexicon.dictionary import RootDictionary
from lexicon.letters import normalize_letter, split_letters

SIZE = 3
EMPTY = ""
EMPTY_KEY_CELL = "."

Grid = List[List[str]]


def is_valid_root(dictionary: RootDictionary, text: str) -> bool:
    return dictionary.is_valid_root(text)


def get_root_meaning(dictionary: RootDictionary, text: str) -> Optional[str]:
    return dictionary.meaning_of(text)


def is_well_formed(grid: Sequence[Sequence[str]]) -> bool:
    return len(grid) == SIZE and all(len(row) == SIZE for row in grid)


def row_text(grid: Sequence[Sequence[str]], row: int) -> str:
    return "".join(grid[row])


def column_text(grid: Sequence[Sequence[str]], col: int) -> str:
    return "".join(grid[r][col] for r in range(SIZE))


def validate_grid(dictionary: RootDictionary, grid: Sequence[Sequence[str]]) -> bool:
    """Return True iff every row and every column is a dictionary root."""

    if not is_well_formed(grid):
        return False
    if any(len(split_letters(cell)) != 1 for row in grid for cell in row):
        return False
    for i in range(SIZE):
        if not dictionary.is_valid_root(row_text(grid, i)):
            return False
    for col in range(SIZE):
        if not dictionary.is_valid_root(column_text(grid, col)):
            return False
    return True


def _letters_for_line(dictionary: RootDictionary, line: Sequence[str], position: int) -> Set[str]:
    """Letters allowed at *position* by roots agreeing with the filled cells of *line*."""

    fixed = {
        i: normalize_letter(cell)
        for i, cell in enumerate(line)
        if i != position and cell != EMPTY
    }
    allowed: Set[str] = set()
    for root in dictionary.roots:
        letters = root.letters
        if all(letters[i] == letter for i, letter in fixed.items()):
            allowed.add(letters[position])
    return allowed


def get_hints_for_position(
    dictionary: RootDictionary,
    grid: Sequence[Sequence[str]],
    row: int,
    col: int,
) -> Set[str]:
    """Letters that fit at ``(row, col)`` for both its row and its column.

    Every filled cell in the row (other than the target) pins the letter at
    its own position; empty cells add no constraint, so a cell surrounded by
    empty cells gets a weak hint.  Returns an empty set when no root satisfies
    both lines.
    """

    if not is_well_formed(grid):
        raise ValueError("grid must be 3x3")
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise IndexError(f"position ({row}, {col}) is outside the grid")

    across = _letters_for_line(dictionary, grid[row], col)
    if not across:
        return set()
    down = _letters_for_line(dictionary, [grid[r][col] for r in range(SIZE)], row)
    return across & down


def get_solution_key(grid: Sequence[Sequence[str]]) -> str:
    """Canonical row-major key of a grid; empty cells render as ``.``."""

    return "|".join(
        "".join(normalize_letter(cell) if cell != EMPTY else EMPTY_KEY_CELL for cell in row)
        for row in grid
    )


__all__ = [
    "EMPTY",
    "Grid",
    "SIZE",
    "column_text",
    "get_hints_for_position",
    "get_root_meaning",
    "get_solution_key",
    "is_valid_root",
    "is_well_formed",
    "row_text",
    "validate_grid",
]
