# generator.py
# Fill a 3x3 grid so that every row and column is a dictionary root, using
# depth-first backtracking with eager prefix pruning.

from __future__ import annotations

import random
from typing import Optional

from lexicon.dictionary import Root, RootDictionary

from .validator import EMPTY, SIZE, Grid, column_text, row_text, validate_grid

# ---------- Utils ----------


def empty_grid() -> Grid:
    return [[EMPTY] * SIZE for _ in range(SIZE)]


def print_grid(g: Grid) -> str:
    lines = ["+-------+"]
    for row in g:
        lines.append("| " + " ".join(cell or "." for cell in row) + " |")
    lines.append("+-------+")
    return "\n".join(lines)


# ---------- Pruning ----------


def column_prefix(g: Grid, row: int, col: int) -> str:
    """Contiguous letters of column *col* from the top down to *row*."""

    prefix = []
    for r in range(row + 1):
        if g[r][col] == EMPTY:
            break
        prefix.append(g[r][col])
    return "".join(prefix)


def is_potentially_valid(dictionary: RootDictionary, g: Grid, row: int, col: int) -> bool:
    """Check the lines touched by the placement at ``(row, col)``."""

    if col == SIZE - 1 and not dictionary.is_valid_root(row_text(g, row)):
        return False
    if row == SIZE - 1 and not dictionary.is_valid_root(column_text(g, col)):
        return False
    if row > 0:
        prefix = column_prefix(g, row, col)
        if prefix and not dictionary.has_prefix(prefix):
            return False
    return True


# ---------- Search ----------


def fill_grid(
    dictionary: RootDictionary,
    rng: Optional[random.Random] = None,
    seed_root: Optional[Root] = None,
) -> Optional[Grid]:
    """Return a solved grid seeded from a root in row 0, or ``None``.

    Row 0 is *seed_root* when given, otherwise a uniformly random root drawn
    from *rng*.  ``None`` means this seed admits no completion; callers retry
    with a new seed.
    """

    if seed_root is None:
        if not dictionary.roots:
            return None
        rng = rng or random.Random()
        seed_root = rng.choice(dictionary.roots)

    grid = empty_grid()
    grid[0] = list(seed_root.letters)
    alphabet = dictionary.alphabet

    def backtrack(row: int, col: int) -> bool:
        if row == SIZE:
            return validate_grid(dictionary, grid)

        next_col = (col + 1) % SIZE
        next_row = row + 1 if next_col == 0 else row

        for letter in alphabet:
            grid[row][col] = letter
            if is_potentially_valid(dictionary, grid, row, col) and backtrack(next_row, next_col):
                return True

        grid[row][col] = EMPTY
        return False

    if backtrack(1, 0):
        return grid
    return None


__all__ = [
    "column_prefix",
    "empty_grid",
    "fill_grid",
    "is_potentially_valid",
    "print_grid",
]
