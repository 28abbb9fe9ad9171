"""Play-time state for one puzzle: cells, reveals and completion.

Persistence, timers and streak bookkeeping live in the UI layer; this module
only holds what the validator needs.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Literal, Optional, Set

from lexicon.dictionary import RootDictionary
from lexicon.letters import display_word, normalize_letter, split_letters

from .bank import Puzzle
from .scoring import Position
from .validator import EMPTY, SIZE, get_solution_key, validate_grid

LineKind = Literal["row", "col"]


def _is_single_letter(value: str) -> bool:
    letters = split_letters(value)
    return len(letters) == 1 and letters[0][0].isalpha()


@dataclass(frozen=True)
class Cell:
    value: str = EMPTY
    is_prefilled: bool = False
    is_revealed: bool = False


@dataclass(frozen=True)
class SemanticHint:
    key: str
    kind: LineKind
    index: int
    root: str
    meaning: Optional[str]


@dataclass(frozen=True)
class CompletionResult:
    solution_key: str
    is_alternative: bool


class GameSession:
    """Mutable per-player state of the active puzzle."""

    def __init__(
        self,
        dictionary: RootDictionary,
        puzzle: Puzzle,
        prefilled: Optional[Iterable[Position]] = None,
    ) -> None:
        self.dictionary = dictionary
        self.alternative_solutions: Dict[int, Set[str]] = {}
        self.load(puzzle, prefilled)

    def load(self, puzzle: Puzzle, prefilled: Optional[Iterable[Position]] = None) -> None:
        """Start *puzzle* from scratch with its clue cells filled in."""

        self.puzzle = puzzle
        self.cells: List[List[Cell]] = [[Cell() for _ in range(SIZE)] for _ in range(SIZE)]
        positions = puzzle.prefilled_cells if prefilled is None else prefilled
        for row, col in positions:
            self.cells[row][col] = Cell(value=puzzle.letter_at(row, col), is_prefilled=True)
        self.hints_used = 0
        self.semantic_hints_used = 0
        self.revealed_semantic_hints: Dict[str, SemanticHint] = {}
        self.completed = False
        self.is_alternative_solution = False

    # ---------- input ----------

    def values(self) -> List[List[str]]:
        return [[cell.value for cell in row] for row in self.cells]

    def set_cell_value(self, row: int, col: int, value: str) -> bool:
        """Write a letter (or clear with ``""``); clue cells are left untouched.

        Anything other than a single letter is rejected, so the ``.`` and ``|``
        characters of the solution key never come from player input.
        """

        if value and not _is_single_letter(value):
            raise ValueError(f"cell value must be a single letter, got {value!r}")
        cell = self.cells[row][col]
        if cell.is_prefilled:
            return False
        self.cells[row][col] = replace(cell, value=normalize_letter(value) if value else EMPTY)
        return True

    def reveal_cell(self, row: int, col: int) -> bool:
        cell = self.cells[row][col]
        if cell.is_prefilled or cell.value != EMPTY:
            return False
        self.cells[row][col] = Cell(value=self.puzzle.letter_at(row, col), is_revealed=True)
        self.hints_used += 1
        return True

    def empty_cells(self) -> List[Position]:
        return [
            (row, col)
            for row in range(SIZE)
            for col in range(SIZE)
            if not self.cells[row][col].is_prefilled and self.cells[row][col].value == EMPTY
        ]

    def reveal_random_empty_cell(self, rng: Optional[random.Random] = None) -> Optional[Position]:
        candidates = self.empty_cells()
        if not candidates:
            return None
        row, col = (rng or random).choice(candidates)
        self.reveal_cell(row, col)
        return row, col

    def reveal_semantic_hint(self, kind: LineKind, index: int) -> SemanticHint:
        """Show the root and meaning of one solution line; counted once per line."""

        if kind not in ("row", "col"):
            raise ValueError(f"kind must be 'row' or 'col', got {kind!r}")
        if not 0 <= index < SIZE:
            raise IndexError(f"line index {index} is outside the grid")

        key = f"{kind}-{index}"
        hint = self.revealed_semantic_hints.get(key)
        if hint is not None:
            return hint

        if kind == "row":
            letters = list(self.puzzle.grid[index])
        else:
            letters = [self.puzzle.grid[r][index] for r in range(SIZE)]
        hint = SemanticHint(
            key=key,
            kind=kind,
            index=index,
            root=display_word(letters),
            meaning=self.dictionary.meaning_of("".join(letters)),
        )
        self.revealed_semantic_hints[key] = hint
        self.semantic_hints_used += 1
        return hint

    # ---------- completion ----------

    def is_full(self) -> bool:
        return all(cell.value != EMPTY for row in self.cells for cell in row)

    def is_complete(self) -> bool:
        return self.is_full() and validate_grid(self.dictionary, self.values())

    def complete(self) -> CompletionResult:
        """Finish the puzzle and report whether the player found another valid solution."""

        if not self.is_complete():
            raise ValueError("grid is not a valid solution yet")

        key = get_solution_key(self.values())
        expected = get_solution_key(self.puzzle.grid)
        self.is_alternative_solution = key != expected
        if self.is_alternative_solution:
            self.alternative_solutions.setdefault(self.puzzle.id, set()).add(key)
        self.completed = True
        return CompletionResult(solution_key=key, is_alternative=self.is_alternative_solution)

    def alternative_solutions_count(self) -> int:
        return len(self.alternative_solutions.get(self.puzzle.id, ()))


__all__ = ["Cell", "CompletionResult", "GameSession", "SemanticHint"]
