"""Puzzle bank: the static hand-off file between generation and play."""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from contracts.errors import (
    BankLoadError,
    ValidationIssue,
    ValidationReport,
    build_report,
    make_error,
    make_warning,
)
from contracts.jsoncanon import canonical_sha256
from contracts.schema_validator import validate_bank_payload
from lexicon.dictionary import RootDictionary
from lexicon.letters import split_letters

from .scoring import Position, prefilled_count
from .validator import SIZE, get_solution_key, validate_grid

_LOGGER = logging.getLogger(__name__)

TIERS = tuple(range(1, 8))


@dataclass(frozen=True)
class Puzzle:
    """A generated puzzle; immutable once minted."""

    id: int
    grid: Tuple[Tuple[str, ...], ...]
    difficulty: int
    prefilled_cells: Tuple[Position, ...]
    day_difficulty: int

    @property
    def rows(self) -> List[str]:
        return ["".join(row) for row in self.grid]

    def letter_at(self, row: int, col: int) -> str:
        return self.grid[row][col]

    def grid_lists(self) -> List[List[str]]:
        return [list(row) for row in self.grid]


@dataclass(frozen=True)
class PuzzleBank:
    generated: str
    roots_used: int
    puzzles: Tuple[Puzzle, ...] = field(default_factory=tuple)

    @property
    def total_puzzles(self) -> int:
        return len(self.puzzles)

    def for_tier(self, tier: int) -> List[Puzzle]:
        """Puzzles of one day tier, in bank order."""
        return [puzzle for puzzle in self.puzzles if puzzle.day_difficulty == tier]

    def get(self, puzzle_id: int) -> Optional[Puzzle]:
        for puzzle in self.puzzles:
            if puzzle.id == puzzle_id:
                return puzzle
        return None

    def tier_counts(self) -> Dict[int, int]:
        counts = Counter(puzzle.day_difficulty for puzzle in self.puzzles)
        return {tier: counts.get(tier, 0) for tier in TIERS}

    def fingerprint(self) -> str:
        return canonical_sha256(bank_to_dict(self))


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------- (de)serialization ----------


def puzzle_to_dict(puzzle: Puzzle) -> Dict[str, Any]:
    return {
        "id": puzzle.id,
        "grid": puzzle.rows,
        "difficulty": puzzle.difficulty,
        "prefilledCells": [{"row": row, "col": col} for row, col in puzzle.prefilled_cells],
        "dayDifficulty": puzzle.day_difficulty,
    }


def puzzle_from_dict(data: Dict[str, Any]) -> Puzzle:
    grid = []
    for index, text in enumerate(data["grid"]):
        letters = split_letters(text)
        if len(letters) != SIZE:
            raise BankLoadError(
                "invalid-grid",
                f"puzzle {data['id']} row {index} has {len(letters)} letters, expected {SIZE}",
            )
        grid.append(tuple(letters))
    return Puzzle(
        id=int(data["id"]),
        grid=tuple(grid),
        difficulty=int(data["difficulty"]),
        prefilled_cells=tuple((int(c["row"]), int(c["col"])) for c in data["prefilledCells"]),
        day_difficulty=int(data["dayDifficulty"]),
    )


def bank_to_dict(bank: PuzzleBank) -> Dict[str, Any]:
    return {
        "generated": bank.generated,
        "totalPuzzles": bank.total_puzzles,
        "rootsUsed": bank.roots_used,
        "puzzles": [puzzle_to_dict(puzzle) for puzzle in bank.puzzles],
    }


def bank_from_dict(data: Any) -> PuzzleBank:
    validate_bank_payload(data)
    puzzles = tuple(puzzle_from_dict(item) for item in data["puzzles"])
    if data["totalPuzzles"] != len(puzzles):
        raise BankLoadError(
            "count-mismatch",
            f"totalPuzzles is {data['totalPuzzles']} but the bank holds {len(puzzles)} puzzles",
        )
    return PuzzleBank(generated=data["generated"], roots_used=data["rootsUsed"], puzzles=puzzles)


def save_bank(bank: PuzzleBank, path: str | Path) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(
        json.dumps(bank_to_dict(bank), ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    _LOGGER.info("bank: wrote %d puzzles to %s", bank.total_puzzles, target)
    return target


def load_bank(path: str | Path) -> PuzzleBank:
    source = Path(path)
    try:
        payload = json.loads(source.read_text("utf-8"))
    except FileNotFoundError as exc:
        raise BankLoadError("bank-not-found", str(source)) from exc
    except json.JSONDecodeError as exc:
        raise BankLoadError("invalid-json", f"{source}: {exc}") from exc

    bank = bank_from_dict(payload)
    _LOGGER.info("bank: loaded %d puzzles from %s (%s)", bank.total_puzzles, source, bank.fingerprint())
    return bank


# ---------- integrity ----------


def _check_puzzle(puzzle: Puzzle, dictionary: RootDictionary, path: str) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    if not validate_grid(dictionary, puzzle.grid):
        issues.append(make_error("grid.invalid", "rows and columns must all be dictionary roots", f"{path}.grid"))

    expected = prefilled_count(puzzle.day_difficulty)
    if len(puzzle.prefilled_cells) != expected:
        issues.append(
            make_error(
                "clues.count",
                f"tier {puzzle.day_difficulty} expects {expected} clues, found {len(puzzle.prefilled_cells)}",
                f"{path}.prefilledCells",
            )
        )
    if len(set(puzzle.prefilled_cells)) != len(puzzle.prefilled_cells):
        issues.append(make_error("clues.duplicate", "clue positions must be unique", f"{path}.prefilledCells"))
    for row, col in puzzle.prefilled_cells:
        if not (0 <= row < SIZE and 0 <= col < SIZE):
            issues.append(make_error("clues.range", f"clue ({row}, {col}) is outside the grid", f"{path}.prefilledCells"))
    return issues


def check_bank(bank: PuzzleBank, dictionary: RootDictionary) -> ValidationReport:
    """Run the integrity checks a bank must pass before it is deployed."""

    issues: List[ValidationIssue] = []
    seen_ids: Dict[int, int] = {}
    seen_keys: Dict[str, int] = {}

    for index, puzzle in enumerate(bank.puzzles):
        path = f"$.puzzles[{index}]"
        issues.extend(_check_puzzle(puzzle, dictionary, path))

        if puzzle.id in seen_ids:
            issues.append(make_error("id.duplicate", f"id {puzzle.id} already used at index {seen_ids[puzzle.id]}", f"{path}.id"))
        seen_ids.setdefault(puzzle.id, index)

        key = get_solution_key(puzzle.grid)
        if key in seen_keys:
            issues.append(make_error("grid.duplicate", f"same grid as index {seen_keys[key]}", f"{path}.grid"))
        seen_keys.setdefault(key, index)

    for tier, count in bank.tier_counts().items():
        if count == 0:
            issues.append(make_error("tier.empty", f"day tier {tier} has no puzzles", "$.puzzles"))
        elif count < _min_tier_size(bank):
            issues.append(make_warning("tier.small", f"day tier {tier} has only {count} puzzles", "$.puzzles"))

    if bank.roots_used != len(dictionary.roots):
        issues.append(
            make_warning(
                "roots.stale",
                f"bank was built from {bank.roots_used} roots, dictionary now has {len(dictionary.roots)}",
                "$.rootsUsed",
            )
        )
    return build_report(issues)


def _min_tier_size(bank: PuzzleBank) -> int:
    counts = [count for count in bank.tier_counts().values() if count]
    if not counts:
        return 0
    return max(counts) // 2


__all__ = [
    "TIERS",
    "Puzzle",
    "PuzzleBank",
    "bank_from_dict",
    "bank_to_dict",
    "check_bank",
    "load_bank",
    "puzzle_from_dict",
    "puzzle_to_dict",
    "save_bank",
    "utc_timestamp",
]
