"""Batch generation of the puzzle bank (dictionary → grids → bank)."""

from __future__ import annotations

import logging
import math
import random
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from crossword.bank import TIERS, Puzzle, PuzzleBank, utc_timestamp
from crossword.generator import fill_grid
from crossword.scoring import calculate_difficulty, prefilled_cells, prefilled_count
from crossword.validator import get_solution_key
from lexicon.dictionary import RootDictionary

from .log import RunLog

_LOGGER = logging.getLogger(__name__)

DEFAULT_TARGET_PUZZLES = 100
DEFAULT_MAX_ATTEMPTS = 10000


@dataclass(frozen=True)
class GenerationReport:
    """Counts produced by a run; a shortfall is reported, never raised."""

    run_id: str
    seed: Optional[str]
    requested: int
    per_tier_target: int
    produced: int
    attempts: int
    max_attempts: int
    tier_counts: Dict[int, int] = field(default_factory=dict)

    @property
    def shortfall(self) -> int:
        return sum(max(0, self.per_tier_target - count) for count in self.tier_counts.values())

    @property
    def exhausted(self) -> bool:
        return self.shortfall > 0 and self.attempts >= self.max_attempts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_id": self.run_id,
            "seed": self.seed,
            "requested": self.requested,
            "per_tier_target": self.per_tier_target,
            "produced": self.produced,
            "attempts": self.attempts,
            "max_attempts": self.max_attempts,
            "tier_counts": {str(tier): count for tier, count in self.tier_counts.items()},
            "shortfall": self.shortfall,
            "exhausted": self.exhausted,
        }


@dataclass(frozen=True)
class GenerationResult:
    bank: PuzzleBank
    report: GenerationReport


def derive_run_id(seed: Optional[str]) -> str:
    """Stable run id for seeded runs, random otherwise."""

    if seed is None or str(seed).strip() == "":
        return uuid.uuid4().hex
    return uuid.uuid5(uuid.NAMESPACE_URL, f"rootgrid|{seed}").hex


def generate_bank(
    dictionary: RootDictionary,
    *,
    target_puzzles: int = DEFAULT_TARGET_PUZZLES,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    seed: Optional[str] = None,
    run_log: Optional[RunLog] = None,
    generated: Optional[str] = None,
) -> GenerationResult:
    """Mint a puzzle bank, ``ceil(target_puzzles / 7)`` puzzles per day tier.

    Every call to the grid search counts against the single global
    ``max_attempts`` budget, including attempts that fail or repeat a grid
    already produced.  When the budget runs out, later tiers end short.
    """

    if target_puzzles < 0:
        raise ValueError("target_puzzles must be non-negative")
    if max_attempts < 0:
        raise ValueError("max_attempts must be non-negative")

    seed = None if seed is None or str(seed).strip() == "" else str(seed)
    rng = random.Random(seed)
    run_id = run_log.run_id if run_log is not None else derive_run_id(seed)
    per_tier = math.ceil(target_puzzles / len(TIERS))

    puzzles: List[Puzzle] = []
    seen: Set[str] = set()
    tier_counts: Dict[int, int] = {}
    attempts = 0

    _LOGGER.info(
        "generation %s: %d roots, target %d (%d per tier), budget %d attempts",
        run_id,
        len(dictionary.roots),
        target_puzzles,
        per_tier,
        max_attempts,
    )
    if run_log is not None:
        run_log.append(
            "generation.started",
            seed=seed,
            roots=len(dictionary.roots),
            target=target_puzzles,
            max_attempts=max_attempts,
        )

    for tier in TIERS:
        clues = prefilled_count(tier)
        produced = 0
        _LOGGER.info("tier %d (%d clues)", tier, clues)

        while produced < per_tier and attempts < max_attempts:
            attempts += 1
            grid = fill_grid(dictionary, rng)
            if grid is None:
                continue

            key = get_solution_key(grid)
            if key in seen:
                continue
            seen.add(key)

            puzzle_id = len(puzzles)
            puzzles.append(
                Puzzle(
                    id=puzzle_id,
                    grid=tuple(tuple(row) for row in grid),
                    difficulty=calculate_difficulty(dictionary, grid),
                    prefilled_cells=tuple(prefilled_cells(clues, puzzle_id)),
                    day_difficulty=tier,
                )
            )
            produced += 1
            _LOGGER.info("  generated %d/%d", produced, per_tier)

        tier_counts[tier] = produced
        if run_log is not None:
            run_log.append("tier.completed", tier=tier, produced=produced, target=per_tier, attempts=attempts)

    bank = PuzzleBank(
        generated=generated or utc_timestamp(),
        roots_used=len(dictionary.roots),
        puzzles=tuple(puzzles),
    )
    report = GenerationReport(
        run_id=run_id,
        seed=seed,
        requested=target_puzzles,
        per_tier_target=per_tier,
        produced=len(puzzles),
        attempts=attempts,
        max_attempts=max_attempts,
        tier_counts=tier_counts,
    )

    _LOGGER.info("generated %d puzzles in %d attempts", report.produced, report.attempts)
    if report.shortfall:
        _LOGGER.warning(
            "generation ended %d puzzles short (produced %d of %d per tier x %d tiers, %d/%d attempts)",
            report.shortfall,
            report.produced,
            per_tier,
            len(TIERS),
            report.attempts,
            max_attempts,
        )
    if run_log is not None:
        run_log.append("generation.completed", **report.to_dict())
    return GenerationResult(bank=bank, report=report)


__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_TARGET_PUZZLES",
    "GenerationReport",
    "GenerationResult",
    "derive_run_id",
    "generate_bank",
]
