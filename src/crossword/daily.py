"""Deterministic mapping from a calendar date to the puzzle of the day."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Union
from zoneinfo import ZoneInfo

from contracts.errors import EmptyTierError

from .bank import Puzzle, PuzzleBank
from .scoring import Position

DEFAULT_TIMEZONE = "Asia/Jerusalem"

_UINT32 = 1 << 32
_INT32_MAX = (1 << 31) - 1

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class DailyPuzzle:
    puzzle: Puzzle
    prefilled: List[Position]


def date_hash(text: str) -> int:
    """Rolling 31-multiplier string hash, wrapped to signed 32 bits, made non-negative."""

    h = 0
    for char in text:
        h = (h * 31 + ord(char)) % _UINT32
    if h > _INT32_MAX:
        h -= _UINT32
    return abs(h)


def tier_for_weekday(day: date) -> int:
    """Monday..Saturday map to tiers 1..6, Sunday to tier 7."""

    return day.weekday() + 1


def local_date(moment: DateLike, tz: str = DEFAULT_TIMEZONE) -> date:
    """Calendar date of *moment* in *tz*.

    A plain ``date`` or a naive ``datetime`` is taken to already be in *tz*.
    """

    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            moment = moment.astimezone(ZoneInfo(tz))
        return moment.date()
    return moment


def get_puzzle_for_date(bank: PuzzleBank, day: DateLike, tz: str = DEFAULT_TIMEZONE) -> DailyPuzzle:
    """Pick the puzzle for *day*; the same date always yields the same puzzle.

    Raises :class:`EmptyTierError` when the bank has no puzzle for the tier;
    a bank in that state is broken and must not be deployed.
    """

    calendar_day = local_date(day, tz)
    tier = tier_for_weekday(calendar_day)
    candidates = bank.for_tier(tier)
    if not candidates:
        raise EmptyTierError(tier)

    index = date_hash(calendar_day.isoformat()) % len(candidates)
    puzzle = candidates[index]
    return DailyPuzzle(puzzle=puzzle, prefilled=list(puzzle.prefilled_cells))


def get_todays_puzzle(
    bank: PuzzleBank,
    tz: str = DEFAULT_TIMEZONE,
    now: Optional[datetime] = None,
) -> DailyPuzzle:
    moment = now if now is not None else datetime.now(ZoneInfo(tz))
    return get_puzzle_for_date(bank, moment, tz)


def get_puzzle_by_id(bank: PuzzleBank, puzzle_id: int) -> Optional[DailyPuzzle]:
    puzzle = bank.get(puzzle_id)
    if puzzle is None:
        return None
    return DailyPuzzle(puzzle=puzzle, prefilled=list(puzzle.prefilled_cells))


__all__ = [
    "DEFAULT_TIMEZONE",
    "DailyPuzzle",
    "date_hash",
    "get_puzzle_by_id",
    "get_puzzle_for_date",
    "get_todays_puzzle",
    "local_date",
    "tier_for_weekday",
]
