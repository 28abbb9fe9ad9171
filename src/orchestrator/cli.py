"""Command line helpers for puzzle bank workflows."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List

from contracts.errors import ContractError, EmptyTierError
from crossword.bank import check_bank, load_bank, save_bank
from crossword.daily import DEFAULT_TIMEZONE, get_puzzle_for_date, get_todays_puzzle
from crossword.generator import print_grid
from lexicon.dictionary import load_dictionary
from project_config import get_section, resolve_path

from .log import RunLog
from .orchestrator import DEFAULT_MAX_ATTEMPTS, DEFAULT_TARGET_PUZZLES, derive_run_id, generate_bank


def _setting(path: str, fallback: Any) -> Any:
    try:
        return get_section(path)
    except (KeyError, RuntimeError):
        return fallback


def _configure_logging() -> None:
    level = str(_setting("logging.level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _dump(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))


def cmd_generate(args: argparse.Namespace) -> int:
    dictionary = load_dictionary(args.dictionary)
    seed = args.seed if args.seed is not None else _setting("generator.seed", "")
    run_log = None
    if args.run_log_dir:
        run_log = RunLog(args.run_log_dir, run_id=derive_run_id(seed))

    result = generate_bank(
        dictionary,
        target_puzzles=args.target,
        max_attempts=args.max_attempts,
        seed=seed,
        run_log=run_log,
    )
    path = save_bank(result.bank, args.output)
    summary = result.report.to_dict()
    summary["output"] = str(path)
    summary["fingerprint"] = result.bank.fingerprint()
    _dump(summary)
    return 0


def cmd_check_bank(args: argparse.Namespace) -> int:
    dictionary = load_dictionary(args.dictionary)
    bank = load_bank(args.bank)
    report = check_bank(bank, dictionary)
    summary = report.to_dict()
    summary["fingerprint"] = bank.fingerprint()
    summary["tier_counts"] = {str(tier): count for tier, count in bank.tier_counts().items()}
    _dump(summary)
    return 0 if report.ok else 1


def cmd_daily(args: argparse.Namespace) -> int:
    bank = load_bank(args.bank)
    if args.date:
        daily = get_puzzle_for_date(bank, args.date, args.timezone)
    else:
        daily = get_todays_puzzle(bank, args.timezone)
    puzzle = daily.puzzle
    _dump(
        {
            "id": puzzle.id,
            "dayDifficulty": puzzle.day_difficulty,
            "difficulty": puzzle.difficulty,
            "grid": puzzle.rows,
            "prefilledCells": [{"row": row, "col": col} for row, col in daily.prefilled],
        }
    )
    if args.show_grid:
        print(print_grid(puzzle.grid_lists()))
    return 0


def build_parser() -> argparse.ArgumentParser:
    dictionary_default = resolve_path(_setting("paths.dictionary", "data/roots.json"))
    bank_default = resolve_path(_setting("paths.bank", "data/puzzles.json"))
    run_log_default = _setting("paths.run_log_dir", None)

    parser = argparse.ArgumentParser(description="Hebrew root mini-crossword tooling")
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Generate the puzzle bank")
    generate.add_argument("--dictionary", type=Path, default=dictionary_default)
    generate.add_argument("--output", type=Path, default=bank_default)
    generate.add_argument(
        "--target",
        type=int,
        default=int(_setting("generator.target_puzzles", DEFAULT_TARGET_PUZZLES)),
        help="Total puzzles to aim for, split evenly over the 7 day tiers",
    )
    generate.add_argument(
        "--max-attempts",
        type=int,
        default=int(_setting("generator.max_attempts", DEFAULT_MAX_ATTEMPTS)),
        help="Global budget of grid searches across all tiers",
    )
    generate.add_argument("--seed", default=None, help="Seed for a reproducible run")
    generate.add_argument(
        "--run-log-dir",
        type=Path,
        default=resolve_path(run_log_default) if run_log_default else None,
        help="Directory for JSONL run events",
    )
    generate.set_defaults(func=cmd_generate)

    check = sub.add_parser("check-bank", help="Validate a puzzle bank against the dictionary")
    check.add_argument("--dictionary", type=Path, default=dictionary_default)
    check.add_argument("--bank", type=Path, default=bank_default)
    check.set_defaults(func=cmd_check_bank)

    daily = sub.add_parser("daily", help="Show the puzzle selected for a date")
    daily.add_argument("--bank", type=Path, default=bank_default)
    daily.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="ISO date (YYYY-MM-DD); defaults to today",
    )
    daily.add_argument("--timezone", default=_setting("daily.timezone", DEFAULT_TIMEZONE))
    daily.add_argument("--show-grid", action="store_true")
    daily.set_defaults(func=cmd_daily)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging()
    try:
        return args.func(args)
    except (ContractError, EmptyTierError) as exc:
        logging.getLogger(__name__).error("%s", exc)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
