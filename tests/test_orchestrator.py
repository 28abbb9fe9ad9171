from __future__ import annotations

import json
import logging

import pytest

from crossword.bank import check_bank
from crossword.scoring import prefilled_cells, prefilled_count
from crossword.validator import get_solution_key, validate_grid
from orchestrator import RunLog, generate_bank
from orchestrator.orchestrator import derive_run_id


def _events(path):
    return [json.loads(line) for line in path.read_text("utf-8").splitlines()]


def test_one_puzzle_per_tier(binary_dictionary):
    result = generate_bank(binary_dictionary, target_puzzles=7, max_attempts=200, seed="s1")
    bank, report = result.bank, result.report

    assert [p.id for p in bank.puzzles] == list(range(7))
    assert [p.day_difficulty for p in bank.puzzles] == [1, 2, 3, 4, 5, 6, 7]
    assert report.produced == 7
    assert report.shortfall == 0
    assert not report.exhausted
    assert bank.roots_used == 8

    for puzzle in bank.puzzles:
        assert validate_grid(binary_dictionary, puzzle.grid)
        assert puzzle.difficulty == 83
        assert list(puzzle.prefilled_cells) == prefilled_cells(prefilled_count(puzzle.day_difficulty), puzzle.id)

    keys = {get_solution_key(p.grid) for p in bank.puzzles}
    assert len(keys) == 7
    assert check_bank(bank, binary_dictionary).ok


def test_seeded_runs_repeat(binary_dictionary):
    first = generate_bank(binary_dictionary, target_puzzles=7, max_attempts=200, seed="repeat", generated="fixed")
    second = generate_bank(binary_dictionary, target_puzzles=7, max_attempts=200, seed="repeat", generated="fixed")
    assert first.bank == second.bank
    assert first.bank.fingerprint() == second.bank.fingerprint()
    assert first.report.run_id == second.report.run_id == derive_run_id("repeat")


def test_budget_exhaustion_is_reported(scenario_dictionary, caplog):
    with caplog.at_level(logging.WARNING, logger="orchestrator.orchestrator"):
        result = generate_bank(scenario_dictionary, target_puzzles=14, max_attempts=60, seed="short")
    report = result.report

    assert report.per_tier_target == 2
    assert report.tier_counts == {1: 1, 2: 0, 3: 0, 4: 0, 5: 0, 6: 0, 7: 0}
    assert report.attempts == 60
    assert report.shortfall == 13
    assert report.exhausted
    assert result.bank.total_puzzles == 1
    assert "short" in caplog.text


def test_zero_budget(binary_dictionary):
    result = generate_bank(binary_dictionary, target_puzzles=7, max_attempts=0)
    assert result.bank.total_puzzles == 0
    assert result.report.attempts == 0
    assert result.report.exhausted


def test_zero_target(binary_dictionary):
    result = generate_bank(binary_dictionary, target_puzzles=0, max_attempts=50)
    assert result.report.attempts == 0
    assert result.report.shortfall == 0
    assert not result.report.exhausted


def test_negative_arguments(binary_dictionary):
    with pytest.raises(ValueError):
        generate_bank(binary_dictionary, target_puzzles=-1)
    with pytest.raises(ValueError):
        generate_bank(binary_dictionary, max_attempts=-1)


def test_run_log_records_lifecycle(tmp_path, binary_dictionary):
    run_log = RunLog(tmp_path, run_id="run-1")
    result = generate_bank(binary_dictionary, target_puzzles=7, max_attempts=200, seed="logged", run_log=run_log)

    events = _events(run_log.path)
    names = [event["event"] for event in events]
    assert names == ["generation.started"] + ["tier.completed"] * 7 + ["generation.completed"]
    assert {event["run_id"] for event in events} == {"run-1"}
    assert result.report.run_id == "run-1"
    assert events[-1]["produced"] == 7
    assert run_log.path.name == "generation_00.jsonl"


def test_run_log_rotates(tmp_path):
    run_log = RunLog(tmp_path, run_id="r", max_bytes=1)
    first = run_log.append("one")
    second = run_log.append("two")
    assert first != second
    assert second.name == "generation_01.jsonl"
    assert _events(first)[0]["event"] == "one"
    assert "ts" in _events(second)[0]
