from __future__ import annotations

import json

import pytest

from contracts.errors import BankLoadError
from crossword.bank import (
    PuzzleBank,
    bank_from_dict,
    bank_to_dict,
    check_bank,
    load_bank,
    save_bank,
)
from crossword.scoring import prefilled_cells, prefilled_count

from conftest import make_puzzle

WORDS = ["אאא", "אאב", "אבא", "אבב", "באא", "באב", "בבא"]


@pytest.fixture
def clean_bank() -> PuzzleBank:
    """One puzzle per tier over the binary alphabet, with the tier's clue count."""

    puzzles = []
    for index, word in enumerate(WORDS):
        tier = index + 1
        clues = prefilled_cells(prefilled_count(tier), index)
        puzzles.append(make_puzzle(index, [word, "אאא", "אאא"], tier, clues))
    return PuzzleBank(generated="2024-01-01T00:00:00.000Z", roots_used=8, puzzles=tuple(puzzles))


def _codes(issues):
    return sorted(issue.code for issue in issues)


def test_save_and_load_round_trip(tmp_path, clean_bank):
    path = save_bank(clean_bank, tmp_path / "nested" / "puzzles.json")
    loaded = load_bank(path)
    assert loaded == clean_bank
    assert loaded.fingerprint() == clean_bank.fingerprint()

    raw = path.read_text("utf-8")
    assert "אאא" in raw
    payload = json.loads(raw)
    assert payload["totalPuzzles"] == 7
    assert payload["puzzles"][0]["prefilledCells"][0] == {"row": 2, "col": 0}


def test_fingerprint_tracks_content(clean_bank):
    changed = PuzzleBank(
        generated=clean_bank.generated,
        roots_used=clean_bank.roots_used,
        puzzles=clean_bank.puzzles[:-1],
    )
    assert changed.fingerprint() != clean_bank.fingerprint()
    assert clean_bank.fingerprint().startswith("sha256-")


def test_tier_queries(scenario_bank):
    assert [p.id for p in scenario_bank.for_tier(1)] == [0, 1, 2]
    assert scenario_bank.tier_counts() == {1: 3, 2: 1, 3: 1, 4: 1, 5: 1, 6: 1, 7: 1}
    assert scenario_bank.get(4).day_difficulty == 3
    assert scenario_bank.get(99) is None
    assert scenario_bank.get(0).rows == ["אבד", "בנה", "דהש"]


def test_missing_bank(tmp_path):
    with pytest.raises(BankLoadError) as excinfo:
        load_bank(tmp_path / "absent.json")
    assert excinfo.value.code == "bank-not-found"


def test_invalid_json(tmp_path):
    path = tmp_path / "puzzles.json"
    path.write_text("{\"puzzles\": [", encoding="utf-8")
    with pytest.raises(BankLoadError) as excinfo:
        load_bank(path)
    assert excinfo.value.code == "invalid-json"


def test_schema_violation(clean_bank):
    payload = bank_to_dict(clean_bank)
    payload["puzzles"][0]["dayDifficulty"] = 9
    with pytest.raises(BankLoadError) as excinfo:
        bank_from_dict(payload)
    assert excinfo.value.code == "schema-violation"
    assert "$.puzzles[0].dayDifficulty" in str(excinfo.value)


def test_count_mismatch(clean_bank):
    payload = bank_to_dict(clean_bank)
    payload["totalPuzzles"] = 8
    with pytest.raises(BankLoadError) as excinfo:
        bank_from_dict(payload)
    assert excinfo.value.code == "count-mismatch"


def test_row_with_wrong_letter_count(clean_bank):
    payload = bank_to_dict(clean_bank)
    payload["puzzles"][2]["grid"][1] = "אאאא"
    with pytest.raises(BankLoadError) as excinfo:
        bank_from_dict(payload)
    assert excinfo.value.code == "invalid-grid"


def test_clean_bank_passes_checks(clean_bank, binary_dictionary):
    report = check_bank(clean_bank, binary_dictionary)
    assert report.ok
    assert report.errors == []
    assert report.warnings == []


def test_corrupted_bank_reports_each_problem(clean_bank, binary_dictionary):
    puzzles = list(clean_bank.puzzles)
    puzzles[0] = make_puzzle(0, ["אאת", "אאא", "אאא"], 1, puzzles[0].prefilled_cells)
    puzzles[1] = make_puzzle(1, ["אאב", "אאא", "אאא"], 2, [(0, 0)] * 6)
    puzzles[2] = make_puzzle(1, ["אאב", "אאא", "אאא"], 3, [(0, 3)] + list(puzzles[2].prefilled_cells[1:]))
    bank = PuzzleBank(generated=clean_bank.generated, roots_used=5, puzzles=tuple(puzzles))

    report = check_bank(bank, binary_dictionary)
    assert not report.ok
    assert _codes(report.errors) == [
        "clues.duplicate",
        "clues.range",
        "grid.duplicate",
        "grid.invalid",
        "id.duplicate",
    ]
    assert _codes(report.warnings) == ["roots.stale"]
    assert report.to_dict()["ok"] is False


def test_wrong_clue_count(clean_bank, binary_dictionary):
    puzzles = list(clean_bank.puzzles)
    puzzles[6] = make_puzzle(6, ["בבא", "אאא", "אאא"], 7, [(0, 0)])
    bank = PuzzleBank(generated=clean_bank.generated, roots_used=8, puzzles=tuple(puzzles))
    report = check_bank(bank, binary_dictionary)
    assert _codes(report.errors) == ["clues.count"]


def test_empty_and_small_tiers(binary_dictionary):
    puzzles = [
        make_puzzle(i, [word, "אאא", "אאא"], 1, prefilled_cells(6, i)) for i, word in enumerate(WORDS[:4])
    ]
    puzzles.append(make_puzzle(4, [WORDS[4], "אאא", "אאא"], 2, prefilled_cells(6, 4)))
    bank = PuzzleBank(generated="2024-01-01T00:00:00.000Z", roots_used=8, puzzles=tuple(puzzles))

    report = check_bank(bank, binary_dictionary)
    assert _codes(report.errors) == ["tier.empty"] * 5
    assert _codes(report.warnings) == ["tier.small"]
