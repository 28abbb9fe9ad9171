from __future__ import annotations

from lexicon.letters import (
    FINAL_TO_REGULAR,
    REGULAR_LETTERS,
    display_word,
    final_form,
    is_final_form,
    letters_equal,
    normalize_letter,
    normalize_text,
    split_letters,
)


def test_final_forms_collapse_to_regular():
    assert normalize_letter("ך") == "כ"
    assert normalize_letter("ם") == "מ"
    assert normalize_letter("ן") == "נ"
    assert normalize_letter("ף") == "פ"
    assert normalize_letter("ץ") == "צ"
    assert normalize_letter("א") == "א"


def test_normalization_is_idempotent():
    for letter in list(REGULAR_LETTERS) + list(FINAL_TO_REGULAR):
        once = normalize_letter(letter)
        assert normalize_letter(once) == once
    for text in ("שלום", "מלך", "ארץ", "abc", ""):
        assert normalize_text(normalize_text(text)) == normalize_text(text)


def test_normalize_text_keeps_order_and_length():
    assert normalize_text("שלום") == "שלומ"
    assert len(split_letters(normalize_text("כתבתם"))) == 5


def test_split_letters_groups_combining_marks():
    # shin with shin dot and qamats, lamed with patah, final mem
    text = "שָׁלַם"
    assert len(text) == 6
    letters = split_letters(text)
    assert len(letters) == 3
    assert normalize_letter(letters[2]) == "מ"


def test_final_form_helpers():
    assert is_final_form("ם")
    assert not is_final_form("מ")
    assert final_form("צ") == "ץ"
    assert final_form("א") == "א"
    assert display_word(["ש", "ל", "מ"]) == "שלם"
    assert letters_equal("מלך", "מלכ")
