"""Hebrew letter normalization.

Final (word-end) letter forms collapse to their regular form before any
comparison, lookup or storage.  Text is composed to NFC and split into
grapheme clusters so that a letter carrying niqqud or a shin/sin dot counts
as one letter.
"""

from __future__ import annotations

import unicodedata
from typing import Iterable, List

FINAL_TO_REGULAR = {
    "ך": "כ",  # kaf sofit
    "ם": "מ",  # mem sofit
    "ן": "נ",  # nun sofit
    "ף": "פ",  # pe sofit
    "ץ": "צ",  # tsadi sofit
}

REGULAR_TO_FINAL = {regular: final for final, regular in FINAL_TO_REGULAR.items()}

# Regular letters in alphabetical order; keyboards and docs use this set.
REGULAR_LETTERS = (
    "א", "ב", "ג", "ד", "ה", "ו", "ז", "ח", "ט", "י", "כ",
    "ל", "מ", "נ", "ס", "ע", "פ", "צ", "ק", "ר", "ש", "ת",
)


def split_letters(text: str) -> List[str]:
    """Split *text* into grapheme clusters (base character plus combining marks)."""

    letters: List[str] = []
    for char in unicodedata.normalize("NFC", text):
        if letters and unicodedata.combining(char):
            letters[-1] += char
        else:
            letters.append(char)
    return letters


def normalize_letter(letter: str) -> str:
    """Return the canonical form of a single letter (grapheme)."""

    if not letter:
        return letter
    base = FINAL_TO_REGULAR.get(letter[0])
    if base is None:
        return letter
    return base + letter[1:]


def normalize_letters(letters: Iterable[str]) -> List[str]:
    return [normalize_letter(letter) for letter in letters]


def normalize_text(text: str) -> str:
    """Normalize every letter of *text*, preserving order and letter count."""

    return "".join(normalize_letters(split_letters(text)))


def letters_equal(a: str, b: str) -> bool:
    return normalize_text(a) == normalize_text(b)


def is_final_form(letter: str) -> bool:
    return bool(letter) and letter[0] in FINAL_TO_REGULAR


def final_form(letter: str) -> str:
    """Return the word-end form of *letter*, or *letter* itself when it has none."""

    if not letter:
        return letter
    final = REGULAR_TO_FINAL.get(letter[0])
    if final is None:
        return letter
    return final + letter[1:]


def display_word(letters: Iterable[str]) -> str:
    """Join normalized letters, writing the last one in its final form."""

    items = list(letters)
    if items:
        items[-1] = final_form(items[-1])
    return "".join(items)


__all__ = [
    "FINAL_TO_REGULAR",
    "REGULAR_LETTERS",
    "REGULAR_TO_FINAL",
    "display_word",
    "final_form",
    "is_final_form",
    "letters_equal",
    "normalize_letter",
    "normalize_letters",
    "normalize_text",
    "split_letters",
]
