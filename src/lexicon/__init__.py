"""Root dictionary and Hebrew letter normalization."""

from __future__ import annotations

from .dictionary import ROOT_LENGTH, Root, RootDictionary, load_dictionary
from .letters import normalize_letter, normalize_text, split_letters

__all__ = [
    "ROOT_LENGTH",
    "Root",
    "RootDictionary",
    "load_dictionary",
    "normalize_letter",
    "normalize_text",
    "split_letters",
]
