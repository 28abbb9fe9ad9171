"""Immutable three-letter root dictionary.

The dictionary is built once from ``{root, meaning}`` records and then passed
by reference to the validator, the generator and the game session.  All
lookups use the normalized form of a root as key.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from contracts.errors import DictionaryLoadError
from contracts.schema_validator import validate_roots_payload

from .letters import normalize_letters, normalize_text, split_letters

_LOGGER = logging.getLogger(__name__)

ROOT_LENGTH = 3


@dataclass(frozen=True)
class Root:
    """A dictionary root: the raw source text, its meaning and normalized letters."""

    text: str
    meaning: str
    letters: Tuple[str, ...]

    @property
    def key(self) -> str:
        return "".join(self.letters)

    @classmethod
    def from_record(cls, text: str, meaning: str) -> "Root":
        return cls(text=text, meaning=meaning, letters=tuple(normalize_letters(split_letters(text))))


class RootDictionary:
    """Read-only lookup structure over the three-letter roots."""

    def __init__(self, roots: Iterable[Root]) -> None:
        kept: List[Root] = [root for root in roots if len(root.letters) == ROOT_LENGTH]
        meanings: Dict[str, str] = {}
        first_source: Dict[str, str] = {}
        alphabet: Dict[str, None] = {}
        frequency: Counter = Counter()
        prefixes = set()

        for root in kept:
            key = root.key
            if key in first_source and first_source[key] != root.text:
                # Later entry wins, matching the bank's historical behaviour.
                _LOGGER.warning(
                    "root %r normalizes to %r like %r; meaning %r replaces %r",
                    root.text,
                    key,
                    first_source[key],
                    root.meaning,
                    meanings[key],
                )
            first_source.setdefault(key, root.text)
            meanings[key] = root.meaning
            for letter in root.letters:
                alphabet.setdefault(letter, None)
                frequency[letter] += 1
            for size in range(1, ROOT_LENGTH):
                prefixes.add("".join(root.letters[:size]))

        self._roots: Tuple[Root, ...] = tuple(kept)
        self._meanings: Mapping[str, str] = MappingProxyType(meanings)
        self._root_set: FrozenSet[str] = frozenset(meanings)
        self._alphabet: Tuple[str, ...] = tuple(alphabet)
        self._frequency: Mapping[str, int] = MappingProxyType(dict(frequency))
        self._prefixes: FrozenSet[str] = frozenset(prefixes)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "RootDictionary":
        return cls(Root.from_record(str(r["root"]), str(r.get("meaning", ""))) for r in records)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "RootDictionary":
        """Build from ``{root: meaning}``; handy for fixtures and small tools."""

        return cls(Root.from_record(root, meaning) for root, meaning in mapping.items())

    # -- lookups -----------------------------------------------------------

    @property
    def roots(self) -> Tuple[Root, ...]:
        """Three-letter entries in source order (duplicates included)."""
        return self._roots

    @property
    def root_set(self) -> FrozenSet[str]:
        return self._root_set

    @property
    def alphabet(self) -> Tuple[str, ...]:
        """Distinct normalized letters in order of first appearance."""
        return self._alphabet

    @property
    def letter_frequency(self) -> Mapping[str, int]:
        return self._frequency

    def __len__(self) -> int:
        return len(self._root_set)

    def __contains__(self, text: object) -> bool:
        return isinstance(text, str) and self.is_valid_root(text)

    def is_valid_root(self, text: str) -> bool:
        return normalize_text(text) in self._root_set

    def meaning_of(self, text: str) -> Optional[str]:
        return self._meanings.get(normalize_text(text))

    def has_prefix(self, text: str) -> bool:
        """True when some root starts with the normalized *text*."""

        normalized = normalize_text(text)
        if len(split_letters(normalized)) >= ROOT_LENGTH:
            return normalized in self._root_set
        return normalized == "" or normalized in self._prefixes

    def all_roots(self) -> List[str]:
        return sorted(self._root_set)

    def frequency_of(self, letter: str) -> int:
        return self._frequency.get(letter, 0)


def load_dictionary(path: str | Path) -> RootDictionary:
    """Load the dictionary source file; any parse or schema failure is fatal."""

    source = Path(path)
    try:
        payload = json.loads(source.read_text("utf-8"))
    except FileNotFoundError as exc:
        raise DictionaryLoadError("dictionary-not-found", str(source)) from exc
    except json.JSONDecodeError as exc:
        raise DictionaryLoadError("invalid-json", f"{source}: {exc}") from exc

    validate_roots_payload(payload)
    dictionary = RootDictionary.from_records(payload)
    _LOGGER.info(
        "dictionary: loaded %d records, %d three-letter roots (%d distinct) from %s",
        len(payload),
        len(dictionary.roots),
        len(dictionary),
        source,
    )
    return dictionary


__all__ = ["ROOT_LENGTH", "Root", "RootDictionary", "load_dictionary"]
