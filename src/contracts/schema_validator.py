"""Offline JSON Schema validation for the dictionary and puzzle bank files."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Type

import jsonschema

from .errors import BankLoadError, ContractError, DictionaryLoadError

_SCHEMA_ROOT = Path(__file__).resolve().parent / "schemas"

ROOTS_SCHEMA = "roots.schema.json"
PUZZLE_BANK_SCHEMA = "puzzle_bank.schema.json"


@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a schema shipped in ``contracts/schemas`` and check it is well formed."""

    resolved = _SCHEMA_ROOT / schema_name
    try:
        schema = json.loads(resolved.read_text("utf-8"))
    except FileNotFoundError as exc:
        raise ContractError("schema-not-found", schema_name) from exc

    Validator = jsonschema.validators.validator_for(schema)
    Validator.check_schema(schema)
    return schema


def _json_path(exc: jsonschema.ValidationError) -> str:
    components = ["$"]
    for part in exc.absolute_path:
        if isinstance(part, int):
            components.append(f"[{part}]")
        else:
            components.append(f".{part}")
    return "".join(components)


def _validate(obj: Any, schema_name: str, error_cls: Type[ContractError]) -> None:
    schema = load_schema(schema_name)
    Validator = jsonschema.validators.validator_for(schema)
    error = jsonschema.exceptions.best_match(Validator(schema).iter_errors(obj))
    if error is not None:
        raise error_cls("schema-violation", f"{_json_path(error)}: {error.message}") from error


def validate_roots_payload(obj: Any) -> None:
    """Raise :class:`DictionaryLoadError` unless *obj* is a valid root list."""

    _validate(obj, ROOTS_SCHEMA, DictionaryLoadError)


def validate_bank_payload(obj: Any) -> None:
    """Raise :class:`BankLoadError` unless *obj* is a valid puzzle bank."""

    _validate(obj, PUZZLE_BANK_SCHEMA, BankLoadError)


__all__ = [
    "PUZZLE_BANK_SCHEMA",
    "ROOTS_SCHEMA",
    "load_schema",
    "validate_bank_payload",
    "validate_roots_payload",
]
