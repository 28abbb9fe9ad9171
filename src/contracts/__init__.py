"""Data contracts for the root dictionary and the puzzle bank."""

from __future__ import annotations

from .errors import (
    BankLoadError,
    ContractError,
    DictionaryLoadError,
    EmptyTierError,
    ValidationIssue,
    ValidationReport,
)
from .schema_validator import validate_bank_payload, validate_roots_payload

__all__ = [
    "BankLoadError",
    "ContractError",
    "DictionaryLoadError",
    "EmptyTierError",
    "ValidationIssue",
    "ValidationReport",
    "validate_bank_payload",
    "validate_roots_payload",
]
