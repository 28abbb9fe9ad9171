"""Shared error types for dictionary and puzzle bank contracts."""

from __future__ import annotations


from dataclasses import dataclass
from typing import List, Optional

SEVERITY_ERROR = "ERROR"
SEVERITY_WARN = "WARN"


class ContractError(RuntimeError):
    """Raised when a data file does not satisfy its contract."""

    def __init__(self, code: str, detail: Optional[str] = None) -> None:
        self.code = code
        self.detail = detail
        message = code if detail is None else f"{code}:{detail}"
        super().__init__(message)


class DictionaryLoadError(ContractError):
    """The root dictionary source is missing or malformed."""


class BankLoadError(ContractError):
    """The puzzle bank file is missing or malformed."""


class EmptyTierError(IndexError):
    """A day tier has no puzzles in the bank."""

    def __init__(self, tier: int) -> None:
        self.tier = tier
        super().__init__(f"puzzle bank has no puzzles for day tier {tier}")


@dataclass(frozen=True)
class ValidationIssue:
    """Single finding produced by an integrity check."""

    code: str
    msg: str
    path: str
    severity: str


@dataclass(frozen=True)
class ValidationReport:
    """Aggregate result of running the integrity checks."""

    ok: bool
    errors: List[ValidationIssue]
    warnings: List[ValidationIssue]

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "errors": [issue.__dict__ for issue in self.errors],
            "warnings": [issue.__dict__ for issue in self.warnings],
        }


def make_error(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct an error-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_ERROR)


def make_warning(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct a warning-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_WARN)


def build_report(issues: List[ValidationIssue]) -> ValidationReport:
    """Split *issues* by severity into a :class:`ValidationReport`."""

    errors = [issue for issue in issues if issue.severity == SEVERITY_ERROR]
    warnings = [issue for issue in issues if issue.severity != SEVERITY_ERROR]
    return ValidationReport(ok=not errors, errors=errors, warnings=warnings)


__all__ = [
    "SEVERITY_ERROR",
    "SEVERITY_WARN",
    "BankLoadError",
    "ContractError",
    "DictionaryLoadError",
    "EmptyTierError",
    "ValidationIssue",
    "ValidationReport",
    "build_report",
    "make_error",
    "make_warning",
]
