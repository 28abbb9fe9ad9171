"""Offline generation of the puzzle bank."""

from .log import RunLog
from .orchestrator import GenerationReport, GenerationResult, generate_bank

__all__ = [
    "GenerationReport",
    "GenerationResult",
    "RunLog",
    "generate_bank",
]
