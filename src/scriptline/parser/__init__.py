"""Fountain screenplay format decoder and encoder for Scriptline."""

from __future__ import annotations

from .classifier import Classification, ClassifierState, classify_line
from .fountain_parser import (
    FountainMetadata,
    FountainParser,
    ParsedFountain,
    ValidationResult,
    validate_fountain,
)
from .fountain_writer import FountainWriter

__all__ = [
    "Classification",
    "ClassifierState",
    "FountainMetadata",
    "FountainParser",
    "FountainWriter",
    "ParsedFountain",
    "ValidationResult",
    "classify_line",
    "validate_fountain",
]
