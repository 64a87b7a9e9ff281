"""Validation of parsed FIX order messages."""

from src.validation.validator import (
    FailureKind,
    ValidationResult,
    check_message,
    validate_message,
)

__all__ = [
    "FailureKind",
    "ValidationResult",
    "check_message",
    "validate_message",
]
