"""Validation engine for template variable values."""

from .engine import ValidationOutcome, validate, validate_values
from .messages import DEFAULT_MESSAGES, format_message
from .options import CustomRule, ValidationOptions

__all__ = [
    "validate",
    "validate_values",
    "ValidationOutcome",
    "ValidationOptions",
    "CustomRule",
    "format_message",
    "DEFAULT_MESSAGES",
]
