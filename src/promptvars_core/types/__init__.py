"""Shared types for promptvars.

Import from here rather than submodules:
    from promptvars_core.types import TemplateVariable, VariableState
"""

from .enums import (
    LogFormat,
    LogLevel,
    PromotionOutcome,
    SyncState,
    TemplateIssueKind,
    VariableErrorKind,
)
from .validation import ValidationIssue, ValidationResult
from .variables import TemplateVariable, TextPosition, ValidationError, VariableState

__all__ = [
    # Enums
    "LogLevel",
    "LogFormat",
    "VariableErrorKind",
    "TemplateIssueKind",
    "SyncState",
    "PromotionOutcome",
    # Variables
    "TextPosition",
    "TemplateVariable",
    "ValidationError",
    "VariableState",
    # Config validation
    "ValidationIssue",
    "ValidationResult",
]
