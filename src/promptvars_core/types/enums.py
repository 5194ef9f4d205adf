"""Shared enumerations for promptvars."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class VariableErrorKind(str, Enum):
    """Kind of a variable value validation error."""

    MISSING_REQUIRED = "missing_required"
    INVALID_VALUE = "invalid_value"


class TemplateIssueKind(str, Enum):
    """Kind of a template parse issue."""

    INVALID_NAME = "invalid_name"
    DUPLICATE_NAME = "duplicate_name"
    MALFORMED_SYNTAX = "malformed_syntax"


class SyncState(str, Enum):
    """Debounced synchronizer state."""

    IDLE = "idle"
    PENDING = "pending"


class PromotionOutcome(str, Enum):
    """Result of promoting a variable to the shared store."""

    PROMOTED = "promoted"
    INVALID = "invalid"
    NOT_DIRTY = "not_dirty"
    UNCHANGED = "unchanged"
    UNKNOWN_VARIABLE = "unknown_variable"
