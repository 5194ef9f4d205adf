"""promptvars error types."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error source categories."""

    CONFIGURATION = "CONFIGURATION"
    TEMPLATE = "TEMPLATE"
    SESSION = "SESSION"
    SYSTEM = "SYSTEM"


@dataclass
class PromptVarsError(Exception):
    """Structured error with context. Base exception for all promptvars errors.

    Raised only for programmer or configuration mistakes. Invalid variable
    values are reported as ``ValidationError`` data, never raised.
    """

    # Identity
    code: str  # e.g., "VALIDATION_OPTIONS_INVALID"
    category: ErrorCategory

    # Messages
    message: str  # Human-readable summary
    detail: str | None = None  # Extended explanation
    suggestion: str | None = None  # Actionable fix

    # Context
    variable_name: str | None = None  # Which variable was involved

    # Metadata
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Set Exception message."""
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for host layers.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "detail": self.detail,
            "suggestion": self.suggestion,
            "variable_name": self.variable_name,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class ErrorTemplate:
    """Template for creating errors."""

    code: str
    category: ErrorCategory
    message_template: str  # "Variable '{variable_name}' not found"
    detail_template: str | None = None
    suggestion_template: str | None = None
