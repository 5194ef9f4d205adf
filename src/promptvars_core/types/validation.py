"""Shared validation types for promptvars."""

from dataclasses import dataclass, field


@dataclass
class ValidationIssue:
    """Single configuration issue (error or warning).

    Used by:
    - ConfigLoader (config validation)
    """

    path: str  # e.g., "sync.delay_ms"
    message: str  # Human-readable description
    severity: str = "error"  # "error" | "warning"
    line: int | None = None  # Line number in source file (if available)


@dataclass
class ValidationResult:
    """Result of configuration validation.

    Used by:
    - ConfigLoader.validate()
    """

    valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Ensure valid is False if there are errors."""
        if self.errors:
            self.valid = False
