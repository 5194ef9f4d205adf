"""Validation options for variable values."""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from promptvars_core.errors import create_error
from promptvars_core.types import ValidationError

if TYPE_CHECKING:
    from promptvars_core.config import ValidationConfig

# A custom rule returns None when the value is fine, or an error (a plain
# string is accepted as the error detail).
CustomRule = Callable[[str], "ValidationError | str | None"]

DEFAULT_MAX_LENGTH = 1000
DEFAULT_MIN_LENGTH = 0


@dataclass(frozen=True)
class ValidationOptions:
    """Per-variable validation rules.

    Malformed options are rejected when the options are built, never when a
    value is validated. ``pattern`` may be given as a string and is compiled
    here.
    """

    max_length: int | None = DEFAULT_MAX_LENGTH
    min_length: int | None = DEFAULT_MIN_LENGTH
    pattern: "re.Pattern[str] | str | None" = None
    validate: CustomRule | None = None

    def __post_init__(self) -> None:
        """Compile the pattern and check bounds.

        Raises:
            PromptVarsError(VALIDATION_OPTIONS_INVALID)
        """
        for name in ("max_length", "min_length"):
            bound = getattr(self, name)
            if bound is None:
                continue
            if isinstance(bound, bool) or not isinstance(bound, int) or bound < 0:
                raise create_error(
                    "VALIDATION_OPTIONS_INVALID",
                    detail=f"{name} must be a non-negative integer, got {bound!r}",
                )

        if (
            self.max_length is not None
            and self.min_length is not None
            and self.min_length > self.max_length
        ):
            raise create_error(
                "VALIDATION_OPTIONS_INVALID",
                detail=(
                    f"min_length ({self.min_length}) exceeds max_length ({self.max_length})"
                ),
            )

        if isinstance(self.pattern, str):
            try:
                compiled = re.compile(self.pattern)
            except re.error as e:
                raise create_error(
                    "VALIDATION_OPTIONS_INVALID",
                    detail=f"Invalid pattern {self.pattern!r}: {e}",
                ) from e
            object.__setattr__(self, "pattern", compiled)
        elif self.pattern is not None and not isinstance(self.pattern, re.Pattern):
            raise create_error(
                "VALIDATION_OPTIONS_INVALID",
                detail=(
                    "pattern must be a string or compiled regex, "
                    f"got {type(self.pattern).__name__}"
                ),
            )

        if self.validate is not None and not callable(self.validate):
            raise create_error(
                "VALIDATION_OPTIONS_INVALID",
                detail="validate must be callable",
            )

    @classmethod
    def from_config(cls, config: "ValidationConfig") -> "ValidationOptions":
        """Build default options from the validation config section."""
        return cls(max_length=config.max_length, min_length=config.min_length)
