"""Template variable and variable state types."""

from dataclasses import dataclass, field, replace
from typing import Any

from .enums import VariableErrorKind


@dataclass(frozen=True)
class TextPosition:
    """Span of a placeholder inside the template text."""

    start: int
    end: int


@dataclass(frozen=True)
class TemplateVariable:
    """A named placeholder found in a template.

    Immutable once the template is parsed. Names are unique within one
    template.
    """

    name: str
    position: TextPosition
    is_required: bool = True
    default_value: str | None = None
    description: str | None = None
    original_match: str = ""


@dataclass(frozen=True)
class ValidationError:
    """Single validation error for a variable value.

    Carries the violated rule and its parameters instead of a pre-rendered
    string. Use ``promptvars_core.validation.format_message`` to render it.
    """

    kind: VariableErrorKind
    variable_name: str | None = None
    position: TextPosition | None = None
    rule: str = "custom"  # required | max_length | min_length | pattern | custom
    params: dict[str, Any] = field(default_factory=dict)
    detail: str | None = None  # Free-form text supplied by custom validators

    @property
    def message(self) -> str:
        """Human-readable message (default English catalog)."""
        from promptvars_core.validation.messages import format_message

        return format_message(self)

    def tagged(self, variable: TemplateVariable) -> "ValidationError":
        """Return copy tagged with the variable's name and position if missing.

        Args:
            variable: Owning variable

        Returns:
            ValidationError with name and position filled in
        """
        if self.variable_name is not None and self.position is not None:
            return self
        return replace(
            self,
            variable_name=self.variable_name or variable.name,
            position=self.position or variable.position,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for host layers.

        Returns:
            Dictionary representation of the error
        """
        return {
            "kind": self.kind.value,
            "variable_name": self.variable_name,
            "position": (
                {"start": self.position.start, "end": self.position.end}
                if self.position
                else None
            ),
            "rule": self.rule,
            "params": dict(self.params),
            "message": self.message,
        }


@dataclass(frozen=True)
class VariableState:
    """Authoritative state of one variable, owned by a session.

    Replaced as a whole on every commit or reset; never mutated in place.
    """

    value: str = ""
    is_valid: bool = True
    is_dirty: bool = False
    errors: tuple[ValidationError, ...] = ()

    def __post_init__(self) -> None:
        """Keep is_valid consistent with errors."""
        if self.errors and self.is_valid:
            object.__setattr__(self, "is_valid", False)
        elif not self.errors and not self.is_valid:
            object.__setattr__(self, "is_valid", True)
