"""Template parsing type definitions."""

from dataclasses import dataclass, field

from promptvars_core.types import TemplateIssueKind, TemplateVariable, TextPosition


@dataclass(frozen=True)
class TemplateIssue:
    """Problem found while parsing a template."""

    kind: TemplateIssueKind
    message: str
    variable_name: str | None = None
    position: TextPosition | None = None


@dataclass
class ParseResult:
    """Result of parsing a template for variables."""

    variables: list[TemplateVariable]
    issues: list[TemplateIssue] = field(default_factory=list)
    template: str = ""  # Template text with escaped braces resolved
    source: str = ""  # Original template text

    @property
    def is_valid(self) -> bool:
        """Whether the template parsed without issues."""
        return not self.issues

    def get(self, name: str) -> TemplateVariable | None:
        """Look up a variable by name."""
        for variable in self.variables:
            if variable.name == name:
                return variable
        return None


@dataclass
class ParseStats:
    """Timing and cache information for the last parse."""

    cache_hit: bool
    parse_ms: float
