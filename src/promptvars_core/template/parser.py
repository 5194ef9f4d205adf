"""Template parsing utilities.

Placeholder syntax::

    {{name}}
    {{name:default}}
    {{name:default:description}}

``\\{{`` and ``\\}}`` are literal braces and never start a placeholder.
"""

import re

from promptvars_core.types import TemplateIssueKind, TemplateVariable, TextPosition

from .types import ParseResult, TemplateIssue

ESCAPED_BRACES = re.compile(r"\\(\{\{|\}\})")

VARIABLE_PATTERN = re.compile(r"(?<!\\)\{\{([^{}:]+)(?::([^{}:]*))?(?::([^{}]*))?\}\}")

NESTED_PATTERN = re.compile(r"\{\{[^{}]*\{\{|\}\}[^{}]*\}\}")

# Letters, digits and underscores; no leading digit, no trailing underscore
VARIABLE_NAME_PATTERN = re.compile(r"^(?:[A-Za-z]|[A-Za-z_][A-Za-z0-9_]*[A-Za-z0-9])$")


def is_valid_name(name: str) -> bool:
    """Check a variable name against VARIABLE_NAME_PATTERN.

    Args:
        name: Candidate name (already trimmed)

    Returns:
        True if the name is allowed
    """
    return bool(VARIABLE_NAME_PATTERN.match(name))


def unescape_template(text: str) -> str:
    """Turn escaped braces into literal braces."""
    return ESCAPED_BRACES.sub(r"\1", text)


def _mask_escapes(text: str) -> str:
    """Blank out escaped braces, keeping offsets stable."""
    return ESCAPED_BRACES.sub(lambda m: " " * len(m.group(0)), text)


def _check_syntax(text: str) -> list[TemplateIssue]:
    match = NESTED_PATTERN.search(_mask_escapes(text))
    if match is None:
        return []
    return [
        TemplateIssue(
            kind=TemplateIssueKind.MALFORMED_SYNTAX,
            message="Nested variables are not allowed",
            position=TextPosition(match.start(), match.end()),
        )
    ]


def _check_name(name: str, position: TextPosition) -> TemplateIssue | None:
    if not name:
        return TemplateIssue(
            kind=TemplateIssueKind.INVALID_NAME,
            message="Variable name cannot be empty",
            variable_name=name,
            position=position,
        )
    if not is_valid_name(name):
        return TemplateIssue(
            kind=TemplateIssueKind.INVALID_NAME,
            message=(
                f'Variable name "{name}" must start with a letter or underscore, '
                "contain only letters, numbers, and underscores, "
                "and not end with an underscore"
            ),
            variable_name=name,
            position=position,
        )
    return None


def parse_template(text: str) -> ParseResult:
    """Extract and validate all variables from a template string.

    A malformed template (nested placeholders) yields no variables at all.
    Invalid or duplicate names are reported and skipped; the first
    occurrence of a name wins.

    Args:
        text: Template text

    Returns:
        ParseResult with variables in order of appearance
    """
    syntax_issues = _check_syntax(text)
    if syntax_issues:
        return ParseResult(variables=[], issues=syntax_issues, template=text, source=text)

    variables: list[TemplateVariable] = []
    issues: list[TemplateIssue] = []
    seen: set[str] = set()

    for match in VARIABLE_PATTERN.finditer(text):
        raw_name, raw_default, raw_description = match.groups()
        name = raw_name.strip()
        position = TextPosition(match.start(), match.end())

        name_issue = _check_name(name, position)
        if name_issue:
            issues.append(name_issue)
            continue

        if name in seen:
            issues.append(
                TemplateIssue(
                    kind=TemplateIssueKind.DUPLICATE_NAME,
                    message=f'Duplicate variable name "{name}"',
                    variable_name=name,
                    position=position,
                )
            )
            continue
        seen.add(name)

        default_value = raw_default.strip() if raw_default is not None else None
        description = raw_description.strip() if raw_description is not None else None
        variables.append(
            TemplateVariable(
                name=name,
                position=position,
                is_required=not default_value,
                default_value=default_value or None,
                description=description or None,
                original_match=match.group(0),
            )
        )

    return ParseResult(
        variables=variables,
        issues=issues,
        template=unescape_template(text),
        source=text,
    )


def replace_variables(text: str, values: dict[str, str]) -> str:
    """Substitute placeholder values into a template.

    Placeholders whose name is missing from ``values`` are left untouched.
    Escaped braces are unescaped afterwards.

    Args:
        text: Template text
        values: Resolved value per variable name

    Returns:
        Rendered text
    """

    def replacer(match: re.Match[str]) -> str:
        name = match.group(1).strip()
        if name in values:
            return values[name]
        return match.group(0)

    # Split on escapes so "\{{" never pairs with a later "}}"
    parts = ESCAPED_BRACES.split(text)
    rendered: list[str] = []
    for index, part in enumerate(parts):
        if index % 2 == 1:
            rendered.append(part)  # captured literal braces
        else:
            rendered.append(VARIABLE_PATTERN.sub(replacer, part))
    return "".join(rendered)
