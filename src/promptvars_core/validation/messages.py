"""Message catalog for validation errors.

Validation errors carry a rule name and parameters; this module turns them
into display text. Hosts with their own wording pass a custom catalog.
"""

from collections.abc import Mapping

from promptvars_core.types import ValidationError

DEFAULT_MESSAGES: dict[str, str] = {
    "required": "{name} is required",
    "max_length": "{name} cannot be longer than {max_length} characters",
    "min_length": "{name} must be at least {min_length} characters",
    "pattern": "{name} has an invalid format",
    "custom": "{name} is invalid",
}


def format_message(error: ValidationError, catalog: Mapping[str, str] | None = None) -> str:
    """Render an error as text.

    A custom rule's own detail text wins over the catalog entry.

    Args:
        error: Error to render
        catalog: Rule name to format string (defaults to DEFAULT_MESSAGES)

    Returns:
        Display message
    """
    if error.detail:
        return error.detail

    messages = catalog if catalog is not None else DEFAULT_MESSAGES
    template = messages.get(error.rule) or DEFAULT_MESSAGES.get(error.rule, "{name} is invalid")
    context = {"name": error.variable_name or "value", **error.params}
    try:
        return template.format(**context)
    except (KeyError, IndexError):
        return template
