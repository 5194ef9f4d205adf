"""Variable value validation.

Pure functions: no timers, no state, safe to call on every keystroke.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from promptvars_core.types import TemplateVariable, ValidationError, VariableErrorKind

from .options import ValidationOptions

_DEFAULT_OPTIONS = ValidationOptions()


@dataclass(frozen=True)
class ValidationOutcome:
    """Verdict for one value."""

    is_valid: bool
    errors: tuple[ValidationError, ...] = ()


def _invalid(variable: TemplateVariable, rule: str, **params: object) -> ValidationError:
    return ValidationError(
        kind=VariableErrorKind.INVALID_VALUE,
        variable_name=variable.name,
        position=variable.position,
        rule=rule,
        params=dict(params),
    )


def _custom_error(variable: TemplateVariable, result: ValidationError | str) -> ValidationError:
    if isinstance(result, str):
        return ValidationError(
            kind=VariableErrorKind.INVALID_VALUE,
            variable_name=variable.name,
            position=variable.position,
            rule="custom",
            detail=result,
        )
    return result.tagged(variable)


def validate(
    variable: TemplateVariable,
    value: str,
    options: ValidationOptions | None = None,
) -> ValidationOutcome:
    """Validate a candidate value for a variable.

    Every rule runs; violations are collected in this order: required,
    max length, min length, pattern, custom.

    Args:
        variable: Variable being edited
        value: Candidate value (untrimmed)
        options: Rules to apply (defaults to max_length=1000, min_length=0)

    Returns:
        ValidationOutcome with ordered errors
    """
    opts = options if options is not None else _DEFAULT_OPTIONS
    trimmed = value.strip()
    errors: list[ValidationError] = []

    if variable.is_required and not trimmed:
        errors.append(
            ValidationError(
                kind=VariableErrorKind.MISSING_REQUIRED,
                variable_name=variable.name,
                position=variable.position,
                rule="required",
            )
        )

    # Max length counts surrounding whitespace, min length does not
    if opts.max_length is not None and len(value) > opts.max_length:
        errors.append(_invalid(variable, "max_length", max_length=opts.max_length))

    if opts.min_length and len(trimmed) < opts.min_length:
        errors.append(_invalid(variable, "min_length", min_length=opts.min_length))

    if opts.pattern is not None and trimmed and not opts.pattern.search(trimmed):
        errors.append(_invalid(variable, "pattern", pattern=opts.pattern.pattern))

    if opts.validate is not None and trimmed:
        result = opts.validate(value)
        if result:
            errors.append(_custom_error(variable, result))

    return ValidationOutcome(is_valid=not errors, errors=tuple(errors))


def validate_values(
    variables: Iterable[TemplateVariable],
    values: Mapping[str, str],
    options: Mapping[str, ValidationOptions] | None = None,
    default_options: ValidationOptions | None = None,
) -> dict[str, ValidationOutcome]:
    """Validate a value for every variable of a template.

    Args:
        variables: Variables in template order
        values: Candidate value per name (missing names validate as "")
        options: Per-variable options
        default_options: Options for variables without an entry in ``options``

    Returns:
        Outcome per variable name, in template order
    """
    per_name = options or {}
    return {
        variable.name: validate(
            variable,
            values.get(variable.name, ""),
            per_name.get(variable.name, default_options),
        )
        for variable in variables
    }
