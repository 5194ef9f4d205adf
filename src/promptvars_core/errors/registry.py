"""Error registry for creating errors from templates."""

from typing import Any

from .errors import ErrorCategory, ErrorTemplate, PromptVarsError


class ErrorRegistry:
    """Registry of error templates. Creates errors from templates + context."""

    def __init__(self) -> None:
        """Initialize error registry with built-in templates."""
        self._templates: dict[str, ErrorTemplate] = {}
        self._load_builtin_templates()

    def get_template(self, code: str) -> ErrorTemplate | None:
        """Get template by error code.

        Args:
            code: Error code to look up

        Returns:
            ErrorTemplate if found, None otherwise
        """
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        """List all registered error codes.

        Returns:
            List of error codes
        """
        return list(self._templates.keys())

    def register(self, template: ErrorTemplate) -> None:
        """Register (or replace) an error template.

        Args:
            template: Template to register
        """
        self._templates[template.code] = template

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
    ) -> PromptVarsError:
        """Create error instance from template + context.

        Args:
            code: Error code
            context: Context variables for template interpolation

        Returns:
            PromptVarsError instance

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = context or {}

        message = self._interpolate(template.message_template, context)
        # Explicit detail in context overrides the template
        detail = context.get("detail") or self._interpolate(template.detail_template, context)
        suggestion = self._interpolate(template.suggestion_template, context)

        if message is None:
            message = f"Error {code}"

        return PromptVarsError(
            code=template.code,
            category=template.category,
            message=message,
            detail=detail,
            suggestion=suggestion,
            variable_name=context.get("variable_name"),
        )

    def _interpolate(
        self,
        template: str | None,
        context: dict[str, Any],
    ) -> str | None:
        """Safe string interpolation.

        Args:
            template: Template string with {var} placeholders
            context: Context variables

        Returns:
            Interpolated string or None if template is None
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except KeyError:
            # Missing context variable - return template as-is
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        # CONFIGURATION Errors
        self._templates["VALIDATION_OPTIONS_INVALID"] = ErrorTemplate(
            code="VALIDATION_OPTIONS_INVALID",
            category=ErrorCategory.CONFIGURATION,
            message_template="Invalid validation options",
            detail_template="The validation options could not be built",
            suggestion_template="Check length bounds and that the pattern is a valid regex",
        )

        self._templates["SYNC_CONFIG_INVALID"] = ErrorTemplate(
            code="SYNC_CONFIG_INVALID",
            category=ErrorCategory.CONFIGURATION,
            message_template="Invalid debounce configuration",
            detail_template="delay_ms={delay_ms}, max_wait_ms={max_wait_ms}",
            suggestion_template="Use non-negative delays with max_wait_ms >= delay_ms",
        )

        self._templates["CONFIG_INVALID"] = ErrorTemplate(
            code="CONFIG_INVALID",
            category=ErrorCategory.CONFIGURATION,
            message_template="Invalid configuration",
            detail_template="The promptvars configuration is invalid",
            suggestion_template="Check the configuration file and fix errors",
        )

        # TEMPLATE Errors
        self._templates["TEMPLATE_SYNTAX"] = ErrorTemplate(
            code="TEMPLATE_SYNTAX",
            category=ErrorCategory.TEMPLATE,
            message_template="Template contains {issue_count} error(s)",
            detail_template="The template could not be parsed",
            suggestion_template="Fix variable names and brace nesting, or escape literal braces",
        )

        self._templates["TEMPLATE_UNRESOLVED"] = ErrorTemplate(
            code="TEMPLATE_UNRESOLVED",
            category=ErrorCategory.TEMPLATE,
            message_template="Required variable '{variable_name}' has no value",
            detail_template="The template cannot be rendered until all required variables are set",
            suggestion_template="Provide a value or promote one to the shared store",
        )

        # SESSION Errors
        self._templates["VARIABLE_NOT_FOUND"] = ErrorTemplate(
            code="VARIABLE_NOT_FOUND",
            category=ErrorCategory.SESSION,
            message_template="Variable '{variable_name}' not found",
            detail_template="The template does not declare this variable",
            suggestion_template="Check the variable name against the parsed template",
        )

        # SYSTEM Errors
        self._templates["INTERNAL_ERROR"] = ErrorTemplate(
            code="INTERNAL_ERROR",
            category=ErrorCategory.SYSTEM,
            message_template="Internal promptvars error",
            detail_template="An unexpected error occurred",
            suggestion_template="Check the logs and report this issue",
        )
