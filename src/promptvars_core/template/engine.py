"""Template engine: cached parsing and rendering of placeholder templates."""

import time
from collections.abc import Mapping
from typing import TYPE_CHECKING

from promptvars_core.errors import create_error
from promptvars_core.logging import PromptVarsLogger

from .cache import TemplateCache
from .parser import parse_template, replace_variables
from .types import ParseResult, ParseStats

if TYPE_CHECKING:
    from promptvars_core.config import TemplateCacheConfig
    from promptvars_core.store import SharedVariableStore


class TemplateEngine:
    """Parse and render prompt templates.

    Supports:
    - Placeholders: {{ topic }}
    - Defaults: {{ tone:friendly }}
    - Descriptions: {{ tone:friendly:Voice of the answer }}
    - Escaped braces: \\{{ literal \\}}

    Does NOT support:
    - Expressions or filters
    - Nested placeholders
    """

    def __init__(
        self,
        cache: TemplateCache | None = None,
        use_cache: bool = True,
        logger: PromptVarsLogger | None = None,
    ) -> None:
        """Initialize template engine.

        Args:
            cache: Parse cache (defaults to a new TemplateCache())
            use_cache: Whether parse() consults the cache
            logger: Optional logger
        """
        self._cache = cache if cache is not None else TemplateCache()
        self._use_cache = use_cache
        self._logger = logger.template() if logger else None
        self.last_stats: ParseStats | None = None

    @classmethod
    def from_config(
        cls,
        config: "TemplateCacheConfig",
        logger: PromptVarsLogger | None = None,
    ) -> "TemplateEngine":
        """Build an engine from the template_cache config section."""
        cache = TemplateCache(max_size=config.max_size, ttl_seconds=config.ttl_seconds)
        return cls(cache=cache, use_cache=config.enabled, logger=logger)

    @property
    def cache(self) -> TemplateCache:
        return self._cache

    def parse(self, template: str) -> ParseResult:
        """Parse a template, reusing a cached result when possible.

        Args:
            template: Template text

        Returns:
            ParseResult (issues are returned as data)
        """
        if self._use_cache:
            cached = self._cache.get(template)
            if cached is not None:
                self.last_stats = ParseStats(cache_hit=True, parse_ms=0.0)
                if self._logger:
                    self._logger.cache_hit(len(cached.variables))
                return cached

        started = time.perf_counter()
        result = parse_template(template)
        parse_ms = (time.perf_counter() - started) * 1000

        if self._use_cache:
            self._cache.set(template, result)
        self.last_stats = ParseStats(cache_hit=False, parse_ms=parse_ms)
        if self._logger:
            self._logger.parsed(len(result.variables), len(result.issues), parse_ms)
        return result

    def parse_strict(self, template: str) -> ParseResult:
        """Parse a template, raising if it has any issue.

        Raises:
            PromptVarsError(TEMPLATE_SYNTAX) listing every issue
        """
        result = self.parse(template)
        if result.issues:
            raise create_error(
                "TEMPLATE_SYNTAX",
                issue_count=len(result.issues),
                detail="; ".join(issue.message for issue in result.issues),
            )
        return result

    def invalidate(self, template: str) -> None:
        """Forget the cached parse of one template."""
        self._cache.invalidate(template)

    def resolve_values(
        self,
        parsed: ParseResult,
        values: Mapping[str, str],
        shared: "SharedVariableStore | None" = None,
    ) -> dict[str, str]:
        """Pick the effective value of each variable.

        Precedence: non-blank local value, then shared store value, then the
        placeholder default.

        Args:
            parsed: Parsed template
            values: Local values by variable name
            shared: Optional shared/global store

        Returns:
            Value per variable name; variables with no value are omitted

        Raises:
            PromptVarsError(TEMPLATE_UNRESOLVED) for a required variable with no value
        """
        resolved: dict[str, str] = {}
        for variable in parsed.variables:
            value = values.get(variable.name)
            if value is not None and value.strip():
                resolved[variable.name] = value
                continue
            if shared is not None and shared.has(variable.name):
                shared_value = shared.get(variable.name)
                if shared_value is not None:
                    resolved[variable.name] = shared_value
                    continue
            if variable.default_value is not None:
                resolved[variable.name] = variable.default_value
            elif variable.is_required:
                raise create_error("TEMPLATE_UNRESOLVED", variable_name=variable.name)
        return resolved

    def render(
        self,
        template: str,
        values: Mapping[str, str],
        shared: "SharedVariableStore | None" = None,
    ) -> str:
        """Render a template with local values and optional shared values.

        Args:
            template: Template text
            values: Local values by variable name
            shared: Optional shared/global store

        Returns:
            Rendered text with escaped braces unescaped

        Raises:
            PromptVarsError(TEMPLATE_SYNTAX) if the template is malformed
            PromptVarsError(TEMPLATE_UNRESOLVED) if a required variable has no value
        """
        parsed = self.parse_strict(template)
        return replace_variables(template, self.resolve_values(parsed, values, shared))
