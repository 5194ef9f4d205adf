"""promptvars logger - Component scoped colored or JSON logging."""

import json
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, TextIO

from promptvars_core.logging.colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    ORANGE,
    RED,
    RESET,
    YELLOW,
)
from promptvars_core.types import LogFormat, LogLevel

COMPONENTS = ("template", "sync", "promotion")


@dataclass
class LogConfig:
    """Logger configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    show_values: bool = True
    truncate_at: int = 200
    components: dict[str, bool] = field(default_factory=dict)
    output: TextIO = field(default=sys.stdout)

    def __post_init__(self) -> None:
        """Initialize default components if not provided."""
        if not self.components:
            self.components = {name: True for name in COMPONENTS}


class PromptVarsLogger:
    """Main logger facade. Creates component-specific loggers."""

    def __init__(self, config: LogConfig | None = None):
        """Initialize logger with configuration.

        Args:
            config: Logger configuration (defaults to LogConfig())
        """
        self.config = config or LogConfig()
        self._level_order = {
            LogLevel.DEBUG: 0,
            LogLevel.INFO: 1,
            LogLevel.WARN: 2,
            LogLevel.ERROR: 3,
        }

    def template(self) -> "TemplateLogger":
        """Get a logger for template parsing events."""
        return TemplateLogger(self)

    def sync(self, variable_name: str) -> "SyncLogger":
        """Get a logger scoped to one variable input.

        Args:
            variable_name: Name of the bound variable

        Returns:
            SyncLogger instance
        """
        return SyncLogger(self, variable_name)

    def promotion(self) -> "PromotionLogger":
        """Get a logger for shared store promotion events."""
        return PromotionLogger(self)

    def configure(self, config: LogConfig) -> None:
        """Update configuration.

        Args:
            config: New logger configuration
        """
        self.config = config

    def _should_log(self, level: LogLevel) -> bool:
        return self._level_order.get(level, 0) >= self._level_order.get(self.config.level, 1)

    def _log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Internal logging method.

        Args:
            level: Log level
            component: Component name (template, sync, promotion)
            message: Log message
            context: Additional context data
        """
        if not self._should_log(level):
            return

        if not self.config.components.get(component, True):
            return

        if self.config.format == LogFormat.JSON:
            self._log_json(level, component, message, context)
        else:
            self._log_colored(level, component, message, context)

    def _log_json(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": level.value,
            "component": component,
            "message": message,
        }
        if context:
            log_entry.update(context)

        print(json.dumps(log_entry), file=self.config.output)

    def _log_colored(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        level_colors = {
            LogLevel.DEBUG: LIGHT_BLUE,
            LogLevel.INFO: CYAN,
            LogLevel.WARN: YELLOW,
            LogLevel.ERROR: RED,
        }

        color = level_colors.get(level, RESET)
        component_color = {
            "template": MAGENTA,
            "sync": ORANGE,
            "promotion": GREEN,
        }.get(component, RESET)

        # Format: [COMPONENT] message
        output = f"{component_color}[{component.upper()}]{RESET} {color}{message}{RESET}"

        if context and self.config.show_values:
            context_str = str(context)
            if len(context_str) > self.config.truncate_at:
                context_str = context_str[: self.config.truncate_at] + "..."
            output += f" {LIGHT_BLUE}{context_str}{RESET}"

        print(output, file=self.config.output)


class TemplateLogger:
    """Logger for template parsing events."""

    def __init__(self, parent: PromptVarsLogger):
        self.parent = parent

    def parsed(self, variable_count: int, issue_count: int, parse_ms: float) -> None:
        """Log a completed parse.

        Args:
            variable_count: Number of variables found
            issue_count: Number of parse issues
            parse_ms: Parse time in milliseconds
        """
        context = {
            "event": "template_parsed",
            "variable_count": variable_count,
            "issue_count": issue_count,
            "parse_ms": round(parse_ms, 3),
        }
        level = LogLevel.WARN if issue_count else LogLevel.DEBUG
        message = f"Template parsed ({variable_count} variables, {issue_count} issues)"
        self.parent._log(level, "template", message, context)

    def cache_hit(self, variable_count: int) -> None:
        """Log a parse served from the cache."""
        self.parent._log(
            LogLevel.DEBUG,
            "template",
            "Template served from cache",
            {"event": "template_cache_hit", "variable_count": variable_count},
        )


class SyncLogger:
    """Logger for debounced input events of one variable."""

    def __init__(self, parent: PromptVarsLogger, variable_name: str):
        """Initialize sync logger.

        Args:
            parent: Parent PromptVarsLogger instance
            variable_name: Variable the input is bound to
        """
        self.parent = parent
        self.variable_name = variable_name

    def _context(self, event: str, **extra: Any) -> dict[str, Any]:
        context = {"variable": self.variable_name, "event": event}
        context.update(extra)
        return context

    def pending(self) -> None:
        """Log the Idle to Pending transition."""
        self.parent._log(
            LogLevel.DEBUG,
            "sync",
            f"'{self.variable_name}' pending",
            self._context("sync_pending"),
        )

    def committed(self, value: str, trigger: str) -> None:
        """Log a commit.

        Args:
            value: Committed value
            trigger: What fired the commit (quiet, ceiling, flush)
        """
        extra: dict[str, Any] = {"trigger": trigger, "length": len(value)}
        if self.parent.config.show_values:
            extra["value"] = value
        self.parent._log(
            LogLevel.DEBUG,
            "sync",
            f"'{self.variable_name}' committed ({trigger})",
            self._context("sync_committed", **extra),
        )

    def suppressed(self) -> None:
        """Log a commit that matched the owner's value and was not propagated."""
        self.parent._log(
            LogLevel.DEBUG,
            "sync",
            f"'{self.variable_name}' unchanged, owner not notified",
            self._context("sync_suppressed"),
        )

    def disposed(self, was_pending: bool) -> None:
        """Log input disposal.

        Args:
            was_pending: Whether an uncommitted edit was dropped
        """
        level = LogLevel.INFO if was_pending else LogLevel.DEBUG
        message = f"'{self.variable_name}' disposed"
        if was_pending:
            message += " (pending edit dropped)"
        self.parent._log(level, "sync", message, self._context("sync_disposed"))


class PromotionLogger:
    """Logger for shared store promotion events."""

    def __init__(self, parent: PromptVarsLogger):
        self.parent = parent

    def promoted(self, variable_name: str) -> None:
        """Log a successful promotion."""
        self.parent._log(
            LogLevel.INFO,
            "promotion",
            f"Promoted '{variable_name}' to shared store ✓",
            {"event": "variable_promoted", "variable": variable_name},
        )

    def rejected(self, variable_name: str, reason: str) -> None:
        """Log a rejected promotion.

        Args:
            variable_name: Variable name
            reason: Outcome value explaining the rejection
        """
        self.parent._log(
            LogLevel.DEBUG,
            "promotion",
            f"Promotion of '{variable_name}' skipped: {reason}",
            {"event": "promotion_rejected", "variable": variable_name, "reason": reason},
        )
