"""promptvars logging - Component scoped colored logging."""

from .colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    ORANGE,
    RED,
    RESET,
    YELLOW,
)
from .logger import (
    LogConfig,
    PromotionLogger,
    PromptVarsLogger,
    SyncLogger,
    TemplateLogger,
)

__all__ = [
    # Logger classes
    "PromptVarsLogger",
    "TemplateLogger",
    "SyncLogger",
    "PromotionLogger",
    "LogConfig",
    # Colors
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "ORANGE",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
