"""promptvars configuration - Config loading and management."""

from .loader import (
    ConfigLoader,
    get_config_loader,
    load_config,
    resolve_env_vars,
)
from .models import (
    LoggingComponentsConfig,
    LoggingConfig,
    PromptVarsConfig,
    SyncConfig,
    TemplateCacheConfig,
    ValidationConfig,
)

__all__ = [
    # Config models
    "PromptVarsConfig",
    "SyncConfig",
    "ValidationConfig",
    "TemplateCacheConfig",
    "LoggingConfig",
    "LoggingComponentsConfig",
    # Loader
    "ConfigLoader",
    "get_config_loader",
    "load_config",
    # Utilities
    "resolve_env_vars",
]
