"""promptvars configuration data models."""

from dataclasses import dataclass, field

from promptvars_core.types import LogFormat, LogLevel


@dataclass
class SyncConfig:
    """Debounced input configuration (milliseconds)."""

    delay_ms: int = 300  # Quiet period after the latest edit
    max_wait_ms: int = 1000  # Ceiling measured from the first edit


@dataclass
class ValidationConfig:
    """Default validation bounds applied when a variable has no options."""

    max_length: int | None = 1000
    min_length: int = 0


@dataclass
class TemplateCacheConfig:
    """Parsed template cache configuration."""

    enabled: bool = True
    max_size: int = 100
    ttl_seconds: int = 300


@dataclass
class LoggingComponentsConfig:
    """Logging components configuration."""

    template: bool = True
    sync: bool = True
    promotion: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    show_values: bool = True
    truncate_at: int = 200
    components: LoggingComponentsConfig = field(default_factory=LoggingComponentsConfig)


@dataclass
class PromptVarsConfig:
    """Root configuration."""

    sync: SyncConfig = field(default_factory=SyncConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    template_cache: TemplateCacheConfig = field(default_factory=TemplateCacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
