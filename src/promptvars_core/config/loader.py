"""promptvars configuration loader."""

import os
import re
import typing
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from promptvars_core.errors import create_error
from promptvars_core.logging import LogConfig, PromptVarsLogger
from promptvars_core.types import LogLevel, ValidationIssue, ValidationResult

from .models import PromptVarsConfig

CONFIG_ENV_VAR = "PROMPTVARS_CONFIG_PATH"
LOCAL_CONFIG_NAME = "promptvars.yaml"

_VALID_KEYS = {
    "sync": {"delay_ms", "max_wait_ms"},
    "validation": {"max_length", "min_length"},
    "template_cache": {"enabled", "max_size", "ttl_seconds"},
    "logging": {"level", "format", "show_values", "truncate_at", "components"},
}


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        PromptVarsError: If required var not set
    """
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        if operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg)
        raise create_error(
            "CONFIG_INVALID",
            detail=f"Required environment variable {var_name} not set",
        )

    return re.sub(pattern, replacer, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return resolve_env_vars(data)
    else:
        return data


def _coerce_int(value: Any) -> Any:
    """Env-substituted numbers arrive as strings."""
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    return value


class ConfigLoader:
    """Load and validate promptvars configuration."""

    def __init__(self, logger: PromptVarsLogger | None = None):
        """Initialize config loader.

        Args:
            logger: Optional PromptVarsLogger instance
        """
        self._config: PromptVarsConfig | None = None
        self._config_path: Path | None = None
        self._logger = logger

    @property
    def config_path(self) -> Path | None:
        """Path of the last loaded file, if any."""
        return self._config_path

    def load(self, path: str | Path | None = None, use_defaults: bool = True) -> PromptVarsConfig:
        """Load configuration from file.

        Resolution order if path not specified:
        1. PROMPTVARS_CONFIG_PATH environment variable
        2. ./promptvars.yaml
        3. ~/.promptvars/config.yaml
        4. If use_defaults=True and no file found, use default configuration

        Args:
            path: Optional path to config file
            use_defaults: If True, use default config when no file found

        Returns:
            Loaded PromptVarsConfig instance

        Raises:
            PromptVarsError: If file not found (when use_defaults=False) or invalid
        """
        if path is None:
            path = self._resolve_config_path()

        config_path = Path(path)

        if not config_path.exists():
            if use_defaults:
                if self._logger:
                    self._logger._log(
                        LogLevel.INFO, "config", "No config file found, using defaults"
                    )
                return self.load_defaults()
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file not found: {config_path}",
            )

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration root must be a mapping",
            )

        data = _resolve_env_vars_recursive(data)
        return self.load_from_dict(data, config_path)

    def load_defaults(self) -> PromptVarsConfig:
        """Load default configuration without a file.

        Returns:
            PromptVarsConfig with default values
        """
        return self.load_from_dict({})

    def load_from_dict(
        self, data: dict[str, Any], config_path: Path | None = None
    ) -> PromptVarsConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            config_path: Optional path to config file (for tracking)

        Returns:
            Loaded PromptVarsConfig instance

        Raises:
            PromptVarsError: If configuration is invalid
        """
        validation = self.validate(data)
        if not validation.valid:
            error_messages = [f"- {issue.path}: {issue.message}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
            )

        try:
            config = self._convert_field(PromptVarsConfig, data)
        except (TypeError, ValueError) as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Failed to parse configuration: {e}",
            ) from e

        self._config = config
        self._config_path = config_path
        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Args:
            data: Configuration dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        for key, section in data.items():
            if key not in _VALID_KEYS:
                warnings.append(
                    ValidationIssue(
                        path=key,
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )
                continue
            if not isinstance(section, dict):
                errors.append(ValidationIssue(path=key, message=f"{key} must be a dictionary"))
                continue
            for sub_key in section:
                if sub_key not in _VALID_KEYS[key]:
                    warnings.append(
                        ValidationIssue(
                            path=f"{key}.{sub_key}",
                            message=f"Unknown configuration key: {key}.{sub_key}",
                            severity="warning",
                        )
                    )

        sync = data.get("sync")
        if isinstance(sync, dict):
            delay = _coerce_int(sync.get("delay_ms", 300))
            max_wait = _coerce_int(sync.get("max_wait_ms", 1000))
            for name, value in (("delay_ms", delay), ("max_wait_ms", max_wait)):
                if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                    errors.append(
                        ValidationIssue(
                            path=f"sync.{name}",
                            message=f"{name} must be a non-negative integer",
                        )
                    )
            if isinstance(delay, int) and isinstance(max_wait, int) and max_wait < delay:
                errors.append(
                    ValidationIssue(
                        path="sync.max_wait_ms",
                        message="max_wait_ms must be greater than or equal to delay_ms",
                    )
                )

        validation = data.get("validation")
        if isinstance(validation, dict):
            max_length = _coerce_int(validation.get("max_length"))
            min_length = _coerce_int(validation.get("min_length", 0))
            if max_length is not None and (not isinstance(max_length, int) or max_length < 0):
                errors.append(
                    ValidationIssue(
                        path="validation.max_length",
                        message="max_length must be a non-negative integer or null",
                    )
                )
            if not isinstance(min_length, int) or min_length < 0:
                errors.append(
                    ValidationIssue(
                        path="validation.min_length",
                        message="min_length must be a non-negative integer",
                    )
                )
            elif isinstance(max_length, int) and min_length > max_length:
                errors.append(
                    ValidationIssue(
                        path="validation.min_length",
                        message="min_length must not exceed max_length",
                    )
                )

        cache = data.get("template_cache")
        if isinstance(cache, dict):
            for name in ("max_size", "ttl_seconds"):
                if name in cache:
                    value = _coerce_int(cache[name])
                    if not isinstance(value, int) or value <= 0:
                        errors.append(
                            ValidationIssue(
                                path=f"template_cache.{name}",
                                message=f"{name} must be a positive integer",
                            )
                        )

        return ValidationResult(valid=True, errors=errors, warnings=warnings)

    def get(self) -> PromptVarsConfig:
        """Get current configuration.

        Raises:
            PromptVarsError: If configuration not loaded
        """
        if self._config is None:
            raise create_error("CONFIG_INVALID", detail="Configuration not loaded")
        return self._config

    def build_logger(self, config: PromptVarsConfig | None = None) -> PromptVarsLogger:
        """Create a logger from the logging section.

        Args:
            config: Configuration to use (defaults to the loaded one)

        Returns:
            Configured PromptVarsLogger
        """
        logging_config = (config or self.get()).logging
        components = logging_config.components
        return PromptVarsLogger(
            LogConfig(
                level=logging_config.level,
                format=logging_config.format,
                show_values=logging_config.show_values,
                truncate_at=logging_config.truncate_at,
                components={f.name: getattr(components, f.name) for f in fields(components)},
            )
        )

    def _resolve_config_path(self) -> Path:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path)

        local_path = Path(LOCAL_CONFIG_NAME)
        if local_path.exists():
            return local_path

        home_path = Path.home() / ".promptvars" / "config.yaml"
        if home_path.exists():
            return home_path

        # Not found - use local path as default
        return local_path

    def _convert_field(self, field_type: Any, value: Any) -> Any:
        """Convert field value to appropriate type.

        Args:
            field_type: Expected field type
            value: Value to convert

        Returns:
            Converted value
        """
        if value is None:
            return None

        # Optional[int] and friends
        args = typing.get_args(field_type)
        if args and type(None) in args:
            non_none = [a for a in args if a is not type(None)]
            if len(non_none) == 1:
                return self._convert_field(non_none[0], value)

        if hasattr(field_type, "__dataclass_fields__"):
            if isinstance(value, dict):
                hints = typing.get_type_hints(field_type)
                kwargs = {}
                for f in fields(field_type):
                    if f.name in value:
                        kwargs[f.name] = self._convert_field(hints[f.name], value[f.name])
                return field_type(**kwargs)
            return value

        if isinstance(field_type, type) and any(
            base.__name__ == "Enum" for base in field_type.__mro__
        ):
            if isinstance(value, str):
                return field_type(value)
            return value

        if field_type is int:
            return _coerce_int(value)

        if field_type is bool and isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")

        return value


# Convenience singleton
_default_loader: ConfigLoader | None = None


def get_config_loader() -> ConfigLoader:
    """Get default config loader singleton.

    Returns:
        Default ConfigLoader instance
    """
    global _default_loader  # noqa: PLW0603
    if _default_loader is None:
        _default_loader = ConfigLoader()
    return _default_loader


def load_config(path: str | Path | None = None) -> PromptVarsConfig:
    """Convenience function to load config.

    Args:
        path: Optional path to config file

    Returns:
        Loaded PromptVarsConfig instance
    """
    return get_config_loader().load(path)
