"""Unit tests for ConfigLoader."""

import io

import pytest

from promptvars_core.config import (
    ConfigLoader,
    PromptVarsConfig,
    resolve_env_vars,
)
from promptvars_core.errors import PromptVarsError
from promptvars_core.logging import LogConfig, PromptVarsLogger
from promptvars_core.types import LogFormat, LogLevel


@pytest.fixture
def loader():
    return ConfigLoader()


def write_config(tmp_path, text):
    path = tmp_path / "promptvars.yaml"
    path.write_text(text)
    return path


class TestLoad:
    """Tests for loading YAML files."""

    def test_full_file(self, loader, tmp_path):
        path = write_config(
            tmp_path,
            """
sync:
  delay_ms: 150
  max_wait_ms: 600
validation:
  max_length: 80
  min_length: 2
template_cache:
  enabled: false
  max_size: 10
  ttl_seconds: 30
logging:
  level: DEBUG
  format: json
  components:
    sync: false
""",
        )

        config = loader.load(path)

        assert config.sync.delay_ms == 150
        assert config.sync.max_wait_ms == 600
        assert config.validation.max_length == 80
        assert config.validation.min_length == 2
        assert config.template_cache.enabled is False
        assert config.template_cache.max_size == 10
        assert config.logging.level is LogLevel.DEBUG
        assert config.logging.format is LogFormat.JSON
        assert config.logging.components.sync is False
        assert config.logging.components.template is True
        assert loader.config_path == path
        assert loader.get() is config

    def test_partial_file_keeps_defaults(self, loader, tmp_path):
        path = write_config(tmp_path, "sync:\n  delay_ms: 100\n")

        config = loader.load(path)

        assert config.sync.delay_ms == 100
        assert config.sync.max_wait_ms == 1000
        assert config.validation.max_length == 1000

    def test_empty_file(self, loader, tmp_path):
        config = loader.load(write_config(tmp_path, ""))

        assert config == PromptVarsConfig()

    def test_null_max_length(self, loader, tmp_path):
        config = loader.load(write_config(tmp_path, "validation:\n  max_length: null\n"))

        assert config.validation.max_length is None

    def test_missing_file_uses_defaults(self, tmp_path):
        output = io.StringIO()
        logger = PromptVarsLogger(LogConfig(format=LogFormat.JSON, output=output))

        config = ConfigLoader(logger=logger).load(tmp_path / "absent.yaml")

        assert config == PromptVarsConfig()
        assert "No config file found" in output.getvalue()

    def test_missing_file_without_defaults(self, loader, tmp_path):
        with pytest.raises(PromptVarsError) as exc_info:
            loader.load(tmp_path / "absent.yaml", use_defaults=False)

        assert exc_info.value.code == "CONFIG_INVALID"
        assert "not found" in exc_info.value.detail

    def test_invalid_yaml(self, loader, tmp_path):
        with pytest.raises(PromptVarsError) as exc_info:
            loader.load(write_config(tmp_path, "sync: [unclosed"))

        assert "Invalid YAML" in exc_info.value.detail

    def test_non_mapping_root(self, loader, tmp_path):
        with pytest.raises(PromptVarsError) as exc_info:
            loader.load(write_config(tmp_path, "- a\n- b\n"))

        assert "mapping" in exc_info.value.detail

    def test_path_from_environment(self, loader, tmp_path, monkeypatch):
        path = write_config(tmp_path, "sync:\n  delay_ms: 42\n  max_wait_ms: 84\n")
        monkeypatch.setenv("PROMPTVARS_CONFIG_PATH", str(path))

        config = loader.load()

        assert config.sync.delay_ms == 42

    def test_get_before_load(self, loader):
        with pytest.raises(PromptVarsError):
            loader.get()


class TestValidation:
    """Tests for config validation."""

    @pytest.mark.parametrize(
        "data,path",
        [
            ({"sync": {"delay_ms": -1}}, "sync.delay_ms"),
            ({"sync": {"delay_ms": 500, "max_wait_ms": 100}}, "sync.max_wait_ms"),
            ({"sync": {"delay_ms": "soon"}}, "sync.delay_ms"),
            ({"validation": {"max_length": -3}}, "validation.max_length"),
            ({"validation": {"min_length": 10, "max_length": 5}}, "validation.min_length"),
            ({"template_cache": {"max_size": 0}}, "template_cache.max_size"),
            ({"logging": "verbose"}, "logging"),
        ],
    )
    def test_errors(self, loader, data, path):
        result = loader.validate(data)

        assert result.valid is False
        assert [issue.path for issue in result.errors] == [path]

    def test_unknown_keys_are_warnings(self, loader):
        result = loader.validate({"extra": 1, "sync": {"delay": 5}})

        assert result.valid is True
        assert {issue.path for issue in result.warnings} == {"extra", "sync.delay"}

    def test_load_from_dict_raises_with_all_errors(self, loader):
        with pytest.raises(PromptVarsError) as exc_info:
            loader.load_from_dict({"sync": {"delay_ms": -1, "max_wait_ms": -1}})

        assert exc_info.value.code == "CONFIG_INVALID"
        assert "sync.delay_ms" in exc_info.value.detail
        assert "sync.max_wait_ms" in exc_info.value.detail


class TestEnvVars:
    """Tests for ${VAR} substitution."""

    def test_set_variable(self, monkeypatch):
        monkeypatch.setenv("PV_DELAY", "250")

        assert resolve_env_vars("${PV_DELAY}") == "250"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("PV_MISSING", raising=False)

        assert resolve_env_vars("${PV_MISSING:-120}") == "120"

    def test_required_missing(self, monkeypatch):
        monkeypatch.delenv("PV_MISSING", raising=False)

        with pytest.raises(PromptVarsError) as exc_info:
            resolve_env_vars("${PV_MISSING}")

        assert "PV_MISSING" in exc_info.value.detail

    def test_custom_error_message(self, monkeypatch):
        monkeypatch.delenv("PV_MISSING", raising=False)

        with pytest.raises(PromptVarsError) as exc_info:
            resolve_env_vars("${PV_MISSING:?set the delay}")

        assert exc_info.value.detail == "set the delay"

    def test_env_values_coerced_in_file(self, loader, tmp_path, monkeypatch):
        monkeypatch.setenv("PV_DELAY", "250")
        monkeypatch.setenv("PV_VERBOSE", "false")
        path = write_config(
            tmp_path,
            'sync:\n  delay_ms: "${PV_DELAY}"\nlogging:\n  show_values: "${PV_VERBOSE}"\n',
        )

        config = loader.load(path)

        assert config.sync.delay_ms == 250
        assert config.logging.show_values is False


class TestBuildLogger:
    """Tests for building a logger from config."""

    def test_build_logger(self, loader):
        config = loader.load_from_dict(
            {"logging": {"level": "WARN", "format": "json", "components": {"sync": False}}}
        )

        logger = loader.build_logger(config)

        assert logger.config.level is LogLevel.WARN
        assert logger.config.format is LogFormat.JSON
        assert logger.config.components == {"template": True, "sync": False, "promotion": True}
