"""Tests for configuration module."""

import json

import pytest
from pydantic import ValidationError

from model_openapi.config import Config, ConversionConfig, LoggingConfig


def test_config_from_env(monkeypatch):
    """Test loading configuration from environment variables."""
    monkeypatch.setenv("MODEL_OPENAPI_LOGGING__LEVEL", "DEBUG")
    monkeypatch.setenv("MODEL_OPENAPI_LOGGING__FORMAT", "console")
    monkeypatch.setenv("MODEL_OPENAPI_CONVERSION__OUTPUT_INDENT", "4")
    monkeypatch.setenv("MODEL_OPENAPI_CONVERSION__WARN_ON_NON_OBJECT_ROOT", "false")
    monkeypatch.setenv("MODEL_OPENAPI_APP_VERSION", "9.9.9")

    # With pydantic-settings, Config() directly loads from env vars
    config = Config()

    assert config.logging.level == "DEBUG"
    assert config.logging.format == "console"
    assert config.conversion.output_indent == 4
    assert config.conversion.warn_on_non_object_root is False
    assert config.conversion.report_untyped_fields is True
    assert config.app_version == "9.9.9"


def test_config_defaults():
    """Test default configuration values."""
    config = Config()

    # LoggingConfig defaults
    assert config.logging.level == "INFO"
    assert config.logging.format == "json"
    assert config.logging.file is None

    # ConversionConfig defaults
    assert config.conversion.warn_on_non_object_root is True
    assert config.conversion.report_untyped_fields is True
    assert config.conversion.output_indent == 2

    # Top-level Config defaults
    assert config.app_name == "model-openapi"
    assert config.app_version == "0.1.0"


def test_config_from_file(tmp_path):
    """Missing sections fall back to their defaults."""
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({
        "logging": {"level": "WARNING", "file": str(tmp_path / "run.log")},
        "conversion": {"report_untyped_fields": False},
    }))

    config = Config.from_file(config_path)

    assert config.logging.level == "WARNING"
    assert config.logging.file == tmp_path / "run.log"
    assert config.logging.format == "json"
    assert config.conversion.report_untyped_fields is False
    assert config.conversion.output_indent == 2


@pytest.mark.parametrize("indent", [-1, 9])
def test_output_indent_is_bounded(indent):
    with pytest.raises(ValidationError):
        ConversionConfig(output_indent=indent)


def test_nested_models_are_independent():
    first, second = Config(), Config()
    first.logging.level = "DEBUG"
    assert second.logging.level == "INFO"
    assert isinstance(first.logging, LoggingConfig)
