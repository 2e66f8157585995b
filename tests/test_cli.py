"""Tests for the click CLI."""
import json
import logging

import pytest
import structlog
from click.testing import CliRunner

from model_openapi import __version__
from model_openapi.__main__ import cli

MODEL = {
    "name": "Notes",
    "schema": {
        "def": {
            "type": "object",
            "shape": {
                "id": {"def": {"type": "string"}},
                "body": {"def": {"type": "optional", "innerType": {"def": {"type": "any"}}}},
            },
        },
    },
    "properties": {"id": {"propertyType": "UniqueId", "config": {"required": True}}},
}


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def model_file(tmp_path):
    path = tmp_path / "notes.json"
    path.write_text(json.dumps(MODEL))
    return path


def test_convert_writes_output_file(runner, model_file, tmp_path):
    output = tmp_path / "out.json"
    result = runner.invoke(cli, ["--log-level", "ERROR", "convert", str(model_file), "-o", str(output), "--indent", "0"])

    assert result.exit_code == 0, result.output
    assert json.loads(output.read_text()) == {
        "type": "object",
        "additionalProperties": False,
        "properties": {"id": {"type": "string"}, "body": {}},
        "required": ["id"],
    }


def test_convert_report_lists_issues(runner, model_file, tmp_path):
    output = tmp_path / "out.json"
    result = runner.invoke(cli, ["--log-level", "ERROR", "convert", str(model_file), "-o", str(output), "--report"])

    assert result.exit_code == 0, result.output
    assert "[info] /properties/body:" in result.output


def test_convert_invalid_document_fails(runner, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{oops")
    result = runner.invoke(cli, ["--log-level", "ERROR", "convert", str(bad)])

    assert result.exit_code == 1
    assert "not valid JSON" in result.output


def test_convert_missing_file_is_a_usage_error(runner, tmp_path):
    result = runner.invoke(cli, ["convert", str(tmp_path / "nope.json")])
    assert result.exit_code == 2


def test_version(runner):
    result = runner.invoke(cli, ["version"])
    assert result.exit_code == 0
    assert f"model-openapi v{__version__}" in result.output


def test_config_show_reflects_overrides(runner, tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"conversion": {"output_indent": 4}}))
    result = runner.invoke(cli, ["--config-file", str(config_file), "--log-format", "console", "--log-level", "error", "config-show"])

    assert result.exit_code == 0, result.output
    shown = json.loads(result.output)
    assert shown["conversion"]["output_indent"] == 4
    assert shown["logging"]["level"] == "ERROR"
    assert shown["logging"]["format"] == "console"


def test_broken_config_file_exits(runner, tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text("[]")
    result = runner.invoke(cli, ["--config-file", str(config_file), "version"])
    assert result.exit_code == 1
    assert "Error loading configuration" in result.output
