"""Tests for the flyerlib CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from flyerlib.cli import app
from flyerlib.config import PROVIDER_ENV_VAR

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch):
    """Run from an empty directory so no real config file is picked up."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(PROVIDER_ENV_VAR, raising=False)


class TestParseCommand:

    def test_success_json(self, tmp_path: Path, ticketed_response):
        source = tmp_path / "response.txt"
        source.write_text(ticketed_response)
        result = runner.invoke(app, ["parse", str(source), "--json", "--provider", "test-model"])
        assert result.exit_code == 0
        body = json.loads(result.stdout)
        assert body["success"] is True
        assert body["provider"] == "test-model"
        assert body["extractedData"]["state"] == "GA"

    def test_default_provider_from_config(self, tmp_path: Path, envelope_response):
        source = tmp_path / "response.txt"
        source.write_text(envelope_response)
        result = runner.invoke(app, ["parse", str(source), "--json"])
        assert result.exit_code == 0
        body = json.loads(result.stdout)
        assert body["provider"] == "gemini-2.0-flash"
        assert "warning" in body

    def test_failure_exit_code(self, tmp_path: Path):
        source = tmp_path / "response.txt"
        source.write_text("not json")
        result = runner.invoke(app, ["parse", str(source), "--json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"] == "PARSE_ERROR"

    def test_stdin(self, save_the_date_response):
        result = runner.invoke(app, ["parse", "-"], input=save_the_date_response)
        assert result.exit_code == 0
        assert "Atlanta" in result.stdout

    def test_table_output_for_incomplete(self, tmp_path: Path):
        source = tmp_path / "response.txt"
        source.write_text(json.dumps({"description": "Foo", "eventName": "Foo", "eventDate": "Jan 1"}))
        result = runner.invoke(app, ["parse", str(source)])
        assert result.exit_code == 1
        assert "INCOMPLETE_FLYER_DATA" in result.stdout

    def test_missing_file(self, tmp_path: Path):
        result = runner.invoke(app, ["parse", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1
        assert "File not found" in result.stdout

    def test_unknown_log_level_in_config(self, tmp_path: Path, ticketed_response):
        source = tmp_path / "response.txt"
        source.write_text(ticketed_response)
        config_file = tmp_path / "extraction_config.json"
        config_file.write_text(json.dumps({"log_level": "LOUD"}))
        result = runner.invoke(app, ["parse", str(source), "--config", str(config_file)])
        assert result.exit_code == 1
        assert "Unknown log_level" in result.stdout


class TestOtherCommands:

    def test_states(self):
        result = runner.invoke(app, ["states"])
        assert result.exit_code == 0
        assert "WV" in result.stdout

    def test_config_show(self, monkeypatch):
        monkeypatch.setenv(PROVIDER_ENV_VAR, "local-llava")
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "local-llava" in result.stdout
