"""Tests for the CLI entry point."""
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from flow_migrate.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@patch("flow_migrate.cli.main.setup_logging")
class TestCli:
    """Argument handling and exit codes."""

    def test_no_arguments(self, mock_logging, runner):
        result = runner.invoke(cli, [])

        assert result.exit_code == 1
        assert "✖ Checking path" in result.output
        assert "unable to find [path] argument" in result.output
        # Nothing after the first step is attempted
        assert "Checking prerequisites" not in result.output

    def test_two_arguments(self, mock_logging, runner, tmp_path):
        result = runner.invoke(cli, [str(tmp_path), str(tmp_path)])

        assert result.exit_code == 1
        assert "unable to find [path] argument" in result.output

    def test_nonexistent_path(self, mock_logging, runner, tmp_path):
        result = runner.invoke(cli, [str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Could not find anything at path" in result.output

    def test_failure_message_followed_by_blank_line(self, mock_logging, runner, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("")

        result = runner.invoke(cli, [str(target)])

        assert result.exit_code == 1
        assert result.output.endswith(f'Provided path is not a directory "{target}"\n\n')

    def test_missing_prompts_file(self, mock_logging, runner, tmp_path, monkeypatch):
        monkeypatch.setenv("FLOW_MIGRATE_PROMPTS_FILE", str(tmp_path / "prompts.yaml"))

        result = runner.invoke(cli, [str(tmp_path)])

        assert result.exit_code == 1
        assert "Prompt table file not found" in result.output
        assert "Checking path" not in result.output

    def test_invalid_settings(self, mock_logging, runner, tmp_path, monkeypatch):
        monkeypatch.setenv("FLOW_MIGRATE_PROMPT_IDLE_TIMEOUT_S", "-1")

        result = runner.invoke(cli, [str(tmp_path)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
