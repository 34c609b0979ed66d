"""Tests for CLI commands."""

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from arith.cli import app
from arith.cli.common import LOG_LEVEL_ENV_VAR, configure_logging


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


def test_eval_command(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "1 + 2"])
    assert result.exit_code == 0
    assert result.output.strip() == "3"


def test_eval_big_number(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "1230 + 24"])
    assert result.exit_code == 0
    assert "1254" in result.output


def test_eval_division_by_zero(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "10 / 0"])
    assert result.exit_code == 1
    assert "Division by zero" in result.output


def test_eval_lexical_error_shows_position(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "1 + x"])
    assert result.exit_code == 1
    assert "Unrecognized character 'x'" in result.output
    assert "      ^" in result.output


def test_eval_skip_unknown(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "1 + 2a", "--skip-unknown"])
    assert result.exit_code == 0
    assert result.output.strip() == "3"


def test_eval_priorities_option(cli_runner: CliRunner):
    reference = cli_runner.invoke(app, ["eval", "6 - 1 + 2"])
    conventional = cli_runner.invoke(app, ["eval", "6 - 1 + 2", "--priorities", "conventional"])
    assert reference.output.strip() == "7"
    assert conventional.output.strip() == "3"


def test_eval_unknown_priorities(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "1 + 2", "-p", "math"])
    assert result.exit_code == 1
    assert "Unknown priority table" in result.output


def test_eval_with_config(cli_runner: CliRunner, tmp_path: Path):
    config = tmp_path / "custom.toml"
    config.write_text('[evaluator]\npriorities = "conventional"\n')
    result = cli_runner.invoke(app, ["eval", "6 - 1 + 2", "--config", str(config)])
    assert result.exit_code == 0
    assert result.output.strip() == "3"


def test_eval_missing_config(cli_runner: CliRunner, tmp_path: Path):
    result = cli_runner.invoke(app, ["eval", "1", "--config", str(tmp_path / "none.toml")])
    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_eval_invalid_config(cli_runner: CliRunner, tmp_path: Path):
    config = tmp_path / "broken.toml"
    config.write_text("[evaluator\n")
    result = cli_runner.invoke(app, ["eval", "1", "--config", str(config)])
    assert result.exit_code == 1
    assert f"Error: invalid config {config}" in result.output
    assert "Traceback" not in result.output


def test_eval_invalid_discovered_config(cli_runner: CliRunner, tmp_path: Path):
    (tmp_path / "arith.toml").write_bytes(b'[evaluator]\npriorities = "\xff"\n')
    result = cli_runner.invoke(app, ["eval", "1"])
    assert result.exit_code == 1
    assert "Error: invalid config" in result.output


def test_eval_long_sum(cli_runner: CliRunner):
    source = " + ".join(["1"] * 1000)
    result = cli_runner.invoke(app, ["eval", source, "--priorities", "conventional"])
    assert result.exit_code == 0
    assert result.output.strip() == "1000"


@pytest.mark.parametrize("name", ["getLogger", "Logger", "basicConfig", "bogus"])
def test_log_level_ignores_non_levels(
    name: str, monkeypatch: pytest.MonkeyPatch, cli_runner: CliRunner
):
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, name)
    seen: dict = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: seen.update(kwargs))
    configure_logging(verbose=False)
    assert seen["level"] == logging.WARNING

    result = cli_runner.invoke(app, ["eval", "1 + 2"])
    assert result.exit_code == 0


def test_log_level_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "debug")
    seen: dict = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: seen.update(kwargs))
    configure_logging(verbose=False)
    assert seen["level"] == logging.DEBUG


def test_tokens_command(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["tokens", "1230 + 24"])
    assert result.exit_code == 0
    assert "3 tokens" in result.output
    assert "1230" in result.output
    assert "plus" in result.output


def test_tree_command(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["tree", "1 + 2 * 3"])
    assert result.exit_code == 0
    assert "Rendered: (1 + (2 * 3))" in result.output
    assert "Depth: 3" in result.output


def test_tree_command_structural_error(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["tree", "1 2"])
    assert result.exit_code == 1
    assert "no operator between" in result.output


def test_check_command(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["check", "1 + 6 - 2 + 3"])
    assert result.exit_code == 0
    assert "Rendered: (1 + (6 - (2 + 3)))" in result.output
    assert "OK" in result.output


def test_version(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.startswith("arith ")
