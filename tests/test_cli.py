"""Tests for the root pflow CLI."""

import pytest
from click.testing import CliRunner

from pflow import __version__
from pflow.cli import cli

pytestmark = pytest.mark.usefixtures("_isolated_project")


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "pflow" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/missing-pflow.toml", "--version"])
    assert result.exit_code == 0


# --- Commands registered ---

EXPECTED_COMMANDS = ["describe", "enabled", "fire"]


@pytest.mark.parametrize("command", EXPECTED_COMMANDS)
def test_command_registered(cli_runner: CliRunner, command: str) -> None:
    result = cli_runner.invoke(cli, [command, "--help"])
    assert result.exit_code == 0, f"{command} --help failed: {result.output}"


def test_all_commands_in_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    for name in EXPECTED_COMMANDS:
        assert name in result.output, f"{name} missing from --help"


@pytest.mark.parametrize(
    "args,expected",
    [
        (["describe", "--examples"], "pflow describe --model"),
        (["enabled", "--examples"], "--role x"),
        (["fire", "--examples"], "--keep-going"),
    ],
)
def test_examples_flag(cli_runner: CliRunner, args: list[str], expected: str) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    assert "Examples for" in result.output
    assert expected in result.output
