"""Tests for the enabled command."""

import json

import pytest
from click.testing import CliRunner

from pflow.cli import cli

pytestmark = pytest.mark.usefixtures("_isolated_project")

OCTOE = ["-m", "tests.models:octoe"]


class TestEnabled:
    def test_initial_state(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "enabled", *OCTOE])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["count"] == 9
        assert all(item["role"] == "x" for item in data["items"])

    def test_state_and_role(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["-q", "enabled", *OCTOE, "--state", "1,1,1,1,0,1,1,1,1,0,1", "--role", "o"],
        )
        assert result.exit_code == 0, result.output
        actions = result.output.split()
        assert len(actions) == 8
        assert "o11" not in actions

    def test_bracketed_state(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["-q", "enabled", "-m", "tests.models:bounded_buffer", "--state", "[3]"]
        )
        assert result.output.split() == ["Consume"]

    def test_multiplier(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["-q", "enabled", "-m", "tests.models:bounded_buffer", "--multiplier", "4"],
        )
        assert result.exit_code == 0
        assert result.output.strip() == ""

    def test_unknown_role_warns(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["enabled", *OCTOE, "--role", "z"])
        assert result.exit_code == 0
        assert "WARNING: Unknown role 'z'" in result.output

    def test_bad_state_vector(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["enabled", *OCTOE, "--state", "1,x"])
        assert result.exit_code == 2
        assert "comma-separated integers" in result.output

    def test_wrong_length_state(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "enabled", *OCTOE, "--state", "1,1"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "INVALID_STATE"
