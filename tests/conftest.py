"""Shared pytest fixtures and test helpers for pflow tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from click.testing import CliRunner

from pflow.domain.model import Model, new_model
from pflow.services.telemetry import disable_telemetry
from tests import models


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def counter_model() -> Model:
    return new_model("counter", models.counter)


@pytest.fixture
def pointer_model() -> Model:
    return new_model("pointer", models.pointer)


@pytest.fixture
def buffer_model() -> Model:
    return new_model("buffer", models.bounded_buffer)


@pytest.fixture
def inhibited_model() -> Model:
    return new_model("inhibited", models.inhibited_increment)


@pytest.fixture
def octoe_model() -> Model:
    return new_model("octoe", models.octoe)


@pytest.fixture
def _no_telemetry() -> Generator[None]:
    """Reset the telemetry flag after tests that enable it."""
    yield
    disable_telemetry()


@pytest.fixture
def _isolated_project(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI tests from an empty directory with no pflow.toml above it.

    Use via ``@pytest.mark.usefixtures("_isolated_project")``.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PFLOW_CONFIG", raising=False)
