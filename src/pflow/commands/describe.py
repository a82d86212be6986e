"""Command: summarize a model's places, transitions, and roles."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pflow.commands._base import PflowCommand, model_options

if TYPE_CHECKING:
    from pflow.commands._context import AppContext


@click.command(
    cls=PflowCommand,
    examples="""\
  pflow describe --model mymodels.counter:v1
  pflow describe --model models/octoe.py:v1 --schema octoe
  pflow --json describe""",
)
@model_options
@click.pass_obj
def describe(app: AppContext, model_ref: str | None, schema: str | None) -> None:
    """Show the compiled places, transitions, and guards of a model."""
    from pflow.services.model import ModelService

    model = app.load_model(model_ref, schema)
    app.emit(ModelService(model).describe())
