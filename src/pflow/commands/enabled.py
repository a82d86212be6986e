"""Command: list actions that can fire from a state."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pflow.commands._base import PflowCommand, model_options, parse_vector

if TYPE_CHECKING:
    from pflow.commands._context import AppContext


@click.command(
    cls=PflowCommand,
    examples="""\
  pflow enabled --model mymodels.octoe:v1
  pflow enabled --model mymodels.octoe:v1 --role x
  pflow enabled --state 1,1,1,1,0,1,1,1,1,0,1 --role o
  pflow -q enabled --multiplier 2""",
)
@model_options
@click.option("--state", callback=parse_vector, help="Starting vector, e.g. 1,0,2.")
@click.option("--role", default=None, help="Only list actions tagged with this role.")
@click.option("--multiplier", type=int, default=None, help="Firing multiplier.")
@click.pass_obj
def enabled(
    app: AppContext,
    model_ref: str | None,
    schema: str | None,
    state: list[int] | None,
    role: str | None,
    multiplier: int | None,
) -> None:
    """List actions that fire without error from the given (or initial) state."""
    from pflow.services.model import ModelService

    model = app.load_model(model_ref, schema)
    if multiplier is None:
        multiplier = app.settings.simulate.multiplier
    app.emit(ModelService(model).enabled(state, role=role, multiplier=multiplier))
