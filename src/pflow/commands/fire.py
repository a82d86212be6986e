"""Command: apply a sequence of actions to a state."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pflow.commands._base import PflowCommand, model_options, parse_vector

if TYPE_CHECKING:
    from pflow.commands._context import AppContext


@click.command(
    cls=PflowCommand,
    examples="""\
  pflow fire --model mymodels.counter:v1 inc0 inc0
  pflow fire --state 2,1,1 clearFlag dec0
  pflow fire --keep-going x11 x11 o00
  pflow --json fire --multiplier 3 produce""",
)
@model_options
@click.argument("actions", nargs=-1, required=True)
@click.option("--state", callback=parse_vector, help="Starting vector, e.g. 1,0,2.")
@click.option("--multiplier", type=int, default=None, help="Firing multiplier per action.")
@click.option(
    "--keep-going",
    is_flag=True,
    help="Skip failing actions instead of stopping at the first one.",
)
@click.pass_obj
def fire(
    app: AppContext,
    model_ref: str | None,
    schema: str | None,
    actions: tuple[str, ...],
    state: list[int] | None,
    multiplier: int | None,
    keep_going: bool,
) -> None:
    """Fire ACTIONS in order, starting from the given (or initial) state."""
    from pflow.services.model import ModelService

    model = app.load_model(model_ref, schema)
    if multiplier is None:
        multiplier = app.settings.simulate.multiplier
    stop_on_error = app.settings.simulate.stop_on_error and not keep_going
    app.emit(
        ModelService(model).fire(
            actions,
            state,
            multiplier=multiplier,
            stop_on_error=stop_on_error,
        )
    )
