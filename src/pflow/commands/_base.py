"""Custom Click base classes and shared options.

Provides PflowCommand that accepts an ``examples`` parameter. When
``--examples`` is passed, the command prints usage examples and exits.
This keeps ``--help`` concise while making examples available on demand.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

_F = TypeVar("_F", bound=Callable[..., Any])


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class PflowCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def parse_vector(
    _ctx: click.Context, param: click.Parameter, value: str | None
) -> list[int] | None:
    """Click callback turning ``"1,0,2"`` into ``[1, 0, 2]``."""
    if value is None:
        return None
    text = value.strip().strip("[]")
    if not text:
        return []
    try:
        return [int(part) for part in text.split(",")]
    except ValueError as exc:
        msg = f"expected comma-separated integers, got {value!r}"
        raise click.BadParameter(msg, param=param) from exc


def model_options(func: _F) -> _F:
    """Add the shared ``--model`` / ``--schema`` options to a command."""
    func = click.option(
        "--schema",
        default=None,
        help="Model name (default: [model] schema_name).",
    )(func)
    func = click.option(
        "-m",
        "--model",
        "model_ref",
        default=None,
        metavar="REF",
        help="Declaration as module:function or file.py:function.",
    )(func)
    return func
