"""Subcommand modules for pflow.

Provides register_commands() which uses deferred imports to keep
``pflow --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from pflow.commands.describe import describe
    from pflow.commands.enabled import enabled
    from pflow.commands.fire import fire

    cli.add_command(describe)
    cli.add_command(enabled)
    cli.add_command(fire)
