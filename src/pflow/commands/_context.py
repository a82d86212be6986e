"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides model loading and centralized result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NoReturn

import click

from pflow.output.formatters import OutputSettings, format_result
from pflow.services.result import ServiceResult

if TYPE_CHECKING:
    from pflow.config.settings import PflowSettings
    from pflow.domain.model import Model


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  Models are loaded on
    demand so ``--help`` and ``--version`` never import declarations.
    """

    def __init__(self, settings: PflowSettings) -> None:
        self.settings = settings

        from pflow.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from pflow.services.telemetry import enable_telemetry

            enable_telemetry()

    def load_model(self, ref: str | None, schema: str | None) -> Model:
        """Compile the declaration named by *ref* (or the configured default).

        Emits an error result and exits when the declaration cannot be
        resolved or is malformed.
        """
        from pflow.domain.errors import ModelDefinitionError
        from pflow.infrastructure.loader import DeclarationLoadError, load_model

        ref = ref or self.settings.model.declaration
        if not ref:
            self.fail(
                "load_model",
                "NO_MODEL",
                "No model declaration given; pass --model or set [model] declaration",
            )
        schema = schema or self.settings.model.schema_name
        try:
            return load_model(ref, schema, base_dir=self.settings.project_root)
        except DeclarationLoadError as exc:
            self.fail("load_model", "LOAD_FAILED", str(exc), {"ref": ref})
        except ModelDefinitionError as exc:
            self.fail("load_model", exc.code.name, str(exc), {"ref": ref})

    def fail(
        self, op: str, code: str, message: str, detail: dict[str, Any] | None = None
    ) -> NoReturn:
        """Emit a failed ServiceResult and exit with code 1."""
        self.emit(ServiceResult.failure(op, code, message, **(detail or {})))
        raise SystemExit(1)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
