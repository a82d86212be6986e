"""Logging setup: stdlib loggers rendered through structlog.

pflow modules log with ``logging.getLogger(__name__)`` and the telemetry
module with ``structlog.get_logger``. Both reach a single stderr handler
whose formatter renders a console line or, with ``--log-json``, one JSON
object per record. Only the ``pflow`` logger tree drops to DEBUG under
``--verbose``; everything else stays at WARNING.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

PFLOW_LOGGER = "pflow"


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _renderer(log_json: bool) -> Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route stdlib and structlog records to stderr.

    Safe to call repeatedly: the root handler is replaced, not stacked.
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)
    logging.getLogger(PFLOW_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
