"""Span tracing for service calls and the transforms they run.

Tracing is off unless :func:`enable_telemetry` was called (``pflow -v``).
When on, a ``@traced`` service method opens a root :class:`Span`; every
action it evaluates inside :func:`trace_step` adds a :class:`StepSpan`
recording the action, the multiplier, and the transform outcome. The
finished tree is attached to ``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ParamSpec

import structlog

from pflow.services.result import ServiceResult

if TYPE_CHECKING:
    from pflow.domain.errors import EvalError
    from pflow.domain.statemachine import Transformation

_enabled: ContextVar[bool] = ContextVar("pflow_telemetry_enabled", default=False)
_root: ContextVar[Span | None] = ContextVar("pflow_telemetry_root", default=None)

_P = ParamSpec("_P")


@dataclass
class Span:
    """Timed node of a trace tree."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    elapsed_ms: float | None = None
    children: list[Span] = field(default_factory=list)

    def close(self) -> None:
        self.elapsed_ms = (time.perf_counter() - self.started) * 1000

    @property
    def steps(self) -> list[StepSpan]:
        return [child for child in self.children if isinstance(child, StepSpan)]

    @property
    def rejected(self) -> int:
        """Number of child steps whose transform returned an error."""
        return sum(1 for step in self.steps if step.error is not None)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "duration_ms": round(self.elapsed_ms or 0.0, 2),
        }
        if self.steps:
            data["rejected"] = self.rejected
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass
class StepSpan(Span):
    """One ``transform`` call: which action ran and how it ended."""

    action: str = ""
    multiplier: int = 1
    error: EvalError | None = None
    state: list[int] = field(default_factory=list)

    def record(self, result: Transformation) -> None:
        self.error = result.error
        self.state = list(result.state)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["action"] = self.action
        data["multiplier"] = self.multiplier
        data["ok"] = self.error is None
        data["state"] = self.state
        if self.error is not None:
            data["error"] = self.error.name
        return data


@contextmanager
def trace_step(action: str, multiplier: int) -> Iterator[StepSpan | None]:
    """Time one transform under the active root span.

    Yields None when tracing is off or no traced call is running; callers
    pass the transform result to :meth:`StepSpan.record` otherwise.
    """
    root = _root.get() if _enabled.get() else None
    if root is None:
        yield None
        return
    step = StepSpan(name=f"transform:{action}", action=action, multiplier=multiplier)
    root.children.append(step)
    try:
        yield step
    finally:
        step.close()


def _log_span(span: Span, *, ok: bool) -> None:
    structlog.get_logger("pflow.telemetry").debug(
        "span.complete",
        span_name=span.name,
        duration_ms=round(span.elapsed_ms or 0.0, 2),
        ok=ok,
        steps=len(span.steps),
        rejected=span.rejected,
    )


def traced(func: Callable[_P, ServiceResult]) -> Callable[_P, ServiceResult]:
    """Run a service method under a root span and attach the tree to its result."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> ServiceResult:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        token = _root.set(span)
        ok = False
        try:
            result = func(*args, **kwargs)
            ok = result.ok
        finally:
            span.close()
            _root.reset(token)
            _log_span(span, ok=ok)

        meta = {**(result.meta or {}), "telemetry": span.to_dict()}
        return result.model_copy(update={"meta": meta})

    return wrapper


def enable_telemetry() -> None:
    """Turn tracing on for the current context."""
    _enabled.set(True)


def disable_telemetry() -> None:
    """Turn tracing off for the current context."""
    _enabled.set(False)
