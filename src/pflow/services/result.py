"""The value every pflow service call returns.

A result carries either a payload (``ok=True``) or a :class:`ServiceError`
whose ``code`` is a stable upper-case identifier: an ``EvalError`` name for
rejected actions, or a service code such as ``INVALID_STATE``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed, plus the vectors involved."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: False when ``error`` is set.
        op: Operation name (``describe``, ``enabled``, ``fire``, ...).
        data: Payload on success.
        warnings: Skipped steps and other non-fatal notes.
        error: Failure details.
        meta: Telemetry span tree when tracing is on.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        """Build a failed result for *op*."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )
