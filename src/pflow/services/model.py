"""ModelService — inspection and simulation over a compiled model.

All higher-level behavior here is built from the model's read surface
(``actions``, ``transform``, ``initial_state``); the model itself is
never modified. Evaluation errors become ``ServiceError`` codes named
after the :class:`~pflow.domain.errors.EvalError` member.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from pflow.domain.errors import EvalError
from pflow.domain.types import Transition
from pflow.services.base import BaseService
from pflow.services.result import ServiceResult
from pflow.services.telemetry import trace_step, traced

logger = logging.getLogger(__name__)


def _transition_row(txn: Transition) -> dict[str, Any]:
    guards = {label: -min(guard.delta, default=0) for label, guard in txn.guards.items()}
    return {
        "label": txn.label,
        "offset": txn.offset,
        "role": txn.role.label,
        "delta": list(txn.delta),
        "guards": guards,
    }


class ModelService(BaseService):
    """Describes a model and fires actions against caller-supplied states."""

    @traced
    def describe(self) -> ServiceResult:
        """Summarize places, transitions, and roles of the model."""
        model = self._model
        places = [
            {
                "label": p.label,
                "offset": p.offset,
                "initial": p.initial,
                "capacity": p.capacity if p.bounded else None,
            }
            for p in model.places
        ]
        return ServiceResult(
            ok=True,
            op="describe",
            data={
                "schema": model.schema,
                "roles": [r.label for r in model.roles],
                "initial_state": model.initial_state(),
                "places": places,
                "transitions": [_transition_row(t) for t in model.transitions],
            },
        )

    @traced
    def enabled(
        self,
        state: Sequence[int] | None = None,
        *,
        role: str | None = None,
        multiplier: int = 1,
    ) -> ServiceResult:
        """List actions that fire without error from *state*.

        Args:
            state: Starting vector; defaults to the initial state.
            role: Only report actions tagged with this role label.
            multiplier: Firing multiplier used for the check.
        """
        current = self._resolve_state("enabled", state)
        if isinstance(current, ServiceResult):
            return current

        warnings: list[str] = []
        if role is not None and role not in {r.label for r in self._model.roles}:
            warnings.append(f"Unknown role '{role}'")

        items: list[dict[str, Any]] = []
        for action in self._model.actions():
            with trace_step(action, multiplier) as step:
                result = self._model.transform(current, action, multiplier)
                if step is not None:
                    step.record(result)
            if not result.ok or result.role is None:
                continue
            if role is not None and result.role.label != role:
                continue
            items.append({"action": action, "role": result.role.label, "state": result.state})

        return ServiceResult(
            ok=True,
            op="enabled",
            data={"state": current, "count": len(items), "items": items},
            warnings=warnings,
        )

    @traced
    def fire(
        self,
        actions: Iterable[str],
        state: Sequence[int] | None = None,
        *,
        multiplier: int = 1,
        stop_on_error: bool = True,
    ) -> ServiceResult:
        """Apply *actions* in order, committing each successful step.

        With *stop_on_error* the first failing step fails the whole
        operation; otherwise failed steps are skipped and reported as
        warnings while the state stays where it was.
        """
        start = self._resolve_state("fire", state)
        if isinstance(start, ServiceResult):
            return start

        current = start
        steps: list[dict[str, Any]] = []
        warnings: list[str] = []

        for index, action in enumerate(actions):
            with trace_step(action, multiplier) as step:
                result = self._model.transform(current, action, multiplier)
                if step is not None:
                    step.record(result)

            if result.error is not None:
                logger.debug("Step %d (%s) rejected: %s", index, action, result.error)
                if stop_on_error:
                    return self._step_failure(index, action, result.error, current, result.state)
                warnings.append(f"Step {index} ({action}): {result.error.message}")
                continue

            current = result.state
            steps.append(
                {
                    "step": index,
                    "action": action,
                    "role": result.role.label if result.role else None,
                    "state": current,
                }
            )

        return ServiceResult(
            ok=True,
            op="fire",
            data={
                "initial_state": start,
                "state": current,
                "count": len(steps),
                "steps": steps,
            },
            warnings=warnings,
        )

    @staticmethod
    def _step_failure(
        index: int,
        action: str,
        error: EvalError,
        state: list[int],
        attempted: list[int],
    ) -> ServiceResult:
        return ServiceResult.failure(
            "fire",
            error.name,
            f"Action '{action}' failed at step {index}: {error.message}",
            step=index,
            action=action,
            state=state,
            attempted=attempted,
        )
