"""BaseService — abstract foundation for all pflow services.

Every service receives a compiled :class:`Model` at construction time.
The model is frozen, so services only read it and never share state
vectors between calls.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from pflow.services.result import ServiceResult

if TYPE_CHECKING:
    from pflow.domain.model import Model


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class ModelService(BaseService):
            def describe(self) -> ServiceResult:
                places = self._model.places
                ...
    """

    def __init__(self, model: Model) -> None:
        self._model = model

    def _resolve_state(
        self, op: str, state: Sequence[int] | None
    ) -> list[int] | ServiceResult:
        """Return a private copy of *state*, or the initial state when None.

        Returns a failed ServiceResult when the vector does not match the
        model's place count.
        """
        if state is None:
            return self._model.initial_state()
        expected = len(self._model.places)
        if len(state) != expected:
            return ServiceResult.failure(
                op,
                "INVALID_STATE",
                f"State has {len(state)} entries, model has {expected} places",
                state=list(state),
                expected_length=expected,
            )
        return list(state)
