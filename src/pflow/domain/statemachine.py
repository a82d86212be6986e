"""StateMachine — guarded, capacity-bounded vector addition over a Net.

Evaluation is pure: the model is never mutated, caller vectors are never
modified, and each call returns a freshly allocated output vector. Errors
are returned next to the computed vector rather than raised, so callers
must check ``error`` before committing the new state.

Label lookups (``offset``, ``action_id``, ``lookup_action``) raise
:class:`UnknownLabelError` since they have no vector to return.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import NamedTuple

from pflow.domain.errors import EvalError, UnknownLabelError
from pflow.domain.net import Net
from pflow.domain.types import Guard, Role, Transition


class Transformation(NamedTuple):
    """Outcome of :meth:`StateMachine.transform`.

    ``state`` is always the computed vector, even when ``error`` is set.
    ``role`` is None only for unknown actions.
    """

    error: EvalError | None
    state: list[int]
    role: Role | None

    @property
    def ok(self) -> bool:
        return self.error is None


class StateMachine(Net):
    """Read and transform surface of a frozen model."""

    @staticmethod
    def bounded_add(
        state: Sequence[int],
        delta: Sequence[int],
        multiplier: int,
        capacity: Sequence[int] | None = None,
    ) -> tuple[EvalError | None, list[int]]:
        """Compute ``state + delta * multiplier`` and check its bounds.

        Negative cells report ``INVALID_OUTPUT``; cells above a positive
        capacity report ``EXCEEDS_CAPACITY``. When several cells fail, the
        highest offset wins, and at the same offset capacity wins.

        *capacity*, when given, must be as long as *state*; None leaves
        every cell unbounded. Mismatched lengths raise ValueError.
        """
        if capacity is None:
            capacity = [0] * len(state)
        err: EvalError | None = None
        out: list[int] = []
        for value, change, limit in zip(state, delta, capacity, strict=True):
            total = value + change * multiplier
            if total < 0:
                err = EvalError.INVALID_OUTPUT
            if 0 < limit < total:
                err = EvalError.EXCEEDS_CAPACITY
            out.append(total)
        return err, out

    def threshold_met(
        self, state: Sequence[int], guard: Guard, multiplier: int
    ) -> tuple[bool, list[int]]:
        """Check whether the inhibiting place holds ``weight * multiplier`` tokens.

        This is the inverse of a bounds check: the guard is met (and the
        transition blocked) when the unbounded subtraction stays
        non-negative.
        """
        err, out = self.bounded_add(state, guard.delta, multiplier)
        return err is None, out

    def actions(self) -> Iterator[str]:
        """Iterate transition labels in offset order."""
        return (txn.label for txn in self.transitions)

    def lookup_action(self, label: str) -> Transition:
        offset = self._transition_index.get(label)
        if offset is None:
            raise UnknownLabelError(EvalError.INVALID_ACTION, label)
        return self.transitions[offset]

    def offset(self, label: str) -> int:
        """Offset of place *label* in state vectors."""
        offset = self._place_index.get(label)
        if offset is None:
            raise UnknownLabelError(EvalError.INVALID_PLACE, label)
        return offset

    def action_id(self, label: str) -> int:
        """Offset of transition *label* in declaration order."""
        return self.lookup_action(label).offset

    def transform(
        self, state: Sequence[int], action: str, multiplier: int = 1
    ) -> Transformation:
        """Fire *action* ``multiplier`` times atomically from *state*.

        Guards are checked first; any guard whose threshold is met blocks
        the action and its vector is returned with ``GUARD_CHECK_FAILURE``.
        """
        try:
            txn = self.lookup_action(action)
        except UnknownLabelError:
            return Transformation(EvalError.INVALID_ACTION, list(state), None)

        for guard in txn.inhibitors:
            met, out = self.threshold_met(state, guard, multiplier)
            if met:
                return Transformation(EvalError.GUARD_CHECK_FAILURE, out, txn.role)

        err, out = self.bounded_add(state, txn.delta, multiplier, self._capacity)
        return Transformation(err, out, txn.role)
