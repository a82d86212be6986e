"""Compile a model declaration into a frozen Net.

``compile_model`` is stateless: it reads a :class:`ModelSpec` and returns
a new :class:`Net` whose transitions carry their final delta vectors and
guards. Arcs are applied in declaration order, so a later arc touching the
same (transition, place) cell overwrites an earlier one.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pflow.domain.net import Net
from pflow.domain.types import Guard, NodeKind

if TYPE_CHECKING:
    from pflow.domain.builder import ModelSpec

logger = logging.getLogger(__name__)


def compile_model(spec: ModelSpec) -> Net:
    """Fold the declared arcs into per-transition delta vectors and guards."""
    size = len(spec.places)
    deltas: list[list[int]] = [[0] * size for _ in spec.transitions]
    guards: list[dict[str, Guard]] = [{} for _ in spec.transitions]

    for arc in spec.arcs:
        if arc.inhibitor:
            place = spec.places[arc.source.offset]
            vector = [0] * size
            vector[place.offset] = -arc.weight
            guards[arc.target.offset][place.label] = Guard(
                label=place.label, delta=tuple(vector)
            )
        elif arc.source.kind is NodeKind.PLACE:
            # consumed from the place when the target transition fires
            deltas[arc.target.offset][arc.source.offset] = -arc.weight
        else:
            # produced into the place when the source transition fires
            deltas[arc.source.offset][arc.target.offset] = arc.weight

    transitions = [
        txn.model_copy(
            update={
                "delta": tuple(deltas[txn.offset]),
                "inhibitors": tuple(guards[txn.offset].values()),
            }
        )
        for txn in spec.transitions
    ]
    logger.debug(
        "Compiled model: %d places, %d transitions, %d arcs",
        size,
        len(transitions),
        len(spec.arcs),
    )
    return Net(places=spec.places, transitions=transitions, roles=spec.roles)
