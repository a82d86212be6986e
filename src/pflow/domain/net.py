"""Net — the ordered place/transition registry of a compiled model.

A Net is immutable: places and transitions are stored as tuples indexed by
offset, with label -> offset lookup tables beside them. Every vector it
hands out is a fresh list owned by the caller.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from pflow.domain.types import Place, Role, Transition


def _index(
    items: tuple[Place, ...] | tuple[Transition, ...], kind: str
) -> MappingProxyType[str, int]:
    """Build a label -> offset table, checking offsets are dense and ordered."""
    table: dict[str, int] = {}
    for position, item in enumerate(items):
        if item.offset != position:
            msg = f"{kind} {item.label!r} has offset {item.offset}, expected {position}"
            raise ValueError(msg)
        table[item.label] = item.offset
    return MappingProxyType(table)


class Net:
    """Frozen registry of places and transitions with vector helpers."""

    def __init__(
        self,
        places: Iterable[Place] = (),
        transitions: Iterable[Transition] = (),
        roles: Iterable[Role] = (),
    ) -> None:
        self._places: tuple[Place, ...] = tuple(places)
        self._transitions: tuple[Transition, ...] = tuple(transitions)
        self._roles: tuple[Role, ...] = tuple(roles)
        self._place_index = _index(self._places, "place")
        self._transition_index = _index(self._transitions, "transition")
        self._initial: tuple[int, ...] = tuple(p.initial for p in self._places)
        self._capacity: tuple[int, ...] = tuple(p.capacity or 0 for p in self._places)

    @property
    def places(self) -> tuple[Place, ...]:
        return self._places

    @property
    def transitions(self) -> tuple[Transition, ...]:
        return self._transitions

    @property
    def roles(self) -> tuple[Role, ...]:
        return self._roles

    def empty_vector(self) -> list[int]:
        """Zero vector sized to the place count."""
        return [0] * len(self._places)

    def initial_state(self) -> list[int]:
        """Initial token count of every place, by offset."""
        return list(self._initial)

    def state_capacity(self) -> list[int]:
        """Capacity of every place, by offset. 0 means unbounded."""
        return list(self._capacity)
