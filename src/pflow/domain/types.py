"""Model entities: roles, places, transitions, arcs, and guards.

Places and transitions are addressed by dense zero-based offsets assigned
in declaration order. Arcs only exist while a model is being declared;
compilation folds them into per-transition delta vectors and guards.
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType

from pydantic import BaseModel


class NodeKind(StrEnum):
    """The two kinds of net node an arc can connect."""

    PLACE = "place"
    TRANSITION = "transition"


class Role(BaseModel):
    """Opaque capability label attached to transitions."""

    model_config = {"frozen": True}

    label: str


class Place(BaseModel):
    """A labeled token counter.

    ``capacity`` of None (or <= 0) means the place is unbounded.
    """

    model_config = {"frozen": True}

    label: str
    offset: int
    initial: int = 0
    capacity: int | None = None

    @property
    def bounded(self) -> bool:
        return self.capacity is not None and self.capacity > 0


class Guard(BaseModel):
    """Inhibitor condition on a transition, keyed by the inhibiting place.

    ``delta`` is zero everywhere except ``-weight`` at the place offset.
    """

    model_config = {"frozen": True}

    label: str
    delta: tuple[int, ...]


class Transition(BaseModel):
    """A role-tagged action applying a signed delta vector to the state.

    Guards are stored as a tuple in declaration order, one per inhibiting
    place; ``guards`` offers a read-only label -> Guard view of them.
    """

    model_config = {"frozen": True}

    label: str
    offset: int
    role: Role
    delta: tuple[int, ...] = ()
    inhibitors: tuple[Guard, ...] = ()

    @property
    def guards(self) -> MappingProxyType[str, Guard]:
        return MappingProxyType({guard.label: guard for guard in self.inhibitors})


class NodeRef(BaseModel):
    """Tagged index of a place or transition inside a declaration."""

    model_config = {"frozen": True}

    kind: NodeKind
    offset: int


class Arc(BaseModel):
    """A declared relation between a place and a transition."""

    model_config = {"frozen": True}

    source: NodeRef
    target: NodeRef
    weight: int
    inhibitor: bool = False
