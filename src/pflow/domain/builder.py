"""MetaModel — the mutable declaration surface of a model.

Declaration is a two-phase process:

1. Builder calls (``role``, ``cell``, ``fn``, and the chained ``flow`` /
   ``guard`` on returned nodes) accumulate a :class:`ModelSpec`.
2. :meth:`MetaModel.reindex` hands the spec to
   :func:`pflow.domain.compiler.compile_model` exactly once and freezes
   the builder. Every later builder call raises ``FROZEN_MODEL``.

Re-declaring a label replaces the earlier definition in place: the label
keeps its original offset, so offsets stay dense and unique.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

from pflow.domain.errors import DefinitionError, ModelDefinitionError
from pflow.domain.types import Arc, NodeKind, NodeRef, Place, Role, Transition

if TYPE_CHECKING:
    from pflow.domain.net import Net

logger = logging.getLogger(__name__)


@dataclass
class ModelSpec:
    """Ordered declarations accumulated before compilation.

    Offsets are positions in ``places`` / ``transitions``; the ``*_index``
    tables map labels back to them.
    """

    roles: list[Role] = field(default_factory=list)
    places: list[Place] = field(default_factory=list)
    transitions: list[Transition] = field(default_factory=list)
    arcs: list[Arc] = field(default_factory=list)
    role_index: dict[str, int] = field(default_factory=dict)
    place_index: dict[str, int] = field(default_factory=dict)
    transition_index: dict[str, int] = field(default_factory=dict)

    def add_role(self, label: str) -> Role:
        role = Role(label=label)
        if label in self.role_index:
            self.roles[self.role_index[label]] = role
        else:
            self.role_index[label] = len(self.roles)
            self.roles.append(role)
        return role

    def add_place(self, label: str, initial: int, capacity: int | None) -> NodeRef:
        offset = self.place_index.get(label)
        if offset is None:
            offset = len(self.places)
            self.place_index[label] = offset
            self.places.append(
                Place(label=label, offset=offset, initial=initial, capacity=capacity)
            )
        else:
            logger.debug("Redeclared place %s at offset %d", label, offset)
            self.places[offset] = Place(
                label=label, offset=offset, initial=initial, capacity=capacity
            )
        return NodeRef(kind=NodeKind.PLACE, offset=offset)

    def add_transition(self, label: str, role: Role) -> NodeRef:
        offset = self.transition_index.get(label)
        if offset is None:
            offset = len(self.transitions)
            self.transition_index[label] = offset
            self.transitions.append(Transition(label=label, offset=offset, role=role))
        else:
            logger.debug("Redeclared transition %s at offset %d", label, offset)
            self.transitions[offset] = Transition(label=label, offset=offset, role=role)
        return NodeRef(kind=NodeKind.TRANSITION, offset=offset)

    def label_of(self, ref: NodeRef) -> str:
        if ref.kind is NodeKind.PLACE:
            return self.places[ref.offset].label
        return self.transitions[ref.offset].label


class Node:
    """Handle to a declared place or transition, used to chain arcs.

    ``cell("p").flow(1, t)`` declares an arc from place ``p`` into
    transition ``t``; both methods return the source node.
    """

    __slots__ = ("builder", "ref")

    def __init__(self, builder: MetaModel, ref: NodeRef) -> None:
        self.builder = builder
        self.ref = ref

    def __repr__(self) -> str:
        return f"Node({self.ref.kind}, {self.label!r})"

    @property
    def label(self) -> str:
        return self.builder.spec.label_of(self.ref)

    def is_place(self) -> bool:
        return self.ref.kind is NodeKind.PLACE

    def is_transition(self) -> bool:
        return self.ref.kind is NodeKind.TRANSITION

    def flow(self, weight: int, target: Node) -> Node:
        """Declare a weighted flow arc from this node to *target*."""
        self.builder.flow(self, weight, target)
        return self

    def guard(self, weight: int, target: Node) -> Node:
        """Declare an inhibitor arc from this place to transition *target*."""
        self.builder.guard(self, weight, target)
        return self


class ModelDsl(NamedTuple):
    """Builder operations handed to a model declaration function.

    Unpacks as ``role, cell, fn = dsl``.
    """

    role: Callable[[str], Role]
    cell: Callable[..., Node]
    fn: Callable[[str, Role], Node]


class MetaModel:
    """Accumulates a model declaration and compiles it once."""

    def __init__(self) -> None:
        self.spec = ModelSpec()
        self.frozen = False

    def assert_not_frozen(self) -> None:
        if self.frozen:
            raise ModelDefinitionError(DefinitionError.FROZEN_MODEL)

    def dsl(self) -> ModelDsl:
        """Bind the declaration operations to this builder."""
        return ModelDsl(role=self.role, cell=self.cell, fn=self.fn)

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def role(self, label: str) -> Role:
        self.assert_not_frozen()
        return self.spec.add_role(label)

    def cell(
        self, label: str, initial: int | None = 0, capacity: int | None = None
    ) -> Node:
        """Declare a place holding *initial* tokens, bounded by *capacity* if > 0."""
        self.assert_not_frozen()
        if initial is None:
            initial = 0
        if initial < 0:
            raise ModelDefinitionError(DefinitionError.BAD_INITIAL_TOKENS, label)
        return Node(self, self.spec.add_place(label, initial, capacity))

    def fn(self, label: str, role: Role) -> Node:
        """Declare a transition fired under *role*."""
        self.assert_not_frozen()
        return Node(self, self.spec.add_transition(label, role))

    def flow(self, source: Node, weight: int, target: Node) -> None:
        """Record a flow arc between a place and a transition, in either direction."""
        self.assert_not_frozen()
        if weight <= 0:
            raise ModelDefinitionError(DefinitionError.BAD_ARC_WEIGHT, f"{weight}")
        if source.is_place() and target.is_place():
            raise ModelDefinitionError(
                DefinitionError.BAD_ARC_PLACE, f"{source.label} -> {target.label}"
            )
        if source.is_transition() and target.is_transition():
            raise ModelDefinitionError(
                DefinitionError.BAD_ARC_TRANSITION, f"{source.label} -> {target.label}"
            )
        self.spec.arcs.append(Arc(source=source.ref, target=target.ref, weight=weight))

    def guard(self, source: Node, weight: int, target: Node) -> None:
        """Record an inhibitor arc from place *source* to transition *target*."""
        self.assert_not_frozen()
        if not source.is_place():
            raise ModelDefinitionError(DefinitionError.BAD_INHIBITOR_SOURCE, source.label)
        if not target.is_transition():
            raise ModelDefinitionError(DefinitionError.BAD_INHIBITOR_TARGET, target.label)
        if weight <= 0:
            raise ModelDefinitionError(DefinitionError.BAD_ARC_WEIGHT, f"{weight}")
        self.spec.arcs.append(
            Arc(source=source.ref, target=target.ref, weight=weight, inhibitor=True)
        )

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def reindex(self) -> Net:
        """Compile the accumulated declaration into a frozen Net.

        Arc records are discarded once compiled.
        """
        from pflow.domain.compiler import compile_model

        self.assert_not_frozen()
        net = compile_model(self.spec)
        self.frozen = True
        self.spec.arcs.clear()
        return net
