"""Tests for model entity types."""

import pytest

from pflow.domain.types import Arc, Guard, NodeKind, NodeRef, Place, Role, Transition


class TestNodeKind:
    def test_members(self) -> None:
        assert {k.value for k in NodeKind} == {"place", "transition"}


class TestPlace:
    def test_defaults(self) -> None:
        place = Place(label="p", offset=0)
        assert place.initial == 0
        assert place.capacity is None
        assert place.bounded is False

    @pytest.mark.parametrize(
        "capacity,bounded", [(None, False), (0, False), (-2, False), (3, True)]
    )
    def test_bounded(self, capacity: int | None, bounded: bool) -> None:
        assert Place(label="p", offset=0, capacity=capacity).bounded is bounded

    def test_frozen(self) -> None:
        place = Place(label="p", offset=0)
        with pytest.raises(Exception):
            place.initial = 3  # type: ignore[misc]


class TestTransition:
    def test_defaults(self) -> None:
        txn = Transition(label="t", offset=0, role=Role(label="r"))
        assert txn.delta == ()
        assert txn.guards == {}
        assert txn.inhibitors == ()

    def test_guards_view_by_label(self) -> None:
        guard = Guard(label="p", delta=(-1,))
        txn = Transition(label="t", offset=0, role=Role(label="r"), inhibitors=(guard,))
        assert txn.guards["p"] == guard
        with pytest.raises(TypeError):
            txn.guards["p"] = guard  # type: ignore[index]

    def test_roles_compare_by_label(self) -> None:
        assert Role(label="r") == Role(label="r")


class TestArc:
    def test_defaults_to_flow(self) -> None:
        arc = Arc(
            source=NodeRef(kind=NodeKind.PLACE, offset=0),
            target=NodeRef(kind=NodeKind.TRANSITION, offset=0),
            weight=1,
        )
        assert arc.inhibitor is False
