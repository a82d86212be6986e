"""Model — a named StateMachine built from a declaration function.

A declaration receives a :class:`ModelDsl` bound to a fresh builder and
calls ``role``, ``cell`` and ``fn`` (chaining ``flow`` / ``guard`` on the
returned nodes). When it returns, the builder is compiled and frozen.

Usage::

    def counter(dsl: ModelDsl) -> None:
        role, cell, fn = dsl
        user = role("default")
        count = cell("count")
        fn("inc", user).flow(1, count)

    model = Model("counter", counter)
    model.transform(model.initial_state(), "inc")
"""

from __future__ import annotations

from collections.abc import Callable

from pflow.domain.builder import MetaModel, ModelDsl
from pflow.domain.statemachine import StateMachine

ModelDeclaration = Callable[[ModelDsl], None]


class Model(StateMachine):
    """Frozen model compiled from a single declaration call.

    Attributes:
        schema: Name of the model.
    """

    def __init__(self, schema: str, declaration: ModelDeclaration) -> None:
        builder = MetaModel()
        declaration(builder.dsl())
        net = builder.reindex()
        super().__init__(net.places, net.transitions, net.roles)
        self.schema = schema

    def __repr__(self) -> str:
        return (
            f"Model({self.schema!r}, places={len(self.places)}, "
            f"transitions={len(self.transitions)})"
        )


def new_model(schema: str, declaration: ModelDeclaration) -> Model:
    """Declare, compile, and freeze a model in one call."""
    return Model(schema, declaration)
