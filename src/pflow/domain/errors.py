"""Error families for model definition and model evaluation.

Definition errors are authoring defects: they are raised while a model is
declared and leave no usable model behind. Evaluation errors are returned
alongside a computed vector; callers decide whether to commit it.

Both families are closed StrEnums and are matched by code, never by
identity of an exception instance.
"""

from __future__ import annotations

from enum import StrEnum


class DefinitionError(StrEnum):
    """Construction-time error codes."""

    BAD_INHIBITOR_SOURCE = "bad_inhibitor_source"
    BAD_INHIBITOR_TARGET = "bad_inhibitor_target"
    BAD_ARC_WEIGHT = "bad_arc_weight"
    BAD_ARC_TRANSITION = "bad_arc_transition"
    BAD_ARC_PLACE = "bad_arc_place"
    BAD_INITIAL_TOKENS = "bad_initial_tokens"
    FROZEN_MODEL = "frozen_model"

    @property
    def message(self) -> str:
        return DEFINITION_MESSAGES[self]


class EvalError(StrEnum):
    """Evaluation-time error codes."""

    INVALID_PLACE = "invalid_place"
    INVALID_ACTION = "invalid_action"
    INVALID_OUTPUT = "invalid_output"
    EXCEEDS_CAPACITY = "exceeds_capacity"
    GUARD_CHECK_FAILURE = "guard_check_failure"

    @property
    def message(self) -> str:
        return EVAL_MESSAGES[self]


DEFINITION_MESSAGES: dict[DefinitionError, str] = {
    DefinitionError.BAD_INHIBITOR_SOURCE: "inhibitor source must be a place",
    DefinitionError.BAD_INHIBITOR_TARGET: "inhibitor target must be a transition",
    DefinitionError.BAD_ARC_WEIGHT: "arc weight must be a positive int",
    DefinitionError.BAD_ARC_TRANSITION: "source and target are both transitions",
    DefinitionError.BAD_ARC_PLACE: "source and target are both places",
    DefinitionError.BAD_INITIAL_TOKENS: "initial token count cannot be negative",
    DefinitionError.FROZEN_MODEL: "model cannot be updated after it is frozen",
}

EVAL_MESSAGES: dict[EvalError, str] = {
    EvalError.INVALID_PLACE: "invalid place",
    EvalError.INVALID_ACTION: "invalid action",
    EvalError.INVALID_OUTPUT: "output cannot be negative",
    EvalError.EXCEEDS_CAPACITY: "output exceeds capacity",
    EvalError.GUARD_CHECK_FAILURE: "guard condition failure",
}


class ModelDefinitionError(Exception):
    """Raised when a model declaration is malformed or the model is frozen."""

    def __init__(self, code: DefinitionError, subject: str | None = None) -> None:
        self.code = code
        self.subject = subject
        msg = code.message if subject is None else f"{code.message}: {subject}"
        super().__init__(msg)


class UnknownLabelError(LookupError):
    """Raised by label lookups on a frozen model."""

    def __init__(self, code: EvalError, label: str) -> None:
        self.code = code
        self.label = label
        super().__init__(f"{code.message}: {label!r}")
