"""Value types shared by the resolver, the gating evaluator and the recorder."""

import typing as t
import uuid

from pydantic import BaseModel, ConfigDict, Field

from common.schema import ExternalIdType

from .enums import NextStep, Slot


class CourseScope(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: t.Literal["course"] = "course"
    course_id: ExternalIdType


class ModuleScope(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: t.Literal["module"] = "module"
    course_id: ExternalIdType
    module_id: ExternalIdType


Scope = t.Annotated[CourseScope | ModuleScope, Field(discriminator="type")]


def slot_for(scope: CourseScope | ModuleScope, timing: str) -> Slot:
    """The slot an assignment with this scope and timing occupies."""
    match scope:
        case CourseScope():
            return Slot.PRE_COURSE if timing == "pre" else Slot.POST_COURSE
        case ModuleScope():
            return Slot.PRE_MODULE if timing == "pre" else Slot.POST_MODULE


class ResolvedAssignments(BaseModel):
    """The active assignment of each slot of a course/module context, by id.

    Slots hold ids only; ``resolver.get_assignment`` and ``resolver.load_frozen``
    load the record and its frozen questions. A slot is None when nothing is
    assigned to it. Module slots are always None when the context has no module.
    """

    model_config = ConfigDict(frozen=True)

    pre_course: uuid.UUID | None = None
    post_course: uuid.UUID | None = None
    pre_module: uuid.UUID | None = None
    post_module: uuid.UUID | None = None

    def get(self, slot: Slot) -> uuid.UUID | None:
        return t.cast(uuid.UUID | None, getattr(self, slot.value))

    def occupied(self) -> list[tuple[Slot, uuid.UUID]]:
        """Occupied slots in a stable order: pre-course, post-course, pre-module, post-module."""
        return [(slot, assignment_id) for slot in Slot if (assignment_id := self.get(slot)) is not None]


class GateFlags(BaseModel):
    """Completion flags of a learner for a course (and optionally one of its modules)."""

    model_config = ConfigDict(frozen=True)

    pre_course_complete: bool = False
    post_course_complete: bool = False
    pre_module_complete: bool = False
    post_module_complete: bool = False

    def is_complete(self, slot: Slot) -> bool:
        return bool(getattr(self, slot.flag))


class GateDecision(BaseModel):
    """Result of a gate check."""

    allowed: bool
    reason: str | None = None  # we don't use the enum here because we want translation
    next_step: NextStep | None = None
    assignment_id: uuid.UUID | None = None


class SlotStatus(BaseModel):
    """One occupied slot of a context and whether the learner has completed it."""

    assignment_id: uuid.UUID
    slot: Slot
    timing: t.Literal["pre", "post"]
    scope: Scope
    completed: bool


class ContextStatus(BaseModel):
    """The assessments of a course/module context and the learner's progress through them."""

    course_id: str
    module_id: str | None = None
    assignments: list[SlotStatus]
    completed_count: int
    total_count: int
    completion_rate: float
