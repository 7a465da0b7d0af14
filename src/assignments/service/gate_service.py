"""Gate-state bookkeeping and gate checks for a learner in a course context."""

import structlog
from django.db.models import Q
from django.utils import timezone

from assignments import gating
from assignments.enums import GateAction, Slot
from assignments.models import Assignment, EnrollmentGateState, ProgressGateState
from assignments.types import ContextStatus, CourseScope, GateDecision, GateFlags, ModuleScope, SlotStatus
from common.utils import get_or_create_with_race_protection

from . import resolver

logger = structlog.get_logger(__name__)


def get_enrollment_state(learner_id: str, course_id: str) -> EnrollmentGateState:
    """Fetch the course-level gate state, creating it on first use."""
    state, _ = get_or_create_with_race_protection(
        EnrollmentGateState,
        Q(learner_id=learner_id, course_id=course_id),
        {"learner_id": learner_id, "course_id": course_id},
    )
    return state


def get_progress_state(learner_id: str, course_id: str, module_id: str) -> ProgressGateState:
    """Fetch the module-level gate state, creating it on first use."""
    state, _ = get_or_create_with_race_protection(
        ProgressGateState,
        Q(learner_id=learner_id, course_id=course_id, module_id=module_id),
        {"learner_id": learner_id, "course_id": course_id, "module_id": module_id},
    )
    return state


def get_gate_flags(learner_id: str, course_id: str, module_id: str | None = None) -> GateFlags:
    """Read the learner's completion flags for a course and, optionally, one of its modules."""
    enrollment = get_enrollment_state(learner_id, course_id)
    flags = {field: getattr(enrollment, field) for field in EnrollmentGateState.FLAGS}
    if module_id:
        progress = get_progress_state(learner_id, course_id, module_id)
        flags |= {field: getattr(progress, field) for field in ProgressGateState.FLAGS}
    return GateFlags(**flags)


def mark_complete(learner_id: str, assignment: Assignment) -> bool:
    """Set the gate flag a submission for ``assignment`` satisfies.

    The flag is set with a conditional update, so it only ever goes from false to
    true and concurrent callers flip it at most once.

    Returns:
        True if this call flipped the flag, False if it was already set.
    """
    slot = assignment.slot
    scope = assignment.scope
    match scope:
        case CourseScope():
            state: EnrollmentGateState | ProgressGateState = get_enrollment_state(learner_id, scope.course_id)
        case ModuleScope():
            state = get_progress_state(learner_id, scope.course_id, scope.module_id)

    flipped = (
        type(state)
        .objects.filter(pk=state.pk, **{slot.flag: False})
        .update(**{slot.flag: True, "updated_at": timezone.now()})
    )
    if flipped:
        logger.info(
            "gate_flag_flipped",
            learner_id=learner_id,
            course_id=scope.course_id,
            module_id=getattr(scope, "module_id", None),
            flag=slot.flag,
            assignment_id=str(assignment.id),
        )
    return bool(flipped)


def check_gate(learner_id: str, course_id: str, module_id: str | None, action: GateAction) -> GateDecision:
    """Decide whether the learner may start or complete the course, or the module if given."""
    resolved = resolver.resolve_context(course_id, module_id)
    flags = get_gate_flags(learner_id, course_id, module_id)
    decision = gating.evaluate(action, flags, resolved, has_module=bool(module_id))
    if not decision.allowed:
        logger.debug(
            "gate_denied",
            learner_id=learner_id,
            course_id=course_id,
            module_id=module_id,
            action=action.value,
            assignment_id=str(decision.assignment_id),
        )
    return decision


def context_status(learner_id: str, course_id: str, module_id: str | None = None) -> ContextStatus:
    """List the live assignments of a context with the learner's completion of each."""
    resolved = resolver.resolve_context(course_id, module_id)
    flags = get_gate_flags(learner_id, course_id, module_id)

    slots: list[SlotStatus] = []
    for slot, assignment_id in resolved.occupied():
        scope: CourseScope | ModuleScope
        if slot in (Slot.PRE_MODULE, Slot.POST_MODULE):
            scope = ModuleScope(course_id=course_id, module_id=module_id or "")
        else:
            scope = CourseScope(course_id=course_id)
        slots.append(
            SlotStatus(
                assignment_id=assignment_id,
                slot=slot,
                timing=slot.timing,  # type: ignore[arg-type]
                scope=scope,
                completed=flags.is_complete(slot),
            )
        )

    completed_count = sum(1 for status in slots if status.completed)
    total_count = len(slots)
    completion_rate = round(completed_count * 100 / total_count, 2) if total_count else 0.0
    return ContextStatus(
        course_id=course_id,
        module_id=module_id,
        assignments=slots,
        completed_count=completed_count,
        total_count=total_count,
        completion_rate=completion_rate,
    )
