"""Assignment resolver: binds frozen questionnaire versions to course and module slots."""

import typing as t
from collections import defaultdict
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from assignments.enums import Slot
from assignments.exceptions import (
    AssignmentNotFoundError,
    AssignmentSlotTakenError,
    DuplicateAssignmentError,
    VersionMismatchError,
)
from assignments.models import Assignment, AssignmentQueryset
from assignments.types import CourseScope, ModuleScope, ResolvedAssignments
from questionnaires.exceptions import TemplateArchivedError, TemplateNotFoundError
from questionnaires.models import QuestionnaireTemplate, QuestionnaireVersion

logger = structlog.get_logger(__name__)


def _scope_fields(scope: CourseScope | ModuleScope) -> dict[str, str]:
    match scope:
        case CourseScope():
            return {"scope_type": Assignment.ScopeType.COURSE, "course_id": scope.course_id, "module_id": ""}
        case ModuleScope():
            return {
                "scope_type": Assignment.ScopeType.MODULE,
                "course_id": scope.course_id,
                "module_id": scope.module_id,
            }


def _slot_occupant(scope_fields: dict[str, str], timing: str, exclude: UUID | None = None) -> Assignment | None:
    queryset = Assignment.objects.live().filter(timing=timing, **scope_fields)
    if exclude is not None:
        queryset = queryset.exclude(pk=exclude)
    return queryset.first()


@transaction.atomic
def create_assignment(
    scope: CourseScope | ModuleScope,
    timing: Assignment.Timing | str,
    template_id: UUID,
    active: bool = True,
) -> Assignment:
    """Assign a questionnaire to a slot, freezing the template's current version.

    The template row is locked so a concurrent revision cannot slip in between
    reading the current version and storing it.

    Raises:
        TemplateNotFoundError: If the template does not exist.
        TemplateArchivedError: If the template is archived.
        AssignmentSlotTakenError: If ``active`` and the slot already has a live assignment.
    """
    template = QuestionnaireTemplate.objects.select_for_update().filter(pk=template_id).first()
    if template is None:
        raise TemplateNotFoundError(template_id)
    if template.archived:
        raise TemplateArchivedError(template_id)

    scope_fields = _scope_fields(scope)
    if active and (occupant := _slot_occupant(scope_fields, timing)) is not None:
        raise AssignmentSlotTakenError(occupant.id)

    assignment = Assignment.objects.create(
        timing=timing,
        active=active,
        template=template,
        template_version=template.current_version,
        **scope_fields,
    )
    logger.info(
        "assignment_created",
        assignment_id=str(assignment.id),
        slot=assignment.slot.value,
        course_id=assignment.course_id,
        module_id=assignment.module_id or None,
        template_id=str(template.id),
        template_version=assignment.template_version,
        active=active,
    )
    return assignment


def _single_per_slot(candidates: t.Iterable[tuple[Slot, UUID]]) -> dict[Slot, UUID]:
    """Collapse (slot, assignment id) pairs into one id per slot.

    Raises:
        DuplicateAssignmentError: If a slot has more than one candidate.
    """
    by_slot: dict[Slot, list[UUID]] = defaultdict(list)
    for slot, assignment_id in candidates:
        by_slot[slot].append(assignment_id)

    resolved: dict[Slot, UUID] = {}
    for slot, assignment_ids in by_slot.items():
        if len(assignment_ids) > 1:
            logger.critical(
                "duplicate_live_assignments",
                slot=slot.value,
                assignment_ids=[str(assignment_id) for assignment_id in assignment_ids],
            )
            raise DuplicateAssignmentError(slot.value, assignment_ids)
        resolved[slot] = assignment_ids[0]
    return resolved


def resolve_context(course_id: str, module_id: str | None = None) -> ResolvedAssignments:
    """Find the live assignment of each slot of a course context.

    Module slots are only looked up when ``module_id`` is given. Gate flags are
    neither read nor written here.
    """
    assignments = Assignment.objects.live().for_context(course_id, module_id)
    resolved = _single_per_slot((assignment.slot, assignment.id) for assignment in assignments)
    return ResolvedAssignments(**{slot.value: assignment_id for slot, assignment_id in resolved.items()})


def get_assignment(assignment_id: UUID) -> Assignment:
    """Fetch an assignment or raise AssignmentNotFoundError."""
    assignment = Assignment.objects.filter(pk=assignment_id).first()
    if assignment is None:
        raise AssignmentNotFoundError(assignment_id)
    return assignment


def load_frozen(assignment_id: UUID) -> tuple[Assignment, QuestionnaireVersion]:
    """Fetch an assignment together with the exact template version it was frozen against.

    Raises:
        AssignmentNotFoundError: If the assignment does not exist.
        VersionMismatchError: If the frozen version is missing from the store. This is a
            data-integrity violation and is logged as such.
    """
    assignment = get_assignment(assignment_id)
    version = QuestionnaireVersion.objects.filter(
        template_id=assignment.template_id, version=assignment.template_version
    ).first()
    if version is None:
        logger.critical(
            "assignment_version_mismatch",
            assignment_id=str(assignment.id),
            template_id=str(assignment.template_id),
            template_version=assignment.template_version,
        )
        raise VersionMismatchError(assignment.id, assignment.template_id, assignment.template_version)
    return assignment, version


@transaction.atomic
def set_assignment_active(assignment_id: UUID, active: bool) -> Assignment:
    """Activate or deactivate an assignment.

    Raises:
        AssignmentNotFoundError: If the assignment does not exist.
        AssignmentSlotTakenError: When activating and another live assignment holds the slot.
        ValidationError: When activating an archived assignment.
    """
    assignment = Assignment.objects.select_for_update().filter(pk=assignment_id).first()
    if assignment is None:
        raise AssignmentNotFoundError(assignment_id)
    if assignment.active == active:
        return assignment
    if active:
        if assignment.archived:
            raise ValidationError({"active": "Archived assignments cannot be reactivated."})
        occupant = _slot_occupant(_scope_fields(assignment.scope), assignment.timing, exclude=assignment.id)
        if occupant is not None:
            raise AssignmentSlotTakenError(occupant.id)

    assignment.active = active
    assignment.save(update_fields=["active", "updated_at"])
    logger.info("assignment_activation_changed", assignment_id=str(assignment.id), active=active)
    return assignment


def archive_assignment(assignment_id: UUID) -> Assignment:
    """Archive an assignment. Existing submissions and gate flags are kept. Archiving twice is a no-op."""
    assignment = get_assignment(assignment_id)
    if not assignment.archived:
        assignment.archived = True
        assignment.save(update_fields=["archived", "updated_at"])
        logger.info("assignment_archived", assignment_id=str(assignment.id))
    return assignment


def list_assignments(
    course_id: str | None = None,
    module_id: str | None = None,
    include_archived: bool = False,
) -> AssignmentQueryset:
    """List assignments, optionally narrowed to a course and one of its modules."""
    queryset = Assignment.objects.get_queryset()
    if course_id:
        queryset = queryset.filter(course_id=course_id)
    if module_id:
        queryset = queryset.filter(module_id=module_id)
    if not include_archived:
        queryset = queryset.filter(archived=False)
    return queryset
