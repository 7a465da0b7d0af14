"""Submission recorder: grades a learner's answers and records the result exactly once."""

import typing as t
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from assignments.exceptions import AlreadySubmittedError, AnswerValidationError, AssignmentInactiveError
from assignments.models import AssignmentSubmission
from questionnaires import grading
from questionnaires.types import AnswerLike

from . import gate_service, resolver

logger = structlog.get_logger(__name__)


@transaction.atomic
def submit(learner_id: str, assignment_id: UUID, answers: t.Sequence[AnswerLike]) -> AssignmentSubmission:
    """Grade and store a learner's answers for an assignment, then open the matching gate.

    The submission row and the gate flag are written in the same transaction: if
    anything fails, neither is stored.

    Raises:
        AssignmentNotFoundError: If the assignment does not exist.
        AssignmentInactiveError: If the assignment is inactive or archived.
        VersionMismatchError: If the frozen template version is missing.
        AlreadySubmittedError: If the learner already submitted this assignment.
        AnswerValidationError: If required questions have no usable answer.
    """
    assignment, version = resolver.load_frozen(assignment_id)
    if not assignment.is_live:
        raise AssignmentInactiveError(assignment.id)
    if AssignmentSubmission.objects.filter(learner_id=learner_id, assignment=assignment).exists():
        raise AlreadySubmittedError(assignment.id, learner_id)

    questions = version.question_set
    missing = grading.find_unanswered(questions, answers)
    if missing:
        logger.info("submission_rejected", assignment_id=str(assignment.id), question_ids=missing)
        raise AnswerValidationError(missing)

    result = grading.grade(questions, answers)
    try:
        with transaction.atomic():
            submission = AssignmentSubmission.objects.create(
                learner_id=learner_id,
                assignment=assignment,
                template_version=version.version,
                answers=[{"question_id": answer.question_id, "value": answer.value} for answer in answers],
                earned=result.earned,
                total=result.total,
                percentage=result.percentage,
                question_scores=[score.model_dump() for score in result.question_scores],
            )
    except (IntegrityError, ValidationError) as e:
        # Lost a race against a concurrent submit of the same learner.
        if AssignmentSubmission.objects.filter(learner_id=learner_id, assignment=assignment).exists():
            raise AlreadySubmittedError(assignment.id, learner_id) from e
        raise

    gate_service.mark_complete(learner_id, assignment)
    logger.info(
        "submission_recorded",
        submission_id=str(submission.id),
        assignment_id=str(assignment.id),
        template_version=version.version,
        learner_id=learner_id,
        earned=result.earned,
        total=result.total,
    )
    return submission


def get_submission(learner_id: str, assignment_id: UUID) -> AssignmentSubmission | None:
    """The learner's stored submission for an assignment, if any."""
    return (
        AssignmentSubmission.objects.select_related("assignment")
        .filter(learner_id=learner_id, assignment_id=assignment_id)
        .first()
    )
