import typing as t
from datetime import datetime
from uuid import UUID

from ninja import Schema

from questionnaires.grading import QuestionScore
from questionnaires.schema import AnswerSchema, FrozenQuestionnaireSchema

from .enums import Slot
from .models import Assignment, AssignmentSubmission
from .types import Scope

# ---- Admin ----


class AssignmentCreateSchema(Schema):
    scope: Scope
    timing: t.Literal["pre", "post"]
    template_id: UUID
    active: bool = True


class AssignmentUpdateSchema(Schema):
    active: bool


class AssignmentSchema(Schema):
    id: UUID
    scope: Scope
    timing: Assignment.Timing
    slot: Slot
    active: bool
    archived: bool
    template_id: UUID
    template_version: int
    created_at: datetime


# ---- Learner ----


class StartedAssignmentSchema(Schema):
    """An assignment as handed to a learner: its frozen questions, without the answer key."""

    assignment_id: UUID
    slot: Slot
    scope: Scope
    submitted: bool
    questionnaire: FrozenQuestionnaireSchema


class ScoreSchema(Schema):
    earned: int
    total: int
    percentage: int


class SubmissionResultSchema(Schema):
    submission_id: UUID
    assignment_id: UUID
    score: ScoreSchema
    submitted_at: datetime

    @classmethod
    def from_submission(cls, submission: AssignmentSubmission) -> "SubmissionResultSchema":
        return cls(
            submission_id=submission.id,
            assignment_id=submission.assignment_id,
            score=ScoreSchema(earned=submission.earned, total=submission.total, percentage=submission.percentage),
            submitted_at=submission.submitted_at,
        )


class SubmissionSchema(SubmissionResultSchema):
    """A stored submission with the answers and the per-question breakdown."""

    template_version: int
    answers: list[AnswerSchema]
    question_scores: list[QuestionScore]

    @classmethod
    def from_submission(cls, submission: AssignmentSubmission) -> "SubmissionSchema":
        return cls(
            submission_id=submission.id,
            assignment_id=submission.assignment_id,
            score=ScoreSchema(earned=submission.earned, total=submission.total, percentage=submission.percentage),
            submitted_at=submission.submitted_at,
            template_version=submission.template_version,
            answers=submission.answers,
            question_scores=submission.question_scores,
        )
