import typing as t
from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from common.schema import OneToTwoFiftyFiveString
from questionnaires.models import QuestionnaireTemplate, QuestionnaireVersion

from .types import (
    AnswerValue,
    ChoiceOption,
    MultiChoiceQuestion,
    Question,
    QuestionList,
    ScaleQuestion,
    SingleChoiceQuestion,
    TextQuestion,
    ensure_unique_question_ids,
)

# ---- Template authoring ----


class TemplateCreateSchema(Schema):
    title: OneToTwoFiftyFiveString
    purpose: QuestionnaireTemplate.Purpose = QuestionnaireTemplate.Purpose.SURVEY
    questions: QuestionList

    @field_validator("questions")
    @classmethod
    def unique_question_ids(cls, v: list[Question]) -> list[Question]:
        """Question ids are the answer keys, so they must be unique."""
        return ensure_unique_question_ids(v)


class TemplateReviseSchema(Schema):
    questions: QuestionList

    @field_validator("questions")
    @classmethod
    def unique_question_ids(cls, v: list[Question]) -> list[Question]:
        """Question ids are the answer keys, so they must be unique."""
        return ensure_unique_question_ids(v)


class TemplateInListSchema(Schema):
    id: UUID
    title: str
    purpose: QuestionnaireTemplate.Purpose
    version: int
    archived: bool
    created_at: datetime
    updated_at: datetime


class TemplateSchema(Schema):
    """A template as seen by admins, at a specific version (correct answers included)."""

    id: UUID
    title: str
    purpose: QuestionnaireTemplate.Purpose
    version: int
    current_version: int
    archived: bool
    questions: list[Question]

    @classmethod
    def from_version(cls, version: QuestionnaireVersion) -> "TemplateSchema":
        """Build the schema from a stored version row."""
        template = version.template
        return cls(
            id=template.id,
            title=template.title,
            purpose=template.purpose,  # type: ignore[arg-type]
            version=version.version,
            current_version=template.current_version,
            archived=template.archived,
            questions=version.question_set,
        )


# ---- Learner-facing questions (no correctness information) ----


class LearnerOptionSchema(Schema):
    id: str
    label: str


class LearnerQuestionSchema(Schema):
    id: str
    type: t.Literal["single", "multi", "scale", "text"]
    prompt: str
    required: bool
    points: int | None = None
    options: list[LearnerOptionSchema] | None = None
    scale_min: int | None = None
    scale_max: int | None = None

    @classmethod
    def from_question(cls, question: Question) -> "LearnerQuestionSchema":
        """Strip the answer key from a question."""
        options: list[ChoiceOption] | None = None
        scale_min = scale_max = None
        match question:
            case SingleChoiceQuestion() | MultiChoiceQuestion():
                options = question.options
            case ScaleQuestion():
                scale_min, scale_max = question.scale.min, question.scale.max
            case TextQuestion():
                pass
        return cls(
            id=question.id,
            type=question.type,
            prompt=question.prompt,
            required=question.required,
            points=question.points,
            options=[LearnerOptionSchema(id=o.id, label=o.label) for o in options] if options is not None else None,
            scale_min=scale_min,
            scale_max=scale_max,
        )


class FrozenQuestionnaireSchema(Schema):
    template_id: UUID
    title: str
    purpose: QuestionnaireTemplate.Purpose
    version: int
    questions: list[LearnerQuestionSchema]

    @classmethod
    def from_version(cls, version: QuestionnaireVersion) -> "FrozenQuestionnaireSchema":
        """Build the learner view of a stored version row."""
        return cls(
            template_id=version.template_id,
            title=version.template.title,
            purpose=version.template.purpose,  # type: ignore[arg-type]
            version=version.version,
            questions=[LearnerQuestionSchema.from_question(q) for q in version.question_set],
        )


# ---- Answers ----


class AnswerSchema(Schema):
    question_id: str = Field(..., min_length=1, max_length=64)
    value: AnswerValue = Field(
        None,
        description="An option id (single), a list of option ids (multi), a number (scale) or text (text).",
    )


class AnswerSubmissionSchema(Schema):
    answers: list[AnswerSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def ensure_unique_question_ids(self) -> "AnswerSubmissionSchema":
        """A validator to ensure unique question ids are not repeated."""
        question_ids = [answer.question_id for answer in self.answers]
        duplicates = {qid for qid in question_ids if question_ids.count(qid) > 1}
        if duplicates:
            raise PydanticCustomError(
                "duplicate_question_ids",
                f"Each question must be answered only once. Duplicated question IDs: {sorted(duplicates)}",
            )
        return self
