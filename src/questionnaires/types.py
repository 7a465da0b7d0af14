"""Value types for questionnaire content and learner answers.

Questions are stored as an immutable JSON snapshot per template version and parsed
back into these models. The ``type`` field is the discriminator, so every question
is exactly one of the four shapes below.
"""

import typing as t

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    model_validator,
)
from pydantic_core import PydanticCustomError

QuestionId = t.Annotated[str, Field(min_length=1, max_length=64)]
OptionId = t.Annotated[str, Field(min_length=1, max_length=64)]


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---- Questions ----


class ChoiceOption(FrozenModel):
    id: OptionId
    label: str = Field(..., min_length=1, max_length=500)
    correct: bool = False


class ScaleRange(FrozenModel):
    min: int
    max: int

    @model_validator(mode="after")
    def ensure_min_below_max(self) -> "ScaleRange":
        """A scale needs at least two points."""
        if self.min >= self.max:
            raise PydanticCustomError("invalid_scale", "Scale min must be lower than scale max.")
        return self


class BaseQuestion(FrozenModel):
    id: QuestionId
    prompt: str = Field(..., min_length=1)
    required: bool = False
    points: int | None = Field(None, ge=0, description="Points awarded for a correct answer.")


class BaseChoiceQuestion(BaseQuestion):
    options: list[ChoiceOption] = Field(..., min_length=1)

    @model_validator(mode="after")
    def ensure_unique_option_ids(self) -> "BaseChoiceQuestion":
        """Option ids are what learners submit, so they must be unambiguous."""
        option_ids = [option.id for option in self.options]
        duplicates = {oid for oid in option_ids if option_ids.count(oid) > 1}
        if duplicates:
            raise PydanticCustomError(
                "duplicate_option_ids",
                f"Option ids must be unique within a question. Duplicated option IDs: {sorted(duplicates)}",
            )
        return self

    @property
    def option_ids(self) -> frozenset[str]:
        return frozenset(option.id for option in self.options)

    @property
    def correct_option_ids(self) -> frozenset[str]:
        return frozenset(option.id for option in self.options if option.correct)


class SingleChoiceQuestion(BaseChoiceQuestion):
    type: t.Literal["single"] = "single"


class MultiChoiceQuestion(BaseChoiceQuestion):
    type: t.Literal["multi"] = "multi"


class ScaleQuestion(BaseQuestion):
    type: t.Literal["scale"] = "scale"
    scale: ScaleRange


class TextQuestion(BaseQuestion):
    type: t.Literal["text"] = "text"


Question = t.Annotated[
    SingleChoiceQuestion | MultiChoiceQuestion | ScaleQuestion | TextQuestion,
    Field(discriminator="type"),
]


def ensure_unique_question_ids(questions: list[Question]) -> list[Question]:
    """Raise if two questions share an id."""
    question_ids = [question.id for question in questions]
    duplicates = {qid for qid in question_ids if question_ids.count(qid) > 1}
    if duplicates:
        raise PydanticCustomError(
            "duplicate_question_ids",
            f"Question ids must be unique within a questionnaire. Duplicated question IDs: {sorted(duplicates)}",
        )
    return questions


QuestionList = t.Annotated[list[Question], Field(min_length=1)]

_question_list_adapter: TypeAdapter[list[Question]] = TypeAdapter(
    t.Annotated[list[Question], AfterValidator(ensure_unique_question_ids)]
)


def parse_questions(raw_questions: t.Any) -> list[Question]:
    """Parse a stored JSON snapshot back into typed questions.

    Raises:
        pydantic.ValidationError: If a question is malformed or two questions share an id.
    """
    return _question_list_adapter.validate_python(raw_questions)


def dump_questions(questions: t.Sequence[Question]) -> list[dict[str, t.Any]]:
    """Serialize typed questions into the JSON snapshot format."""
    return [question.model_dump(mode="json") for question in questions]


# ---- Answers ----
# A submitted value only becomes one of these once it has been checked against
# the type the question declares. Anything that does not fit is "no answer".


class SingleChoiceAnswer(FrozenModel):
    option_id: str


class MultiChoiceAnswer(FrozenModel):
    option_ids: frozenset[str]


class ScaleAnswer(FrozenModel):
    value: float


class TextAnswer(FrozenModel):
    text: str


TypedAnswer = SingleChoiceAnswer | MultiChoiceAnswer | ScaleAnswer | TextAnswer

# Strict members keep JSON true a bool instead of the number 1; grading treats a bool as no answer.
AnswerValue = StrictStr | list[StrictStr] | StrictBool | StrictInt | StrictFloat | None


class AnswerLike(t.Protocol):
    @property
    def question_id(self) -> str: ...

    @property
    def value(self) -> AnswerValue: ...
