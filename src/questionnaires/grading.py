"""Scoring of learner answers against a frozen set of questions.

Everything in this module is a pure function of its inputs: no database access,
no clock, no randomness. Missing or malformed answers simply earn nothing.
"""

import typing as t
from collections import defaultdict

from pydantic import BaseModel

from .types import (
    AnswerLike,
    AnswerValue,
    MultiChoiceAnswer,
    MultiChoiceQuestion,
    Question,
    ScaleAnswer,
    ScaleQuestion,
    SingleChoiceAnswer,
    SingleChoiceQuestion,
    TextAnswer,
    TextQuestion,
    TypedAnswer,
)


class QuestionScore(BaseModel):
    question_id: str
    earned: int
    total: int
    correct: bool


class GradingResult(BaseModel):
    earned: int
    total: int
    percentage: int
    question_scores: list[QuestionScore]


def is_scored(question: Question) -> bool:
    """Whether a question contributes to the total.

    Scale and text questions have no notion of correctness and never do.
    """
    if question.points is None:
        return False
    match question:
        case SingleChoiceQuestion() | MultiChoiceQuestion():
            return bool(question.correct_option_ids)
        case ScaleQuestion() | TextQuestion():
            return False


def to_typed_answer(question: Question, value: AnswerValue) -> TypedAnswer | None:
    """Interpret a raw submitted value according to the question's declared type.

    Returns None when the value does not fit the question (wrong shape, unknown
    option id, scale value out of range, blank text).
    """
    match question:
        case SingleChoiceQuestion():
            if isinstance(value, str) and value in question.option_ids:
                return SingleChoiceAnswer(option_id=value)
        case MultiChoiceQuestion():
            if isinstance(value, list) and value and all(isinstance(v, str) for v in value):
                option_ids = frozenset(value)
                if option_ids <= question.option_ids:
                    return MultiChoiceAnswer(option_ids=option_ids)
        case ScaleQuestion():
            if isinstance(value, int | float) and not isinstance(value, bool):
                if question.scale.min <= value <= question.scale.max:
                    return ScaleAnswer(value=float(value))
        case TextQuestion():
            if isinstance(value, str) and value.strip():
                return TextAnswer(text=value)
    return None


def index_answers(questions: t.Sequence[Question], answers: t.Iterable[AnswerLike]) -> dict[str, TypedAnswer]:
    """Map question ids to their typed answer.

    Answers for unknown question ids are dropped. A question answered more than once
    counts as unanswered, so the result never depends on the order of the answers.
    """
    by_id = {question.id: question for question in questions}
    raw_values: dict[str, list[AnswerValue]] = defaultdict(list)
    for answer in answers:
        if answer.question_id in by_id:
            raw_values[answer.question_id].append(answer.value)

    typed: dict[str, TypedAnswer] = {}
    for question_id, values in raw_values.items():
        if len(values) != 1:
            continue
        typed_answer = to_typed_answer(by_id[question_id], values[0])
        if typed_answer is not None:
            typed[question_id] = typed_answer
    return typed


def _is_correct(question: Question, answer: TypedAnswer | None) -> bool:
    match question, answer:
        case SingleChoiceQuestion(), SingleChoiceAnswer(option_id=option_id):
            # Membership, not equality: a question may mark several options correct.
            return option_id in question.correct_option_ids
        case MultiChoiceQuestion(), MultiChoiceAnswer(option_ids=option_ids):
            # Exact set match only, no partial credit.
            return option_ids == question.correct_option_ids
        case _:
            return False


def grade(questions: t.Sequence[Question], answers: t.Iterable[AnswerLike]) -> GradingResult:
    """Grade answers against questions.

    Args:
        questions: The frozen questions, in display order.
        answers: The learner's answers, in any order.

    Returns:
        GradingResult with earned/total points, a rounded percentage and one
        QuestionScore per scored question.
    """
    typed_answers = index_answers(questions, answers)
    question_scores: list[QuestionScore] = []
    for question in questions:
        if not is_scored(question):
            continue
        points = t.cast(int, question.points)
        correct = _is_correct(question, typed_answers.get(question.id))
        question_scores.append(
            QuestionScore(question_id=question.id, earned=points if correct else 0, total=points, correct=correct)
        )

    earned = sum(score.earned for score in question_scores)
    total = sum(score.total for score in question_scores)
    percentage = round(earned * 100 / total) if total else 0
    return GradingResult(earned=earned, total=total, percentage=percentage, question_scores=question_scores)


def find_unanswered(questions: t.Sequence[Question], answers: t.Iterable[AnswerLike]) -> list[str]:
    """Ids of required questions without a usable answer, in question order."""
    typed_answers = index_answers(questions, answers)
    return [question.id for question in questions if question.required and question.id not in typed_answers]
