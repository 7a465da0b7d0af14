"""Tests for the grading engine."""

import itertools
from dataclasses import dataclass

import pytest

from questionnaires.grading import find_unanswered, grade, index_answers, is_scored, to_typed_answer
from questionnaires.schema import AnswerSchema
from questionnaires.types import (
    AnswerValue,
    ChoiceOption,
    MultiChoiceAnswer,
    MultiChoiceQuestion,
    Question,
    ScaleAnswer,
    ScaleQuestion,
    SingleChoiceAnswer,
    SingleChoiceQuestion,
    TextQuestion,
)


@dataclass(frozen=True)
class Answer:
    question_id: str
    value: AnswerValue


class TestIsScored:
    def test_choice_question_with_points_and_correct_option(self, single_question: SingleChoiceQuestion) -> None:
        assert is_scored(single_question) is True

    def test_choice_question_without_points(self, single_question: SingleChoiceQuestion) -> None:
        assert is_scored(single_question.model_copy(update={"points": None})) is False

    def test_choice_question_without_correct_option(self) -> None:
        question = SingleChoiceQuestion(
            id="poll", prompt="Favourite?", points=5, options=[ChoiceOption(id="a", label="A")]
        )
        assert is_scored(question) is False

    def test_scale_and_text_never_scored(self, scale_question: ScaleQuestion, text_question: TextQuestion) -> None:
        assert text_question.points is not None
        assert is_scored(scale_question.model_copy(update={"points": 4})) is False
        assert is_scored(text_question) is False


class TestToTypedAnswer:
    def test_single_choice(self, single_question: SingleChoiceQuestion) -> None:
        assert to_typed_answer(single_question, "b") == SingleChoiceAnswer(option_id="b")

    @pytest.mark.parametrize("value", ["z", ["b"], 2, None, ""])
    def test_single_choice_malformed(self, single_question: SingleChoiceQuestion, value: AnswerValue) -> None:
        assert to_typed_answer(single_question, value) is None

    def test_multi_choice(self, multi_question: MultiChoiceQuestion) -> None:
        assert to_typed_answer(multi_question, ["b", "a"]) == MultiChoiceAnswer(option_ids=frozenset({"a", "b"}))

    @pytest.mark.parametrize("value", [[], ["a", "z"], "a", 1, None])
    def test_multi_choice_malformed(self, multi_question: MultiChoiceQuestion, value: AnswerValue) -> None:
        assert to_typed_answer(multi_question, value) is None

    @pytest.mark.parametrize("value", [1, 3, 5, 2.5])
    def test_scale_in_range(self, scale_question: ScaleQuestion, value: AnswerValue) -> None:
        assert to_typed_answer(scale_question, value) == ScaleAnswer(value=float(value))  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", [0, 6, "3", True, None])
    def test_scale_malformed(self, scale_question: ScaleQuestion, value: AnswerValue) -> None:
        assert to_typed_answer(scale_question, value) is None

    def test_blank_text_is_no_answer(self, text_question: TextQuestion) -> None:
        assert to_typed_answer(text_question, "   ") is None
        assert to_typed_answer(text_question, "fine") is not None


class TestGrade:
    def test_all_correct(self, quiz_questions: list[Question]) -> None:
        """Only the single and multi questions count; scale and text never do."""
        result = grade(
            quiz_questions,
            [Answer("q1", "b"), Answer("q2", ["a", "b"]), Answer("q3", 4), Answer("q4", "some text")],
        )

        assert (result.earned, result.total, result.percentage) == (15, 15, 100)
        assert [score.question_id for score in result.question_scores] == ["q1", "q2"]
        assert all(score.correct for score in result.question_scores)

    def test_single_choice_membership(self) -> None:
        """A single-choice question with several correct options accepts any of them."""
        question = SingleChoiceQuestion(
            id="q",
            prompt="Pick a prime",
            points=2,
            options=[
                ChoiceOption(id="2", label="2", correct=True),
                ChoiceOption(id="3", label="3", correct=True),
                ChoiceOption(id="4", label="4"),
            ],
        )
        assert grade([question], [Answer("q", "3")]).earned == 2
        assert grade([question], [Answer("q", "4")]).earned == 0

    @pytest.mark.parametrize(
        "submitted, expected_earned",
        [
            (["a", "b"], 5),
            (["b", "a"], 5),
            (["a"], 0),
            (["a", "b", "c"], 0),
            (["c"], 0),
        ],
    )
    def test_multi_choice_exact_set_match(
        self, multi_question: MultiChoiceQuestion, submitted: list[str], expected_earned: int
    ) -> None:
        result = grade([multi_question], [Answer("q2", submitted)])
        assert result.earned == expected_earned
        assert result.total == 5

    def test_missing_and_malformed_answers_earn_nothing(self, quiz_questions: list[Question]) -> None:
        result = grade(quiz_questions, [Answer("q2", "a")])
        assert (result.earned, result.total, result.percentage) == (0, 15, 0)

    def test_unknown_question_ids_are_ignored(self, quiz_questions: list[Question]) -> None:
        result = grade(quiz_questions, [Answer("nope", "b"), Answer("q1", "b")])
        assert result.earned == 10

    def test_duplicate_answers_count_as_unanswered(self, quiz_questions: list[Question]) -> None:
        result = grade(quiz_questions, [Answer("q1", "b"), Answer("q1", "a")])
        assert result.earned == 0
        assert index_answers(quiz_questions, [Answer("q1", "b"), Answer("q1", "b")]) == {}

    def test_nothing_scored_gives_zero_percentage(
        self, scale_question: ScaleQuestion, text_question: TextQuestion
    ) -> None:
        result = grade([scale_question, text_question], [Answer("q3", 2), Answer("q4", "x")])
        assert (result.earned, result.total, result.percentage) == (0, 0, 0)
        assert result.question_scores == []

    def test_percentage_is_rounded(self, single_question: SingleChoiceQuestion) -> None:
        other = single_question.model_copy(update={"id": "q9", "points": 20})
        result = grade([single_question, other], [Answer("q1", "b")])
        assert result.percentage == 33

    def test_order_independent_and_deterministic(self, quiz_questions: list[Question]) -> None:
        answers = [Answer("q1", "b"), Answer("q2", ["a"]), Answer("q3", 2), Answer("q1", "c"), Answer("x", "y")]
        expected = grade(quiz_questions, answers)
        for permutation in itertools.permutations(answers):
            assert grade(quiz_questions, permutation) == expected


class TestFindUnanswered:
    def test_lists_required_questions_without_usable_answer(self, quiz_questions: list[Question]) -> None:
        assert find_unanswered(quiz_questions, []) == ["q1", "q3"]

    def test_malformed_required_answers_are_reported(self, quiz_questions: list[Question]) -> None:
        assert find_unanswered(quiz_questions, [Answer("q1", "zzz"), Answer("q3", 9)]) == ["q1", "q3"]

    def test_optional_questions_are_not_reported(self, quiz_questions: list[Question]) -> None:
        assert find_unanswered(quiz_questions, [Answer("q1", "a"), Answer("q3", 1)]) == []


class TestAnswerSchema:
    def test_boolean_stays_a_boolean(self, scale_question: ScaleQuestion) -> None:
        answer = AnswerSchema(question_id="q3", value=True)

        assert answer.value is True
        assert find_unanswered([scale_question], [answer]) == ["q3"]

    @pytest.mark.parametrize("value", ["b", ["a", "b"], 3, 2.5, None])
    def test_other_values_are_kept_as_sent(self, value: AnswerValue) -> None:
        assert AnswerSchema(question_id="q1", value=value).value == value
