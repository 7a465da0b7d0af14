"""Shared fixtures for all apps."""

import typing as t

import pytest
from django.contrib.auth.models import User
from django.core.cache import cache
from django.test.client import Client
from ninja_jwt.tokens import RefreshToken

from questionnaires.models import QuestionnaireTemplate
from questionnaires.service import template_service
from questionnaires.types import (
    ChoiceOption,
    MultiChoiceQuestion,
    Question,
    ScaleQuestion,
    ScaleRange,
    SingleChoiceQuestion,
    TextQuestion,
)


@pytest.fixture(autouse=True)
def clear_cache() -> t.Iterator[None]:
    """Reset throttling counters between tests."""
    cache.clear()
    yield
    cache.clear()


# ---- Users and clients ----


@pytest.fixture
def learner(django_user_model: type[User]) -> User:
    return django_user_model.objects.create_user(username="learner", email="learner@example.com", password="pass")


@pytest.fixture
def other_learner(django_user_model: type[User]) -> User:
    return django_user_model.objects.create_user(username="other", email="other@example.com", password="pass")


@pytest.fixture
def staff_user(django_user_model: type[User]) -> User:
    return django_user_model.objects.create_user(
        username="staff", email="staff@example.com", password="pass", is_staff=True
    )


def _jwt_client(user: User) -> Client:
    refresh = RefreshToken.for_user(user)
    return Client(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")  # type: ignore[attr-defined]


@pytest.fixture
def learner_client(learner: User) -> Client:
    """API client for a learner."""
    return _jwt_client(learner)


@pytest.fixture
def staff_client(staff_user: User) -> Client:
    """API client for a staff member."""
    return _jwt_client(staff_user)


# ---- Questionnaire content ----


@pytest.fixture
def single_question() -> SingleChoiceQuestion:
    """A required single-choice question worth 10 points; "b" is correct."""
    return SingleChoiceQuestion(
        id="q1",
        prompt="Which one?",
        required=True,
        points=10,
        options=[
            ChoiceOption(id="a", label="A"),
            ChoiceOption(id="b", label="B", correct=True),
            ChoiceOption(id="c", label="C"),
        ],
    )


@pytest.fixture
def multi_question() -> MultiChoiceQuestion:
    """An optional multi-choice question worth 5 points; "a" and "b" are correct."""
    return MultiChoiceQuestion(
        id="q2",
        prompt="Which ones?",
        points=5,
        options=[
            ChoiceOption(id="a", label="A", correct=True),
            ChoiceOption(id="b", label="B", correct=True),
            ChoiceOption(id="c", label="C"),
        ],
    )


@pytest.fixture
def scale_question() -> ScaleQuestion:
    return ScaleQuestion(id="q3", prompt="How confident are you?", required=True, scale=ScaleRange(min=1, max=5))


@pytest.fixture
def text_question() -> TextQuestion:
    return TextQuestion(id="q4", prompt="Anything else?", points=3)


@pytest.fixture
def quiz_questions(
    single_question: SingleChoiceQuestion,
    multi_question: MultiChoiceQuestion,
    scale_question: ScaleQuestion,
    text_question: TextQuestion,
) -> list[Question]:
    return [single_question, multi_question, scale_question, text_question]


@pytest.fixture
def quiz_template(quiz_questions: list[Question]) -> QuestionnaireTemplate:
    """A quiz template at version 1."""
    return template_service.create_template("Python basics", QuestionnaireTemplate.Purpose.QUIZ, quiz_questions)


@pytest.fixture
def single_question_template(single_question: SingleChoiceQuestion) -> QuestionnaireTemplate:
    """A template whose version 1 only holds the single-choice question."""
    return template_service.create_template("Warm-up", QuestionnaireTemplate.Purpose.ASSESSMENT, [single_question])
