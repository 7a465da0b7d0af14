"""Tests for the questionnaire template admin endpoints."""

import pytest
from django.test.client import Client
from django.urls import reverse

from questionnaires.models import QuestionnaireTemplate

pytestmark = pytest.mark.django_db

QUESTIONS = [
    {
        "id": "q1",
        "type": "single",
        "prompt": "2 + 2?",
        "required": True,
        "points": 10,
        "options": [{"id": "a", "label": "3"}, {"id": "b", "label": "4", "correct": True}],
    },
    {"id": "q2", "type": "text", "prompt": "Comments"},
]


def test_create_template(staff_client: Client) -> None:
    url = reverse("api:create_template")
    payload = {"title": "Arithmetic", "purpose": "quiz", "questions": QUESTIONS}

    response = staff_client.post(url, data=payload, content_type="application/json")

    assert response.status_code == 200, response.content
    data = response.json()
    assert data["version"] == 1
    assert data["current_version"] == 1
    assert [q["id"] for q in data["questions"]] == ["q1", "q2"]
    assert data["questions"][0]["options"][1]["correct"] is True


def test_create_template_rejects_duplicate_question_ids(staff_client: Client) -> None:
    url = reverse("api:create_template")
    payload = {"title": "Dupes", "questions": [QUESTIONS[0], QUESTIONS[0]]}

    response = staff_client.post(url, data=payload, content_type="application/json")

    assert response.status_code == 422
    assert QuestionnaireTemplate.objects.count() == 0


def test_template_endpoints_require_staff(learner_client: Client) -> None:
    response = learner_client.get(reverse("api:list_templates"))
    assert response.status_code == 403


def test_revise_then_fetch_old_version(staff_client: Client, quiz_template: QuestionnaireTemplate) -> None:
    revise_url = reverse("api:revise_template", kwargs={"template_id": quiz_template.id})

    response = staff_client.put(revise_url, data={"questions": QUESTIONS}, content_type="application/json")

    assert response.status_code == 200, response.content
    assert response.json()["version"] == 2

    get_url = reverse("api:get_template", kwargs={"template_id": quiz_template.id})
    old = staff_client.get(get_url, {"version": 1}).json()
    current = staff_client.get(get_url).json()
    assert old["version"] == 1
    assert old["current_version"] == 2
    assert [q["id"] for q in old["questions"]] == ["q1", "q2", "q3", "q4"]
    assert current["version"] == 2


def test_revise_archived_template_conflicts(staff_client: Client, quiz_template: QuestionnaireTemplate) -> None:
    archive_url = reverse("api:archive_template", kwargs={"template_id": quiz_template.id})
    assert staff_client.post(archive_url).status_code == 200

    revise_url = reverse("api:revise_template", kwargs={"template_id": quiz_template.id})
    response = staff_client.put(revise_url, data={"questions": QUESTIONS}, content_type="application/json")

    assert response.status_code == 409


def test_get_unknown_version(staff_client: Client, quiz_template: QuestionnaireTemplate) -> None:
    url = reverse("api:get_template", kwargs={"template_id": quiz_template.id})
    response = staff_client.get(url, {"version": 5})
    assert response.status_code == 404


def test_list_templates(staff_client: Client, quiz_template: QuestionnaireTemplate) -> None:
    response = staff_client.get(reverse("api:list_templates"))

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 1
    assert data["results"][0]["id"] == str(quiz_template.id)
