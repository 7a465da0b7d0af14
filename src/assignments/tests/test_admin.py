"""Tests for the assignment admin pages."""

import pytest
from django.contrib import admin
from django.contrib.auth.models import User
from django.http import HttpRequest
from django.test import RequestFactory

from assignments.models import Assignment, EnrollmentGateState, ProgressGateState
from questionnaires.models import QuestionnaireTemplate

from .conftest import COURSE_ID, MODULE_ID

pytestmark = pytest.mark.django_db


@pytest.fixture
def admin_request(admin_user: User) -> HttpRequest:
    request = RequestFactory().get("/")
    request.user = admin_user
    return request


@pytest.mark.parametrize(
    "model, defaults",
    [
        (EnrollmentGateState, {"learner_id": "42", "course_id": COURSE_ID}),
        (ProgressGateState, {"learner_id": "42", "course_id": COURSE_ID, "module_id": MODULE_ID}),
    ],
)
def test_gate_states_cannot_be_written(
    admin_request: HttpRequest, model: type[EnrollmentGateState | ProgressGateState], defaults: dict[str, str]
) -> None:
    state = model.objects.create(**defaults)
    model_admin = admin.site._registry[model]

    assert model_admin.has_add_permission(admin_request) is False
    assert model_admin.has_change_permission(admin_request, state) is False
    assert model_admin.has_delete_permission(admin_request, state) is False
    assert set(model.FLAGS) <= set(model_admin.get_readonly_fields(admin_request, state))


def test_assignment_archived_flag_is_read_only(admin_request: HttpRequest, pre_course_assignment: Assignment) -> None:
    model_admin = admin.site._registry[Assignment]
    assert "archived" in model_admin.get_readonly_fields(admin_request, pre_course_assignment)


def test_template_archived_flag_is_read_only(admin_request: HttpRequest, quiz_template: QuestionnaireTemplate) -> None:
    model_admin = admin.site._registry[QuestionnaireTemplate]
    assert "archived" in model_admin.get_readonly_fields(admin_request, quiz_template)
