# src/assignments/admin.py

import json
import typing as t

from django.contrib import admin
from django.http import HttpRequest
from django.urls import reverse
from django.utils.html import format_html
from unfold.admin import ModelAdmin

from . import models


class TemplateLinkMixin:
    """Mixin to add a link to the frozen questionnaire template."""

    def template_link(self, obj: models.Assignment) -> str:
        url = reverse("admin:questionnaires_questionnairetemplate_change", args=[obj.template_id])
        return format_html('<a href="{}">{} (v{})</a>', url, obj.template.title, obj.template_version)

    template_link.short_description = "Questionnaire"  # type: ignore[attr-defined]


@admin.register(models.Assignment)
class AssignmentAdmin(ModelAdmin, TemplateLinkMixin):  # type: ignore[misc]
    """Admin model for Assignments.

    The questionnaire and its frozen version can only be set on creation, through the API.
    """

    list_display = ["__str__", "scope_type", "course_id", "module_id", "timing", "template_link", "active", "archived"]
    list_filter = ["scope_type", "timing", "active", "archived"]
    search_fields = ["course_id", "module_id", "template__title"]
    readonly_fields = [
        "scope_type",
        "course_id",
        "module_id",
        "timing",
        "template",
        "template_version",
        "archived",
        "created_at",
    ]

    def has_add_permission(self, request: HttpRequest) -> bool:
        return False


@admin.register(models.AssignmentSubmission)
class AssignmentSubmissionAdmin(ModelAdmin):  # type: ignore[misc]
    """Admin model for Assignment Submissions. Submissions are read-only."""

    list_display = ["__str__", "learner_id", "assignment_link", "earned", "total", "percentage", "submitted_at"]
    list_filter = ["submitted_at", "assignment__timing", "assignment__scope_type"]
    search_fields = ["learner_id", "assignment__course_id", "assignment__module_id"]
    date_hierarchy = "submitted_at"
    readonly_fields = [
        "learner_id",
        "assignment",
        "template_version",
        "earned",
        "total",
        "percentage",
        "answers_display",
        "question_scores_display",
        "submitted_at",
    ]
    exclude = ["answers", "question_scores"]

    def has_add_permission(self, request: HttpRequest) -> bool:
        return False

    def has_change_permission(self, request: HttpRequest, obj: t.Any = None) -> bool:
        return False

    def assignment_link(self, obj: models.AssignmentSubmission) -> str:
        url = reverse("admin:assignments_assignment_change", args=[obj.assignment_id])
        return format_html('<a href="{}">{}</a>', url, obj.assignment)

    assignment_link.short_description = "Assignment"  # type: ignore[attr-defined]

    def answers_display(self, obj: models.AssignmentSubmission) -> str:
        return format_html("<pre>{}</pre>", json.dumps(obj.answers, indent=2))

    answers_display.short_description = "Answers"  # type: ignore[attr-defined]

    def question_scores_display(self, obj: models.AssignmentSubmission) -> str:
        return format_html("<pre>{}</pre>", json.dumps(obj.question_scores, indent=2))

    question_scores_display.short_description = "Question Scores"  # type: ignore[attr-defined]


class ReadOnlyGateStateMixin:
    """Gate flags are only set by recorded submissions, so gate states are view-only here."""

    def has_add_permission(self, request: HttpRequest) -> bool:
        return False

    def has_change_permission(self, request: HttpRequest, obj: t.Any = None) -> bool:
        return False

    def has_delete_permission(self, request: HttpRequest, obj: t.Any = None) -> bool:
        return False


@admin.register(models.EnrollmentGateState)
class EnrollmentGateStateAdmin(ReadOnlyGateStateMixin, ModelAdmin):  # type: ignore[misc]
    """Admin model for course-level gate states."""

    list_display = ["learner_id", "course_id", "pre_course_complete", "post_course_complete", "updated_at"]
    list_filter = ["pre_course_complete", "post_course_complete"]
    search_fields = ["learner_id", "course_id"]
    readonly_fields = ["learner_id", "course_id", *models.EnrollmentGateState.FLAGS, "created_at", "updated_at"]


@admin.register(models.ProgressGateState)
class ProgressGateStateAdmin(ReadOnlyGateStateMixin, ModelAdmin):  # type: ignore[misc]
    """Admin model for module-level gate states."""

    list_display = ["learner_id", "course_id", "module_id", "pre_module_complete", "post_module_complete", "updated_at"]
    list_filter = ["pre_module_complete", "post_module_complete"]
    search_fields = ["learner_id", "course_id", "module_id"]
    readonly_fields = [
        "learner_id",
        "course_id",
        "module_id",
        *models.ProgressGateState.FLAGS,
        "created_at",
        "updated_at",
    ]
