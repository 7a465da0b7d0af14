# src/questionnaires/admin.py

import json
import typing as t

from django.contrib import admin
from django.http import HttpRequest
from django.urls import reverse
from django.utils.html import format_html
from unfold.admin import ModelAdmin, TabularInline

from . import models


# --- Inlines for QuestionnaireTemplate Admin ---
class QuestionnaireVersionInline(TabularInline):  # type: ignore[misc]
    """Read-only list of the stored versions of a template."""

    model = models.QuestionnaireVersion
    extra = 0
    can_delete = False
    fields = ["version", "question_count", "created_at"]
    readonly_fields = ["version", "question_count", "created_at"]
    ordering = ["-version"]

    def has_add_permission(self, request: HttpRequest, obj: t.Any = None) -> bool:
        return False

    def question_count(self, obj: models.QuestionnaireVersion) -> int:
        return len(obj.questions)

    question_count.short_description = "Questions"  # type: ignore[attr-defined]


@admin.register(models.QuestionnaireTemplate)
class QuestionnaireTemplateAdmin(ModelAdmin):  # type: ignore[misc]
    """Admin model for Questionnaire Templates.

    Question content is only edited through the API, which creates a new version
    for every change.
    """

    list_display = ["title", "purpose", "current_version", "archived", "created_at"]
    list_filter = ["purpose", "archived", "created_at"]
    search_fields = ["title"]
    readonly_fields = ["current_version", "archived", "created_at", "updated_at"]
    fields = ["title", "purpose", "archived", "current_version", "created_at", "updated_at"]
    inlines = [QuestionnaireVersionInline]


@admin.register(models.QuestionnaireVersion)
class QuestionnaireVersionAdmin(ModelAdmin):  # type: ignore[misc]
    """Admin model for Questionnaire Versions. Versions are immutable."""

    list_display = ["__str__", "template_link", "version", "created_at"]
    list_filter = ["created_at"]
    search_fields = ["template__title"]
    readonly_fields = ["template", "version", "questions_display", "created_at"]
    fields = ["template", "version", "questions_display", "created_at"]

    def has_add_permission(self, request: HttpRequest) -> bool:
        return False

    def has_change_permission(self, request: HttpRequest, obj: t.Any = None) -> bool:
        return False

    def has_delete_permission(self, request: HttpRequest, obj: t.Any = None) -> bool:
        return False

    def template_link(self, obj: models.QuestionnaireVersion) -> str:
        url = reverse("admin:questionnaires_questionnairetemplate_change", args=[obj.template_id])
        return format_html('<a href="{}">{}</a>', url, obj.template.title)

    template_link.short_description = "Template"  # type: ignore[attr-defined]

    def questions_display(self, obj: models.QuestionnaireVersion) -> str:
        return format_html("<pre>{}</pre>", json.dumps(obj.questions, indent=2))

    questions_display.short_description = "Questions"  # type: ignore[attr-defined]
