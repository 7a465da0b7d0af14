import typing as t
from functools import cached_property

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from pydantic import ValidationError as PydanticValidationError

from common.models import TimeStampedModel

from . import exceptions
from .types import Question, parse_questions

# ---- QuestionnaireTemplate model ----


class QuestionnaireTemplateQueryset(models.QuerySet["QuestionnaireTemplate"]):
    """QuestionnaireTemplate queryset."""

    def assignable(self) -> t.Self:
        """Templates that may still be bound to new assignments."""
        return self.filter(archived=False)


class QuestionnaireTemplateManager(models.Manager["QuestionnaireTemplate"]):
    def get_queryset(self) -> QuestionnaireTemplateQueryset:
        """Get questionnaire template queryset."""
        return QuestionnaireTemplateQueryset(self.model)

    def assignable(self) -> QuestionnaireTemplateQueryset:
        """Templates that may still be bound to new assignments."""
        return self.get_queryset().assignable()


class QuestionnaireTemplate(TimeStampedModel):
    """A reusable questionnaire.

    The question content lives in QuestionnaireVersion rows; ``current_version``
    only points at the latest one and never moves backwards.
    """

    class Purpose(models.TextChoices):
        SURVEY = "survey"
        QUIZ = "quiz"
        ASSESSMENT = "assessment"

    title = models.CharField(max_length=255, db_index=True)
    purpose = models.CharField(choices=Purpose.choices, max_length=20, default=Purpose.SURVEY)
    current_version = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    archived = models.BooleanField(default=False, db_index=True)

    objects = QuestionnaireTemplateManager()

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.title} (v{self.current_version})"

    @property
    def version(self) -> int:
        return self.current_version

    def clean(self) -> None:
        """Ensure the version pointer never decreases."""
        super().clean()
        if self._state.adding:
            return
        stored_version = (
            QuestionnaireTemplate.objects.filter(pk=self.pk).values_list("current_version", flat=True).first()
        )
        if stored_version is not None and self.current_version < stored_version:
            raise ValidationError({"current_version": "The template version cannot decrease."})


# ---- QuestionnaireVersion model ----


class QuestionnaireVersionQueryset(models.QuerySet["QuestionnaireVersion"]):
    """QuestionnaireVersion queryset."""


class QuestionnaireVersionManager(models.Manager["QuestionnaireVersion"]):
    def get_queryset(self) -> QuestionnaireVersionQueryset:
        """Get questionnaire version queryset."""
        return QuestionnaireVersionQueryset(self.model).select_related("template")


class QuestionnaireVersion(TimeStampedModel):
    """One immutable snapshot of a template's questions.

    Rows are only ever inserted. Assignments reference ``(template, version)`` and
    rely on the row staying around for as long as the template exists.
    """

    template = models.ForeignKey(QuestionnaireTemplate, on_delete=models.PROTECT, related_name="versions")
    version = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    questions = models.JSONField(default=list, help_text="Ordered question snapshot.")

    objects = QuestionnaireVersionManager()

    class Meta:
        constraints = [models.UniqueConstraint(fields=["template", "version"], name="unique_template_version")]
        ordering = ["template", "version"]

    def __str__(self) -> str:
        return f"{self.template_id} v{self.version}"

    def clean(self) -> None:
        """Validate the question snapshot."""
        super().clean()
        try:
            parse_questions(self.questions)
        except PydanticValidationError as e:
            raise ValidationError({"questions": [err["msg"] for err in e.errors()]}) from e

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Insert-only."""
        if not self._state.adding:
            raise exceptions.ImmutableVersionError(f"Version {self.version} of {self.template_id} is immutable.")
        super().save(*args, **kwargs)

    def delete(self, *args: t.Any, **kwargs: t.Any) -> t.NoReturn:
        """Versions are never deleted."""
        raise exceptions.ImmutableVersionError(f"Version {self.version} of {self.template_id} cannot be deleted.")

    @cached_property
    def question_set(self) -> list[Question]:
        """The typed questions of this version."""
        return parse_questions(self.questions)
