import typing as t

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone

from common.models import TimeStampedModel
from questionnaires.models import QuestionnaireTemplate

from .enums import Slot
from .types import CourseScope, ModuleScope, slot_for

# ---- Assignment model ----


class AssignmentQueryset(models.QuerySet["Assignment"]):
    """Assignment queryset."""

    def live(self) -> t.Self:
        """Assignments learners currently have to take."""
        return self.filter(active=True, archived=False)

    def for_context(self, course_id: str, module_id: str | None = None) -> t.Self:
        """Assignments on the course itself and, if given, on one of its modules."""
        scope_filter = Q(scope_type=Assignment.ScopeType.COURSE, course_id=course_id)
        if module_id:
            scope_filter |= Q(scope_type=Assignment.ScopeType.MODULE, course_id=course_id, module_id=module_id)
        return self.filter(scope_filter)


class AssignmentManager(models.Manager["Assignment"]):
    def get_queryset(self) -> AssignmentQueryset:
        """Get assignment queryset."""
        return AssignmentQueryset(self.model).select_related("template")

    def live(self) -> AssignmentQueryset:
        """Assignments learners currently have to take."""
        return self.get_queryset().live()

    def for_context(self, course_id: str, module_id: str | None = None) -> AssignmentQueryset:
        """Assignments on the course itself and, if given, on one of its modules."""
        return self.get_queryset().for_context(course_id, module_id)


class Assignment(TimeStampedModel):
    """A questionnaire bound to a course or module, before or after it.

    ``template_version`` is the template version that was current when the
    assignment was created. It is never updated afterwards, so later template
    revisions do not change what learners are asked or how they are graded.
    """

    class ScopeType(models.TextChoices):
        COURSE = "course"
        MODULE = "module"

    class Timing(models.TextChoices):
        PRE = "pre"
        POST = "post"

    scope_type = models.CharField(choices=ScopeType.choices, max_length=10)
    course_id = models.CharField(max_length=128, db_index=True)
    module_id = models.CharField(max_length=128, blank=True, default="", db_index=True)
    timing = models.CharField(choices=Timing.choices, max_length=4)
    active = models.BooleanField(default=True)
    archived = models.BooleanField(default=False)
    template = models.ForeignKey(QuestionnaireTemplate, on_delete=models.PROTECT, related_name="assignments")
    template_version = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    objects = AssignmentManager()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["scope_type", "course_id", "module_id", "timing"],
                condition=Q(active=True, archived=False),
                name="unique_live_assignment_per_slot",
            )
        ]
        ordering = ["course_id", "module_id", "-created_at"]

    def __str__(self) -> str:
        return f"{self.slot} @ {self.course_id}/{self.module_id or '-'} ({self.template_id} v{self.template_version})"

    @property
    def scope(self) -> CourseScope | ModuleScope:
        match self.scope_type:
            case Assignment.ScopeType.COURSE:
                return CourseScope(course_id=self.course_id)
            case Assignment.ScopeType.MODULE:
                return ModuleScope(course_id=self.course_id, module_id=self.module_id)
            case _:
                raise ValueError(f"Unknown scope type: {self.scope_type!r}")

    @property
    def slot(self) -> Slot:
        return slot_for(self.scope, self.timing)

    @property
    def is_live(self) -> bool:
        return self.active and not self.archived

    def clean(self) -> None:
        """Ensure the scope is consistent and the frozen version is left alone."""
        super().clean()
        if self.scope_type == self.ScopeType.COURSE and self.module_id:
            raise ValidationError({"module_id": "A course-scoped assignment cannot reference a module."})
        if self.scope_type == self.ScopeType.MODULE and not self.module_id:
            raise ValidationError({"module_id": "A module-scoped assignment requires a module."})
        if self._state.adding:
            return
        frozen = Assignment.objects.filter(pk=self.pk).values_list("template_id", "template_version").first()
        if frozen is not None and frozen != (self.template_id, self.template_version):
            raise ValidationError({"template_version": "The questionnaire version of an assignment is frozen."})


# ---- AssignmentSubmission model ----


class AssignmentSubmission(TimeStampedModel):
    """A learner's one and only submission for an assignment, with its score.

    Rows are only ever inserted.
    """

    learner_id = models.CharField(max_length=128, db_index=True)
    assignment = models.ForeignKey(Assignment, on_delete=models.PROTECT, related_name="submissions")
    template_version = models.PositiveIntegerField(help_text="The questionnaire version the answers were graded on.")
    answers = models.JSONField(default=list)
    earned = models.PositiveIntegerField(default=0)
    total = models.PositiveIntegerField(default=0)
    percentage = models.PositiveSmallIntegerField(default=0, validators=[MaxValueValidator(100)])
    question_scores = models.JSONField(default=list)
    submitted_at = models.DateTimeField(default=timezone.now)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["learner_id", "assignment"], name="unique_learner_assignment_submission")
        ]
        ordering = ["-submitted_at"]

    def __str__(self) -> str:
        return f"{self.learner_id} -> {self.assignment_id}: {self.earned}/{self.total}"

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Insert-only: the stored score never changes."""
        if not self._state.adding:
            raise ValidationError("Submissions cannot be modified.")
        super().save(*args, **kwargs)


# ---- Gate state models ----


def _ensure_flags_not_reset(instance: models.Model, flags: t.Iterable[str]) -> None:
    if instance._state.adding:
        return
    flags = list(flags)
    stored = type(instance)._default_manager.filter(pk=instance.pk).values(*flags).first()
    if stored is None:
        return
    reset = [flag for flag in flags if stored[flag] and not getattr(instance, flag)]
    if reset:
        raise ValidationError({flag: "A completed gate cannot be reset." for flag in reset})


class EnrollmentGateState(TimeStampedModel):
    """Course-level completion flags of a learner."""

    learner_id = models.CharField(max_length=128, db_index=True)
    course_id = models.CharField(max_length=128, db_index=True)
    pre_course_complete = models.BooleanField(default=False)
    post_course_complete = models.BooleanField(default=False)

    FLAGS: t.ClassVar[tuple[str, ...]] = ("pre_course_complete", "post_course_complete")

    class Meta:
        constraints = [models.UniqueConstraint(fields=["learner_id", "course_id"], name="unique_enrollment_gate")]

    def __str__(self) -> str:
        return f"{self.learner_id} @ {self.course_id}"

    def clean(self) -> None:
        """Flags only ever go from false to true."""
        super().clean()
        _ensure_flags_not_reset(self, self.FLAGS)


class ProgressGateState(TimeStampedModel):
    """Module-level completion flags of a learner."""

    learner_id = models.CharField(max_length=128, db_index=True)
    course_id = models.CharField(max_length=128, db_index=True)
    module_id = models.CharField(max_length=128, db_index=True)
    pre_module_complete = models.BooleanField(default=False)
    post_module_complete = models.BooleanField(default=False)

    FLAGS: t.ClassVar[tuple[str, ...]] = ("pre_module_complete", "post_module_complete")

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["learner_id", "course_id", "module_id"], name="unique_progress_gate")
        ]

    def __str__(self) -> str:
        return f"{self.learner_id} @ {self.course_id}/{self.module_id}"

    def clean(self) -> None:
        """Flags only ever go from false to true."""
        super().clean()
        _ensure_flags_not_reset(self, self.FLAGS)
