"""Enums for the assignment gating system."""

from enum import StrEnum

from django.utils.translation import gettext_noop


class Slot(StrEnum):
    """The four (scope, timing) positions an assignment can occupy in a course context."""

    PRE_COURSE = "pre_course"
    POST_COURSE = "post_course"
    PRE_MODULE = "pre_module"
    POST_MODULE = "post_module"

    @property
    def timing(self) -> str:
        return self.value.split("_", 1)[0]

    @property
    def scope_type(self) -> str:
        return self.value.split("_", 1)[1]

    @property
    def flag(self) -> str:
        """Name of the gate-state flag a submission for this slot flips."""
        return f"{self.value}_complete"


class GateAction(StrEnum):
    START = "start"
    COMPLETE = "complete"


class NextStep(StrEnum):
    """Possible next steps for a learner to get past a gate."""

    COMPLETE_QUESTIONNAIRE = "complete_questionnaire"


class Reasons(StrEnum):
    """Reasons why a learner may not start or complete a unit of content.

    Note: Strings are marked with _noop() for translation extraction.
    The actual translation happens in gating.py when using _(Reasons.XXX).
    """

    PRE_COURSE_REQUIRED = gettext_noop("pre-course questionnaire required")
    POST_COURSE_REQUIRED = gettext_noop("post-course questionnaire required")
    PRE_MODULE_REQUIRED = gettext_noop("pre-module questionnaire required")
    POST_MODULE_REQUIRED = gettext_noop("post-module questionnaire required")
