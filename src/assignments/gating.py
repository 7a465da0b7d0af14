"""Gate decisions for starting and completing courses and modules.

A gate only looks at whether an active assignment occupies a slot and whether the
learner's matching completion flag is set. It never inspects submissions, touches
the database or raises.
"""

import typing as t

from django.utils.translation import gettext as _

from .enums import GateAction, NextStep, Reasons, Slot
from .types import GateDecision, GateFlags, ResolvedAssignments

_SLOT_REASONS: dict[Slot, Reasons] = {
    Slot.PRE_COURSE: Reasons.PRE_COURSE_REQUIRED,
    Slot.POST_COURSE: Reasons.POST_COURSE_REQUIRED,
    Slot.PRE_MODULE: Reasons.PRE_MODULE_REQUIRED,
    Slot.POST_MODULE: Reasons.POST_MODULE_REQUIRED,
}


def _first_blocking(slots: tuple[Slot, ...], flags: GateFlags, resolved: ResolvedAssignments) -> GateDecision:
    """Deny on the first slot (in the given order) with an assignment and no completion."""
    for slot in slots:
        assignment_id = resolved.get(slot)
        if assignment_id is not None and not flags.is_complete(slot):
            return GateDecision(
                allowed=False,
                reason=_(_SLOT_REASONS[slot]),
                next_step=NextStep.COMPLETE_QUESTIONNAIRE,
                assignment_id=assignment_id,
            )
    return GateDecision(allowed=True)


def can_start_course(flags: GateFlags, resolved: ResolvedAssignments) -> GateDecision:
    return _first_blocking((Slot.PRE_COURSE,), flags, resolved)


def can_start_module(flags: GateFlags, resolved: ResolvedAssignments) -> GateDecision:
    """The course's pre-questionnaire comes before the module's own."""
    return _first_blocking((Slot.PRE_COURSE, Slot.PRE_MODULE), flags, resolved)


def can_complete_module(flags: GateFlags, resolved: ResolvedAssignments) -> GateDecision:
    return _first_blocking((Slot.POST_MODULE,), flags, resolved)


def can_complete_course(flags: GateFlags, resolved: ResolvedAssignments) -> GateDecision:
    return _first_blocking((Slot.POST_COURSE,), flags, resolved)


def evaluate(action: GateAction, flags: GateFlags, resolved: ResolvedAssignments, has_module: bool) -> GateDecision:
    """Pick the gate for an action on a course, or on a module when ``has_module`` is set."""
    match action:
        case GateAction.START:
            return can_start_module(flags, resolved) if has_module else can_start_course(flags, resolved)
        case GateAction.COMPLETE:
            return can_complete_module(flags, resolved) if has_module else can_complete_course(flags, resolved)
        case _:
            t.assert_never(action)
