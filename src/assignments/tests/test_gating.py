"""Tests for the pure gate decisions. No database involved."""

import uuid

import pytest

from assignments import gating
from assignments.enums import GateAction, NextStep, Reasons
from assignments.types import GateFlags, ResolvedAssignments

PRE_COURSE = uuid.uuid4()
POST_COURSE = uuid.uuid4()
PRE_MODULE = uuid.uuid4()
POST_MODULE = uuid.uuid4()

ALL_ASSIGNED = ResolvedAssignments(
    pre_course=PRE_COURSE, post_course=POST_COURSE, pre_module=PRE_MODULE, post_module=POST_MODULE
)
NOTHING_ASSIGNED = ResolvedAssignments()
NOTHING_DONE = GateFlags()


class TestCanStartModule:
    def test_pre_course_blocks_first(self) -> None:
        decision = gating.can_start_module(NOTHING_DONE, ALL_ASSIGNED)

        assert decision.allowed is False
        assert decision.reason == Reasons.PRE_COURSE_REQUIRED
        assert decision.assignment_id == PRE_COURSE
        assert decision.next_step == NextStep.COMPLETE_QUESTIONNAIRE

    def test_pre_module_blocks_once_pre_course_is_done(self) -> None:
        decision = gating.can_start_module(GateFlags(pre_course_complete=True), ALL_ASSIGNED)

        assert decision.allowed is False
        assert decision.reason == Reasons.PRE_MODULE_REQUIRED
        assert decision.assignment_id == PRE_MODULE

    def test_allows_when_pre_flags_are_set(self) -> None:
        flags = GateFlags(pre_course_complete=True, pre_module_complete=True)
        assert gating.can_start_module(flags, ALL_ASSIGNED).allowed is True

    def test_allows_when_nothing_is_assigned(self) -> None:
        decision = gating.can_start_module(NOTHING_DONE, NOTHING_ASSIGNED)
        assert decision.allowed is True
        assert decision.reason is None
        assert decision.assignment_id is None

    def test_post_assignments_do_not_block_starting(self) -> None:
        resolved = ResolvedAssignments(post_course=POST_COURSE, post_module=POST_MODULE)
        assert gating.can_start_module(NOTHING_DONE, resolved).allowed is True


class TestCanComplete:
    def test_module_needs_post_module(self) -> None:
        decision = gating.can_complete_module(GateFlags(pre_course_complete=True), ALL_ASSIGNED)
        assert decision.allowed is False
        assert decision.reason == Reasons.POST_MODULE_REQUIRED
        assert decision.assignment_id == POST_MODULE

    def test_module_complete(self) -> None:
        assert gating.can_complete_module(GateFlags(post_module_complete=True), ALL_ASSIGNED).allowed is True

    def test_course_needs_post_course(self) -> None:
        decision = gating.can_complete_course(GateFlags(post_module_complete=True), ALL_ASSIGNED)
        assert decision.allowed is False
        assert decision.reason == Reasons.POST_COURSE_REQUIRED

    def test_course_complete(self) -> None:
        assert gating.can_complete_course(GateFlags(post_course_complete=True), ALL_ASSIGNED).allowed is True


class TestCanStartCourse:
    def test_needs_pre_course(self) -> None:
        decision = gating.can_start_course(NOTHING_DONE, ALL_ASSIGNED)
        assert decision.allowed is False
        assert decision.reason == Reasons.PRE_COURSE_REQUIRED

    def test_module_slots_are_irrelevant(self) -> None:
        resolved = ResolvedAssignments(pre_module=PRE_MODULE)
        assert gating.can_start_course(NOTHING_DONE, resolved).allowed is True


@pytest.mark.parametrize(
    "action, has_module, expected_reason",
    [
        (GateAction.START, False, Reasons.PRE_COURSE_REQUIRED),
        (GateAction.START, True, Reasons.PRE_MODULE_REQUIRED),
        (GateAction.COMPLETE, False, Reasons.POST_COURSE_REQUIRED),
        (GateAction.COMPLETE, True, Reasons.POST_MODULE_REQUIRED),
    ],
)
def test_evaluate_dispatches_on_action_and_module(
    action: GateAction, has_module: bool, expected_reason: Reasons
) -> None:
    flags = GateFlags(pre_course_complete=has_module)
    decision = gating.evaluate(action, flags, ALL_ASSIGNED, has_module=has_module)
    assert decision.reason == expected_reason
