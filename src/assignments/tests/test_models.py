"""Tests for the assignment models."""

import pytest

from assignments.enums import Slot
from assignments.models import Assignment
from assignments.types import CourseScope, ModuleScope

from .conftest import COURSE_ID, MODULE_ID


@pytest.mark.parametrize(
    "scope_type, module_id, expected_scope, expected_slot",
    [
        (Assignment.ScopeType.COURSE, "", CourseScope(course_id=COURSE_ID), Slot.PRE_COURSE),
        (
            Assignment.ScopeType.MODULE,
            MODULE_ID,
            ModuleScope(course_id=COURSE_ID, module_id=MODULE_ID),
            Slot.PRE_MODULE,
        ),
    ],
)
def test_scope_from_stored_fields(
    scope_type: str, module_id: str, expected_scope: CourseScope | ModuleScope, expected_slot: Slot
) -> None:
    assignment = Assignment(scope_type=scope_type, course_id=COURSE_ID, module_id=module_id, timing="pre")

    assert assignment.scope == expected_scope
    assert assignment.slot == expected_slot


def test_unknown_scope_type_is_rejected() -> None:
    assignment = Assignment(scope_type="lesson", course_id=COURSE_ID, timing="pre")
    with pytest.raises(ValueError, match="lesson"):
        assignment.scope
