"""Custom exceptions for the assignments app."""

import typing as t
from uuid import UUID


class AssignmentException(Exception):
    """Base exception for the assignments app."""


class AssignmentNotFoundError(AssignmentException):
    """Raised when an assignment does not exist."""

    def __init__(self, assignment_id: UUID) -> None:
        """Keep the assignment id for the error response."""
        self.assignment_id = assignment_id
        super().__init__(f"Assignment {assignment_id} not found.")


class AssignmentInactiveError(AssignmentException):
    """Raised when a learner interacts with an inactive or archived assignment."""

    def __init__(self, assignment_id: UUID) -> None:
        """Keep the assignment id for the error response."""
        self.assignment_id = assignment_id
        super().__init__(f"Assignment {assignment_id} is not active.")


class AlreadySubmittedError(AssignmentException):
    """Raised when a learner submits the same assignment a second time."""

    def __init__(self, assignment_id: UUID, learner_id: str) -> None:
        """Keep the submission key for the error response."""
        self.assignment_id = assignment_id
        self.learner_id = learner_id
        super().__init__(f"Assignment {assignment_id} has already been submitted.")


class AssignmentSlotTakenError(AssignmentException):
    """Raised when activating an assignment would put two in the same (scope, timing) slot."""

    def __init__(self, existing_id: UUID) -> None:
        """Keep the id of the assignment already holding the slot."""
        self.existing_id = existing_id
        super().__init__(f"Another active assignment ({existing_id}) already covers this scope and timing.")


class AnswerValidationError(AssignmentException):
    """Raised when required questions are missing a usable answer.

    This is the only error of the submission pipeline the learner can fix.
    """

    def __init__(self, question_ids: t.Sequence[str]) -> None:
        """Keep the offending question ids for the error response."""
        self.question_ids = list(question_ids)
        super().__init__(f"Missing or invalid answers for required questions: {', '.join(self.question_ids)}")


# ---- Data integrity ----
# These are never expected in correct operation and must not be reported as "not found".


class AssignmentIntegrityError(AssignmentException):
    """Base for stored data that violates an invariant."""


class VersionMismatchError(AssignmentIntegrityError):
    """Raised when the template version an assignment was frozen against is missing."""

    def __init__(self, assignment_id: UUID, template_id: UUID, template_version: int) -> None:
        """Keep the dangling reference for operators."""
        self.assignment_id = assignment_id
        self.template_id = template_id
        self.template_version = template_version
        super().__init__(
            f"Assignment {assignment_id} is frozen against version {template_version} "
            f"of template {template_id}, which does not exist."
        )


class DuplicateAssignmentError(AssignmentIntegrityError):
    """Raised when more than one active assignment occupies the same (scope, timing) slot."""

    def __init__(self, slot: str, assignment_ids: t.Sequence[UUID]) -> None:
        """Keep the slot and the conflicting assignment ids for operators."""
        self.slot = slot
        self.assignment_ids = list(assignment_ids)
        super().__init__(f"Multiple active assignments for slot {slot}: {', '.join(map(str, self.assignment_ids))}")
