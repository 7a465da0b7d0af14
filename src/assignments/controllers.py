from uuid import UUID

from ninja.errors import HttpError
from ninja_extra import api_controller, route
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.permissions import IsAdminUser
from ninja_jwt.authentication import JWTAuth

from common.controllers import UserAwareController
from common.throttling import QuestionnaireSubmissionThrottle, UserDefaultThrottle, WriteThrottle
from questionnaires.schema import AnswerSubmissionSchema, FrozenQuestionnaireSchema

from .enums import GateAction
from .exceptions import AssignmentInactiveError
from .models import Assignment, AssignmentQueryset
from .schema import (
    AssignmentCreateSchema,
    AssignmentSchema,
    AssignmentUpdateSchema,
    StartedAssignmentSchema,
    SubmissionResultSchema,
    SubmissionSchema,
)
from .service import gate_service, resolver, submission_service
from .types import ContextStatus, GateDecision


@api_controller("/learning", auth=JWTAuth(), tags=["Learning"], throttle=UserDefaultThrottle())
class LearningController(UserAwareController):
    """Learner-facing endpoints: which assessments apply, taking them, and the gates they guard."""

    @route.get("/context", url_name="learning_context", response=ContextStatus)
    def get_context(self, course_id: str, module_id: str | None = None) -> ContextStatus:
        """List the assessments of a course (and module) with the learner's completion of each."""
        return gate_service.context_status(self.learner_id(), course_id, module_id)

    @route.get("/gate", url_name="learning_gate", response=GateDecision)
    def check_gate(self, course_id: str, action: GateAction, module_id: str | None = None) -> GateDecision:
        """Check whether the learner may start or complete a course, or a module when module_id is given.

        When denied, the response names the blocking assignment and the next step.
        """
        return gate_service.check_gate(self.learner_id(), course_id, module_id, action)

    @route.post("/assignments/{assignment_id}/start", url_name="start_assignment", response=StartedAssignmentSchema)
    def start_assignment(self, assignment_id: UUID) -> StartedAssignmentSchema:
        """Get the frozen questions of an assignment. Correct answers are not included."""
        learner_id = self.learner_id()
        assignment, version = resolver.load_frozen(assignment_id)
        if not assignment.is_live:
            raise AssignmentInactiveError(assignment.id)
        return StartedAssignmentSchema(
            assignment_id=assignment.id,
            slot=assignment.slot,
            scope=assignment.scope,
            submitted=submission_service.get_submission(learner_id, assignment.id) is not None,
            questionnaire=FrozenQuestionnaireSchema.from_version(version),
        )

    @route.post(
        "/assignments/{assignment_id}/submit",
        url_name="submit_assignment",
        response=SubmissionResultSchema,
        throttle=QuestionnaireSubmissionThrottle(),
    )
    def submit_assignment(self, assignment_id: UUID, payload: AnswerSubmissionSchema) -> SubmissionResultSchema:
        """Submit answers for an assignment.

        Each assignment can be submitted once. The score is computed against the
        questionnaire version the assignment was frozen with.
        """
        submission = submission_service.submit(self.learner_id(), assignment_id, payload.answers)
        return SubmissionResultSchema.from_submission(submission)

    @route.get("/assignments/{assignment_id}/submission", url_name="get_submission", response=SubmissionSchema)
    def get_submission(self, assignment_id: UUID) -> SubmissionSchema:
        """Get the learner's stored submission for an assignment."""
        submission = submission_service.get_submission(self.learner_id(), assignment_id)
        if submission is None:
            raise HttpError(404, "No submission found for this assignment.")
        return SubmissionSchema.from_submission(submission)


@api_controller(
    "/assignments",
    auth=JWTAuth(),
    permissions=[IsAdminUser],
    tags=["Assignments"],
    throttle=UserDefaultThrottle(),
)
class AssignmentAdminController(UserAwareController):
    """Binding questionnaire templates to course and module slots."""

    @route.post("/", url_name="create_assignment", response=AssignmentSchema, throttle=WriteThrottle())
    def create_assignment(self, payload: AssignmentCreateSchema) -> Assignment:
        """Assign a questionnaire to a course or module, freezing its current version."""
        return resolver.create_assignment(payload.scope, payload.timing, payload.template_id, payload.active)

    @route.get("/", url_name="list_assignments", response=PaginatedResponseSchema[AssignmentSchema])
    @paginate(PageNumberPaginationExtra, page_size=20)
    def list_assignments(
        self, course_id: str | None = None, module_id: str | None = None, include_archived: bool = False
    ) -> AssignmentQueryset:
        """List assignments, optionally for one course or module."""
        return resolver.list_assignments(course_id, module_id, include_archived=include_archived)

    @route.get("/{assignment_id}", url_name="get_assignment", response=AssignmentSchema)
    def get_assignment(self, assignment_id: UUID) -> Assignment:
        return resolver.get_assignment(assignment_id)

    @route.patch("/{assignment_id}", url_name="update_assignment", response=AssignmentSchema, throttle=WriteThrottle())
    def update_assignment(self, assignment_id: UUID, payload: AssignmentUpdateSchema) -> Assignment:
        """Activate or deactivate an assignment. The frozen questionnaire version cannot be changed."""
        return resolver.set_assignment_active(assignment_id, payload.active)

    @route.post(
        "/{assignment_id}/archive",
        url_name="archive_assignment",
        response=AssignmentSchema,
        throttle=WriteThrottle(),
    )
    def archive_assignment(self, assignment_id: UUID) -> Assignment:
        """Archive an assignment. Learners' submissions and completed gates are kept."""
        return resolver.archive_assignment(assignment_id)
