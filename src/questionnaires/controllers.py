"""Admin controllers for questionnaire templates."""

from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.permissions import IsAdminUser
from ninja_jwt.authentication import JWTAuth

from common.controllers import UserAwareController
from common.throttling import UserDefaultThrottle, WriteThrottle

from .models import QuestionnaireTemplate
from .schema import TemplateCreateSchema, TemplateInListSchema, TemplateReviseSchema, TemplateSchema
from .service import template_service


@api_controller(
    "/questionnaire-templates",
    auth=JWTAuth(),
    permissions=[IsAdminUser],
    tags=["Questionnaire Templates"],
    throttle=UserDefaultThrottle(),
)
class QuestionnaireTemplateController(UserAwareController):
    """Authoring endpoints for versioned questionnaire templates.

    Every change to the questions creates a new version. Older versions stay
    available because assignments are frozen against the version that was current
    when they were created.
    """

    @route.post("/", url_name="create_template", response=TemplateSchema, throttle=WriteThrottle())
    def create_template(self, payload: TemplateCreateSchema) -> TemplateSchema:
        """Create a questionnaire template at version 1."""
        template = template_service.create_template(payload.title, payload.purpose, payload.questions)
        return TemplateSchema.from_version(template_service.get_template_version(template.id))

    @route.get("/", url_name="list_templates", response=PaginatedResponseSchema[TemplateInListSchema])
    @paginate(PageNumberPaginationExtra, page_size=20)
    def list_templates(self, include_archived: bool = False) -> QuerySet[QuestionnaireTemplate]:
        """List questionnaire templates, newest first. Archived ones only on request."""
        return template_service.list_templates(include_archived=include_archived)

    @route.get("/{template_id}", url_name="get_template", response=TemplateSchema)
    def get_template(self, template_id: UUID, version: int | None = None) -> TemplateSchema:
        """Get a template at its current version, or at an older one with ?version=N."""
        return TemplateSchema.from_version(template_service.get_template_version(template_id, version))

    @route.put(
        "/{template_id}/questions",
        url_name="revise_template",
        response=TemplateSchema,
        throttle=WriteThrottle(),
    )
    def revise_template(self, template_id: UUID, payload: TemplateReviseSchema) -> TemplateSchema:
        """Replace the questions, producing a new version.

        Assignments created earlier keep using the version they were frozen against.
        """
        new_version = template_service.revise_template(template_id, payload.questions)
        return TemplateSchema.from_version(template_service.get_template_version(template_id, new_version))

    @route.post(
        "/{template_id}/archive",
        url_name="archive_template",
        response=TemplateSchema,
        throttle=WriteThrottle(),
    )
    def archive_template(self, template_id: UUID) -> TemplateSchema:
        """Archive a template so it can no longer be revised or assigned."""
        template = template_service.archive_template(template_id)
        return TemplateSchema.from_version(template_service.get_template_version(template.id))
