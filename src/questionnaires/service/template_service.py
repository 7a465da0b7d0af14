"""Template store: questionnaire templates and their append-only version history."""

import typing as t
from uuid import UUID

import structlog
from django.db import transaction
from django.db.models import QuerySet

from questionnaires.exceptions import TemplateArchivedError, TemplateNotFoundError
from questionnaires.models import QuestionnaireTemplate, QuestionnaireVersion
from questionnaires.types import Question, dump_questions

logger = structlog.get_logger(__name__)


@transaction.atomic
def create_template(
    title: str,
    purpose: QuestionnaireTemplate.Purpose | str,
    questions: t.Sequence[Question],
) -> QuestionnaireTemplate:
    """Create a template together with its first version."""
    template = QuestionnaireTemplate.objects.create(title=title, purpose=purpose, current_version=1)
    QuestionnaireVersion.objects.create(template=template, version=1, questions=dump_questions(questions))
    logger.info(
        "questionnaire_template_created",
        template_id=str(template.id),
        purpose=template.purpose,
        question_count=len(questions),
    )
    return template


@transaction.atomic
def revise_template(template_id: UUID, questions: t.Sequence[Question]) -> int:
    """Store a new version of the template's questions and move the current pointer to it.

    The template row is locked for the duration of the transaction, so concurrent
    revisions get distinct, consecutive version numbers.

    Returns:
        The new version number.

    Raises:
        TemplateNotFoundError: If the template does not exist.
        TemplateArchivedError: If the template is archived.
    """
    template = QuestionnaireTemplate.objects.select_for_update().filter(pk=template_id).first()
    if template is None:
        raise TemplateNotFoundError(template_id)
    if template.archived:
        raise TemplateArchivedError(template_id)

    new_version = template.current_version + 1
    QuestionnaireVersion.objects.create(template=template, version=new_version, questions=dump_questions(questions))
    template.current_version = new_version
    template.save(update_fields=["current_version", "updated_at"])
    logger.info(
        "questionnaire_template_revised",
        template_id=str(template.id),
        version=new_version,
        question_count=len(questions),
    )
    return new_version


def archive_template(template_id: UUID) -> QuestionnaireTemplate:
    """Mark a template as archived.

    Archived templates remain readable (frozen assignments are still graded against
    them) but can no longer be revised or assigned. Archiving twice is a no-op.
    """
    template = QuestionnaireTemplate.objects.filter(pk=template_id).first()
    if template is None:
        raise TemplateNotFoundError(template_id)
    if not template.archived:
        template.archived = True
        template.save(update_fields=["archived", "updated_at"])
        logger.info("questionnaire_template_archived", template_id=str(template.id))
    return template


def get_template_version(template_id: UUID, version: int | None = None) -> QuestionnaireVersion:
    """Fetch one version of a template, the current one when ``version`` is omitted.

    Raises:
        TemplateNotFoundError: If the template or the requested version does not exist.
    """
    template = QuestionnaireTemplate.objects.filter(pk=template_id).first()
    if template is None:
        raise TemplateNotFoundError(template_id)
    wanted = template.current_version if version is None else version
    version_row = QuestionnaireVersion.objects.filter(template=template, version=wanted).first()
    if version_row is None:
        raise TemplateNotFoundError(template_id, wanted)
    return version_row


def list_templates(include_archived: bool = False) -> QuerySet[QuestionnaireTemplate]:
    """List templates, newest first."""
    queryset = QuestionnaireTemplate.objects.all()
    if not include_archived:
        queryset = queryset.assignable()
    return queryset
