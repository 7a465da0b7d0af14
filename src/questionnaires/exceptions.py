"""Custom exceptions for the questionnaires app."""

from uuid import UUID


class QuestionnaireException(Exception):
    """Base exception for the questionnaires app."""


class TemplateNotFoundError(QuestionnaireException):
    """Raised when a questionnaire template (or one of its versions) does not exist."""

    def __init__(self, template_id: UUID, version: int | None = None) -> None:
        """Keep the requested template id and version for the error response."""
        self.template_id = template_id
        self.version = version
        if version is None:
            super().__init__(f"Questionnaire template {template_id} not found.")
        else:
            super().__init__(f"Questionnaire template {template_id} has no version {version}.")


class TemplateArchivedError(QuestionnaireException):
    """Raised when an archived template is revised or assigned."""

    def __init__(self, template_id: UUID) -> None:
        """Keep the template id for the error response."""
        self.template_id = template_id
        super().__init__(f"Questionnaire template {template_id} is archived.")


class ImmutableVersionError(QuestionnaireException):
    """Raised when a stored questionnaire version is written to again."""
