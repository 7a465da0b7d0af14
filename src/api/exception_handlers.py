"""Exception handlers for the API."""

import traceback
import typing as t
from copy import deepcopy

import orjson
import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja.responses import Response

from assignments.exceptions import (
    AlreadySubmittedError,
    AnswerValidationError,
    AssignmentInactiveError,
    AssignmentIntegrityError,
    AssignmentNotFoundError,
    AssignmentSlotTakenError,
)
from questionnaires.exceptions import TemplateArchivedError, TemplateNotFoundError

logger = structlog.get_logger(__name__)


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Handle a general exception.

    Args:
        request: The incoming HTTP request.
        exc: The exception.

    Returns:
        The response.
    """
    json_payload = None
    if request.method in ("POST", "PUT", "PATCH") and request.headers.get("Content-Type") == "application/json":
        try:
            json_payload = obfuscate(orjson.loads(request.body))
        except orjson.JSONDecodeError:  # pragma: no cover
            json_payload = None
    logger.exception(
        "INTERNAL_SERVER_ERROR",
        path=f"{request.method} {request.path}",
        headers=obfuscate(dict(request.headers)),
        query=obfuscate(request.GET.dict()),
        json_payload=json_payload,
    )
    data = {"detail": "Internal Server Error."}
    is_staff = getattr(request, "user", None) and request.user.is_staff
    if settings.DEBUG or is_staff:  # pragma: no cover
        data["traceback"] = traceback.format_exc()
    return Response(status=500, data=data)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a validation error.

    Args:
        request: The incoming HTTP request.
        exc: The exception.
    """
    logger.warning("VALIDATION_ERROR", exc_info=True)
    if hasattr(exc, "error_dict"):
        error_dict = {k: [ee for e in v for ee in e] for k, v in exc.error_dict.items()}
    else:
        error_dict = {"__all__": list(exc.messages)}  # type: ignore[union-attr]
    return Response(status=400, data={"errors": error_dict})


def handle_answer_validation_error(
    request: HttpRequest, exc: AnswerValidationError | t.Type[AnswerValidationError]
) -> Response:
    """Handle missing or malformed answers to required questions."""
    return Response(
        status=400,
        data={"detail": "Some required questions have no valid answer.", "question_ids": exc.question_ids},
    )


def handle_not_found_error(
    request: HttpRequest,
    exc: TemplateNotFoundError | AssignmentNotFoundError | t.Type[TemplateNotFoundError | AssignmentNotFoundError],
) -> Response:
    """Handle a missing template, template version or assignment."""
    return Response(status=404, data={"detail": str(exc)})


def handle_conflict_error(
    request: HttpRequest,
    exc: Exception | t.Type[Exception],
) -> Response:
    """Handle a request that conflicts with the current state (inactive, archived or occupied)."""
    return Response(status=409, data={"detail": str(exc)})


def handle_already_submitted_error(
    request: HttpRequest, exc: AlreadySubmittedError | t.Type[AlreadySubmittedError]
) -> Response:
    """Handle a second submission for the same assignment."""
    return Response(
        status=409,
        data={"detail": "You have already submitted this assignment.", "assignment_id": str(exc.assignment_id)},
    )


def handle_assignment_integrity_error(
    request: HttpRequest, exc: AssignmentIntegrityError | t.Type[AssignmentIntegrityError]
) -> Response:
    """Handle stored data that violates an invariant.

    These are never reported as "not found", so operators can tell corruption
    apart from a bad request.
    """
    logger.critical("INTEGRITY_ERROR", error=str(exc), error_type=type(exc).__name__, path=request.path)
    return Response(status=500, data={"detail": "Internal data integrity error.", "code": "integrity_error"})


SENSITIVE_KEYS = {"password", "token", "access", "refresh", "x-api-key", "authorization", "authentication"}


def obfuscate(data: dict[str, t.Any]) -> dict[str, t.Any]:
    """Obfuscate sensitive data in payloads and headers."""
    if not isinstance(data, dict):
        return data
    new_data = deepcopy(data)
    for key in data.keys():
        if key.lower() in SENSITIVE_KEYS:
            new_data[key] = "********"
    return new_data


EXCEPTION_HANDLERS: dict[type[Exception], t.Callable[[HttpRequest, t.Any], Response]] = {
    Exception: handle_general_exception,
    ValidationError: handle_django_validation_error,
    AnswerValidationError: handle_answer_validation_error,
    TemplateNotFoundError: handle_not_found_error,
    AssignmentNotFoundError: handle_not_found_error,
    TemplateArchivedError: handle_conflict_error,
    AssignmentInactiveError: handle_conflict_error,
    AssignmentSlotTakenError: handle_conflict_error,
    AlreadySubmittedError: handle_already_submitted_error,
    AssignmentIntegrityError: handle_assignment_integrity_error,
}
