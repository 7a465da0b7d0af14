from django.conf import settings
from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI

from assignments.controllers import AssignmentAdminController, LearningController
from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle, UserDefaultThrottle
from questionnaires.controllers import QuestionnaireTemplateController

from .exception_handlers import EXCEPTION_HANDLERS

api = NinjaExtraAPI(
    title="Learngate API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"Learngate API {settings.VERSION}",
    app_name=f"learngate-api-{settings.VERSION}",
    urls_namespace="api",
    servers=[
        {"url": settings.SERVICE_URL, "description": settings.SERVICE_DESCRIPTION},
    ],
    throttle=[AnonDefaultThrottle(), UserDefaultThrottle()],
)


@api.get("/version", tags=["Version"], response={200: VersionResponse})
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """Get the API version.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, VersionResponse(version=settings.VERSION)


@api.get("/healthcheck", tags=["Healthcheck"], response={200: ResponseOk})
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    """Check the health of the API.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, ResponseOk()


api.register_controllers(
    # Learner controllers
    LearningController,
    # Admin controllers
    QuestionnaireTemplateController,
    AssignmentAdminController,
)

for exc, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exc, handler)
