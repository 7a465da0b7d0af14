"""Tests for the structlog context middleware."""

import typing as t

import pytest
import structlog
from django.http import HttpRequest, HttpResponse
from django.test import RequestFactory
from django.test.utils import override_settings

from common.middleware import StructlogContextMiddleware


@pytest.fixture
def captured() -> dict[str, t.Any]:
    return {}


@pytest.fixture
def middleware(captured: dict[str, t.Any]) -> StructlogContextMiddleware:
    def get_response(request: HttpRequest) -> HttpResponse:
        captured.update(structlog.contextvars.get_contextvars())
        return HttpResponse("ok")

    return StructlogContextMiddleware(get_response)


def test_binds_request_context(middleware: StructlogContextMiddleware, captured: dict[str, t.Any]) -> None:
    request = RequestFactory().get("/api/learning/context", HTTP_X_FORWARDED_FOR="203.0.113.7, 10.0.0.1")

    response = middleware(request)

    assert captured["path"] == "/api/learning/context"
    assert captured["method"] == "GET"
    assert captured["ip_address"] == "203.0.113.7"
    assert response["X-Request-ID"] == captured["request_id"]
    assert structlog.contextvars.get_contextvars() == {}


def test_reuses_incoming_request_id(middleware: StructlogContextMiddleware, captured: dict[str, t.Any]) -> None:
    request = RequestFactory().get("/", HTTP_X_REQUEST_ID="abc-123")

    response = middleware(request)

    assert captured["request_id"] == "abc-123"
    assert response["X-Request-ID"] == "abc-123"


@override_settings(ENABLE_OBSERVABILITY=False)
def test_disabled(middleware: StructlogContextMiddleware, captured: dict[str, t.Any]) -> None:
    response = middleware(RequestFactory().get("/"))

    assert "request_id" not in captured
    assert "X-Request-ID" not in response
