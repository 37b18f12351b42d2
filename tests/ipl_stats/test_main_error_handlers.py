"""Tests asserting ``ipl_stats.main`` exception handlers build structured envelopes."""

from __future__ import annotations

import json
from collections.abc import Callable

import pytest
from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from httpx import ASGITransport, AsyncClient
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException

import ipl_stats.main as ipl_main
from ipl_stats.schemas.error import ErrorResponse, ErrorType
from ipl_stats.services.container import GatewayServices
from ipl_stats.settings import AppSettings
from ipl_stats.utils.request_context import clear_request_id, set_request_id


def _build_request(path: str = "/resource", *, endpoint: object | None = None) -> Request:
    """Create a minimal ``Request`` suitable for invoking handlers."""

    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "headers": Headers().raw,
    }
    if endpoint is not None:
        scope["endpoint"] = endpoint
    return Request(scope)


def _handler(app, exc_class: type[Exception]):
    return app.exception_handlers[exc_class]


@pytest.mark.asyncio
async def test_validation_exception_handler_lists_fields() -> None:
    token = set_request_id("req-1")
    request = _build_request("/api/search/players")
    exc = RequestValidationError(
        [
            {
                "loc": ("query", "limit"),
                "msg": "Input should be a valid integer",
                "input": "abc",
            }
        ]
    )

    try:
        response = await _handler(ipl_main.app, RequestValidationError)(request, exc)
    finally:
        clear_request_id(token)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    payload = json.loads(response.body.decode())
    assert payload["success"] is False
    assert payload["message"] == "Request validation failed"
    assert payload["request_id"] == "req-1"
    assert payload["errors"] == [
        {"field": "query.limit", "message": "Input should be a valid integer", "value": "abc"}
    ]


@pytest.mark.asyncio
async def test_http_exception_handler_keeps_route_detail() -> None:
    request = _build_request("/api/match/9", endpoint=object())

    response = await _handler(ipl_main.app, StarletteHTTPException)(
        request, HTTPException(status_code=404, detail="Match not found")
    )

    payload = json.loads(response.body.decode())
    assert response.status_code == 404
    assert payload["message"] == "Match not found"
    assert payload["error_type"] == ErrorType.NOT_FOUND.value


@pytest.mark.asyncio
async def test_http_exception_handler_names_unmatched_paths() -> None:
    request = _build_request("/api/unknown")

    response = await _handler(ipl_main.app, StarletteHTTPException)(
        request, StarletteHTTPException(status_code=404)
    )

    payload = json.loads(response.body.decode())
    assert payload["message"] == "API endpoint /api/unknown not found"


@pytest.mark.asyncio
async def test_http_exception_handler_delegates_to_builder(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    called: dict[str, object] = {}

    def fake_builder(**kwargs):
        called["kwargs"] = kwargs
        return ErrorResponse(
            message="Method Not Allowed",
            error_type=ErrorType.HTTP_ERROR,
            status_code=405,
            path="/api/players",
        )

    monkeypatch.setattr(ipl_main, "build_error_response", fake_builder)

    response = await _handler(ipl_main.app, StarletteHTTPException)(
        _build_request("/api/players", endpoint=object()),
        StarletteHTTPException(status_code=405, headers={"Allow": "GET"}),
    )

    assert called["kwargs"]["error_type"] is ErrorType.HTTP_ERROR
    assert called["kwargs"]["status_code"] == 405
    assert response.headers["Allow"] == "GET"


@pytest.mark.asyncio
async def test_generic_exception_handler_hides_details_in_production(
    make_services: Callable[..., GatewayServices],
    make_settings: Callable[..., AppSettings],
) -> None:
    settings = make_settings(app_env="production")
    app = ipl_main.create_app(settings, make_services(settings))

    response = await _handler(app, Exception)(
        _build_request("/api/players"), RuntimeError("roster exploded")
    )

    payload = json.loads(response.body.decode())
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert payload["message"] == "Internal server error"
    assert payload["error"] is None
    assert payload["error_type"] == "internal_error"


@pytest.mark.asyncio
async def test_unhandled_route_error_is_reported_in_development(
    make_services: Callable[..., GatewayServices],
    make_settings: Callable[..., AppSettings],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    settings = make_settings(app_env="development")
    services = make_services(settings)
    app = ipl_main.create_app(settings, services)

    async def _explode():
        raise RuntimeError("roster exploded")

    monkeypatch.setattr(services.players, "get_players", _explode)

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/api/analytics")

    assert response.status_code == 500
    payload = response.json()
    assert payload["message"] == "Internal server error"
    assert payload["error"] == "roster exploded"
    assert payload["path"] == "/api/analytics"
