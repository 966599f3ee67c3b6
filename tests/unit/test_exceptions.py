"""Tests for the error taxonomy and its HTTP mapping."""

import httpx
import pytest
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI

from src.projecthub.core.exceptions import (
    AppError,
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
    setup_exception_handlers,
)

pytestmark = pytest.mark.unit


def _app_raising(exc: Exception) -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    app.add_middleware(CorrelationIdMiddleware)

    @app.get("/boom")
    async def boom():
        raise exc

    return app


async def _get(app: FastAPI, path: str = "/boom") -> httpx.Response:
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get(path)


@pytest.mark.parametrize(
    ("exc", "status_code"),
    [
        (NotFoundError("Project not found"), 404),
        (ForbiddenError(), 403),
        (InvalidStateError("Request is no longer pending"), 400),
        (ConflictError(), 409),
        (UnauthorizedError(), 401),
    ],
)
async def test_app_errors_map_to_status(exc: AppError, status_code: int) -> None:
    response = await _get(_app_raising(exc))

    assert response.status_code == status_code
    body = response.json()
    assert body["success"] is False
    assert body["message"] == exc.message


def test_default_messages() -> None:
    assert NotFoundError().message == "Resource not found"
    assert InvalidStateError("custom").message == "custom"


async def test_request_id_echoed_in_error_body() -> None:
    response = await _get(_app_raising(NotFoundError()))

    assert response.json()["request_id"] == response.headers["X-Request-ID"]


async def test_unauthorized_sets_www_authenticate() -> None:
    response = await _get(_app_raising(UnauthorizedError()))

    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_unhandled_exception_is_generic_500() -> None:
    response = await _get(_app_raising(RuntimeError("secret detail")))

    assert response.status_code == 500
    assert response.json()["message"] == "Internal server error"
    assert "secret detail" not in response.text


async def test_unknown_route_uses_error_body() -> None:
    response = await _get(_app_raising(NotFoundError()), "/missing")

    assert response.status_code == 404
    assert response.json()["success"] is False
