"""Tests for global exception handlers.

Domain errors must map to stable status codes and a consistent envelope;
unexpected exceptions must never leak internals.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from adsdash.core.errors import (
    AccessDeniedAppError,
    AppError,
    StorageAppError,
    ValidationAppError,
)
from adsdash.core.exception_handlers import general_exception_handler, setup_exception_handlers


@pytest.fixture
def app_with_handlers() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/validation")
    async def validation():
        raise ValidationAppError(
            code="invalid_error_report",
            message="Failed to record error report",
            details={"field": "message"},
        )

    @app.get("/denied")
    async def denied():
        raise AccessDeniedAppError(code="error_log_forbidden", message="Not here")

    @app.get("/storage")
    async def storage():
        raise StorageAppError(code="preference_store_unwritable", message="Disk full")

    @app.get("/base")
    async def base():
        raise AppError(code="generic", message="Generic domain error")

    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers, raise_server_exceptions=False)


class TestAppErrorHandler:
    @pytest.mark.parametrize(
        ("path", "status_code", "code"),
        [
            ("/validation", 400, "invalid_error_report"),
            ("/denied", 403, "error_log_forbidden"),
            ("/storage", 500, "preference_store_unwritable"),
            ("/base", 400, "generic"),
        ],
    )
    def test_status_mapping(self, client: TestClient, path: str, status_code: int, code: str) -> None:
        response = client.get(path)

        assert response.status_code == status_code
        error = response.json()["error"]
        assert error["code"] == code
        assert "message" in error
        assert "request_id" in error

    def test_details_included_when_present(self, client: TestClient) -> None:
        data = client.get("/validation").json()

        assert data["error"]["details"] == {"field": "message"}

    def test_details_omitted_when_absent(self, client: TestClient) -> None:
        data = client.get("/denied").json()

        assert "details" not in data["error"]

    def test_str_of_error_is_message(self) -> None:
        exc = ValidationAppError(code="x", message="readable")

        assert str(exc) == "readable"


class TestGeneralExceptionHandler:
    def test_returns_generic_500(self) -> None:
        request = AsyncMock()
        request.url.path = "/v1/errors"
        request.method = "GET"

        exc = RuntimeError("database connection failed")
        response = asyncio.run(general_exception_handler(request, exc))

        data = json.loads(bytes(response.body).decode())
        assert response.status_code == 500
        assert data["error"]["code"] == "internal_server_error"
        assert "database connection" not in data["error"]["message"]
        assert "request_id" in data["error"]

    def test_never_leaks_stack_trace(self) -> None:
        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"

        response = asyncio.run(general_exception_handler(request, ValueError("secret detail")))

        text = bytes(response.body).decode()
        assert "Traceback" not in text
        assert "ValueError" not in text
        assert "secret detail" not in text


def test_setup_registers_both_handlers(app_with_handlers: FastAPI) -> None:
    assert AppError in app_with_handlers.exception_handlers
    assert Exception in app_with_handlers.exception_handlers
