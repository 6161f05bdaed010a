"""
Tests for middleware components.

This module tests:
- RequestIDMiddleware (correlation ID tracking)
- LoggingMiddleware (request/response logging)

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

import logging
import uuid

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from serviflex.middleware.logging import LoggingMiddleware
from serviflex.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware


def build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/test")
    async def test_endpoint(request: Request):
        return {"request_id": request.state.request_id}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    return app


class TestRequestIDMiddleware:
    """Tests for request ID correlation middleware."""

    def test_request_id_generated_when_missing(self):
        """
        Test that request ID is generated when not provided.

        Arrange: App with RequestIDMiddleware
        Act: Make request without X-Request-ID header
        Assert: Response has X-Request-ID header with valid UUID
        """
        # Arrange
        client = TestClient(build_app())

        # Act
        response = client.get("/test")

        # Assert
        assert response.status_code == 200
        request_id = response.headers[REQUEST_ID_HEADER]
        uuid.UUID(request_id)
        assert response.json()["request_id"] == request_id

    def test_request_id_preserved_from_header(self):
        # Arrange
        client = TestClient(build_app())

        # Act
        response = client.get("/test", headers={REQUEST_ID_HEADER: "custom-request-id-123"})

        # Assert
        assert response.headers[REQUEST_ID_HEADER] == "custom-request-id-123"
        assert response.json()["request_id"] == "custom-request-id-123"


class TestLoggingMiddleware:
    """Tests for request logging middleware."""

    def test_logs_request_completion_with_context(self, caplog):
        """
        Test that completed requests are logged with status and latency.

        Arrange: App with both middlewares
        Act: Make a request with a known request id
        Assert: "Request completed" record carries path, status, latency, request id
        """
        # Arrange
        client = TestClient(build_app())

        # Act
        with caplog.at_level(logging.INFO, logger="serviflex.middleware.logging"):
            client.get("/test", headers={REQUEST_ID_HEADER: "req-42"})

        # Assert
        completed = [r for r in caplog.records if r.getMessage() == "Request completed"]
        assert len(completed) == 1
        record = completed[0]
        assert record.path == "/test"
        assert record.status_code == 200
        assert record.request_id == "req-42"
        assert record.latency_ms >= 0

    def test_logs_and_reraises_failures(self, caplog):
        # Arrange
        client = TestClient(build_app(), raise_server_exceptions=True)

        # Act
        with caplog.at_level(logging.ERROR, logger="serviflex.middleware.logging"):
            with pytest.raises(RuntimeError):
                client.get("/boom")

        # Assert
        failed = [r for r in caplog.records if r.getMessage().startswith("Request failed")]
        assert len(failed) == 1
        assert failed[0].exception_type == "RuntimeError"
