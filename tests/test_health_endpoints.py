"""
Tests for health check endpoints.

This module tests:
- /api/health endpoint (liveness probe)
- /api/health/ready endpoint (readiness probe with Firestore check)

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

import asyncio
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from serviflex.core.probes import check_firestore


class TestHealthEndpoint:
    """Tests for /api/health liveness probe."""

    @pytest.mark.anyio
    async def test_health_returns_200(self, client):
        # Act
        response = await client.get("/api/health")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))

    @pytest.mark.anyio
    async def test_root_endpoint(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    @pytest.mark.anyio
    async def test_response_carries_request_id(self, client):
        response = await client.get("/api/health", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"


class TestReadinessEndpoint:
    """Tests for /api/health/ready readiness probe."""

    @pytest.mark.anyio
    async def test_ready_when_firestore_answers(self, client):
        # Act
        response = await client.get("/api/health/ready")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"]["firestore"]["healthy"] is True

    @pytest.mark.anyio
    async def test_not_ready_returns_503(self, client):
        """
        Test readiness failure.

        Arrange: Patch the Firestore probe to fail
        Act: GET /api/health/ready
        Assert: 503 with failing check detail
        """
        # Arrange
        with patch("serviflex.api.v1.health.check_firestore", AsyncMock(return_value=False)):
            # Act
            response = await client.get("/api/health/ready")

        # Assert
        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not_ready"
        assert data["checks"]["firestore"]["healthy"] is False
        assert data["checks"]["firestore"]["error"]


class TestFirestoreProbe:
    """Tests for the check_firestore() probe."""

    @pytest.mark.anyio
    async def test_probe_success(self, fake_db):
        assert await check_firestore(fake_db) is True

    @pytest.mark.anyio
    async def test_probe_error(self):
        # Arrange
        db = MagicMock()
        db.collection.return_value.limit.return_value.get = AsyncMock(side_effect=RuntimeError("down"))

        # Act / Assert
        assert await check_firestore(db) is False

    @pytest.mark.anyio
    async def test_probe_timeout(self):
        # Arrange
        async def hang():
            await asyncio.sleep(5)

        db = MagicMock()
        db.collection.return_value.limit.return_value.get = hang

        # Act / Assert
        assert await check_firestore(db, timeout_seconds=0.05) is False
