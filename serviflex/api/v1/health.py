"""
Health check endpoints for monitoring and readiness probes.

This module provides endpoints for:
- Liveness probe: /health (basic "is the server running" check)
- Readiness probe: /health/ready (checks Firestore connectivity)
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Response, status

from serviflex.api.dependencies import Database
from serviflex.core.probes import check_firestore
from serviflex.schemas.health import HealthCheckDetail, HealthResponse, ReadinessResponse


router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Basic health check to verify the service is running",
)
async def health_check() -> HealthResponse:
    """
    Basic liveness probe.

    This endpoint should always return 200 if the application is running.

    Example response:
        {
            "status": "ok",
            "timestamp": "2025-11-24T10:30:00.123456Z"
        }
    """
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc)
    )


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Readiness check including Firestore connectivity",
)
async def readiness_check(response: Response, db: Database) -> ReadinessResponse:
    """
    Readiness probe with dependency checks.

    Returns 200 if Firestore answers within the probe timeout, 503 otherwise.

    Example response (unhealthy):
        {
            "status": "not_ready",
            "checks": {
                "firestore": {"healthy": false, "latency_ms": 2000.4, "error": "..."}
            },
            "timestamp": "2025-11-24T10:30:00.123456Z"
        }
    """
    start = time.perf_counter()
    firestore_healthy = await check_firestore(db)
    latency = (time.perf_counter() - start) * 1000

    checks = {
        "firestore": HealthCheckDetail(
            healthy=firestore_healthy,
            latency_ms=round(latency, 2),
            error=None if firestore_healthy else "Firestore unreachable or timed out"
        ),
    }

    all_healthy = all(check.healthy for check in checks.values())
    if not all_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status="ready" if all_healthy else "not_ready",
        checks=checks,
        timestamp=datetime.now(timezone.utc)
    )
