"""Health check endpoints."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, status

from relay_gateway.models.response import HealthResponse

router = APIRouter()

# Track start time for uptime calculation
_start_time = time.time()


@router.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health():
    """Basic health check endpoint.

    Returns gateway health status and uptime.
    Used by load balancers for health checks.
    """
    uptime_seconds = int(time.time() - _start_time)

    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        uptime_seconds=uptime_seconds,
    )


@router.get("/healthz", status_code=status.HTTP_200_OK)
async def healthz():
    """Liveness probe endpoint."""
    return {"status": "OK"}
