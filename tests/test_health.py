"""Tests for health check endpoints."""

import pytest


@pytest.mark.asyncio
async def test_health_endpoint(client):
    """Test basic health check endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["timestamp"].endswith("Z")
    assert data["uptime_seconds"] >= 0


@pytest.mark.asyncio
async def test_healthz_endpoint(client):
    """Test liveness probe endpoint."""
    response = await client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "OK"}


@pytest.mark.asyncio
async def test_root_returns_service_metadata(client):
    response = await client.get("/")
    assert response.status_code == 200

    data = response.json()
    assert data["service"]
    assert data["docs"] == "/docs"


@pytest.mark.asyncio
async def test_correlation_and_security_headers(client):
    """Responses carry the correlation ID and hardening headers."""
    response = await client.get("/healthz", headers={"X-Correlation-Id": "corr-1"})

    assert response.headers["X-Correlation-Id"] == "corr-1"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
