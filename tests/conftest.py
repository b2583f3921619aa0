"""Pytest configuration and fixtures."""

from typing import List, Optional, Type

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr

from main import app
from relay_gateway.clients import GenerationClient
from relay_gateway.config import GatewayConfig
from relay_gateway.routes.generate import get_gateway_config, get_generation_client

TEST_API_KEY = "test-secret-key-123"
TEST_MODEL = "gemini-test"
TEST_BASE_URL = "https://upstream.test/v1beta/models"


def candidate_body(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


class FakeProvider:
    """Stand-in for the upstream provider, recording every request it receives."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.json_body = candidate_body("X")
        self.text_body: Optional[str] = None
        self.raise_error: Optional[Type[httpx.RequestError]] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_error is not None:
            raise self.raise_error("upstream transport failure", request=request)
        if self.text_body is not None:
            return httpx.Response(self.status_code, text=self.text_body)
        return httpx.Response(self.status_code, json=self.json_body)


@pytest.fixture
def provider():
    """Create a fake upstream provider."""
    return FakeProvider()


@pytest.fixture
def gateway_config():
    """Upstream configuration with a test credential."""
    return GatewayConfig(
        credential=SecretStr(TEST_API_KEY),
        model_identifier=TEST_MODEL,
        provider_base_url=TEST_BASE_URL,
        request_timeout=5.0,
    )


@pytest_asyncio.fixture
async def generation_client(provider):
    """Generation client wired to the fake provider."""
    client = GenerationClient(timeout=5.0, transport=httpx.MockTransport(provider.handler))
    yield client
    await client.close()


@pytest_asyncio.fixture
async def client(gateway_config, generation_client):
    """Create test client with gateway dependencies pointed at the fake provider."""
    app.dependency_overrides[get_gateway_config] = lambda: gateway_config
    app.dependency_overrides[get_generation_client] = lambda: generation_client

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
