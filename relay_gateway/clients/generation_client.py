"""HTTP client for the upstream generative-text provider."""

import logging
import time

import httpx

from relay_gateway.config import GatewayConfig
from relay_gateway.errors import UpstreamUnreachableError
from relay_gateway.models.request import GenerationPayload

logger = logging.getLogger(__name__)


class GenerationClient:
    """Async client issuing generateContent calls to the provider."""

    def __init__(self, timeout: float = 30.0, transport: httpx.AsyncBaseTransport = None):
        """Initialize generation client.

        Args:
            timeout: Default request timeout in seconds
            transport: Optional transport, used by tests to stand in for the provider
        """
        self.timeout = timeout
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def generate_content(
        self, config: GatewayConfig, payload: GenerationPayload
    ) -> httpx.Response:
        """Send one generateContent request upstream.

        The provider's response is returned whatever its status; only
        transport-level failures raise.

        Args:
            config: Upstream configuration holding the credential
            payload: Normalized generation payload

        Returns:
            httpx.Response from the provider

        Raises:
            UpstreamUnreachableError: If the provider cannot be reached
        """
        url = config.endpoint_url
        try:
            logger.info(f"Forwarding generateContent request to {url}")

            start_time = time.perf_counter()
            response = await self.client.post(
                url,
                params={"key": config.credential.get_secret_value()},
                headers={"Content-Type": "application/json"},
                json=payload.to_upstream_body(),
                timeout=config.request_timeout,
            )

            logger.info(
                f"Received response from {url}: status={response.status_code}, "
                f"latency={(time.perf_counter() - start_time) * 1000:.2f}ms"
            )

            return response

        except httpx.TimeoutException as e:
            logger.error(f"Request to {url} timed out")
            raise UpstreamUnreachableError(
                "Request to upstream provider timed out", timed_out=True, cause=e
            )
        except httpx.RequestError as e:
            # httpx includes the full URL in some messages; log only the type
            logger.error(f"Request to {url} failed: {type(e).__name__}")
            raise UpstreamUnreachableError(
                "Failed to connect to upstream provider", cause=e
            )
