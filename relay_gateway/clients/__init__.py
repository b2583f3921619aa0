"""HTTP clients for the upstream provider."""

from relay_gateway.clients.generation_client import GenerationClient

__all__ = ["GenerationClient"]
