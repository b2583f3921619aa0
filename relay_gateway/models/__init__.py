"""Pydantic models for the relay gateway."""

from relay_gateway.models.request import Content, GenerationPayload, InboundBody, Part
from relay_gateway.models.response import ErrorCode, GatewayResponse, HealthResponse

__all__ = [
    "Part",
    "Content",
    "GenerationPayload",
    "InboundBody",
    "ErrorCode",
    "GatewayResponse",
    "HealthResponse",
]
