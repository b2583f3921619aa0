"""Response models for the relay gateway."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes."""

    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    BAD_REQUEST = "BAD_REQUEST"
    CONFIGURATION_MISSING = "CONFIGURATION_MISSING"
    UPSTREAM_UNREACHABLE = "UPSTREAM_UNREACHABLE"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    MALFORMED_UPSTREAM_RESPONSE = "MALFORMED_UPSTREAM_RESPONSE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class GatewayResponse(BaseModel):
    """Client-facing response envelope.

    Fields that do not apply to a given outcome are left unset and omitted
    from the serialized body.
    """

    success: bool
    content: Optional[str] = None
    analysis: Optional[str] = None
    error: Optional[str] = None
    details: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"success": True, "content": "Relays forward traffic."},
                {
                    "success": False,
                    "error": "Resource has been exhausted (e.g. check quota).",
                    "details": '{"error": {"code": 429, "status": "RESOURCE_EXHAUSTED"}}',
                },
            ]
        }
    )

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: str
    uptime_seconds: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "timestamp": "2024-01-10T10:30:00Z",
                "uptime_seconds": 3600,
            }
        }
    )
