"""Error handling and standardization service."""

import json
import logging
from typing import Any, Dict, Optional

from relay_gateway.models.response import ErrorCode, GatewayResponse

logger = logging.getLogger(__name__)

REDACTED = "[REDACTED]"


class ErrorService:
    """Service for error handling and standardization."""

    @staticmethod
    def create_error_response(
        message: str,
        details: Optional[str] = None,
    ) -> GatewayResponse:
        """Create standardized error response.

        Args:
            message: Error message shown to the caller
            details: Optional diagnostic text

        Returns:
            GatewayResponse object
        """
        return GatewayResponse(success=False, error=message, details=details)

    @staticmethod
    def map_http_status_to_error_code(status_code: int) -> ErrorCode:
        """Map HTTP status code to error code.

        Args:
            status_code: HTTP status code

        Returns:
            ErrorCode enum
        """
        mapping = {
            400: ErrorCode.BAD_REQUEST,
            405: ErrorCode.METHOD_NOT_ALLOWED,
            415: ErrorCode.BAD_REQUEST,
            422: ErrorCode.BAD_REQUEST,
            502: ErrorCode.UPSTREAM_UNREACHABLE,
            504: ErrorCode.UPSTREAM_UNREACHABLE,
        }
        return mapping.get(status_code, ErrorCode.INTERNAL_ERROR)

    @staticmethod
    def upstream_status_for_client(status_code: Optional[int]) -> int:
        """Status forwarded to the caller for an upstream-reported error.

        Upstream 4xx/5xx statuses are passed through verbatim; anything else
        (redirects, informational, missing) becomes 500.
        """
        if status_code is not None and 400 <= status_code <= 599:
            return status_code
        return 500

    @staticmethod
    def summarize_upstream_error(status_code: int, raw_body: str) -> str:
        """Extract a short, human-readable summary from an upstream error body.

        Understands the provider envelope ``{"error": {"message": ...}}`` as
        well as plain ``{"error": "..."}`` / ``{"message": "..."}`` bodies.

        Args:
            status_code: HTTP status code from the provider
            raw_body: Response body text from the provider

        Returns:
            Summary message
        """
        message = None
        try:
            parsed = json.loads(raw_body) if raw_body else None
        except ValueError:
            parsed = None

        if isinstance(parsed, dict):
            error = parsed.get("error")
            if isinstance(error, dict):
                message = error.get("message") or error.get("status")
            elif isinstance(error, str):
                message = error
            message = message or parsed.get("message") or parsed.get("detail")

        if not isinstance(message, str) or not message.strip():
            message = f"Upstream provider returned HTTP {status_code}"
        return message

    @staticmethod
    def redact(text: Optional[str], secret: Optional[str]) -> Optional[str]:
        """Remove every occurrence of ``secret`` from ``text``."""
        if not text or not secret:
            return text
        return text.replace(secret, REDACTED)

    @staticmethod
    def log_error(
        error_code: ErrorCode,
        message: str,
        correlation_id: Optional[str] = None,
        path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Log error with context.

        Args:
            error_code: Error code
            message: Error message
            correlation_id: Request correlation ID
            path: Request path
            details: Additional details
        """
        log_data = {
            "error_code": error_code.value,
            "message": message,
        }

        if correlation_id:
            log_data["correlation_id"] = correlation_id
        if path:
            log_data["path"] = path
        if details:
            log_data["details"] = details

        logger.error(f"Error: {log_data}")
