"""Middleware for the relay gateway."""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from structlog.contextvars import bind_contextvars, clear_contextvars

from relay_gateway.models.response import ErrorCode
from relay_gateway.routes.generate import profile_for_path
from relay_gateway.services.error_service import ErrorService
from relay_gateway.services.response_projector import ALLOWED_METHODS, apply_cross_origin

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to generate and propagate correlation IDs."""

    async def dispatch(self, request: Request, call_next: Callable):
        """Add correlation ID to request."""
        correlation_id = request.headers.get("X-Correlation-Id", str(uuid.uuid4()))
        request.state.correlation_id = correlation_id
        clear_contextvars()
        bind_contextvars(correlation_id=correlation_id)

        response = await call_next(request)

        response.headers["X-Correlation-Id"] = correlation_id

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all requests."""

    async def dispatch(self, request: Request, call_next: Callable):
        """Log request and response."""
        start_time = time.time()
        correlation_id = getattr(request.state, "correlation_id", "unknown")

        # Query string is left out: it may carry secrets
        logger.info(
            f"Request started: method={request.method} path={request.url.path} "
            f"correlation_id={correlation_id}"
        )

        response = await call_next(request)

        latency_ms = (time.time() - start_time) * 1000

        logger.info(
            f"Request completed: method={request.method} path={request.url.path} "
            f"status={response.status_code} latency={latency_ms:.2f}ms "
            f"correlation_id={correlation_id}"
        )

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers."""

    async def dispatch(self, request: Request, call_next: Callable):
        """Add security headers to response."""
        response = await call_next(request)

        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )
        response.headers["Cache-Control"] = "no-store"

        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware for global error handling."""

    async def dispatch(self, request: Request, call_next: Callable):
        """Handle errors and return standardized responses."""
        try:
            response = await call_next(request)
            return response
        except Exception as e:
            correlation_id = getattr(request.state, "correlation_id", None)
            error_response = ErrorService.create_error_response(
                message="An internal server error occurred."
            )

            ErrorService.log_error(
                error_code=ErrorCode.INTERNAL_ERROR,
                message=type(e).__name__,
                correlation_id=correlation_id,
                path=request.url.path,
            )

            logger.exception("Unhandled exception")

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_response.to_body(),
            )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (unknown path, unlisted method) in the gateway envelope."""
    correlation_id = getattr(request.state, "correlation_id", None)
    ErrorService.log_error(
        error_code=ErrorService.map_http_status_to_error_code(exc.status_code),
        message=str(exc.detail),
        correlation_id=correlation_id,
        path=request.url.path,
    )

    response = JSONResponse(
        status_code=exc.status_code,
        content=ErrorService.create_error_response(str(exc.detail)).to_body(),
        headers=getattr(exc, "headers", None),
    )

    profile = profile_for_path(request.url.path)
    if profile is not None:
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            response.headers["Allow"] = ALLOWED_METHODS
        apply_cross_origin(response, profile)
    return response
