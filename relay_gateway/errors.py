"""Gateway error types."""

from typing import Optional

from fastapi import status

from relay_gateway.models.response import ErrorCode


class GatewayError(Exception):
    """Base class for failures that end an invocation with a gateway response."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MethodNotAllowedError(GatewayError):
    code = ErrorCode.METHOD_NOT_ALLOWED
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED


class BadRequestError(GatewayError):
    code = ErrorCode.BAD_REQUEST
    status_code = status.HTTP_400_BAD_REQUEST


class ConfigurationMissingError(GatewayError):
    code = ErrorCode.CONFIGURATION_MISSING


class UpstreamUnreachableError(GatewayError):
    """The provider could not be reached (connect failure, timeout, transport error)."""

    code = ErrorCode.UPSTREAM_UNREACHABLE

    def __init__(self, message: str, timed_out: bool = False, cause: Optional[Exception] = None):
        super().__init__(message)
        self.timed_out = timed_out
        self.cause = cause
