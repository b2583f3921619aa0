"""Projection of gateway outcomes onto client-facing HTTP responses."""

import logging
from typing import Optional

from fastapi import status
from fastapi.responses import JSONResponse, Response

from relay_gateway.config import GatewayProfile, ProjectionMode
from relay_gateway.errors import GatewayError
from relay_gateway.models.response import GatewayResponse
from relay_gateway.services.error_service import ErrorService
from relay_gateway.services.result_classifier import Classification, Outcome

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal server error occurred."
MALFORMED_RESPONSE_MESSAGE = "Failed to generate response from upstream provider."
ALLOWED_METHODS = "POST, OPTIONS"


def apply_cross_origin(response: Response, profile: GatewayProfile) -> Response:
    """Set the cross-origin headers when the endpoint allows cross-origin calls."""
    if profile.allow_cross_origin:
        response.headers["Access-Control-Allow-Origin"] = profile.allow_origin
        response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


def _json(status_code: int, body: GatewayResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.to_body())


def project_error(error: GatewayError) -> JSONResponse:
    """Response for a failure raised before or around the upstream call."""
    if error.status_code >= 500 and type(error) is GatewayError:
        message = INTERNAL_ERROR_MESSAGE
    else:
        message = error.message
    response = _json(error.status_code, ErrorService.create_error_response(message))
    if error.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        response.headers["Allow"] = ALLOWED_METHODS
    return response


def project_internal_error() -> JSONResponse:
    return _json(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorService.create_error_response(INTERNAL_ERROR_MESSAGE),
    )


def project_classification(
    classification: Classification,
    profile: GatewayProfile,
    credential: Optional[str] = None,
) -> JSONResponse:
    """Map a classified upstream outcome to the caller's response.

    Args:
        classification: Result of the upstream call
        profile: Endpoint profile selecting projection and error verbosity
        credential: Secret to scrub from any passthrough text

    Returns:
        JSONResponse with a stable body shape
    """
    outcome = classification.outcome

    if outcome == Outcome.SUCCESS:
        if profile.projection == ProjectionMode.RAW:
            return JSONResponse(status_code=status.HTTP_200_OK, content=classification.body)
        body = GatewayResponse(success=True)
        if profile.projection == ProjectionMode.ANALYSIS:
            body.analysis = classification.text
        else:
            body.content = classification.text
        return _json(status.HTTP_200_OK, body)

    if outcome == Outcome.UPSTREAM_ERROR:
        raw_error = ErrorService.redact(classification.raw_error, credential)
        summary = ErrorService.redact(
            ErrorService.summarize_upstream_error(classification.upstream_status, raw_error),
            credential,
        )
        details = raw_error if profile.expose_upstream_error_details else None
        return _json(
            ErrorService.upstream_status_for_client(classification.upstream_status),
            ErrorService.create_error_response(summary, details=details or None),
        )

    if outcome == Outcome.MALFORMED_UPSTREAM_RESPONSE:
        return _json(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorService.create_error_response(MALFORMED_RESPONSE_MESSAGE),
        )

    return project_internal_error()
