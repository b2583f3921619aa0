"""Gateway endpoints relaying prompts to the generative-text provider."""

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import Response

from relay_gateway.clients import GenerationClient
from relay_gateway.config import (
    COMPATIBILITY_PROFILE,
    PROXY_PROFILE,
    GatewayConfig,
    GatewayProfile,
    settings,
)
from relay_gateway.errors import (
    BadRequestError,
    ConfigurationMissingError,
    GatewayError,
    MethodNotAllowedError,
    UpstreamUnreachableError,
)
from relay_gateway.models.response import ErrorCode
from relay_gateway.services import (
    BadRequest,
    ErrorService,
    classify_response,
    classify_unreachable,
    translate,
)
from relay_gateway.services.response_projector import (
    apply_cross_origin,
    project_classification,
    project_error,
    project_internal_error,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ROUTE_PREFIX = "/api"
GATEWAY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def profile_for_path(path: str) -> Optional[GatewayProfile]:
    """Profile of the gateway endpoint serving ``path``, or None for other paths."""
    profiles = {
        f"{ROUTE_PREFIX}/proxy": PROXY_PROFILE,
        f"{ROUTE_PREFIX}/check-compatibility": COMPATIBILITY_PROFILE,
    }
    return profiles.get(path.rstrip("/"))


def get_gateway_config(request: Request) -> GatewayConfig:
    """Upstream configuration built at startup, or from settings when startup did not run."""
    config = getattr(request.app.state, "gateway_config", None)
    if config is None:
        config = GatewayConfig.from_settings(settings)
        request.app.state.gateway_config = config
    return config


def get_generation_client(request: Request) -> GenerationClient:
    client = getattr(request.app.state, "generation_client", None)
    if client is None:
        client = GenerationClient(timeout=settings.REQUEST_TIMEOUT)
        request.app.state.generation_client = client
    return client


async def _read_json_object(request: Request) -> dict:
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() != "application/json":
        raise BadRequestError("Content-Type must be application/json")

    raw = await request.body()
    if not raw:
        raise BadRequestError("Request body is required")
    try:
        body = json.loads(raw)
    except ValueError:
        raise BadRequestError("Request body is not valid JSON")
    if not isinstance(body, dict):
        raise BadRequestError("Request body must be a JSON object")
    return body


async def handle_generation(
    request: Request,
    profile: GatewayProfile,
    config: GatewayConfig,
    client: GenerationClient,
) -> Response:
    """Run one inbound call through guard, translation, config check, upstream call and projection."""
    correlation_id = getattr(request.state, "correlation_id", None)
    try:
        if request.method == "OPTIONS" and profile.allow_cross_origin:
            return Response(status_code=status.HTTP_200_OK)
        if request.method != "POST":
            raise MethodNotAllowedError("Method Not Allowed")

        body = await _read_json_object(request)

        result = translate(body, profile.accepted_input_shapes)
        if isinstance(result, BadRequest):
            raise BadRequestError(result.message)

        if not config.has_credential:
            raise ConfigurationMissingError("Gemini API key is not configured.")

        logger.info(
            f"Relaying {result.shape.value} request to model {config.model_identifier} "
            f"correlation_id={correlation_id}"
        )

        try:
            upstream_response = await client.generate_content(config, result.payload)
        except UpstreamUnreachableError as e:
            ErrorService.log_error(
                error_code=e.code,
                message=e.message,
                correlation_id=correlation_id,
                path=request.url.path,
            )
            classification = classify_unreachable(e)
        else:
            classification = classify_response(upstream_response)

        return project_classification(
            classification, profile, credential=config.credential.get_secret_value()
        )

    except GatewayError as e:
        ErrorService.log_error(
            error_code=e.code,
            message=e.message,
            correlation_id=correlation_id,
            path=request.url.path,
        )
        return project_error(e)
    except Exception as e:
        ErrorService.log_error(
            error_code=ErrorCode.INTERNAL_ERROR,
            message=type(e).__name__,
            correlation_id=correlation_id,
            path=request.url.path,
        )
        logger.exception("Unhandled exception while relaying request")
        return project_internal_error()


@router.api_route("/proxy", methods=GATEWAY_METHODS)
async def proxy(
    request: Request,
    config: GatewayConfig = Depends(get_gateway_config),
    client: GenerationClient = Depends(get_generation_client),
):
    """Relay a flat prompt or structured contents to the provider.

    Body: ``{"prompt": "..."}`` or ``{"contents": [{"role": "user", "parts": [{"text": "..."}]}]}``
    """
    response = await handle_generation(request, PROXY_PROFILE, config, client)
    return apply_cross_origin(response, PROXY_PROFILE)


@router.api_route("/check-compatibility", methods=GATEWAY_METHODS)
async def check_compatibility(
    request: Request,
    config: GatewayConfig = Depends(get_gateway_config),
    client: GenerationClient = Depends(get_generation_client),
):
    """Ask the provider for a compatibility analysis of two devices.

    Body: ``{"device1": "...", "device2": "..."}``
    """
    response = await handle_generation(request, COMPATIBILITY_PROFILE, config, client)
    return apply_cross_origin(response, COMPATIBILITY_PROFILE)
