"""Relay Gateway - Main entry point for all client requests."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from relay_gateway.clients import GenerationClient
from relay_gateway.config import GatewayConfig, settings
from relay_gateway.logging_config import configure_logging
from relay_gateway.middleware import (
    CorrelationIdMiddleware,
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    http_exception_handler,
)
from relay_gateway.routes import router

try:
    import uvicorn
except ImportError:  # pragma: no cover - uvicorn optional for ASGI deployments
    uvicorn = None

configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for FastAPI application."""
    logger.info(
        f"Starting {settings.SERVICE_NAME} v{settings.SERVICE_VERSION}"
    )
    logger.info(
        "Environment: %s | Server: %s:%s",
        settings.ENVIRONMENT,
        settings.HOST,
        settings.PORT,
    )

    gateway_config = GatewayConfig.from_settings(settings)
    if not gateway_config.has_credential:
        logger.warning("GEMINI_API_KEY is not set; gateway requests will fail with 500")
    logger.info(
        "Upstream model: %s | Base URL: %s",
        gateway_config.model_identifier,
        gateway_config.provider_base_url,
    )

    generation_client = GenerationClient(timeout=gateway_config.request_timeout)

    # Store in app state
    app.state.gateway_config = gateway_config
    app.state.generation_client = generation_client

    logger.info(f"{settings.SERVICE_NAME} startup complete")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.SERVICE_NAME}")
    await generation_client.close()
    logger.info(f"{settings.SERVICE_NAME} shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.OPENAPI_TITLE,
    version=settings.SERVICE_VERSION,
    description=settings.OPENAPI_DESCRIPTION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Framework errors (unknown paths, unlisted methods) use the gateway error envelope
app.add_exception_handler(StarletteHTTPException, http_exception_handler)

# Add custom middleware (order matters - last added is executed first)
app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)
# Correlation ID (outermost - sets correlation_id first)
app.add_middleware(CorrelationIdMiddleware)

# Include routers
app.include_router(router)


@app.get("/")
async def root():
    """Root endpoint returning service metadata."""
    return {
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "environment": settings.ENVIRONMENT,
        "docs": "/docs",
    }

logger.info("FastAPI application configured")


if __name__ == "__main__" and uvicorn:
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT.lower() == "development",
    )
