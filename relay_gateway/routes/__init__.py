"""Route handlers for the relay gateway."""

from fastapi import APIRouter

from relay_gateway.routes import generate, health

# Create main router
router = APIRouter()

router.include_router(health.router, tags=["Health"])
router.include_router(generate.router, prefix=generate.ROUTE_PREFIX, tags=["Gateway"])
