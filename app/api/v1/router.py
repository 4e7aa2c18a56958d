"""
API v1 Router - Main Entry Point
Aggregates all v1 endpoints of the PG manager back end
"""
from fastapi import APIRouter

from app.api.v1.endpoints import (
    beds,
    dashboard,
    floors,
    payments,
    properties,
    rooms,
    tenants,
)
from app.config.settings import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        404: {"description": "Not Found"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
    }
)

ENDPOINT_MODULES = [properties, floors, rooms, beds, tenants, payments, dashboard]

for module in ENDPOINT_MODULES:
    router.include_router(module.router)


@router.get("/health", tags=["System Health"])
async def api_health_check():
    """Liveness probe with the mounted resource groups."""
    return {
        "status": "healthy",
        "version": settings.API_VERSION,
        "environment": settings.ENVIRONMENT,
        "resources": [module.router.prefix.strip("/") for module in ENDPOINT_MODULES],
    }


logger.debug(f"API v1 router initialized with {len(router.routes)} routes")
