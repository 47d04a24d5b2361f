"""
Health & System Routes
API endpoints for health checks and system information
"""

from fastapi import APIRouter
from datetime import datetime, timezone

from app.schemas.product_schemas import HealthResponse
from app.services.catalog_service import get_catalog_service
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["system"])


@router.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "environment": settings.ENVIRONMENT,
        "documentation": "/docs"
    }


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Detailed health check endpoint
    Returns service status, catalog size and store configuration
    """
    service = get_catalog_service()
    product_count = await service.count_products()
    backend = service.repository.backend_name

    services = {"product_store": backend}
    if backend == "convex":
        services["convex"] = "configured" if settings.CONVEX_URL else "missing"

    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        metrics={
            "products": product_count,
        },
        services=services
    )


@router.get("/info")
async def system_info():
    """Get system information"""
    return {
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "debug": settings.DEBUG,
        "api_host": settings.API_HOST,
        "api_port": settings.API_PORT,
        "store_backend": settings.CATALOG_STORE_BACKEND,
        "page_size": settings.CATALOG_PAGE_SIZE
    }
