"""
Main FastAPI Application
Product catalog API server
"""

import httpx
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.logging import setup_logging, get_logger
from app.core.exceptions import CatalogException, ExternalServiceException
from app.core.convex_client import close_convex_client
from app.api.v1 import health, products
from app.services.seed_service import get_seed_service

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management
    Startup and shutdown events
    """
    # Startup
    logger.info(
        "Starting Product Catalog API",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        store=settings.CATALOG_STORE_BACKEND
    )

    if settings.SEED_ON_STARTUP:
        result = await get_seed_service().seed_products()
        logger.info("Startup seed finished", message=result.message)

    yield

    # Shutdown
    logger.info("Shutting down Product Catalog API")
    await close_convex_client()


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Product catalog API - paginated, filterable, searchable product listing",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)


# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global Exception Handlers
@app.exception_handler(CatalogException)
async def catalog_exception_handler(request: Request, exc: CatalogException):
    """Handle custom catalog exceptions"""
    logger.error(
        "Catalog exception",
        code=exc.code,
        message=exc.message,
        details=exc.details,
        path=request.url.path
    )
    status_code = (
        status.HTTP_502_BAD_GATEWAY
        if isinstance(exc, ExternalServiceException)
        else status.HTTP_400_BAD_REQUEST
    )
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": exc.message,
            "details": exc.details
        }
    )


@app.exception_handler(httpx.HTTPError)
async def store_transport_exception_handler(request: Request, exc: httpx.HTTPError):
    """Handle product store transport failures"""
    logger.error(
        "Product store unreachable",
        error=str(exc),
        path=request.url.path
    )
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "error": "EXTERNAL_SERVICE_ERROR",
            "message": "Product store request failed",
            "details": {} if settings.ENVIRONMENT == "production" else {"error": str(exc)}
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        path=request.url.path
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "details": {} if settings.ENVIRONMENT == "production" else {"error": str(exc)}
        }
    )


# Include routers
app.include_router(health.router)
app.include_router(products.router, prefix="/api/v1")
