"""
Simple startup script
Prepares the product store and starts the API server
"""

import asyncio

from app.core.config import settings
from app.core.logging import setup_logging, get_logger
from app.core.convex_client import close_convex_client
from app.repositories.product_repository import get_product_repository
import uvicorn

setup_logging()
logger = get_logger(__name__)


async def initialize():
    """Check the configured product store before serving traffic"""
    logger.info("Initializing application...", store=settings.CATALOG_STORE_BACKEND)
    repository = get_product_repository()
    try:
        count = await repository.count()
    finally:
        await close_convex_client()
    logger.info("Product store ready", backend=repository.backend_name, products=count)


def main():
    """Main startup function"""
    print("\n" + "="*50)
    print("Product Catalog API - Starting...")
    print("="*50 + "\n")

    if settings.CATALOG_STORE_BACKEND == "convex":
        asyncio.run(initialize())

    print("\n" + "="*50)
    print("Ready! Starting API Server...")
    print(f"API:  http://{settings.API_HOST}:{settings.API_PORT}")
    print(f"Docs: http://{settings.API_HOST}:{settings.API_PORT}/docs")
    print(f"Products: http://{settings.API_HOST}:{settings.API_PORT}/api/v1/products")
    print("="*50 + "\n")

    # Start server
    uvicorn.run(
        "server:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
        log_level="info"
    )


if __name__ == "__main__":
    main()
