"""
Service Layer
Business logic for the product catalog.
"""

from app.services.catalog_service import CatalogService, build_query_plan, get_catalog_service
from app.services.seed_service import SeedService, SAMPLE_PRODUCTS, get_seed_service

__all__ = [
    # Catalog queries
    "CatalogService",
    "build_query_plan",
    "get_catalog_service",
    # Seeding
    "SeedService",
    "SAMPLE_PRODUCTS",
    "get_seed_service",
]
