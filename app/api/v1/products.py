"""
Product Routes
API endpoints for browsing the product catalog
"""

from fastapi import APIRouter, Query
from typing import List, Optional

from app.schemas.product_schemas import (
    ProductPageResponse,
    PriceRangeResponse,
    SeedResponse
)
from app.services.catalog_service import get_catalog_service
from app.services.seed_service import get_seed_service
from app.models.product import ProductFilter, SortOption
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductPageResponse)
async def get_products(
    cursor: Optional[str] = Query(None, description="Cursor returned with the previous page"),
    page_size: int = Query(
        settings.CATALOG_PAGE_SIZE, ge=1, le=settings.CATALOG_MAX_PAGE_SIZE, description="Products per page"
    ),
    category: Optional[str] = Query(None, description="Category name, or 'all'"),
    sort_by: Optional[SortOption] = Query(None, description="name, price_asc, price_desc or rating"),
    min_price: Optional[float] = Query(None, ge=0, description="Inclusive lower price bound"),
    max_price: Optional[float] = Query(None, ge=0, description="Inclusive upper price bound"),
    search: Optional[str] = Query(None, description="Search product names; other filters are ignored"),
):
    """
    List products one page at a time

    Pass the returned `next_cursor` back unchanged to continue; `is_done`
    marks the last page.
    """
    service = get_catalog_service()
    page = await service.list_products(
        ProductFilter(
            category=category,
            sort_by=sort_by,
            min_price=min_price,
            max_price=max_price,
            search=search,
        ),
        cursor=cursor,
        page_size=page_size,
    )
    return ProductPageResponse.from_page(page)


@router.get("/categories", response_model=List[str])
async def get_categories():
    """Distinct product categories in ascending order"""
    service = get_catalog_service()
    return await service.list_categories()


@router.get("/price-range", response_model=PriceRangeResponse)
async def get_price_range():
    """Lowest and highest product price"""
    service = get_catalog_service()
    return PriceRangeResponse.from_range(await service.get_price_range())


@router.post("/seed", response_model=SeedResponse)
async def seed_products():
    """Load the sample products if the catalog is empty"""
    service = get_seed_service()
    result = await service.seed_products()
    logger.info("Seed requested via API", seeded=result.seeded, inserted=result.inserted)
    return SeedResponse.from_result(result)
