"""
Catalog API Client
Async HTTP client for the product catalog endpoints
"""

import httpx
from typing import Any, Dict, List, Optional

from app.models.product import PriceRange, Product, ProductFilter, ProductPage, SeedResult
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class CatalogApiClient:
    """
    Async HTTP client for the catalog API

    Usage:
        async with CatalogApiClient("http://localhost:8000") as client:
            page = await client.fetch_products(ProductFilter(category="Books"))
            more = await client.fetch_products(ProductFilter(category="Books"), cursor=page.next_cursor)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or f"http://{settings.API_CLIENT_HOST}:{settings.API_PORT}").rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}/api/v1",
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "CatalogApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self):
        """Close the HTTP client"""
        if not self._client.is_closed:
            await self._client.aclose()

    async def fetch_products(
        self,
        product_filter: ProductFilter,
        cursor: Optional[str] = None,
        page_size: Optional[int] = None
    ) -> ProductPage:
        params: Dict[str, Any] = {"page_size": page_size or settings.CATALOG_PAGE_SIZE}
        if cursor is not None:
            params["cursor"] = cursor
        if product_filter.category is not None:
            params["category"] = product_filter.category
        if product_filter.sort_by is not None:
            params["sort_by"] = product_filter.sort_by.value
        if product_filter.min_price is not None:
            params["min_price"] = product_filter.min_price
        if product_filter.max_price is not None:
            params["max_price"] = product_filter.max_price
        if product_filter.search:
            params["search"] = product_filter.search

        response = await self._client.get("/products", params=params)
        response.raise_for_status()
        data = response.json()
        return ProductPage(
            items=[Product.from_dict(item) for item in data["items"]],
            next_cursor=data.get("next_cursor"),
            is_done=data["is_done"],
        )

    async def fetch_categories(self) -> List[str]:
        response = await self._client.get("/products/categories")
        response.raise_for_status()
        return response.json()

    async def fetch_price_range(self) -> PriceRange:
        response = await self._client.get("/products/price-range")
        response.raise_for_status()
        data = response.json()
        return PriceRange(min=data["min"], max=data["max"])

    async def seed(self) -> SeedResult:
        response = await self._client.post("/products/seed")
        response.raise_for_status()
        data = response.json()
        logger.info("Seed response received", message=data.get("message"))
        return SeedResult(seeded=data["seeded"], inserted=data["inserted"])
