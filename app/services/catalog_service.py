"""
Catalog Service
Product listing, filtering and catalog-wide aggregates
"""

from typing import List, Optional

from app.models.product import PriceRange, ProductFilter, ProductPage, SortOption
from app.models.query import IndexName, QueryPlan, SortOrder
from app.repositories.product_repository import ProductRepository, get_product_repository
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


def build_query_plan(product_filter: ProductFilter) -> QueryPlan:
    """
    Choose the index and post-index predicates for a filter.

    Search wins over everything else and drops category, price and sort.
    Price and rating sorts read their own index and filter category and
    price afterwards. Without an explicit sort a category reads the
    category index; otherwise the table is read in creation order.
    """
    search = product_filter.search_text
    if search is not None:
        return QueryPlan.for_search(search)

    category = product_filter.category_filter
    bounds = product_filter.price_bounds
    sort = product_filter.sort

    if sort is SortOption.PRICE_ASC:
        return QueryPlan(index=IndexName.BY_PRICE, order=SortOrder.ASC, category=category, price_bounds=bounds)
    if sort is SortOption.PRICE_DESC:
        return QueryPlan(index=IndexName.BY_PRICE, order=SortOrder.DESC, category=category, price_bounds=bounds)
    if sort is SortOption.RATING:
        return QueryPlan(index=IndexName.BY_RATING, order=SortOrder.DESC, category=category, price_bounds=bounds)
    if sort is SortOption.NAME:
        if category is not None:
            return QueryPlan(index=IndexName.BY_CATEGORY, index_value=category, price_bounds=bounds)
        return QueryPlan(price_bounds=bounds)
    raise ValueError(f"Unhandled sort option: {sort!r}")


class CatalogService:
    """Service for product catalog read operations"""

    def __init__(self, repository: Optional[ProductRepository] = None):
        self.repository = repository or get_product_repository()

    async def list_products(
        self,
        product_filter: Optional[ProductFilter] = None,
        cursor: Optional[str] = None,
        page_size: Optional[int] = None
    ) -> ProductPage:
        """
        Get one page of products

        Args:
            product_filter: Category, sort, price bounds and search text
            cursor: Cursor returned with the previous page, None for the first page
            page_size: Number of products per page (defaults to CATALOG_PAGE_SIZE)

        Returns:
            ProductPage with items, the next cursor and the is_done flag
        """
        product_filter = product_filter or ProductFilter()
        num_items = page_size or settings.CATALOG_PAGE_SIZE

        if product_filter.search_text is not None and product_filter.has_non_search_filters():
            logger.debug(
                "Search ignores category, price and sort filters",
                category=product_filter.category,
                sort_by=product_filter.sort.value,
                min_price=product_filter.min_price,
                max_price=product_filter.max_price,
            )

        plan = build_query_plan(product_filter)
        page = await self.repository.paginate(plan, cursor, num_items)

        logger.debug(
            "Products page served",
            count=len(page.items),
            is_done=page.is_done,
            first_page=cursor is None,
            **plan.describe()
        )
        return page

    async def list_categories(self) -> List[str]:
        """Distinct categories, sorted ascending"""
        products = await self.repository.collect()
        return sorted({p.category for p in products})

    async def get_price_range(self) -> PriceRange:
        """Lowest and highest price, or the configured defaults for an empty catalog"""
        products = await self.repository.collect()
        if not products:
            return PriceRange(
                min=settings.PRICE_RANGE_DEFAULT_MIN,
                max=settings.PRICE_RANGE_DEFAULT_MAX,
            )
        prices = [p.price for p in products]
        return PriceRange(min=min(prices), max=max(prices))

    async def count_products(self) -> int:
        return await self.repository.count()


# Singleton instance
_catalog_service: Optional[CatalogService] = None


def get_catalog_service() -> CatalogService:
    """Get catalog service instance"""
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = CatalogService()
    return _catalog_service
