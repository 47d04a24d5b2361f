"""
Catalog Browser
Client-side state for infinite-scroll product browsing
"""

from dataclasses import dataclass, fields, replace
from typing import Callable, List, Optional, Protocol, Tuple

from app.models.product import (
    ALL_CATEGORIES,
    PriceRange,
    Product,
    ProductFilter,
    ProductPage,
    SeedResult,
    SortOption,
)
from app.services.catalog_service import CatalogService
from app.services.seed_service import SeedService
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

# Distance in pixels from the bottom of the page that triggers the next fetch
SCROLL_THRESHOLD = 1000

SEED_SUCCESS_MESSAGE = "Sample products loaded!"
SEED_FAILURE_MESSAGE = "Failed to load sample products"


class CatalogBackend(Protocol):
    async def fetch_products(
        self,
        product_filter: ProductFilter,
        cursor: Optional[str] = None,
        page_size: Optional[int] = None
    ) -> ProductPage: ...

    async def seed(self) -> SeedResult: ...


class ServiceBackend:
    """In-process backend that calls the catalog services directly"""

    def __init__(self, catalog: CatalogService, seeder: SeedService):
        self.catalog = catalog
        self.seeder = seeder

    async def fetch_products(self, product_filter, cursor=None, page_size=None) -> ProductPage:
        return await self.catalog.list_products(product_filter, cursor=cursor, page_size=page_size)

    async def seed(self) -> SeedResult:
        return await self.seeder.seed_products()


@dataclass(frozen=True)
class FilterState:
    """Filter controls as the user sees them"""
    category: str = ALL_CATEGORIES
    sort_by: SortOption = SortOption.NAME
    min_price: float = settings.PRICE_RANGE_DEFAULT_MIN
    max_price: float = settings.PRICE_RANGE_DEFAULT_MAX
    search: str = ""

    def to_product_filter(self) -> ProductFilter:
        return ProductFilter(
            category=self.category if self.category != ALL_CATEGORIES else None,
            sort_by=self.sort_by,
            min_price=self.min_price,
            max_price=self.max_price,
            search=self.search or None,
        )


_FILTER_FIELDS = {f.name for f in fields(FilterState)}


class CatalogBrowser:
    """
    Accumulates pages of products for the current filters.

    Any filter change discards what was loaded and restarts from the first
    page. Responses that arrive after a newer filter change are dropped.
    A backend failure while fetching propagates and leaves ``is_loading``
    set until the next filter change; only seeding failures are caught.

    With ``auto_seed`` on, every empty page for an unsearched, uncategorised
    listing asks the backend to seed; a store that already has products
    answers "already seeded" and nothing is reloaded.
    """

    def __init__(
        self,
        backend: CatalogBackend,
        page_size: Optional[int] = None,
        notify: Optional[Callable[[str, str], None]] = None,
        auto_seed: bool = True,
    ):
        self.backend = backend
        self.page_size = page_size or settings.CATALOG_PAGE_SIZE
        self._notify_callback = notify
        self.auto_seed = auto_seed

        self.filters = FilterState()
        self.products: List[Product] = []
        self.has_more = True
        self.is_loading = False
        self.notifications: List[Tuple[str, str]] = []

        self._cursor: Optional[str] = None
        self._generation = 0

    async def start(self) -> None:
        """Load the first page for the initial filters"""
        await self._load_first_page()

    async def apply_filters(self, **changes) -> None:
        unknown = set(changes) - _FILTER_FIELDS
        if unknown:
            raise TypeError(f"Unknown filter fields: {', '.join(sorted(unknown))}")
        if "sort_by" in changes:
            changes["sort_by"] = SortOption(changes["sort_by"])

        self.filters = replace(self.filters, **changes)
        await self._load_first_page()

    async def clear_filters(self, price_range: PriceRange) -> None:
        await self.apply_filters(
            category=ALL_CATEGORIES,
            sort_by=SortOption.NAME,
            min_price=price_range.min,
            max_price=price_range.max,
            search="",
        )

    def has_active_filters(self, price_range: PriceRange) -> bool:
        return (
            self.filters.category != ALL_CATEGORIES
            or self.filters.min_price != price_range.min
            or self.filters.max_price != price_range.max
            or self.filters.search != ""
        )

    async def load_more(self) -> bool:
        """Fetch and append the next page; returns False when nothing was requested"""
        if not self.has_more or self.is_loading:
            return False

        generation = self._generation
        self.is_loading = True
        page = await self.backend.fetch_products(
            self.filters.to_product_filter(),
            cursor=self._cursor,
            page_size=self.page_size,
        )
        if generation != self._generation:
            return False

        self.products.extend(page.items)
        self._cursor = page.next_cursor
        self.has_more = not page.is_done
        self.is_loading = False
        return True

    def should_load_more(self, scroll_top: float, viewport_height: float, document_height: float) -> bool:
        return viewport_height + scroll_top >= document_height - SCROLL_THRESHOLD

    async def on_scroll(self, scroll_top: float, viewport_height: float, document_height: float) -> bool:
        if self.should_load_more(scroll_top, viewport_height, document_height):
            return await self.load_more()
        return False

    def summary(self) -> str:
        text = f"Showing {len(self.products)} products"
        if self.filters.category != ALL_CATEGORIES:
            text += f" in {self.filters.category}"
        if self.filters.search:
            text += f' for "{self.filters.search}"'
        return text

    async def _load_first_page(self) -> None:
        self._generation += 1
        generation = self._generation
        self.products = []
        self._cursor = None
        self.has_more = True
        self.is_loading = True

        page = await self.backend.fetch_products(
            self.filters.to_product_filter(),
            cursor=None,
            page_size=self.page_size,
        )
        if generation != self._generation:
            return

        self.products = list(page.items)
        self._cursor = page.next_cursor
        self.has_more = not page.is_done
        self.is_loading = False

        if not self.products and self._should_seed():
            await self._seed()

    def _should_seed(self) -> bool:
        return (
            self.auto_seed
            and not self.filters.search
            and self.filters.category == ALL_CATEGORIES
        )

    async def _seed(self) -> None:
        try:
            result = await self.backend.seed()
        except Exception:
            logger.error("Seeding sample products failed", exc_info=True)
            self._notify("error", SEED_FAILURE_MESSAGE)
            return

        self._notify("success", SEED_SUCCESS_MESSAGE)
        if result.seeded:
            await self._load_first_page()

    def _notify(self, level: str, message: str) -> None:
        self.notifications.append((level, message))
        if self._notify_callback is not None:
            self._notify_callback(level, message)
