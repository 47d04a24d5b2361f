import pytest

from app.core.exceptions import ExternalServiceException
from app.models.product import PriceRange, ProductFilter, SortOption
from app.repositories.product_repository import ProductRepository
from app.services.catalog_service import CatalogService


async def _all_items(catalog, product_filter, page_size=5):
    items = []
    cursor = None
    while True:
        page = await catalog.list_products(product_filter, cursor=cursor, page_size=page_size)
        items.extend(page.items)
        if page.is_done:
            return items
        cursor = page.next_cursor


@pytest.mark.asyncio
async def test_electronics_by_price_ascending(catalog):
    page = await catalog.list_products(ProductFilter(category="Electronics", sort_by=SortOption.PRICE_ASC))
    assert [p.price for p in page.items] == [79, 299, 999, 1199]
    assert all(p.category == "Electronics" for p in page.items)
    assert page.is_done


@pytest.mark.asyncio
async def test_default_page_size_is_twelve(catalog, repository):
    existing = await repository.collect()
    await repository.insert(existing[0].copy(name="Extra"))
    page = await catalog.list_products()
    assert len(page.items) == 12
    assert not page.is_done


@pytest.mark.asyncio
async def test_price_order_holds_across_pages(catalog):
    asc = await _all_items(catalog, ProductFilter(sort_by=SortOption.PRICE_ASC), page_size=5)
    prices = [p.price for p in asc]
    assert len(prices) == 12
    assert prices == sorted(prices)

    desc = await _all_items(catalog, ProductFilter(sort_by=SortOption.PRICE_DESC), page_size=5)
    prices = [p.price for p in desc]
    assert prices == sorted(prices, reverse=True)


@pytest.mark.asyncio
async def test_rating_order_with_category(catalog):
    items = await _all_items(catalog, ProductFilter(sort_by=SortOption.RATING, category="Electronics"), page_size=3)
    assert [p.name for p in items] == [
        "MacBook Air M2",
        "iPhone 15 Pro",
        "Wireless Headphones",
        "Gaming Mouse RGB",
    ]


@pytest.mark.asyncio
async def test_category_filter_uses_store_order(catalog):
    page = await catalog.list_products(ProductFilter(category="Sports"))
    assert [p.name for p in page.items] == ["Yoga Mat Premium", "Protein Powder Vanilla"]


@pytest.mark.asyncio
async def test_all_category_is_a_pass_through(catalog):
    page = await catalog.list_products(ProductFilter(category="all"))
    assert len(page.items) == 12


@pytest.mark.asyncio
@pytest.mark.parametrize("min_price,max_price,expected", [
    (28, 35, ["Protein Powder Vanilla", "Organic Face Cream"]),
    (None, 30, ["The Great Gatsby", "Atomic Habits", "Organic Face Cream"]),
    (1000, None, ["MacBook Air M2"]),
])
async def test_price_bounds_are_inclusive(catalog, min_price, max_price, expected):
    page = await catalog.list_products(ProductFilter(min_price=min_price, max_price=max_price))
    assert [p.name for p in page.items] == expected


@pytest.mark.asyncio
async def test_price_bounds_with_every_sort(catalog):
    for sort_by in SortOption:
        items = await _all_items(catalog, ProductFilter(sort_by=sort_by, min_price=40, max_price=300), page_size=2)
        assert items
        assert all(40 <= p.price <= 300 for p in items)


@pytest.mark.asyncio
async def test_search_ignores_category_price_and_sort(catalog):
    page = await catalog.list_products(ProductFilter(
        search="air",
        category="Books",
        sort_by=SortOption.PRICE_ASC,
        min_price=0,
        max_price=10,
    ))
    assert [p.name for p in page.items] == ["MacBook Air M2", "Nike Air Max 270"]


@pytest.mark.asyncio
async def test_whitespace_search_matches_nothing(catalog):
    page = await catalog.list_products(ProductFilter(search="   ", category="Books"))
    assert page.items == []
    assert page.is_done


@pytest.mark.asyncio
async def test_unknown_category_returns_empty_page(catalog):
    page = await catalog.list_products(ProductFilter(category="Toys", sort_by=SortOption.RATING))
    assert page.items == []
    assert page.is_done


@pytest.mark.asyncio
async def test_list_categories(catalog):
    assert await catalog.list_categories() == ["Beauty", "Books", "Electronics", "Fashion", "Home", "Sports"]


@pytest.mark.asyncio
async def test_price_range(catalog):
    assert await catalog.get_price_range() == PriceRange(min=12, max=1199)


@pytest.mark.asyncio
async def test_empty_catalog_aggregates(empty_repository):
    catalog = CatalogService(empty_repository)
    assert await catalog.list_categories() == []
    assert await catalog.get_price_range() == PriceRange(min=0, max=1000)
    page = await catalog.list_products()
    assert page.items == []
    assert page.is_done


class FailingRepository(ProductRepository):
    async def paginate(self, plan, cursor, num_items):
        raise ExternalServiceException("convex", "index by_price not ready")


@pytest.mark.asyncio
async def test_store_errors_propagate_unchanged():
    catalog = CatalogService(FailingRepository())
    with pytest.raises(ExternalServiceException) as exc_info:
        await catalog.list_products(ProductFilter(sort_by=SortOption.PRICE_ASC))
    assert exc_info.value.details["error"] == "index by_price not ready"
