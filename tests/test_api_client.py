import httpx
import pytest

from server import app
from app.browser.api_client import CatalogApiClient
from app.browser.catalog_browser import CatalogBrowser
from app.models.product import ProductFilter, SortOption
from app.repositories.product_repository import InMemoryProductRepository


def _client():
    return CatalogApiClient("http://catalog.test", transport=httpx.ASGITransport(app=app))


@pytest.mark.asyncio
async def test_client_round_trip(use_repository):
    use_repository(InMemoryProductRepository())

    async with _client() as client:
        assert (await client.fetch_price_range()).max == 1000

        result = await client.seed()
        assert result.seeded and result.inserted == 12

        first = await client.fetch_products(ProductFilter(sort_by=SortOption.PRICE_DESC), page_size=7)
        second = await client.fetch_products(
            ProductFilter(sort_by=SortOption.PRICE_DESC), cursor=first.next_cursor, page_size=7
        )
        assert not first.is_done
        assert second.is_done
        prices = [p.price for p in first.items + second.items]
        assert prices == sorted(prices, reverse=True)
        assert len(prices) == 12

        assert "Books" in await client.fetch_categories()


@pytest.mark.asyncio
async def test_browser_over_http(use_repository):
    use_repository(InMemoryProductRepository())

    async with _client() as client:
        browser = CatalogBrowser(client, page_size=5)
        await browser.start()
        assert browser.notifications == [("success", "Sample products loaded!")]
        assert len(browser.products) == 5

        await browser.apply_filters(search="Atomic")
        assert [p.name for p in browser.products] == ["Atomic Habits"]
        assert not browser.has_more


@pytest.mark.asyncio
async def test_client_raises_on_validation_error(use_repository):
    use_repository(InMemoryProductRepository())

    async with _client() as client:
        with pytest.raises(httpx.HTTPStatusError):
            await client.fetch_products(ProductFilter(min_price=-5))
