import asyncio

import pytest

from app.services.seed_service import SAMPLE_PRODUCTS, SeedService


def test_sample_set_is_complete():
    assert len(SAMPLE_PRODUCTS) == 12
    required = {"name", "description", "price", "category", "image_url", "brand", "rating", "stock", "tags"}
    for product in SAMPLE_PRODUCTS:
        assert set(product) == required
        assert product["price"] >= 0
        assert 0 <= product["rating"] <= 5
        assert product["tags"]


@pytest.mark.asyncio
async def test_seed_twice_inserts_once(empty_repository):
    service = SeedService(empty_repository)

    first = await service.seed_products()
    assert first.seeded
    assert first.inserted == 12
    assert first.message == "Products seeded successfully"

    second = await service.seed_products()
    assert not second.seeded
    assert second.inserted == 0
    assert second.message == "Products already seeded"
    assert await empty_repository.count() == 12


@pytest.mark.asyncio
async def test_seed_is_skipped_when_catalog_has_any_product(repository):
    service = SeedService(repository)
    result = await service.seed_products()
    assert result.message == "Products already seeded"
    assert await repository.count() == 12


@pytest.mark.asyncio
async def test_concurrent_seeds_insert_once(empty_repository):
    service = SeedService(empty_repository)
    results = await asyncio.gather(*(service.seed_products() for _ in range(3)))
    assert sum(r.seeded for r in results) == 1
    assert await empty_repository.count() == 12
