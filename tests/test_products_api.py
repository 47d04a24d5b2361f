import base64
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from server import app
from app.core.exceptions import ExternalServiceException
from app.repositories.product_repository import InMemoryProductRepository, ProductRepository
from app.services.seed_service import sample_products

client = TestClient(app)


@pytest.fixture
def seeded_api(use_repository):
    return use_repository(InMemoryProductRepository(sample_products()))


@pytest.fixture
def empty_api(use_repository):
    return use_repository(InMemoryProductRepository())


def test_list_products_first_page(seeded_api):
    response = client.get("/api/v1/products")
    assert response.status_code == 200
    body = response.json()
    assert len(body["items"]) == 12
    assert body["is_done"] is True
    assert body["next_cursor"]
    assert body["items"][0]["name"] == "iPhone 15 Pro"
    assert body["items"][0]["image_url"].startswith("https://images.unsplash.com/")


def test_category_and_price_sort(seeded_api):
    response = client.get("/api/v1/products", params={"category": "Electronics", "sort_by": "price_asc"})
    assert response.status_code == 200
    assert [p["price"] for p in response.json()["items"]] == [79, 299, 999, 1199]


def test_cursor_chain(seeded_api):
    params = {"sort_by": "price_desc", "page_size": 5}
    seen = []
    cursor = None
    for _ in range(5):
        query = dict(params, cursor=cursor) if cursor else params
        body = client.get("/api/v1/products", params=query).json()
        seen.extend(p["price"] for p in body["items"])
        if body["is_done"]:
            break
        cursor = body["next_cursor"]
    assert seen == sorted(seen, reverse=True)
    assert len(seen) == 12


def test_search_ignores_filters(seeded_api):
    response = client.get("/api/v1/products", params={"search": "mouse", "category": "Books", "max_price": 1})
    assert [p["name"] for p in response.json()["items"]] == ["Gaming Mouse RGB"]


@pytest.mark.parametrize("params", [
    {"sort_by": "popularity"},
    {"page_size": 0},
    {"page_size": 1000},
    {"min_price": -1},
])
def test_invalid_parameters_rejected(seeded_api, params):
    response = client.get("/api/v1/products", params=params)
    assert response.status_code == 422


def test_invalid_cursor_is_a_client_error(seeded_api):
    response = client.get("/api/v1/products", params={"cursor": "garbage"})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_cursor_with_wrong_key_type_is_a_client_error(seeded_api):
    raw = json.dumps({"shape": "by_price:asc", "key": ["x"]}).encode("utf-8")
    cursor = base64.urlsafe_b64encode(raw).decode("ascii")
    response = client.get("/api/v1/products", params={"sort_by": "price_asc", "cursor": cursor})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_categories_and_price_range(seeded_api):
    assert client.get("/api/v1/products/categories").json() == [
        "Beauty", "Books", "Electronics", "Fashion", "Home", "Sports",
    ]
    assert client.get("/api/v1/products/price-range").json() == {"min": 12, "max": 1199}


def test_price_range_default_when_empty(empty_api):
    assert client.get("/api/v1/products/price-range").json() == {"min": 0, "max": 1000}
    assert client.get("/api/v1/products/categories").json() == []


def test_seed_endpoint_is_idempotent(empty_api):
    first = client.post("/api/v1/products/seed")
    assert first.status_code == 200
    assert first.json() == {"message": "Products seeded successfully", "seeded": True, "inserted": 12}

    second = client.post("/api/v1/products/seed")
    assert second.json() == {"message": "Products already seeded", "seeded": False, "inserted": 0}
    assert len(client.get("/api/v1/products", params={"page_size": 100}).json()["items"]) == 12


class BrokenStore(ProductRepository):
    backend_name = "broken"

    async def paginate(self, plan, cursor, num_items):
        raise ExternalServiceException("convex", "Index by_price not found", function_path="products:paginate")

    async def collect(self):
        raise httpx.ConnectError("connection refused")


def test_store_failures_surface_as_bad_gateway(use_repository):
    use_repository(BrokenStore())

    response = client.get("/api/v1/products", params={"sort_by": "price_asc"})
    assert response.status_code == 502
    assert response.json()["error"] == "EXTERNAL_SERVICE_ERROR"
    assert response.json()["details"]["function"] == "products:paginate"

    response = client.get("/api/v1/products/categories")
    assert response.status_code == 502


def test_health_reports_store(seeded_api):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["metrics"]["products"] == 12
    assert body["services"]["product_store"] == "memory"


def test_root():
    body = client.get("/").json()
    assert body["service"] == "Product Catalog API"
    assert body["status"] == "running"
