"""Pytest fixtures for catalog tests."""

import pytest

from app.repositories.product_repository import InMemoryProductRepository
from app.services import catalog_service, seed_service
from app.services.catalog_service import CatalogService
from app.services.seed_service import SeedService, sample_products


@pytest.fixture
def empty_repository():
    """In-memory product store with no rows."""
    return InMemoryProductRepository()


@pytest.fixture
def repository():
    """In-memory product store holding the 12 sample products."""
    return InMemoryProductRepository(sample_products())


@pytest.fixture
def catalog(repository):
    return CatalogService(repository)


@pytest.fixture
def use_repository(monkeypatch):
    """Point the API-level service singletons at a given repository."""

    def _use(repo):
        monkeypatch.setattr(catalog_service, "_catalog_service", CatalogService(repo))
        monkeypatch.setattr(seed_service, "_seed_service", SeedService(repo))
        return repo

    return _use
