"""
Catalog browsing client: filter state, infinite scroll and the HTTP client.
"""

from app.browser.api_client import CatalogApiClient
from app.browser.catalog_browser import CatalogBrowser, FilterState, ServiceBackend

__all__ = [
    "CatalogApiClient",
    "CatalogBrowser",
    "FilterState",
    "ServiceBackend",
]
