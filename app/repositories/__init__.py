"""
Repository Layer
Data access and persistence operations.
"""

from app.repositories.product_repository import (
    ProductRepository,
    InMemoryProductRepository,
    get_product_repository,
    reset_product_repository,
)

__all__ = [
    "ProductRepository",
    "InMemoryProductRepository",
    "get_product_repository",
    "reset_product_repository",
]
