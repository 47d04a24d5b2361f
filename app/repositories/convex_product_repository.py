"""
Convex Product Repository
Data access layer for the products table using Convex DB
"""

from typing import Any, Dict, Iterable, List, Optional

from app.models.product import Product, ProductPage
from app.models.query import QueryPlan
from app.core.convex_client import get_convex_client, ConvexClient
from app.core.logging import get_logger
from app.repositories.product_repository import ProductRepository

logger = get_logger(__name__)


class ConvexProductRepository(ProductRepository):
    """
    Repository for product data access using Convex DB

    Index selection, post-index filtering, search and cursor handling all
    run inside the Convex functions; this class only ships the query plan
    and maps documents back to ``Product``.
    """

    backend_name = "convex"

    def __init__(self, client: Optional[ConvexClient] = None):
        self.client = client or get_convex_client()

    async def paginate(self, plan: QueryPlan, cursor: Optional[str], num_items: int) -> ProductPage:
        try:
            result = await self.client.query("products:paginate", {
                "plan": plan.to_convex(),
                "paginationOpts": {"numItems": num_items, "cursor": cursor},
            })
        except Exception as e:
            logger.error("Failed to paginate products from Convex", error=str(e), **plan.describe())
            raise

        return ProductPage(
            items=[self._map_convex_to_product(doc) for doc in result.get("page", [])],
            next_cursor=result.get("continueCursor"),
            is_done=bool(result.get("isDone", True)),
        )

    async def collect(self) -> List[Product]:
        try:
            docs = await self.client.query("products:list")
        except Exception as e:
            logger.error("Failed to list products from Convex", error=str(e))
            raise
        return [self._map_convex_to_product(doc) for doc in docs or []]

    async def insert(self, product: Product) -> Product:
        try:
            product_id = await self.client.mutation("products:insert", self._map_product_to_convex(product))
        except Exception as e:
            logger.error("Failed to insert product in Convex", error=str(e), name=product.name)
            raise
        return product.copy(id=product_id)

    async def seed_if_empty(self, products: Iterable[Product]) -> int:
        # One mutation, so the emptiness check and the inserts share a transaction.
        payload = [self._map_product_to_convex(p) for p in products]
        try:
            inserted = await self.client.mutation("products:seedIfEmpty", {"products": payload})
        except Exception as e:
            logger.error("Failed to seed products in Convex", error=str(e))
            raise
        return int(inserted or 0)

    def _map_convex_to_product(self, data: Dict[str, Any]) -> Product:
        """Map Convex document to Product model"""
        return Product(
            id=data.get("_id"),
            creation_time=data.get("_creationTime"),
            name=data["name"],
            description=data.get("description", ""),
            price=data["price"],
            category=data["category"],
            image_url=data.get("imageUrl", ""),
            brand=data.get("brand", ""),
            rating=data.get("rating", 0),
            stock=data.get("stock", 0),
            tags=data.get("tags", []),
        )

    def _map_product_to_convex(self, product: Product) -> Dict[str, Any]:
        """Map Product model to Convex document fields (system fields excluded)"""
        return {
            "name": product.name,
            "description": product.description,
            "price": product.price,
            "category": product.category,
            "imageUrl": product.image_url,
            "brand": product.brand,
            "rating": product.rating,
            "stock": product.stock,
            "tags": list(product.tags),
        }
