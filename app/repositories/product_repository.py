"""
Product Repository
Data access layer for the products table
"""

import asyncio
import base64
import binascii
import json
import re
import time
import uuid
from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.models.product import Product, ProductPage
from app.models.query import QueryPlan, SortOrder, SEARCH_FIELD
from app.core.config import settings
from app.core.exceptions import ConfigurationException, InvalidCursorException
from app.core.logging import get_logger

logger = get_logger(__name__)

_TOKEN_RE = re.compile(r"\w+")


class ProductRepository:
    """
    Contract every product store backend fulfils.

    Pagination is cursor based: ``paginate`` receives the cursor returned
    with the previous page (None for the first page) and returns a new
    opaque cursor plus an ``is_done`` flag. Callers never build cursors.
    """

    backend_name = "abstract"

    async def paginate(self, plan: QueryPlan, cursor: Optional[str], num_items: int) -> ProductPage:
        raise NotImplementedError

    async def collect(self) -> List[Product]:
        """Every product, unindexed, in creation order"""
        raise NotImplementedError

    async def insert(self, product: Product) -> Product:
        raise NotImplementedError

    async def seed_if_empty(self, products: Iterable[Product]) -> int:
        """Insert ``products`` only when the table is empty; returns the number inserted"""
        raise NotImplementedError

    async def count(self) -> int:
        return len(await self.collect())


def _tokenize(text: str) -> List[str]:
    return _TOKEN_RE.findall(text.lower())


def search_score(query: str, text: str) -> int:
    """
    Relevance of ``text`` for ``query``: number of query terms found in text.

    Every term must match a whole token except the last one, which may match
    a token prefix so results appear while the user is still typing.
    """
    terms = _tokenize(query)
    tokens = _tokenize(text)
    if not terms or not tokens:
        return 0
    token_set = set(tokens)
    score = sum(1 for term in terms[:-1] if term in token_set)
    last = terms[-1]
    if any(token.startswith(last) for token in tokens):
        score += 1
    return score


class InMemoryProductRepository(ProductRepository):
    """
    Process-local product store.

    Mirrors the Convex table: ``by_category``, ``by_price`` and ``by_rating``
    indexes (ties ordered by creation time), a name search index and
    forward-only cursors bound to the query shape that issued them.
    """

    backend_name = "memory"

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._products: Dict[str, Product] = {}
        self._last_creation_time = 0.0
        self._lock = asyncio.Lock()
        for product in products or []:
            self._insert_unlocked(product)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _next_creation_time(self) -> float:
        now = time.time() * 1000
        self._last_creation_time = max(now, self._last_creation_time + 1)
        return self._last_creation_time

    def _insert_unlocked(self, product: Product) -> Product:
        stored = product.copy(
            id=uuid.uuid4().hex,
            creation_time=self._next_creation_time(),
        )
        self._products[stored.id] = stored
        return stored.copy()

    async def insert(self, product: Product) -> Product:
        async with self._lock:
            stored = self._insert_unlocked(product)
        logger.debug("Product inserted", product_id=stored.id, name=stored.name)
        return stored

    async def seed_if_empty(self, products: Iterable[Product]) -> int:
        # Check and inserts share the lock so concurrent seeds cannot both pass.
        async with self._lock:
            if self._products:
                return 0
            inserted = [self._insert_unlocked(p) for p in products]
        logger.info("Products seeded", count=len(inserted))
        return len(inserted)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def collect(self) -> List[Product]:
        ordered = sorted(self._products.values(), key=lambda p: (p.creation_time, p.id))
        return [p.copy() for p in ordered]

    async def count(self) -> int:
        return len(self._products)

    def _scan(self, plan: QueryPlan) -> List[Tuple[list, Product]]:
        """Rows matching ``plan`` with their index keys, in scan order"""
        rows: List[Tuple[list, Product]] = []
        if plan.is_search:
            for product in self._products.values():
                score = search_score(plan.search, getattr(product, SEARCH_FIELD))
                if score > 0:
                    rows.append(([-score, product.creation_time, product.id], product))
            rows.sort(key=lambda row: row[0])
            return rows

        for product in self._products.values():
            if not plan.matches(product):
                continue
            key = [product.creation_time, product.id]
            if plan.index is not None:
                key.insert(0, getattr(product, plan.index.field))
            rows.append((key, product))
        rows.sort(key=lambda row: row[0], reverse=plan.order is SortOrder.DESC)
        return rows

    async def paginate(self, plan: QueryPlan, cursor: Optional[str], num_items: int) -> ProductPage:
        shape = _plan_shape(plan)
        position = _decode_cursor(cursor, shape, _key_types(plan)) if cursor else None
        if position is not None and position.get("end"):
            return ProductPage(items=[], next_cursor=cursor, is_done=True)

        rows = self._scan(plan)
        if position is not None:
            last_key = position["key"]
            descending = plan.order is SortOrder.DESC and not plan.is_search
            rows = [
                row for row in rows
                if (row[0] < last_key if descending else row[0] > last_key)
            ]

        page_rows = rows[:num_items]
        is_done = len(rows) <= num_items
        if is_done:
            next_cursor = _encode_cursor(shape, {"end": True})
        else:
            next_cursor = _encode_cursor(shape, {"key": page_rows[-1][0]})

        return ProductPage(
            items=[product.copy() for _, product in page_rows],
            next_cursor=next_cursor,
            is_done=is_done,
        )


def _plan_shape(plan: QueryPlan) -> str:
    """Identify the index and direction a cursor belongs to"""
    if plan.is_search:
        return "search"
    index = plan.index.value if plan.index else "creation_time"
    return f"{index}:{plan.order.value}"


def _encode_cursor(shape: str, position: Dict[str, Any]) -> str:
    raw = json.dumps({"shape": shape, **position}, separators=(",", ":"))
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


_NUMBER = (int, float)


def _key_types(plan: QueryPlan) -> List[tuple]:
    """Expected type of each element of the scan key ``_scan`` builds for ``plan``"""
    if plan.is_search:
        return [(int,), _NUMBER, (str,)]
    types = [_NUMBER, (str,)]
    if plan.index is not None:
        types.insert(0, (str,) if plan.index.field == "category" else _NUMBER)
    return types


def _key_matches(key: Any, types: List[tuple]) -> bool:
    if not isinstance(key, list) or len(key) != len(types):
        return False
    return all(
        isinstance(value, expected) and not isinstance(value, bool)
        for value, expected in zip(key, types)
    )


def _decode_cursor(cursor: str, shape: str, key_types: List[tuple]) -> Dict[str, Any]:
    try:
        data = json.loads(base64.urlsafe_b64decode(cursor.encode("ascii")))
    except (binascii.Error, ValueError, UnicodeError):
        raise InvalidCursorException(cursor)
    if not isinstance(data, dict) or data.get("shape") != shape:
        raise InvalidCursorException(cursor)
    if not data.get("end") and not _key_matches(data.get("key"), key_types):
        raise InvalidCursorException(cursor)
    return data


# Singleton instance
_product_repository: Optional[ProductRepository] = None


def get_product_repository() -> ProductRepository:
    """Get the product repository for the configured backend"""
    global _product_repository
    if _product_repository is None:
        backend = settings.CATALOG_STORE_BACKEND.lower()
        if backend == "memory":
            _product_repository = InMemoryProductRepository()
        elif backend == "convex":
            from app.repositories.convex_product_repository import ConvexProductRepository
            _product_repository = ConvexProductRepository()
        else:
            raise ConfigurationException(
                f"Unknown CATALOG_STORE_BACKEND: {settings.CATALOG_STORE_BACKEND}",
                details={"allowed": ["memory", "convex"]},
            )
        logger.info("Product repository initialised", backend=backend)
    return _product_repository


def reset_product_repository() -> None:
    """Forget the cached repository (used when settings change, e.g. in tests)"""
    global _product_repository
    _product_repository = None
