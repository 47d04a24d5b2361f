"""
Query Plan Models
Store-agnostic description of how a product page should be read
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
from enum import Enum

from app.models.product import PriceBounds, Product


SEARCH_INDEX = "search_products"
SEARCH_FIELD = "name"


class IndexName(str, Enum):
    """Indexes defined on the products table"""
    BY_CATEGORY = "by_category"
    BY_PRICE = "by_price"
    BY_RATING = "by_rating"

    @property
    def field(self) -> str:
        return INDEX_FIELDS[self]


INDEX_FIELDS = {
    IndexName.BY_CATEGORY: "category",
    IndexName.BY_PRICE: "price",
    IndexName.BY_RATING: "rating",
}


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class QueryPlan:
    """
    A single read against the products table.

    ``index`` of None means a scan in store-native (creation time) order.
    ``index_value`` is an equality bound on the index field, used by the
    category index. ``category`` and ``price_bounds`` are predicates applied
    after the index scan. When ``search`` is set the search index is used
    and every other field is ignored by the store.
    """
    index: Optional[IndexName] = None
    order: SortOrder = SortOrder.ASC
    index_value: Optional[str] = None
    category: Optional[str] = None
    price_bounds: Optional[PriceBounds] = None
    search: Optional[str] = None

    @classmethod
    def for_search(cls, text: str) -> "QueryPlan":
        return cls(search=text)

    @property
    def is_search(self) -> bool:
        return self.search is not None

    def matches(self, product: Product) -> bool:
        """Apply the post-index predicates to one product"""
        if self.index_value is not None and self.index is not None:
            if getattr(product, self.index.field) != self.index_value:
                return False
        if self.category is not None and product.category != self.category:
            return False
        if self.price_bounds is not None and not self.price_bounds.contains(product.price):
            return False
        return True

    def to_convex(self) -> Dict[str, Any]:
        """Serialize for the products:paginate Convex function (unset fields omitted)"""
        if self.is_search:
            return {"searchIndex": SEARCH_INDEX, "searchField": SEARCH_FIELD, "searchQuery": self.search}

        plan: Dict[str, Any] = {"order": self.order.value}
        if self.index is not None:
            plan["index"] = self.index.value
        if self.index_value is not None:
            plan["indexValue"] = self.index_value

        filters: Dict[str, Any] = {}
        if self.category is not None:
            filters["category"] = self.category
        if self.price_bounds is not None:
            filters["minPrice"] = self.price_bounds.min
            if self.price_bounds.max is not None:
                filters["maxPrice"] = self.price_bounds.max
        if filters:
            plan["filters"] = filters
        return plan

    def describe(self) -> Dict[str, Any]:
        """Flat summary used in log lines"""
        if self.is_search:
            return {"index": SEARCH_INDEX, "search": self.search}
        return {
            "index": self.index.value if self.index else "creation_time",
            "order": self.order.value,
            "category": self.index_value or self.category,
            "price_bounds": (
                f"[{self.price_bounds.min}, {self.price_bounds.max if self.price_bounds.max is not None else 'inf'}]"
                if self.price_bounds else None
            ),
        }
