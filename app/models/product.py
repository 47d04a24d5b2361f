"""
Product Data Models
Domain models for the product catalog
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum


ALL_CATEGORIES = "all"


class SortOption(str, Enum):
    """Sort keys accepted by the product listing"""
    NAME = "name"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    RATING = "rating"

    @property
    def label(self) -> str:
        return SORT_LABELS[self]


SORT_LABELS = {
    SortOption.NAME: "Name (A-Z)",
    SortOption.PRICE_ASC: "Price: Low to High",
    SortOption.PRICE_DESC: "Price: High to Low",
    SortOption.RATING: "Highest Rated",
}


class Product:
    """Product domain model"""

    def __init__(
        self,
        name: str,
        description: str,
        price: float,
        category: str,
        image_url: str,
        brand: str,
        rating: float,
        stock: int,
        tags: Optional[List[str]] = None,
        id: Optional[str] = None,
        creation_time: Optional[float] = None
    ):
        self.id = id
        self.creation_time = creation_time
        self.name = name
        self.description = description
        self.price = price
        self.category = category
        self.image_url = image_url
        self.brand = brand
        self.rating = rating
        self.stock = stock
        self.tags = list(tags or [])

    def to_dict(self) -> Dict[str, Any]:
        """Convert product to dictionary"""
        return {
            "id": self.id,
            "creation_time": self.creation_time,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category": self.category,
            "image_url": self.image_url,
            "brand": self.brand,
            "rating": self.rating,
            "stock": self.stock,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """Create product from dictionary"""
        return cls(
            id=data.get("id"),
            creation_time=data.get("creation_time"),
            name=data["name"],
            description=data.get("description", ""),
            price=data["price"],
            category=data["category"],
            image_url=data.get("image_url", ""),
            brand=data.get("brand", ""),
            rating=data.get("rating", 0),
            stock=data.get("stock", 0),
            tags=data.get("tags", []),
        )

    def copy(self, **changes) -> "Product":
        data = self.to_dict()
        data.update(changes)
        return Product.from_dict(data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Product(id={self.id!r}, name={self.name!r}, price={self.price!r})"


@dataclass(frozen=True)
class PriceBounds:
    """Inclusive price window; a missing maximum means unbounded"""
    min: float = 0
    max: Optional[float] = None

    def contains(self, price: float) -> bool:
        if price < self.min:
            return False
        return self.max is None or price <= self.max


@dataclass
class ProductFilter:
    """
    Filter and sort request for the product listing.

    All defaulting happens here so the query service can rely on the
    resolved properties instead of re-checking raw values per branch.
    """
    category: Optional[str] = None
    sort_by: Optional[SortOption] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    search: Optional[str] = None

    def __post_init__(self):
        if self.sort_by is not None:
            self.sort_by = SortOption(self.sort_by)

    @property
    def category_filter(self) -> Optional[str]:
        """Category to filter on, or None for the 'all' sentinel"""
        if not self.category or self.category == ALL_CATEGORIES:
            return None
        return self.category

    @property
    def sort(self) -> SortOption:
        return self.sort_by or SortOption.NAME

    @property
    def price_bounds(self) -> Optional[PriceBounds]:
        if self.min_price is None and self.max_price is None:
            return None
        return PriceBounds(
            min=self.min_price if self.min_price is not None else 0,
            max=self.max_price,
        )

    @property
    def search_text(self) -> Optional[str]:
        return self.search or None

    def has_non_search_filters(self) -> bool:
        return (
            self.category_filter is not None
            or self.price_bounds is not None
            or self.sort is not SortOption.NAME
        )


@dataclass
class ProductPage:
    """One page of products plus the store-issued continuation cursor"""
    items: List[Product] = field(default_factory=list)
    next_cursor: Optional[str] = None
    is_done: bool = True


@dataclass(frozen=True)
class PriceRange:
    """Lowest and highest price present in the catalog"""
    min: float
    max: float


@dataclass(frozen=True)
class SeedResult:
    """Outcome of a seed request"""
    seeded: bool
    inserted: int = 0

    ALREADY_SEEDED = "Products already seeded"
    SEEDED = "Products seeded successfully"

    @property
    def message(self) -> str:
        return self.SEEDED if self.seeded else self.ALREADY_SEEDED
