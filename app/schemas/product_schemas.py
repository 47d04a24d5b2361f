"""
Product Schemas
Request/Response models for catalog endpoints
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from app.models.product import PriceRange, Product, ProductPage, SeedResult


class ProductResponse(BaseModel):
    """A single catalog product"""
    id: str
    creation_time: Optional[float] = None
    name: str
    description: str = ""
    price: float = Field(..., ge=0)
    category: str
    image_url: str = ""
    brand: str = ""
    rating: float = Field(default=0, ge=0, le=5)
    stock: int = Field(default=0, ge=0)
    tags: List[str] = []

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(**product.to_dict())


class ProductPageResponse(BaseModel):
    """One page of products"""
    items: List[ProductResponse]
    next_cursor: Optional[str] = Field(None, description="Pass back as `cursor` to fetch the next page")
    is_done: bool

    @classmethod
    def from_page(cls, page: ProductPage) -> "ProductPageResponse":
        return cls(
            items=[ProductResponse.from_product(p) for p in page.items],
            next_cursor=page.next_cursor,
            is_done=page.is_done,
        )


class PriceRangeResponse(BaseModel):
    """Price slider bounds"""
    min: float
    max: float

    @classmethod
    def from_range(cls, price_range: PriceRange) -> "PriceRangeResponse":
        return cls(min=price_range.min, max=price_range.max)


class SeedResponse(BaseModel):
    """Result of seeding sample products"""
    message: str
    seeded: bool
    inserted: int

    @classmethod
    def from_result(cls, result: SeedResult) -> "SeedResponse":
        return cls(message=result.message, seeded=result.seeded, inserted=result.inserted)


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    timestamp: str
    metrics: Dict[str, Any]
    services: Dict[str, str]
