"""
Seed Service
Loads the sample product set into an empty catalog
"""

from typing import List, Optional

from app.models.product import Product, SeedResult
from app.repositories.product_repository import ProductRepository, get_product_repository
from app.core.logging import get_logger

logger = get_logger(__name__)


SAMPLE_PRODUCTS = [
    {
        "name": "iPhone 15 Pro",
        "description": "Latest iPhone with advanced camera system and A17 Pro chip",
        "price": 999,
        "category": "Electronics",
        "image_url": "https://images.unsplash.com/photo-1592750475338-74b7b21085ab?w=400",
        "brand": "Apple",
        "rating": 4.8,
        "stock": 50,
        "tags": ["smartphone", "premium", "camera"],
    },
    {
        "name": "MacBook Air M2",
        "description": "Lightweight laptop with M2 chip and all-day battery life",
        "price": 1199,
        "category": "Electronics",
        "image_url": "https://images.unsplash.com/photo-1541807084-5c52b6b3adef?w=400",
        "brand": "Apple",
        "rating": 4.9,
        "stock": 30,
        "tags": ["laptop", "portable", "productivity"],
    },
    {
        "name": "Nike Air Max 270",
        "description": "Comfortable running shoes with Max Air cushioning",
        "price": 150,
        "category": "Fashion",
        "image_url": "https://images.unsplash.com/photo-1542291026-7eec264c27ff?w=400",
        "brand": "Nike",
        "rating": 4.5,
        "stock": 100,
        "tags": ["shoes", "running", "comfort"],
    },
    {
        "name": "Levi's 501 Jeans",
        "description": "Classic straight-fit jeans made from premium denim",
        "price": 89,
        "category": "Fashion",
        "image_url": "https://images.unsplash.com/photo-1542272604-787c3835535d?w=400",
        "brand": "Levi's",
        "rating": 4.3,
        "stock": 75,
        "tags": ["jeans", "classic", "denim"],
    },
    {
        "name": "The Great Gatsby",
        "description": "Classic American novel by F. Scott Fitzgerald",
        "price": 12,
        "category": "Books",
        "image_url": "https://images.unsplash.com/photo-1544947950-fa07a98d237f?w=400",
        "brand": "Scribner",
        "rating": 4.2,
        "stock": 200,
        "tags": ["fiction", "classic", "literature"],
    },
    {
        "name": "Atomic Habits",
        "description": "Life-changing guide to building good habits and breaking bad ones",
        "price": 18,
        "category": "Books",
        "image_url": "https://images.unsplash.com/photo-1481627834876-b7833e8f5570?w=400",
        "brand": "Avery",
        "rating": 4.7,
        "stock": 150,
        "tags": ["self-help", "productivity", "habits"],
    },
    {
        "name": "Yoga Mat Premium",
        "description": "Non-slip yoga mat perfect for all types of yoga practice",
        "price": 45,
        "category": "Sports",
        "image_url": "https://images.unsplash.com/photo-1544367567-0f2fcb009e0b?w=400",
        "brand": "YogaLife",
        "rating": 4.4,
        "stock": 80,
        "tags": ["yoga", "fitness", "exercise"],
    },
    {
        "name": "Protein Powder Vanilla",
        "description": "High-quality whey protein powder for muscle building",
        "price": 35,
        "category": "Sports",
        "image_url": "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=400",
        "brand": "FitNutrition",
        "rating": 4.1,
        "stock": 120,
        "tags": ["protein", "supplement", "fitness"],
    },
    {
        "name": "Wireless Headphones",
        "description": "Premium noise-cancelling wireless headphones",
        "price": 299,
        "category": "Electronics",
        "image_url": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=400",
        "brand": "SoundTech",
        "rating": 4.6,
        "stock": 60,
        "tags": ["headphones", "wireless", "audio"],
    },
    {
        "name": "Coffee Maker Deluxe",
        "description": "Programmable coffee maker with built-in grinder",
        "price": 179,
        "category": "Home",
        "image_url": "https://images.unsplash.com/photo-1495474472287-4d71bcdd2085?w=400",
        "brand": "BrewMaster",
        "rating": 4.3,
        "stock": 40,
        "tags": ["coffee", "kitchen", "appliance"],
    },
    {
        "name": "Organic Face Cream",
        "description": "Natural moisturizing cream for all skin types",
        "price": 28,
        "category": "Beauty",
        "image_url": "https://images.unsplash.com/photo-1556228578-8c89e6adf883?w=400",
        "brand": "NaturalGlow",
        "rating": 4.5,
        "stock": 90,
        "tags": ["skincare", "organic", "moisturizer"],
    },
    {
        "name": "Gaming Mouse RGB",
        "description": "High-precision gaming mouse with customizable RGB lighting",
        "price": 79,
        "category": "Electronics",
        "image_url": "https://images.unsplash.com/photo-1527814050087-3793815479db?w=400",
        "brand": "GameTech",
        "rating": 4.4,
        "stock": 70,
        "tags": ["gaming", "mouse", "rgb"],
    },
]


def sample_products() -> List[Product]:
    """Fresh Product instances for the sample set"""
    return [Product.from_dict(data) for data in SAMPLE_PRODUCTS]


class SeedService:
    """Service for bootstrapping the catalog with sample data"""

    def __init__(self, repository: Optional[ProductRepository] = None):
        self.repository = repository or get_product_repository()

    async def seed_products(self) -> SeedResult:
        """
        Insert the sample products unless the catalog already has any product

        The emptiness check and the inserts are a single conditional write on
        the repository, so two concurrent calls insert the set at most once.
        """
        inserted = await self.repository.seed_if_empty(sample_products())
        result = SeedResult(seeded=inserted > 0, inserted=inserted)

        logger.info(result.message, inserted=inserted, backend=self.repository.backend_name)
        return result


# Singleton instance
_seed_service: Optional[SeedService] = None


def get_seed_service() -> SeedService:
    """Get seed service instance"""
    global _seed_service
    if _seed_service is None:
        _seed_service = SeedService()
    return _seed_service
