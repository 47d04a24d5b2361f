"""
Seed the product catalog with the sample products.

Runs against the configured store backend (CATALOG_STORE_BACKEND). With the
convex backend this is the one-time administrative bootstrap; with the
memory backend it only prints what would be loaded.
"""
import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings
from app.core.convex_client import close_convex_client
from app.core.logging import setup_logging
from app.services.catalog_service import CatalogService
from app.services.seed_service import SeedService


async def seed(show_categories: bool):
    seeder = SeedService()
    catalog = CatalogService(seeder.repository)
    try:
        result = await seeder.seed_products()
        print(f"{result.message} (inserted {result.inserted})")
        if show_categories:
            categories = await catalog.list_categories()
            price_range = await catalog.get_price_range()
            print(f"Categories: {', '.join(categories)}")
            print(f"Price range: {price_range.min} - {price_range.max}")
    finally:
        await close_convex_client()


def main():
    parser = argparse.ArgumentParser(description="Seed sample products")
    parser.add_argument("--show", action="store_true", help="Print categories and price range afterwards")
    args = parser.parse_args()

    setup_logging()
    print(f"Seeding products into the '{settings.CATALOG_STORE_BACKEND}' store")
    asyncio.run(seed(args.show))


if __name__ == "__main__":
    main()
