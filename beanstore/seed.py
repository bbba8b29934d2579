"""
Sample data loader

Creates the tables, the starter coffee catalog and the default admin.
Safe to run repeatedly: each part is skipped when data already exists.

Usage:
    python -m beanstore.seed
"""

import argparse
import asyncio
import logging
from decimal import Decimal

from sqlalchemy import select

from beanstore.core.config import Settings, get_settings
from beanstore.core.database import (
    create_engine_from_settings, create_session_factory, session_scope, init_db, close_db
)
from beanstore.core.logging import setup_logging
from beanstore.models import Product, AdminUser
from beanstore.api.v1.auth.services import AuthService

logger = logging.getLogger(__name__)

_IMAGE = "https://images.unsplash.com/photo-{}?auto=format&fit=crop&w=400&h=400"

SAMPLE_PRODUCTS = [
    {
        "name": "Ethiopian Sidamo",
        "description": "A bright, floral coffee with wine-like acidity and a clean finish. Notes of citrus, berries, and tea-like qualities.",
        "price": Decimal("24.99"),
        "image_url": _IMAGE.format("1559056199-641a0ac8b55e"),
        "category": "Single Origin",
        "origin": "Ethiopia",
        "roast_level": "Light Roast",
    },
    {
        "name": "Colombian Supremo",
        "description": "Rich, full-bodied coffee with perfect balance. Chocolate and caramel notes with a smooth, nutty finish.",
        "price": Decimal("22.99"),
        "image_url": _IMAGE.format("1497935586351-b67a49e012bf"),
        "category": "Single Origin",
        "origin": "Colombia",
        "roast_level": "Medium Roast",
    },
    {
        "name": "Brazilian Santos",
        "description": "Smooth, low-acid coffee with chocolatey sweetness. Perfect for espresso or drip brewing.",
        "price": Decimal("19.99"),
        "image_url": _IMAGE.format("1447933601403-0c6688de566e"),
        "category": "Single Origin",
        "origin": "Brazil",
        "roast_level": "Dark Roast",
    },
    {
        "name": "Guatemalan Antigua",
        "description": "Complex, full-bodied coffee with spicy and smoky notes. Rich volcanic soil creates distinctive flavor.",
        "price": Decimal("26.99"),
        "image_url": _IMAGE.format("1501339847302-ac426a4a7cbb"),
        "category": "Single Origin",
        "origin": "Guatemala",
        "roast_level": "Medium Roast",
    },
    {
        "name": "House Blend",
        "description": "Our signature blend combining the best of South American and African beans. Balanced and approachable.",
        "price": Decimal("18.99"),
        "image_url": _IMAGE.format("1442512595331-e89e73853f31"),
        "category": "Blend",
        "origin": "Multi-Origin",
        "roast_level": "Medium Roast",
    },
    {
        "name": "Espresso Roast",
        "description": "Dark, rich blend perfect for espresso. Bold flavor with low acidity and lingering finish.",
        "price": Decimal("21.99"),
        "image_url": _IMAGE.format("1509042239860-f550ce710b93"),
        "category": "Blend",
        "origin": "Multi-Origin",
        "roast_level": "Dark Roast",
    },
    {
        "name": "French Roast",
        "description": "Bold, intense coffee with smoky, charred notes. For those who love their coffee strong and dark.",
        "price": Decimal("20.99"),
        "image_url": _IMAGE.format("1495474472287-4d71bcdd2085"),
        "category": "Blend",
        "origin": "Multi-Origin",
        "roast_level": "Dark Roast",
    },
    {
        "name": "Jamaican Blue Mountain",
        "description": "One of the world's finest coffees. Mild, sweet, and exceptionally smooth with no bitterness.",
        "price": Decimal("49.99"),
        "image_url": _IMAGE.format("1511920170033-f8396924c348"),
        "category": "Premium",
        "origin": "Jamaica",
        "roast_level": "Light Roast",
    },
    {
        "name": "Kona Coffee",
        "description": "Hawaiian grown coffee with smooth, rich flavor. Buttery texture with hints of spice and nuts.",
        "price": Decimal("39.99"),
        "image_url": _IMAGE.format("1514432324607-a09d9b4aefdd"),
        "category": "Premium",
        "origin": "Hawaii",
        "roast_level": "Medium Roast",
    },
    {
        "name": "Decaf Colombian",
        "description": "All the flavor of our Colombian Supremo without the caffeine. Swiss water process preserves taste.",
        "price": Decimal("23.99"),
        "image_url": _IMAGE.format("1521302080334-4bebac2763a6"),
        "category": "Decaf",
        "origin": "Colombia",
        "roast_level": "Medium Roast",
    },
]

async def seed(settings: Settings) -> None:
    """Create tables and load sample products and the default admin"""
    engine = create_engine_from_settings(settings)
    session_factory = create_session_factory(engine)

    try:
        await init_db(engine)

        async with session_scope(session_factory) as db:
            existing = await db.execute(select(Product.id).limit(1))
            if existing.first() is None:
                db.add_all([Product(**data, in_stock=True) for data in SAMPLE_PRODUCTS])
                await db.commit()
                logger.info(f"Added {len(SAMPLE_PRODUCTS)} sample products")
            else:
                logger.info("Products already exist, skipping")

            existing = await db.execute(select(AdminUser.id).limit(1))
            if existing.first() is None:
                await AuthService(db, settings).create_admin(
                    settings.DEFAULT_ADMIN_USERNAME,
                    settings.DEFAULT_ADMIN_PASSWORD,
                    settings.DEFAULT_ADMIN_EMAIL
                )
                logger.info(f"Default admin '{settings.DEFAULT_ADMIN_USERNAME}' created")
            else:
                logger.info("Admin user already exists, skipping")
    finally:
        await close_db(engine)

def main():
    parser = argparse.ArgumentParser(description="Load BeanStore sample data")
    parser.add_argument(
        "--database-url",
        help="Override DATABASE_URL for this run"
    )
    args = parser.parse_args()

    settings = get_settings()
    if args.database_url:
        settings = settings.model_copy(update={"DATABASE_URL": args.database_url})

    setup_logging(settings.LOG_LEVEL)
    asyncio.run(seed(settings))

if __name__ == "__main__":
    main()
