"""Tests for the sample data loader."""

import asyncio

from sqlalchemy import select, func

from beanstore.models import Product, AdminUser
from beanstore.seed import seed, SAMPLE_PRODUCTS


def _counts(db_factory):
    async def count():
        async with db_factory() as db:
            products = await db.scalar(select(func.count(Product.id)))
            admins = await db.scalar(select(func.count(AdminUser.id)))
            return products, admins

    return asyncio.run(count())


def test_seed_is_idempotent(settings, db_factory):
    asyncio.run(seed(settings))
    asyncio.run(seed(settings))

    assert _counts(db_factory) == (len(SAMPLE_PRODUCTS), 1)


def test_seeded_admin_can_log_in(settings, client):
    asyncio.run(seed(settings))

    response = client.post(
        "/api/v1/admin/login",
        json={"username": settings.DEFAULT_ADMIN_USERNAME, "password": settings.DEFAULT_ADMIN_PASSWORD},
    )

    assert response.status_code == 200
    names = {product["name"] for product in client.get("/api/v1/products").json()}
    assert "Jamaican Blue Mountain" in names
