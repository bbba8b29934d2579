"""Pytest fixtures for BeanStore tests."""

import asyncio
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from beanstore.core.config import Settings
from beanstore.core.database import create_engine_from_settings, create_session_factory, init_db, close_db
from beanstore.main import create_app
from beanstore.models import Product
from beanstore.api.v1.auth.services import AuthService

ADMIN_USERNAME = "headroaster"
ADMIN_PASSWORD = "beans4ever"


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'beanstore.db'}",
        SECRET_KEY="test-secret-key-not-for-production",
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def client(settings):
    """Client with the app lifespan running (tables created)."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def other_client(client):
    """A second browser: same app, separate cookie jar, so a separate cart."""
    return TestClient(client.app)


@pytest.fixture
def db_factory(settings):
    """Session factory for driving services directly."""
    engine = create_engine_from_settings(settings)
    asyncio.run(init_db(engine))
    yield create_session_factory(engine)
    asyncio.run(close_db(engine))


@pytest.fixture
def product_factory(db_factory):
    """Insert a catalog product and return it."""

    async def make(name="Ethiopian Sidamo", price="24.99", in_stock=True):
        async with db_factory() as db:
            product = Product(
                name=name,
                description=f"{name} whole beans",
                price=Decimal(price),
                image_url="https://images.example.com/beans.jpg",
                category="Single Origin",
                origin="Ethiopia",
                roast_level="Light Roast",
                in_stock=in_stock,
            )
            db.add(product)
            await db.commit()
            await db.refresh(product)
            return product

    return make


@pytest.fixture
def admin_headers(client, settings):
    """Bearer header for a freshly created admin."""

    async def create_admin():
        async with client.app.state.session_factory() as db:
            await AuthService(db, settings).create_admin(
                ADMIN_USERNAME, ADMIN_PASSWORD, "headroaster@example.com"
            )

    asyncio.run(create_admin())

    response = client.post(
        "/api/v1/admin/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def create_product(client, admin_headers):
    """Create a product through the API and return its JSON."""

    def create(name="Ethiopian Sidamo", price="24.99", in_stock=True, category="Single Origin"):
        response = client.post(
            "/api/v1/products",
            json={
                "name": name,
                "description": f"{name} whole beans",
                "price": price,
                "image_url": "https://images.example.com/beans.jpg",
                "category": category,
                "origin": "Ethiopia",
                "roast_level": "Light Roast",
                "in_stock": in_stock,
            },
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return create


@pytest.fixture
def customer():
    """Valid customer fields for placing an order."""
    return {
        "customer_name": "Ada Lovelace",
        "customer_email": "ada@example.com",
        "customer_address": "12 Analytical Row",
        "customer_city": "London",
        "customer_zip": "10001",
    }
