"""Tests for the product catalog API."""

import pytest


class TestCatalogReads:
    def test_list_hides_deleted_products(self, client, create_product, admin_headers):
        kept = create_product("House Blend", "18.99", category="Blend")
        dropped = create_product("French Roast", "20.99", category="Blend")

        client.delete(f"/api/v1/products/{dropped['id']}", headers=admin_headers)

        names = [product["name"] for product in client.get("/api/v1/products").json()]
        assert names == [kept["name"]]

    def test_list_filters_by_category(self, client, create_product):
        create_product("House Blend", "18.99", category="Blend")
        create_product("Kona Coffee", "39.99", category="Premium")

        products = client.get("/api/v1/products", params={"category": "Premium"}).json()

        assert [product["name"] for product in products] == ["Kona Coffee"]

    def test_get_product(self, client, create_product):
        product = create_product("Kona Coffee", "39.99")

        response = client.get(f"/api/v1/products/{product['id']}")

        assert response.status_code == 200
        assert response.json()["price"] == "39.99"

    def test_get_missing_product(self, client):
        response = client.get("/api/v1/products/321")

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "NOT_FOUND"
        assert error["request_id"] == response.headers["X-Request-ID"]


class TestCatalogWrites:
    def test_create_requires_admin(self, client):
        response = client.post(
            "/api/v1/products",
            json={
                "name": "Free Beans",
                "description": "Unauthorised",
                "price": "1.00",
                "image_url": "https://images.example.com/free.jpg",
                "category": "Blend",
                "origin": "Nowhere",
                "roast_level": "Dark Roast",
            },
        )

        assert response.status_code == 401

    @pytest.mark.parametrize("price", ["0", "-1.00", "12.345"])
    def test_create_rejects_bad_price(self, client, admin_headers, price):
        response = client.post(
            "/api/v1/products",
            json={
                "name": "Bad Beans",
                "description": "No",
                "price": price,
                "image_url": "https://images.example.com/bad.jpg",
                "category": "Blend",
                "origin": "Nowhere",
                "roast_level": "Dark Roast",
            },
            headers=admin_headers,
        )

        assert response.status_code == 422

    def test_partial_update(self, client, create_product, admin_headers):
        product = create_product("Kona Coffee", "39.99")

        response = client.put(
            f"/api/v1/products/{product['id']}",
            json={"in_stock": False},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["in_stock"] is False
        assert body["price"] == "39.99"
        assert body["name"] == "Kona Coffee"

    def test_update_without_token(self, client, create_product):
        product = create_product()

        response = client.put(f"/api/v1/products/{product['id']}", json={"in_stock": False})

        assert response.status_code == 401

    def test_delete_removes_product_from_carts(self, client, other_client, create_product, admin_headers):
        product = create_product()
        other = create_product("Kona Coffee", "39.99")
        client.post("/api/v1/cart", json={"product_id": product["id"], "quantity": 2})
        client.post("/api/v1/cart", json={"product_id": other["id"], "quantity": 1})
        other_client.post("/api/v1/cart", json={"product_id": product["id"], "quantity": 1})

        response = client.delete(f"/api/v1/products/{product['id']}", headers=admin_headers)

        assert response.status_code == 204
        assert client.get(f"/api/v1/products/{product['id']}").status_code == 404
        assert [line["product_id"] for line in client.get("/api/v1/cart").json()["items"]] == [other["id"]]
        assert other_client.get("/api/v1/cart").json()["items"] == []

    def test_delete_twice_is_not_found(self, client, create_product, admin_headers):
        product = create_product()
        client.delete(f"/api/v1/products/{product['id']}", headers=admin_headers)

        response = client.delete(f"/api/v1/products/{product['id']}", headers=admin_headers)

        assert response.status_code == 404


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_detailed_health_checks_database(self, client):
        body = client.get("/health/detailed").json()

        assert body["components"]["database"]["status"] == "healthy"
