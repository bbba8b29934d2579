"""Tests for order placement and order reads."""

import asyncio
from decimal import Decimal
from types import SimpleNamespace

from sqlalchemy import delete, select, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from beanstore.api.v1.cart.services import CartService
from beanstore.api.v1.orders.schemas import OrderCreate
from beanstore.api.v1.orders.services import OrderService, order_total
from beanstore.models import Money, Order, OrderItem, Product


def _add(client, product_id, quantity=1, customizations=None):
    payload = {"product_id": product_id, "quantity": quantity}
    if customizations is not None:
        payload["customizations"] = customizations
    response = client.post("/api/v1/cart", json=payload)
    assert response.status_code == 201
    return response.json()


class TestPlaceOrderFromCart:
    def test_checkout_snapshots_cart(self, client, create_product, customer, admin_headers):
        product = create_product("Ethiopian Sidamo", "24.99")
        _add(client, product["id"], 2)
        _add(client, product["id"], 1)

        response = client.post("/api/v1/orders", json=customer)

        assert response.status_code == 201
        order = response.json()
        assert order["status"] == "pending"
        assert Decimal(order["total_amount"]) == Decimal("74.97")
        assert order["customer_email"] == "ada@example.com"

        detail = client.get(f"/api/v1/orders/{order['id']}", headers=admin_headers).json()
        assert len(detail["items"]) == 1
        line = detail["items"][0]
        assert line["product_id"] == product["id"]
        assert line["quantity"] == 3
        assert line["price"] == "24.99"
        assert line["product_name"] == "Ethiopian Sidamo"

        assert client.get("/api/v1/cart").json()["items"] == []

    def test_customizations_carry_into_order(self, client, create_product, customer, admin_headers):
        product = create_product()
        _add(client, product["id"], 1, {"grind": "espresso", "bag_size": "5lb"})

        order = client.post("/api/v1/orders", json=customer).json()

        detail = client.get(f"/api/v1/orders/{order['id']}", headers=admin_headers).json()
        assert detail["items"][0]["customizations"] == {"grind": "espresso", "bag_size": "5lb"}

    def test_empty_cart_is_invalid(self, client, customer):
        response = client.post("/api/v1/orders", json=customer)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_ARGUMENT"

    def test_checkout_clears_only_the_ordering_session(self, client, other_client, create_product, customer):
        product = create_product()
        _add(client, product["id"], 1)
        _add(other_client, product["id"], 4)

        assert client.post("/api/v1/orders", json=customer).status_code == 201

        assert client.get("/api/v1/cart").json()["items"] == []
        assert other_client.get("/api/v1/cart").json()["total_items"] == 4

    def test_out_of_stock_rejects_whole_order(self, client, create_product, customer, admin_headers):
        sidamo = create_product("Ethiopian Sidamo", "24.99")
        kona = create_product("Kona Coffee", "39.99", in_stock=False)
        _add(client, sidamo["id"], 1)
        _add(client, kona["id"], 1)

        response = client.post("/api/v1/orders", json=customer)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "OUT_OF_STOCK"
        assert "Kona Coffee" in response.json()["error"]["message"]
        assert len(client.get("/api/v1/cart").json()["items"]) == 2
        assert client.get("/api/v1/orders", headers=admin_headers).json() == []

    def test_invalid_customer_fields(self, client, create_product, customer):
        product = create_product()
        _add(client, product["id"], 1)

        response = client.post("/api/v1/orders", json={**customer, "customer_email": "not-an-email"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_ARGUMENT"
        assert len(client.get("/api/v1/cart").json()["items"]) == 1


class TestPlaceOrderWithExplicitItems:
    def test_total_is_sum_of_catalog_prices(self, client, create_product, customer):
        sidamo = create_product("Ethiopian Sidamo", "24.99")
        kona = create_product("Kona Coffee", "39.99")

        response = client.post(
            "/api/v1/orders",
            json={
                **customer,
                "items": [
                    {"product_id": sidamo["id"], "quantity": 2},
                    {"product_id": kona["id"], "quantity": 1},
                ],
            },
        )

        assert response.status_code == 201
        assert Decimal(response.json()["total_amount"]) == Decimal("89.97")

    def test_explicit_items_also_clear_the_cart(self, client, create_product, customer):
        product = create_product()
        _add(client, product["id"], 2)

        client.post(
            "/api/v1/orders",
            json={**customer, "items": [{"product_id": product["id"], "quantity": 1}]},
        )

        assert client.get("/api/v1/cart").json()["items"] == []

    def test_empty_item_list_is_invalid(self, client, customer):
        response = client.post("/api/v1/orders", json={**customer, "items": []})

        assert response.status_code == 400

    def test_unknown_product_rejects_whole_order(self, client, create_product, customer, admin_headers):
        product = create_product()
        _add(client, product["id"], 1)

        response = client.post(
            "/api/v1/orders",
            json={
                **customer,
                "items": [
                    {"product_id": product["id"], "quantity": 1},
                    {"product_id": 9999, "quantity": 1},
                ],
            },
        )

        assert response.status_code == 404
        assert len(client.get("/api/v1/cart").json()["items"]) == 1
        assert client.get("/api/v1/orders", headers=admin_headers).json() == []

    def test_deleted_product_cannot_be_ordered(self, client, create_product, customer, admin_headers):
        product = create_product()
        client.delete(f"/api/v1/products/{product['id']}", headers=admin_headers)

        response = client.post(
            "/api/v1/orders",
            json={**customer, "items": [{"product_id": product["id"], "quantity": 1}]},
        )

        assert response.status_code == 404


class TestOrderAtomicity:
    def test_failed_commit_leaves_cart_and_no_order(
        self, client, create_product, customer, admin_headers, monkeypatch
    ):
        product = create_product()
        _add(client, product["id"], 2)

        async def failing_clear(self, session_id, cart_item_ids=None):
            raise OperationalError("DELETE FROM cart_items", {}, Exception("disk I/O error"))

        monkeypatch.setattr(OrderService, "_clear_cart", failing_clear)

        response = client.post("/api/v1/orders", json=customer)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ORDER_COMMIT_FAILED"
        assert client.get("/api/v1/cart").json()["items"][0]["quantity"] == 2
        assert client.get("/api/v1/orders", headers=admin_headers).json() == []

        monkeypatch.undo()
        assert client.post("/api/v1/orders", json=customer).status_code == 201

    def test_failure_writing_items_discards_order_header(
        self, client, create_product, customer, admin_headers, monkeypatch
    ):
        product = create_product()
        _add(client, product["id"], 2)
        original_resolve = OrderService._resolve_products

        async def nameless_products(self, product_ids):
            products = await original_resolve(self, product_ids)
            # product_name is NOT NULL, so the item insert fails after the header is flushed
            return {
                product_id: SimpleNamespace(price=found.price, name=None)
                for product_id, found in products.items()
            }

        monkeypatch.setattr(OrderService, "_resolve_products", nameless_products)

        response = client.post("/api/v1/orders", json=customer)
        monkeypatch.undo()

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ORDER_COMMIT_FAILED"
        assert client.get("/api/v1/cart").json()["items"][0]["quantity"] == 2
        assert client.get("/api/v1/orders", headers=admin_headers).json() == []

    def test_failure_loading_order_defaults_rolls_back(
        self, client, create_product, customer, admin_headers, monkeypatch
    ):
        product = create_product()
        _add(client, product["id"], 1)
        original_refresh = AsyncSession.refresh

        async def failing_refresh(self, instance, *args, **kwargs):
            if isinstance(instance, Order):
                raise OperationalError("SELECT orders", {}, Exception("database is locked"))
            return await original_refresh(self, instance, *args, **kwargs)

        monkeypatch.setattr(AsyncSession, "refresh", failing_refresh)

        response = client.post("/api/v1/orders", json=customer)
        monkeypatch.undo()

        assert response.status_code == 409
        assert len(client.get("/api/v1/cart").json()["items"]) == 1
        assert client.get("/api/v1/orders", headers=admin_headers).json() == []


class TestCheckoutConcurrency:
    def test_line_added_while_ordering_stays_in_cart(
        self, db_factory, product_factory, customer, monkeypatch
    ):
        original_resolve = OrderService._resolve_products

        async def scenario():
            sidamo = await product_factory("Ethiopian Sidamo", "24.99")
            kona = await product_factory("Kona Coffee", "39.99")
            async with db_factory() as db:
                await CartService(db).add_item("s1", sidamo.id, 2)

            async def resolve_after_concurrent_add(self, product_ids):
                async with db_factory() as other:
                    await CartService(other).add_item("s1", kona.id, 1)
                return await original_resolve(self, product_ids)

            monkeypatch.setattr(OrderService, "_resolve_products", resolve_after_concurrent_add)
            async with db_factory() as db:
                order = await OrderService(db).place_order("s1", OrderCreate(**customer))
            monkeypatch.undo()

            async with db_factory() as db:
                remaining = await CartService(db).list_items("s1")
                ordered = (
                    await db.scalars(select(OrderItem).where(OrderItem.order_id == order.id))
                ).all()
            return sidamo, kona, order, remaining, ordered

        sidamo, kona, order, remaining, ordered = asyncio.run(scenario())

        assert order.created_at is not None
        assert order.total_amount == Decimal("49.98")
        assert [(item.product_id, item.quantity) for item in ordered] == [(sidamo.id, 2)]
        assert [(item.product_id, item.quantity) for item in remaining] == [(kona.id, 1)]


class TestMoneyStorage:
    def test_sqlite_keeps_amounts_as_decimal_text(self, client, create_product, customer):
        product = create_product("Ethiopian Sidamo", "24.99")
        _add(client, product["id"], 3)
        assert client.post("/api/v1/orders", json=customer).status_code == 201

        async def stored(table, column):
            async with client.app.state.session_factory() as db:
                result = await db.execute(text(f"SELECT typeof({column}), {column} FROM {table}"))
                return tuple(result.one())

        assert asyncio.run(stored("products", "price")) == ("text", "24.99")
        assert asyncio.run(stored("orders", "total_amount")) == ("text", "74.97")
        assert asyncio.run(stored("order_items", "price")) == ("text", "24.99")

    def test_bind_rounds_to_cents(self):
        money = Money()

        assert money.process_bind_param(Decimal("1.005"), sqlite.dialect()) == "1.01"
        assert money.process_bind_param(Decimal("7"), postgresql.dialect()) == Decimal("7.00")
        assert money.process_bind_param(None, sqlite.dialect()) is None
        assert money.process_result_value("18.50", sqlite.dialect()) == Decimal("18.50")


class TestOrderSnapshots:
    def test_price_edit_does_not_change_placed_order(self, client, create_product, customer, admin_headers):
        product = create_product(price="24.99")
        _add(client, product["id"], 2)
        order = client.post("/api/v1/orders", json=customer).json()

        client.put(f"/api/v1/products/{product['id']}", json={"price": "30.00"}, headers=admin_headers)

        detail = client.get(f"/api/v1/orders/{order['id']}", headers=admin_headers).json()
        assert Decimal(detail["total_amount"]) == Decimal("49.98")
        assert detail["items"][0]["price"] == "24.99"
        assert detail["items"][0]["product"]["price"] == "30.00"

    def test_missing_product_reads_as_tombstone(
        self, client, create_product, customer, admin_headers, db_factory
    ):
        product = create_product("Kona Coffee", "39.99")
        _add(client, product["id"], 1)
        order = client.post("/api/v1/orders", json=customer).json()

        async def hard_delete():
            async with db_factory() as db:
                await db.execute(delete(Product).where(Product.id == product["id"]))
                await db.commit()

        asyncio.run(hard_delete())

        detail = client.get(f"/api/v1/orders/{order['id']}", headers=admin_headers).json()
        line = detail["items"][0]
        assert line["price"] == "39.99"
        assert line["product"]["id"] == product["id"]
        assert line["product"]["name"] == "Kona Coffee"
        assert line["product"]["is_deleted"] is True
        assert line["product"]["in_stock"] is False

    def test_soft_deleted_product_is_flagged(self, client, create_product, customer, admin_headers):
        product = create_product("Kona Coffee", "39.99")
        _add(client, product["id"], 1)
        order = client.post("/api/v1/orders", json=customer).json()

        client.delete(f"/api/v1/products/{product['id']}", headers=admin_headers)

        detail = client.get(f"/api/v1/orders/{order['id']}", headers=admin_headers).json()
        assert detail["items"][0]["product"]["is_deleted"] is True
        assert detail["items"][0]["product"]["origin"] == "Ethiopia"


class TestOrderReads:
    def test_orders_require_admin(self, client):
        response = client.get("/api/v1/orders")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_list_newest_first_with_filter(self, client, create_product, customer, admin_headers):
        product = create_product()
        ids = []
        for _ in range(3):
            _add(client, product["id"], 1)
            ids.append(client.post("/api/v1/orders", json=customer).json()["id"])

        client.put(f"/api/v1/orders/{ids[0]}/status", json={"status": "completed"}, headers=admin_headers)

        orders = client.get("/api/v1/orders", headers=admin_headers).json()
        assert [order["id"] for order in orders] == list(reversed(ids))
        assert all(len(order["items"]) == 1 for order in orders)

        completed = client.get("/api/v1/orders?status=completed", headers=admin_headers).json()
        assert [order["id"] for order in completed] == [ids[0]]

    def test_unknown_order_is_not_found(self, client, admin_headers):
        response = client.get("/api/v1/orders/4242", headers=admin_headers)

        assert response.status_code == 404


class TestOrderTotal:
    def test_rounds_once_half_up(self):
        assert order_total([(Decimal("0.125"), 1), (Decimal("0.125"), 1)]) == Decimal("0.25")
        assert order_total([(Decimal("0.005"), 1)]) == Decimal("0.01")

    def test_sums_price_times_quantity(self):
        assert order_total([(Decimal("24.99"), 3), (Decimal("18.99"), 2)]) == Decimal("112.95")
