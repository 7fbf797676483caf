"""Integration tests for the /orders endpoints."""

import pytest

SHIPPING = {"street": "1 Main St", "city": "Springfield", "postalCode": "12345", "country": "USA"}


def _order_body(product_id, quantity=1, **overrides):
    body = {
        "orderItems": [{"product": product_id, "quantity": quantity}],
        "shippingAddress": SHIPPING,
        "paymentMethod": "PayPal",
        "itemsPrice": 100.0,
        "taxPrice": 10.0,
        "shippingPrice": 5.0,
        "totalPrice": 115.0,
    }
    body.update(overrides)
    return body


@pytest.fixture()
def buyer(create_user, auth_headers):
    user_id = create_user(name="John Doe", email="john@example.com")
    return user_id, auth_headers(user_id)


@pytest.fixture()
def admin_headers(create_user, auth_headers):
    return auth_headers(create_user(name="Admin", email="admin@example.com", role="admin"))


class TestPlaceOrder:
    def test_created(self, client, buyer, create_product):
        user_id, headers = buyer
        product_id = create_product(name="Desk Lamp", price=40.0, stock=5)

        response = client.post("/orders", json=_order_body(product_id, quantity=3), headers=headers)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "placed"
        assert data["isPaid"] is False
        assert data["user"] == {"id": user_id, "name": "John Doe", "email": "john@example.com"}
        assert data["orderItems"][0]["name"] == "Desk Lamp"
        assert data["orderItems"][0]["price"] == 40.0
        assert data["totalPrice"] == 115.0
        assert data["shippingAddress"]["postalCode"] == "12345"

        assert client.get(f"/products/{product_id}").json()["stock"] == 2

    def test_no_items(self, client, buyer):
        _, headers = buyer
        response = client.post("/orders", json=_order_body("ignored", orderItems=[]), headers=headers)

        assert response.status_code == 400
        assert response.json() == {"message": "No order items"}

    def test_unknown_product(self, client, buyer):
        _, headers = buyer
        response = client.post("/orders", json=_order_body("missing"), headers=headers)

        assert response.status_code == 404
        assert response.json() == {"message": "Product not found: missing"}

    def test_out_of_stock(self, client, buyer, create_product):
        _, headers = buyer
        product_id = create_product(name="Desk Lamp", stock=5)
        client.post("/orders", json=_order_body(product_id, quantity=3), headers=headers)

        response = client.post("/orders", json=_order_body(product_id, quantity=3), headers=headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Product Desk Lamp is out of stock"}
        assert client.get(f"/products/{product_id}").json()["stock"] == 2

    def test_requires_login(self, client, create_product):
        response = client.post("/orders", json=_order_body(create_product()))
        assert response.status_code == 401


class TestViewingOrders:
    def test_owner_can_view(self, client, buyer, create_product):
        _, headers = buyer
        order_id = client.post("/orders", json=_order_body(create_product()), headers=headers).json()["id"]

        response = client.get(f"/orders/{order_id}", headers=headers)

        assert response.status_code == 200
        assert response.json()["id"] == order_id

    def test_other_customer_forbidden(self, client, buyer, create_user, auth_headers, create_product):
        _, headers = buyer
        order_id = client.post("/orders", json=_order_body(create_product()), headers=headers).json()["id"]
        stranger = auth_headers(create_user(name="Jane", email="jane@example.com"))

        response = client.get(f"/orders/{order_id}", headers=stranger)

        assert response.status_code == 403
        assert response.json() == {"message": "Not authorized to view this order"}

    def test_admin_can_view(self, client, buyer, admin_headers, create_product):
        _, headers = buyer
        order_id = client.post("/orders", json=_order_body(create_product()), headers=headers).json()["id"]

        assert client.get(f"/orders/{order_id}", headers=admin_headers).status_code == 200

    def test_unknown_order(self, client, buyer):
        _, headers = buyer
        response = client.get("/orders/missing", headers=headers)
        assert response.status_code == 404
        assert response.json() == {"message": "Order not found"}

    def test_my_orders_paginated(self, client, buyer, create_user, auth_headers, create_product):
        _, headers = buyer
        product_id = create_product(stock=10)
        for _ in range(3):
            client.post("/orders", json=_order_body(product_id), headers=headers)
        other = auth_headers(create_user(name="Jane", email="jane@example.com"))
        client.post("/orders", json=_order_body(product_id), headers=other)

        response = client.get("/orders/myorders?page=2&pageSize=2", headers=headers)

        data = response.json()
        assert len(data["orders"]) == 1
        assert data["page"] == 2
        assert data["pages"] == 2
        assert data["totalOrders"] == 3

    def test_admin_listing_with_keyword(self, client, buyer, admin_headers, create_product):
        _, headers = buyer
        product_id = create_product(stock=10)
        first = client.post("/orders", json=_order_body(product_id), headers=headers).json()["id"]
        client.post("/orders", json=_order_body(product_id), headers=headers)
        client.put(f"/orders/{first}/status", json={"status": "shipped"}, headers=admin_headers)

        response = client.get("/orders?keyword=SHIP", headers=admin_headers)

        data = response.json()
        assert [o["id"] for o in data["orders"]] == [first]
        assert data["orders"][0]["user"]["name"] == "John Doe"

    def test_listing_requires_admin(self, client, buyer):
        _, headers = buyer
        assert client.get("/orders", headers=headers).status_code == 403


class TestPaymentAndStatus:
    def test_pay(self, client, buyer, create_product):
        _, headers = buyer
        order_id = client.post("/orders", json=_order_body(create_product()), headers=headers).json()["id"]

        response = client.put(
            f"/orders/{order_id}/pay",
            json={
                "id": "PAY-123",
                "status": "COMPLETED",
                "update_time": "2024-01-01T00:00:00Z",
                "payer": {"email_address": "john@example.com"},
            },
            headers=headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["isPaid"] is True
        assert data["paidAt"] is not None
        assert data["status"] == "placed"
        assert data["paymentResult"] == {
            "id": "PAY-123",
            "status": "COMPLETED",
            "update_time": "2024-01-01T00:00:00Z",
            "email_address": "john@example.com",
        }

    def test_delivered(self, client, buyer, admin_headers, create_product):
        _, headers = buyer
        order_id = client.post("/orders", json=_order_body(create_product()), headers=headers).json()["id"]

        response = client.put(f"/orders/{order_id}/status", json={"status": "delivered"}, headers=admin_headers)

        data = response.json()
        assert data["status"] == "delivered"
        assert data["isDelivered"] is True
        assert data["deliveredAt"] is not None

    def test_invalid_status(self, client, buyer, admin_headers, create_product):
        _, headers = buyer
        order_id = client.post("/orders", json=_order_body(create_product()), headers=headers).json()["id"]

        response = client.put(f"/orders/{order_id}/status", json={"status": "lost"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid order status: lost"}

    def test_status_requires_admin(self, client, buyer, create_product):
        _, headers = buyer
        order_id = client.post("/orders", json=_order_body(create_product()), headers=headers).json()["id"]

        response = client.put(f"/orders/{order_id}/status", json={"status": "shipped"}, headers=headers)

        assert response.status_code == 403


class TestStats:
    def test_stats(self, client, buyer, admin_headers, create_product):
        _, headers = buyer
        product_id = create_product(stock=10)
        first = client.post("/orders", json=_order_body(product_id, totalPrice=100.0), headers=headers).json()["id"]
        client.post("/orders", json=_order_body(product_id, totalPrice=50.0), headers=headers)
        client.put(f"/orders/{first}/status", json={"status": "cancelled"}, headers=admin_headers)

        response = client.get("/orders/stats", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["totalOrders"] == 2
        assert data["totalSales"] == 150.0
        assert len(data["dailySales"]) == 1
        assert data["dailySales"][0]["orders"] == 2
        assert {c["status"]: c["count"] for c in data["statusCounts"]} == {"cancelled": 1, "placed": 1}
