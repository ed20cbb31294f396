"""Integration tests for the order endpoints."""


class TestPlaceOrder:
    def test_checkout(self, client, customer, place_order):
        order = place_order()

        assert order["customer_id"] == "cust-001"
        assert order["subtotal"] == 100.0
        assert order["shipping_cost"] == 10.0
        assert order["tax"] == 10.0
        assert order["total"] == 120.0
        assert order["order_status"] == "pending"
        assert order["shipping_address"]["zip_code"] == "400001"
        assert client.get("/cart", headers=customer).json()["items"] == []

    def test_empty_cart(self, client, customer, address):
        body = {"shipping_address": address, "billing_address": address, "payment_method": "upi"}
        response = client.post("/orders", json=body, headers=customer)

        assert response.status_code == 400
        assert response.json()["error"] == "Cart is empty"

    def test_missing_address_field(self, client, customer, address):
        client.post("/cart", json={"product_id": "prod-aviator"}, headers=customer)
        del address["phone"]
        body = {"shipping_address": address, "billing_address": address, "payment_method": "upi"}

        response = client.post("/orders", json=body, headers=customer)

        assert response.status_code == 422

    def test_retry_with_checkout_id(self, client, customer, place_order, address):
        first = place_order(checkout_id="chk-001")
        body = {
            "shipping_address": address,
            "billing_address": address,
            "payment_method": "credit_card",
            "checkout_id": "chk-001",
        }

        response = client.post("/orders", json=body, headers=customer)

        assert response.status_code == 201
        assert response.json()["order_id"] == first["order_id"]


class TestListAndGetOrders:
    def test_list_is_paginated_newest_first(self, client, customer, place_order):
        first = place_order()
        second = place_order(items=(("prod-reader", 1),))

        response = client.get("/orders", params={"page": 1, "limit": 1}, headers=customer)

        data = response.json()
        assert [o["order_id"] for o in data["orders"]] == [second["order_id"]]
        assert data["pagination"] == {"page": 1, "limit": 1, "total": 2, "pages": 2}

        page_two = client.get("/orders", params={"page": 2, "limit": 1}, headers=customer).json()
        assert [o["order_id"] for o in page_two["orders"]] == [first["order_id"]]

    def test_customers_only_see_their_orders(self, client, other_customer, place_order):
        order = place_order()

        assert client.get("/orders", headers=other_customer).json()["orders"] == []
        response = client.get(f"/orders/{order['order_id']}", headers=other_customer)
        assert response.status_code == 404

    def test_get_order(self, client, customer, place_order):
        order = place_order()
        response = client.get(f"/orders/{order['order_id']}", headers=customer)
        assert response.status_code == 200
        assert response.json()["items"][0]["product_id"] == "prod-aviator"


class TestCancelOrder:
    def test_cancel(self, client, customer, place_order):
        order = place_order()

        response = client.post(f"/orders/{order['order_id']}/cancel", json={"reason": "Too slow"}, headers=customer)

        assert response.status_code == 200
        assert response.json()["order_status"] == "cancelled"
        assert response.json()["cancellation_reason"] == "Too slow"

    def test_cancel_after_processing(self, client, customer, admin, place_order):
        order = place_order()
        client.patch(f"/orders/{order['order_id']}/status", json={"order_status": "processing"}, headers=admin)

        response = client.post(f"/orders/{order['order_id']}/cancel", json={}, headers=customer)

        assert response.status_code == 400
        assert "order_status" in response.json()["details"]


class TestUpdateOrderStatus:
    def test_requires_admin(self, client, customer, place_order):
        order = place_order()
        response = client.patch(
            f"/orders/{order['order_id']}/status",
            json={"order_status": "processing"},
            headers=customer,
        )
        assert response.status_code == 403
        assert response.json()["error"] == "Admin access required"

    def test_ship_with_tracking(self, client, admin, place_order):
        order = place_order()
        url = f"/orders/{order['order_id']}/status"

        client.patch(url, json={"order_status": "processing"}, headers=admin)
        response = client.patch(url, json={"order_status": "shipped", "tracking_number": "TRK-9"}, headers=admin)

        data = response.json()
        assert data["order_status"] == "shipped"
        assert data["shipping_status"] == "shipped"
        assert data["tracking_number"] == "TRK-9"

    def test_invalid_transition(self, client, admin, place_order):
        order = place_order()
        response = client.patch(
            f"/orders/{order['order_id']}/status",
            json={"order_status": "delivered"},
            headers=admin,
        )
        assert response.status_code == 400

    def test_shipping_status_cannot_outrun_order_status(self, client, admin, place_order):
        order = place_order()
        response = client.patch(
            f"/orders/{order['order_id']}/status",
            json={"order_status": "processing", "shipping_status": "delivered"},
            headers=admin,
        )
        assert response.status_code == 400
        assert "shipping_status" in response.json()["details"]

    def test_admin_cancellation_keeps_reason(self, client, admin, mailer, place_order):
        order = place_order()
        response = client.patch(
            f"/orders/{order['order_id']}/status",
            json={"order_status": "cancelled", "reason": "Lens lab backlog"},
            headers=admin,
        )

        assert response.json()["cancellation_reason"] == "Lens lab backlog"
        assert mailer.sent_emails[-1]["subject"] == f"Order cancelled #{order['order_id']}"


class TestUpdatePaymentStatus:
    def test_requires_admin(self, client, customer, place_order):
        order = place_order()
        response = client.patch(
            f"/orders/{order['order_id']}/payment",
            json={"payment_status": "completed"},
            headers=customer,
        )
        assert response.status_code == 403

    def test_record_offline_payment(self, client, admin, place_order):
        order = place_order()
        response = client.patch(
            f"/orders/{order['order_id']}/payment",
            json={"payment_status": "completed"},
            headers=admin,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["payment_status"] == "completed"
        assert data["paid_at"] is not None

    def test_invalid_correction(self, client, admin, place_order):
        order = place_order()
        response = client.patch(
            f"/orders/{order['order_id']}/payment",
            json={"payment_status": "refunded"},
            headers=admin,
        )
        assert response.status_code == 400
        assert "payment_status" in response.json()["details"]

    def test_unknown_order(self, client, admin):
        response = client.patch("/orders/missing-order/payment", json={"payment_status": "completed"}, headers=admin)
        assert response.status_code == 404
