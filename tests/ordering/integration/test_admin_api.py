"""Integration tests for the admin listing endpoints."""

CARD = {
    "card_number": "4111111111111234",
    "card_type": "visa",
    "card_holder_name": "Asha Rao",
    "expiry_date": "09/28",
}


def _pay(client, headers, order_id, method, details):
    body = {"order_id": order_id, "payment_method": method, "payment_details": details}
    return client.post("/payments", json=body, headers=headers)


class TestAdminOrders:
    def test_requires_admin(self, client, customer):
        assert client.get("/admin/orders", headers=customer).status_code == 403

    def test_lists_every_customers_orders(self, client, admin, place_order):
        place_order()
        place_order(items=(("prod-reader", 1),))

        data = client.get("/admin/orders", headers=admin).json()

        assert data["pagination"]["total"] == 2

    def test_filter_by_status(self, client, customer, admin, place_order):
        cancelled = place_order()
        place_order(items=(("prod-reader", 1),))
        client.post(f"/orders/{cancelled['order_id']}/cancel", json={}, headers=customer)

        data = client.get("/admin/orders", params={"status": "cancelled"}, headers=admin).json()

        assert [o["order_id"] for o in data["orders"]] == [cancelled["order_id"]]


class TestAdminPayments:
    def test_filter_by_status_and_method(self, client, customer, admin, place_order, gateway):
        paid = place_order()
        _pay(client, customer, paid["order_id"], "credit_card", CARD)

        declined = place_order(items=(("prod-reader", 1),), payment_method="upi")
        gateway.configure(should_succeed=False)
        _pay(client, customer, declined["order_id"], "upi", {"upi_id": "asha@okbank"})

        failed = client.get("/admin/payments", params={"status": "failed"}, headers=admin).json()
        assert [p["order_id"] for p in failed["payments"]] == [declined["order_id"]]

        cards = client.get("/admin/payments", params={"method": "credit_card"}, headers=admin).json()
        assert [p["order_id"] for p in cards["payments"]] == [paid["order_id"]]

        everything = client.get("/admin/payments", headers=admin).json()
        assert everything["pagination"]["total"] == 2
