"""Integration tests for the payment and refund endpoints."""

CARD = {
    "card_number": "4111111111111234",
    "card_type": "visa",
    "card_holder_name": "Asha Rao",
    "expiry_date": "09/28",
}


def _pay(client, headers, order_id, method="credit_card", details=None):
    body = {"order_id": order_id, "payment_method": method, "payment_details": details or CARD}
    return client.post("/payments", json=body, headers=headers)


class TestProcessPayment:
    def test_successful_payment(self, client, customer, place_order):
        order = place_order()

        response = _pay(client, customer, order["order_id"])

        assert response.status_code == 200
        data = response.json()
        assert data["payment"]["payment_status"] == "completed"
        assert data["payment"]["amount"] == 120.0
        assert data["payment"]["payment_details"] == {
            "card_type": "visa",
            "last4": "1234",
            "card_holder_name": "Asha Rao",
            "expiry_date": "09/28",
        }
        assert data["order"]["payment_status"] == "completed"
        assert data["order"]["payment_id"] == data["payment"]["payment_id"]

    def test_declined_payment(self, client, customer, place_order, gateway):
        order = place_order()
        gateway.configure(should_succeed=False, failure_reason="Do not honour")

        response = _pay(client, customer, order["order_id"])

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Payment processing failed"
        assert "Do not honour" not in response.text

        payment = client.get(f"/payments/{body['details']['payment_id']}", headers=customer).json()
        assert payment["payment_status"] == "failed"
        assert payment["error_code"] == "card_declined"
        assert "error_message" not in payment
        assert "Do not honour" not in str(payment)

        listed = client.get("/payments", headers=customer)
        assert listed.json()["payments"][0]["payment_status"] == "failed"
        assert "Do not honour" not in listed.text

    def test_already_paid(self, client, customer, place_order):
        order = place_order()
        _pay(client, customer, order["order_id"])

        response = _pay(client, customer, order["order_id"])

        assert response.status_code == 400
        assert response.json()["error"] == "Order is already paid"

    def test_invalid_upi_id(self, client, customer, place_order):
        order = place_order(payment_method="upi")

        response = _pay(client, customer, order["order_id"], method="upi", details={"upi_id": "not-an-id"})

        assert response.status_code == 400
        assert "upi_id" in response.json()["details"]

    def test_someone_elses_order(self, client, other_customer, place_order):
        order = place_order()
        response = _pay(client, other_customer, order["order_id"])
        assert response.status_code == 404


class TestListPayments:
    def test_list_own_payments(self, client, customer, other_customer, place_order):
        order = place_order()
        _pay(client, customer, order["order_id"])

        data = client.get("/payments", headers=customer).json()
        assert data["pagination"]["total"] == 1
        assert data["payments"][0]["order_id"] == order["order_id"]

        assert client.get("/payments", headers=other_customer).json()["payments"] == []


class TestRefund:
    def test_refund(self, client, customer, place_order):
        order = place_order()
        payment_id = _pay(client, customer, order["order_id"]).json()["payment"]["payment_id"]

        response = client.post(f"/payments/{payment_id}/refund", json={"reason": "Wrong fit"}, headers=customer)

        assert response.status_code == 200
        data = response.json()
        assert data["payment"]["payment_status"] == "refunded"
        assert data["payment"]["refund_amount"] == 120.0
        assert data["order"]["payment_status"] == "refunded"

    def test_refund_declined_by_gateway(self, client, customer, place_order, gateway):
        order = place_order()
        payment_id = _pay(client, customer, order["order_id"]).json()["payment"]["payment_id"]
        gateway.configure(should_succeed=False)

        response = client.post(f"/payments/{payment_id}/refund", json={}, headers=customer)

        assert response.status_code == 400
        assert response.json() == {"error": "Refund processing failed", "details": {"payment_id": payment_id}}

    def test_refund_delivered_order(self, client, customer, admin, place_order):
        order = place_order()
        payment_id = _pay(client, customer, order["order_id"]).json()["payment"]["payment_id"]
        url = f"/orders/{order['order_id']}/status"
        client.patch(url, json={"order_status": "processing"}, headers=admin)
        client.patch(url, json={"order_status": "shipped", "tracking_number": "TRK-1"}, headers=admin)
        client.patch(url, json={"order_status": "delivered"}, headers=admin)

        response = client.post(f"/payments/{payment_id}/refund", json={}, headers=customer)

        assert response.status_code == 400
        assert response.json()["details"] == {"order_status": ["Cannot refund delivered orders"]}
