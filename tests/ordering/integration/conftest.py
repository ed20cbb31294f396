import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import (
    admin_router,
    cart_router,
    order_router,
    payment_router,
    register_error_handlers,
    wishlist_router,
)

CUSTOMER = {"X-Customer-Id": "cust-001", "X-Customer-Email": "asha@example.com"}
OTHER_CUSTOMER = {"X-Customer-Id": "cust-002"}
ADMIN = {"X-Customer-Id": "admin-001", "X-Customer-Role": "admin"}


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(payment_router)
    app.include_router(admin_router)
    app.include_router(wishlist_router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def customer():
    return dict(CUSTOMER)


@pytest.fixture()
def other_customer():
    return dict(OTHER_CUSTOMER)


@pytest.fixture()
def admin():
    return dict(ADMIN)


@pytest.fixture()
def place_order(client, customer, address):
    """Fill the cart and check out; returns the order JSON."""

    def _place(items=(("prod-aviator", 2),), payment_method="credit_card", shipping_method="standard", **extra):
        for product_id, quantity in items:
            response = client.post("/cart", json={"product_id": product_id, "quantity": quantity}, headers=customer)
            assert response.status_code == 200
        body = {
            "shipping_address": address,
            "billing_address": address,
            "payment_method": payment_method,
            "shipping_method": shipping_method,
            **extra,
        }
        response = client.post("/orders", json=body, headers=customer)
        assert response.status_code == 201
        return response.json()

    return _place
