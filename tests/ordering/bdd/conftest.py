"""Shared BDD fixtures and step definitions for the ordering domain."""

import json

import pytest
from ordering.cart.items import AddToCart
from ordering.errors import EmptyCartError
from ordering.order.checkout import PlaceOrder
from ordering.order.order import Order
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then, when


@pytest.fixture()
def customer():
    return {"id": None, "email": None}


@pytest.fixture()
def outcome():
    """Container for the result or error of the last When step."""
    return {"result": None, "exc": None}


def _place_order(customer, address, shipping_method, payment_method):
    return current_domain.process(
        PlaceOrder(
            customer_id=customer["id"],
            customer_email=customer["email"],
            shipping_address=json.dumps(address),
            billing_address=json.dumps(address),
            payment_method=payment_method,
            shipping_method=shipping_method,
        ),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the customer "{customer_id}" with email "{email}"'))
def _(customer, customer_id, email):
    customer["id"] = customer_id
    customer["email"] = email


@given(parsers.cfparse('the cart holds {quantity:d} of "{product_id}"'))
def _(customer, quantity, product_id):
    current_domain.process(
        AddToCart(customer_id=customer["id"], product_id=product_id, quantity=quantity),
        asynchronous=False,
    )


@given(
    parsers.cfparse('the customer checked out with "{shipping_method}" shipping paying by "{payment_method}"'),
    target_fixture="order_id",
)
def _(customer, address, shipping_method, payment_method):
    return _place_order(customer, address, shipping_method, payment_method)


@given("the gateway declines charges")
def _(gateway):
    gateway.configure(should_succeed=False)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(
    parsers.cfparse('the customer checks out with "{shipping_method}" shipping paying by "{payment_method}"'),
    target_fixture="order_id",
)
def _(customer, address, outcome, shipping_method, payment_method):
    try:
        return _place_order(customer, address, shipping_method, payment_method)
    except EmptyCartError as exc:
        outcome["exc"] = exc
        return None


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order payment status is "{status}"'))
def _(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).payment_status == status


@then(parsers.cfparse('the order status is "{status}"'))
def _(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).order_status == status
