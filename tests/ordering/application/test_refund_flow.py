"""Application tests for refunding a completed payment."""

import json

import pytest
from ordering.cart.items import AddToCart
from ordering.errors import PaymentFailedError
from ordering.order.checkout import PlaceOrder
from ordering.order.order import Order
from ordering.order.status import UpdateOrderStatus
from ordering.payment.payment import Payment
from ordering.payment.processing import charge_order
from ordering.payment.refund import RequestRefund, get_customer_payment
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain


@pytest.fixture()
def paid(address):
    """A paid order: returns ``(order_id, payment_id)``."""
    current_domain.process(
        AddToCart(customer_id="cust-001", product_id="prod-reader", quantity=1),
        asynchronous=False,
    )
    order_id = current_domain.process(
        PlaceOrder(
            customer_id="cust-001",
            shipping_address=json.dumps(address),
            billing_address=json.dumps(address),
            payment_method="upi",
            shipping_method="standard",
        ),
        asynchronous=False,
    )
    payment = charge_order(order_id, "cust-001", "upi", {"upi_id": "asha@okbank"})
    return order_id, str(payment.id)


def _refund(payment_id, customer_id="cust-001", reason=None):
    current_domain.process(
        RequestRefund(payment_id=payment_id, customer_id=customer_id, reason=reason),
        asynchronous=False,
    )


class TestRequestRefund:
    def test_full_refund(self, paid, gateway):
        order_id, payment_id = paid

        _refund(payment_id, reason="Wrong size")

        payment = current_domain.repository_for(Payment).get(payment_id)
        assert payment.payment_status == "refunded"
        assert payment.refund_amount == payment.amount == 98.0
        assert payment.refund_reason == "Wrong size"

        order = current_domain.repository_for(Order).get(order_id)
        assert order.payment_status == "refunded"
        assert order.refunded_at is not None

        assert gateway.calls[-1]["method"] == "create_refund"
        assert gateway.calls[-1]["gateway_transaction_id"] == payment.gateway_transaction_id

    def test_delivered_order_cannot_be_refunded(self, paid):
        order_id, payment_id = paid
        for status, tracking in (("processing", None), ("shipped", "TRK-1"), ("delivered", None)):
            current_domain.process(
                UpdateOrderStatus(order_id=order_id, order_status=status, tracking_number=tracking),
                asynchronous=False,
            )

        with pytest.raises(ValidationError) as exc:
            _refund(payment_id)
        assert "order_status" in exc.value.messages

    def test_refund_twice(self, paid):
        _, payment_id = paid
        _refund(payment_id)
        with pytest.raises(ValidationError):
            _refund(payment_id)

    def test_gateway_refusal_changes_nothing(self, paid, gateway):
        order_id, payment_id = paid
        gateway.configure(should_succeed=False, failure_reason="Refund window closed")

        with pytest.raises(PaymentFailedError) as exc:
            _refund(payment_id)

        assert exc.value.messages == "Refund processing failed"
        assert current_domain.repository_for(Payment).get(payment_id).payment_status == "completed"
        assert current_domain.repository_for(Order).get(order_id).payment_status == "completed"

    def test_other_customer_cannot_refund(self, paid):
        _, payment_id = paid
        with pytest.raises(ObjectNotFoundError):
            _refund(payment_id, customer_id="cust-002")

    def test_get_customer_payment(self, paid):
        _, payment_id = paid
        assert str(get_customer_payment(payment_id, "cust-001").id) == payment_id
        with pytest.raises(ObjectNotFoundError):
            get_customer_payment(payment_id, "cust-002")
