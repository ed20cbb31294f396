"""Charging an order through the payment gateway.

The ``ProcessPayment`` handler always persists the payment it opens, even
when the gateway declines: raising from the handler would roll the failed
record back. ``charge_order`` wraps the command for callers and turns a
declined payment into ``PaymentFailedError`` once the record is safely
stored.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.errors import AlreadyPaidError, ConflictError, PaymentFailedError
from ordering.gateway import get_gateway
from ordering.order.cancellation import get_customer_order
from ordering.order.order import Order, OrderStatus, PaymentStatus
from ordering.payment.details import parse_payment_details
from ordering.payment.payment import Payment

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Payment")
class ProcessPayment:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    payment_method = String(required=True, max_length=20)
    payment_details = Text()  # JSON: method-specific fields


@ordering.command_handler(part_of=Payment)
class ProcessPaymentHandler:
    @handle(ProcessPayment)
    def process_payment(self, command):
        order = get_customer_order(command.order_id, command.customer_id)

        if PaymentStatus(order.payment_status) == PaymentStatus.COMPLETED:
            raise AlreadyPaidError({"order": ["Order is already paid"]})
        if PaymentStatus(order.payment_status) == PaymentStatus.REFUNDED:
            raise ConflictError({"order": ["Order has been refunded and cannot be paid again"]})
        if OrderStatus(order.order_status) == OrderStatus.CANCELLED:
            raise ValidationError({"order": ["Cancelled orders cannot be paid"]})
        if command.payment_method != order.payment_method:
            raise ValidationError({"payment_method": ["Payment method must match the order's payment method"]})

        raw_details = command.payment_details
        details = parse_payment_details(
            command.payment_method,
            json.loads(raw_details) if isinstance(raw_details, str) else raw_details,
        )

        gateway = get_gateway()
        payment = Payment.initiate(order, command.payment_method, details, payment_gateway=gateway.name)

        result = gateway.create_charge(
            amount=payment.amount,
            currency=payment.currency,
            payment_method_type=payment.payment_method,
            last4=payment.last4,
            idempotency_key=payment.transaction_id,
        )

        if result.success:
            payment.complete(result.gateway_transaction_id)
            order.mark_paid(payment.id, payment.transaction_id, paid_at=payment.paid_at)
            current_domain.repository_for(Order).add(order)
            logger.info(
                "Payment completed",
                payment_id=str(payment.id),
                order_id=str(order.id),
                customer_id=str(order.customer_id),
                amount=payment.amount,
            )
        else:
            payment.fail(result.error_code, result.failure_reason)
            logger.warning(
                "Payment declined by gateway",
                payment_id=str(payment.id),
                order_id=str(order.id),
                customer_id=str(order.customer_id),
                error_code=result.error_code,
                reason=result.failure_reason,
            )

        current_domain.repository_for(Payment).add(payment)
        return str(payment.id)


def charge_order(order_id, customer_id, payment_method, payment_details):
    """Pay for an order and return the completed Payment.

    Raises ``PaymentFailedError`` when the gateway declines; the failed
    payment is already stored by then.
    """
    payment_id = current_domain.process(
        ProcessPayment(
            order_id=order_id,
            customer_id=customer_id,
            payment_method=payment_method,
            payment_details=json.dumps(payment_details or {}),
        ),
        asynchronous=False,
    )

    payment = current_domain.repository_for(Payment).get(payment_id)
    if PaymentStatus(payment.payment_status) == PaymentStatus.FAILED:
        raise PaymentFailedError(payment_id=payment_id)
    return payment
