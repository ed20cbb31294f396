"""Refund of a completed payment: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.errors import PaymentFailedError
from ordering.gateway import get_gateway
from ordering.order.order import Order, OrderStatus, PaymentStatus
from ordering.payment.payment import Payment

logger = structlog.get_logger(__name__)


def get_customer_payment(payment_id, customer_id):
    """Load a payment owned by ``customer_id``; someone else's payment is reported as missing."""
    payment = current_domain.repository_for(Payment).get(payment_id)
    if not payment.is_owned_by(customer_id):
        raise ObjectNotFoundError(f"Payment {payment_id} not found")
    return payment


@ordering.command(part_of="Payment")
class RequestRefund:
    payment_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    reason = Text()


@ordering.command_handler(part_of=Payment)
class RequestRefundHandler:
    @handle(RequestRefund)
    def request_refund(self, command):
        payment = get_customer_payment(command.payment_id, command.customer_id)
        if PaymentStatus(payment.payment_status) != PaymentStatus.COMPLETED:
            raise ValidationError({"payment_status": ["Only completed payments can be refunded"]})

        order_repo = current_domain.repository_for(Order)
        order = order_repo.get(payment.order_id)
        if OrderStatus(order.order_status) == OrderStatus.DELIVERED:
            raise ValidationError({"order_status": ["Cannot refund delivered orders"]})

        result = get_gateway().create_refund(
            gateway_transaction_id=payment.gateway_transaction_id,
            amount=payment.amount,
            reason=command.reason or "",
        )
        if not result.success:
            logger.warning(
                "Refund declined by gateway",
                payment_id=str(payment.id),
                order_id=str(order.id),
                reason=result.failure_reason,
            )
            raise PaymentFailedError(payment_id=str(payment.id), message="Refund processing failed")

        payment.refund(reason=command.reason)
        order.mark_refunded(payment.id, payment.refund_amount, refunded_at=payment.refund_date)

        current_domain.repository_for(Payment).add(payment)
        order_repo.add(order)

        logger.info(
            "Payment refunded",
            payment_id=str(payment.id),
            order_id=str(order.id),
            customer_id=str(payment.customer_id),
            amount=payment.refund_amount,
        )
