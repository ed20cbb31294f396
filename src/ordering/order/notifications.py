"""Order emails: confirmation on placement, notice on cancellation.

Sending is fire-and-forget. A failed delivery is logged and never undoes
the order change that triggered it.
"""

import structlog
from protean.utils.mixins import handle

from ordering.domain import ordering
from ordering.mailer import get_mailer
from ordering.order.events import OrderCancelled, OrderPlaced
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


def _send(to, subject, body, order_id):
    try:
        result = get_mailer().send(to=to, subject=subject, body=body)
    except Exception as e:
        logger.error("Order email could not be sent", order_id=order_id, error=str(e))
        return

    if result.get("status") != "sent":
        logger.warning(
            "Order email delivery failed",
            order_id=order_id,
            error=result.get("error", "Unknown delivery error"),
        )


@ordering.event_handler(part_of=Order)
class OrderEmailHandler:
    """Emails the customer about their order when an address is on record."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        if not event.customer_email:
            logger.info("Order has no customer email, skipping confirmation", order_id=str(event.order_id))
            return

        delivery = event.estimated_delivery_date.strftime("%Y-%m-%d") if event.estimated_delivery_date else "soon"
        body = (
            f"Thank you for your order {event.order_id}.\n"
            f"Items: {event.item_count}\n"
            f"Total: {event.total:.2f} {event.currency}\n"
            f"Estimated delivery: {delivery}"
        )
        _send(event.customer_email, f"Order confirmation #{event.order_id}", body, str(event.order_id))

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        if not event.customer_email:
            return

        body = f"Your order {event.order_id} has been cancelled."
        if event.reason:
            body += f"\nReason: {event.reason}"
        _send(event.customer_email, f"Order cancelled #{event.order_id}", body, str(event.order_id))
