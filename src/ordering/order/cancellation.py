"""Customer order cancellation: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


def get_customer_order(order_id, customer_id):
    """Load an order owned by ``customer_id``; someone else's order is reported as missing."""
    order = current_domain.repository_for(Order).get(order_id)
    if not order.is_owned_by(customer_id):
        raise ObjectNotFoundError(f"Order {order_id} not found")
    return order


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    reason = Text()


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order = get_customer_order(command.order_id, command.customer_id)
        order.cancel(reason=command.reason)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order cancelled",
            customer_id=str(command.customer_id),
            order_id=str(command.order_id),
        )
