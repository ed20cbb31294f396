"""Administrative order updates: fulfilment status and manual payment status."""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    order_status = String(required=True, max_length=20)
    shipping_status = String(max_length=20)
    tracking_number = String(max_length=100)
    reason = Text()


@ordering.command(part_of="Order")
class UpdatePaymentStatus:
    order_id = Identifier(required=True)
    payment_status = String(required=True, max_length=20)


@ordering.command_handler(part_of=Order)
class OrderAdministrationHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.update_status(
            command.order_status,
            shipping_status=command.shipping_status,
            tracking_number=command.tracking_number,
            reason=command.reason,
        )
        repo.add(order)

        logger.info(
            "Order status updated",
            order_id=str(command.order_id),
            order_status=order.order_status,
        )

    @handle(UpdatePaymentStatus)
    def update_payment_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous = order.payment_status
        order.update_payment_status(command.payment_status)
        repo.add(order)

        logger.info(
            "Order payment status set by administrator",
            order_id=str(command.order_id),
            previous_status=previous,
            payment_status=order.payment_status,
        )
