"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a new order."""

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_email = String()
    item_count = Integer(required=True)
    subtotal = Float(required=True)
    shipping_cost = Float(required=True)
    tax = Float(required=True)
    total = Float(required=True)
    currency = String(required=True)
    shipping_method = String(required=True)
    estimated_delivery_date = DateTime()
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """An order was cancelled before fulfilment started."""

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_email = String()
    reason = Text()
    cancelled_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """An administrator moved the order through its fulfilment states."""

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    shipping_status = String()
    tracking_number = String()
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderPaid:
    """A payment for the order completed."""

    order_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    transaction_id = String(required=True)
    amount = Float(required=True)
    paid_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderRefunded:
    """The order's payment was refunded."""

    order_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    amount = Float(required=True)
    refunded_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderPaymentStatusUpdated:
    """An administrator recorded a payment outcome by hand."""

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
