"""Domain events for the Payment aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Payment")
class PaymentCompleted:
    """The gateway accepted a charge for an order."""

    payment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    amount = Float(required=True)
    currency = String(required=True)
    transaction_id = String(required=True)
    paid_at = DateTime(required=True)


@ordering.event(part_of="Payment")
class PaymentFailed:
    """The gateway declined a charge."""

    payment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    error_code = String()
    error_message = Text()


@ordering.event(part_of="Payment")
class PaymentRefunded:
    """A completed payment was refunded in full."""

    payment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    refund_amount = Float(required=True)
    reason = Text()
    refunded_at = DateTime(required=True)
