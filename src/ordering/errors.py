"""Typed failures raised by the ordering domain.

All of them extend Protean's exception hierarchy so that command handlers
roll back their unit of work when one escapes, and the API layer can map
each family to a status code.
"""

from protean.exceptions import (
    InvalidOperationError,
    ObjectNotFoundError,
    ProteanException,
    ValidationError,
)


class CartItemNotFoundError(ObjectNotFoundError):
    """The referenced line is not in the customer's cart."""


class EmptyCartError(ValidationError):
    """Checkout or validation was attempted on a cart without items."""

    def __init__(self, message="Cart is empty"):
        super().__init__({"cart": [message]})


class InsufficientStockError(ValidationError):
    """A product does not have enough units for the requested quantity."""

    def __init__(self, product_id, available, requested):
        self.product_id = product_id
        self.available = available
        self.requested = requested
        super().__init__({"quantity": [f"Insufficient stock: {available} available, {requested} requested"]})


class ConflictError(InvalidOperationError):
    """The request collides with the current state of a resource."""


class AlreadyPaidError(ConflictError):
    """The order already carries a completed payment."""


class PaymentFailedError(ProteanException):
    """The gateway declined a charge or refund.

    The gateway's own reason is logged and stored on the payment record; the
    exception carries only a generic message for callers.
    """

    def __init__(self, payment_id=None, message="Payment processing failed"):
        self.payment_id = payment_id
        super().__init__(message)
