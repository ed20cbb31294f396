"""Order aggregate: an immutable snapshot of a checked-out cart plus its lifecycle.

State Machine:
    PENDING → PROCESSING → SHIPPED → DELIVERED
    PENDING, PROCESSING → CANCELLED

Customers may only cancel while the order is still pending; administrators
drive every other transition. Orders are never deleted.
"""

from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from ordering import pricing
from ordering.domain import ordering
from ordering.lens import EyePower
from ordering.order.events import (
    OrderCancelled,
    OrderPaid,
    OrderPaymentStatusUpdated,
    OrderPlaced,
    OrderRefunded,
    OrderStatusChanged,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class ShippingStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


class PaymentMethod(Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    UPI = "upi"
    NET_BANKING = "net_banking"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Shipping status that follows each order status unless set explicitly
_SHIPPING_FOR_ORDER_STATUS = {
    OrderStatus.PROCESSING: ShippingStatus.PROCESSING,
    OrderStatus.SHIPPED: ShippingStatus.SHIPPED,
    OrderStatus.DELIVERED: ShippingStatus.DELIVERED,
}

# Furthest shipping status each order status allows
_SHIPPING_CEILING = {
    OrderStatus.PENDING: ShippingStatus.PENDING,
    OrderStatus.PROCESSING: ShippingStatus.PROCESSING,
    OrderStatus.SHIPPED: ShippingStatus.SHIPPED,
    OrderStatus.DELIVERED: ShippingStatus.DELIVERED,
    OrderStatus.CANCELLED: ShippingStatus.PROCESSING,
}
_SHIPPING_RANK = {status: rank for rank, status in enumerate(ShippingStatus)}

# Payment status corrections an administrator may record by hand
_PAYMENT_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.COMPLETED, PaymentStatus.FAILED},
    PaymentStatus.FAILED: {PaymentStatus.PENDING, PaymentStatus.COMPLETED},
    PaymentStatus.COMPLETED: {PaymentStatus.REFUNDED},
    PaymentStatus.REFUNDED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class Address:
    """A delivery or billing address captured at checkout time."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    country = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    phone = String(required=True, max_length=20)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A line copied from the cart at checkout; later catalogue changes never reach it."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    lens_type = String(max_length=50)
    lens_color = String(max_length=50)
    left_eye = ValueObject(EyePower)
    right_eye = ValueObject(EyePower)


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    customer_email = String(max_length=254)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(Address, required=True)
    billing_address = ValueObject(Address, required=True)
    payment_method = String(choices=PaymentMethod, required=True)
    shipping_method = String(choices=pricing.ShippingMethod, required=True)

    subtotal = Float(default=0.0)
    shipping_cost = Float(default=0.0)
    tax = Float(default=0.0)
    discount = Float(default=0.0, min_value=0.0)
    total = Float(default=0.0)
    currency = String(max_length=3, default="USD")
    notes = Text()

    order_status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    shipping_status = String(choices=ShippingStatus, default=ShippingStatus.PENDING.value)

    tracking_number = String(max_length=100)
    estimated_delivery_date = DateTime()
    payment_id = Identifier()
    transaction_id = String(max_length=100)
    checkout_id = String(max_length=100)
    paid_at = DateTime()
    delivered_at = DateTime()
    cancelled_at = DateTime()
    cancellation_reason = Text()
    refunded_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_add_up(self):
        expected = pricing.order_total(self.subtotal or 0.0, self.tax or 0.0, self.shipping_cost or 0.0, self.discount)
        if round(self.total or 0.0, 2) != expected:
            raise ValidationError({"total": ["Order total must equal subtotal + tax + shipping - discount"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        cart_items,
        subtotal,
        shipping_address,
        billing_address,
        payment_method,
        shipping_method,
        notes=None,
        discount=0.0,
        checkout_id=None,
        customer_email=None,
    ):
        """Price a set of cart lines and open a pending order for them."""
        now = datetime.now()
        shipping_cost = pricing.shipping_cost(shipping_method, subtotal)
        tax = pricing.tax(subtotal)
        total = pricing.order_total(subtotal, tax, shipping_cost, discount)

        order = cls(
            customer_id=customer_id,
            customer_email=customer_email,
            shipping_address=shipping_address,
            billing_address=billing_address,
            payment_method=payment_method,
            shipping_method=shipping_method,
            subtotal=subtotal,
            shipping_cost=shipping_cost,
            tax=tax,
            discount=discount or 0.0,
            total=total,
            notes=notes,
            checkout_id=checkout_id,
            order_status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
            shipping_status=ShippingStatus.PENDING.value,
            estimated_delivery_date=pricing.estimated_delivery_date(shipping_method, now),
            created_at=now,
            updated_at=now,
        )

        for line in cart_items:
            order.add_items(
                OrderItem(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price=line.price,
                    lens_type=line.lens_type,
                    lens_color=line.lens_color,
                    left_eye=line.left_eye,
                    right_eye=line.right_eye,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                customer_email=customer_email,
                item_count=sum(line.quantity for line in cart_items),
                subtotal=subtotal,
                shipping_cost=shipping_cost,
                tax=tax,
                total=total,
                currency=order.currency,
                shipping_method=shipping_method,
                estimated_delivery_date=order.estimated_delivery_date,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State machine helpers
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.order_status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError(
                {"order_status": [f"Cannot transition from {current.value} to {target_status.value}"]}
            )

    def is_owned_by(self, customer_id):
        return str(self.customer_id) == str(customer_id)

    # -------------------------------------------------------------------
    # Customer cancellation
    # -------------------------------------------------------------------
    def cancel(self, reason=None):
        if OrderStatus(self.order_status) != OrderStatus.PENDING:
            raise ValidationError({"order_status": [f"Order cannot be cancelled while {self.order_status}"]})

        now = datetime.now()
        self.order_status = OrderStatus.CANCELLED.value
        self.cancelled_at = now
        self.cancellation_reason = reason
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                customer_email=self.customer_email,
                reason=reason,
                cancelled_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Administrative status updates
    # -------------------------------------------------------------------
    def update_status(self, order_status, shipping_status=None, tracking_number=None, reason=None):
        try:
            target = OrderStatus(order_status)
        except ValueError:
            raise ValidationError({"order_status": [f"Unknown order status '{order_status}'"]}) from None
        if shipping_status is not None and shipping_status not in {s.value for s in ShippingStatus}:
            raise ValidationError({"shipping_status": [f"Unknown shipping status '{shipping_status}'"]})

        self._assert_can_transition(target)

        if shipping_status is not None:
            ceiling = _SHIPPING_CEILING[target]
            if _SHIPPING_RANK[ShippingStatus(shipping_status)] > _SHIPPING_RANK[ceiling]:
                message = f"Shipping status cannot be {shipping_status} while the order is {target.value}"
                raise ValidationError({"shipping_status": [message]})

        if target == OrderStatus.SHIPPED and not (tracking_number or self.tracking_number):
            raise ValidationError({"tracking_number": ["A tracking number is required to ship an order"]})

        previous = self.order_status
        now = datetime.now()

        self.order_status = target.value
        if shipping_status is not None:
            self.shipping_status = ShippingStatus(shipping_status).value
        elif target in _SHIPPING_FOR_ORDER_STATUS:
            self.shipping_status = _SHIPPING_FOR_ORDER_STATUS[target].value
        if tracking_number:
            self.tracking_number = tracking_number
        if target == OrderStatus.DELIVERED:
            self.delivered_at = now
        if target == OrderStatus.CANCELLED:
            self.cancelled_at = now
            self.cancellation_reason = reason
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                shipping_status=self.shipping_status,
                tracking_number=self.tracking_number,
                changed_at=now,
            )
        )
        if target == OrderStatus.CANCELLED:
            self.raise_(
                OrderCancelled(
                    order_id=str(self.id),
                    customer_id=str(self.customer_id),
                    customer_email=self.customer_email,
                    reason=reason,
                    cancelled_at=now,
                )
            )

    def update_payment_status(self, payment_status):
        """Record a payment outcome settled outside the gateway flow."""
        try:
            target = PaymentStatus(payment_status)
        except ValueError:
            raise ValidationError({"payment_status": [f"Unknown payment status '{payment_status}'"]}) from None

        current = PaymentStatus(self.payment_status)
        if target not in _PAYMENT_TRANSITIONS[current]:
            raise ValidationError(
                {"payment_status": [f"Cannot change payment status from {current.value} to {target.value}"]}
            )
        if target == PaymentStatus.COMPLETED and OrderStatus(self.order_status) == OrderStatus.CANCELLED:
            raise ValidationError({"payment_status": ["Cancelled orders cannot be marked as paid"]})

        now = datetime.now()
        self.payment_status = target.value
        if target == PaymentStatus.COMPLETED:
            self.paid_at = now
        if target == PaymentStatus.REFUNDED:
            self.refunded_at = now
        self.updated_at = now

        self.raise_(
            OrderPaymentStatusUpdated(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Payment linkage
    # -------------------------------------------------------------------
    def mark_paid(self, payment_id, transaction_id, paid_at=None):
        paid_at = paid_at or datetime.now()
        with atomic_change(self):
            self.payment_status = PaymentStatus.COMPLETED.value
            self.payment_id = payment_id
            self.transaction_id = transaction_id
            self.paid_at = paid_at
            self.updated_at = paid_at

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                payment_id=str(payment_id),
                transaction_id=transaction_id,
                amount=self.total,
                paid_at=paid_at,
            )
        )

    def mark_refunded(self, payment_id, amount, refunded_at=None):
        refunded_at = refunded_at or datetime.now()
        with atomic_change(self):
            self.payment_status = PaymentStatus.REFUNDED.value
            self.refunded_at = refunded_at
            self.updated_at = refunded_at

        self.raise_(
            OrderRefunded(
                order_id=str(self.id),
                payment_id=str(payment_id),
                amount=amount,
                refunded_at=refunded_at,
            )
        )
