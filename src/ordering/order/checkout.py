"""Checkout: converts the customer's cart into an Order.

The new order and the emptied cart are written by the same handler, so they
commit or roll back together. A client-supplied ``checkout_id`` makes the
command safe to retry: a second attempt returns the order created by the
first instead of placing another one.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering import pricing
from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering
from ordering.errors import EmptyCartError
from ordering.order.order import Address, Order

logger = structlog.get_logger(__name__)


def _address_from(raw, field_name):
    data = json.loads(raw) if isinstance(raw, str) else raw
    if not isinstance(data, dict):
        raise ValidationError({field_name: ["Address must be an object"]})
    return Address(
        street=data.get("street"),
        city=data.get("city"),
        state=data.get("state"),
        country=data.get("country"),
        zip_code=data.get("zip_code"),
        phone=data.get("phone"),
    )


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    customer_email = String(max_length=254)
    shipping_address = Text(required=True)  # JSON: Address fields
    billing_address = Text(required=True)  # JSON: Address fields
    payment_method = String(required=True, max_length=20)
    shipping_method = String(required=True, max_length=20)
    notes = Text()
    checkout_id = String(max_length=100)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order_repo = current_domain.repository_for(Order)

        if command.checkout_id:
            existing = (
                order_repo._dao.query.filter(
                    customer_id=str(command.customer_id),
                    checkout_id=command.checkout_id,
                )
                .all()
                .items
            )
            if existing:
                logger.info(
                    "Checkout already completed, returning existing order",
                    customer_id=str(command.customer_id),
                    order_id=str(existing[0].id),
                    checkout_id=command.checkout_id,
                )
                return str(existing[0].id)

        if not pricing.is_known_shipping_method(command.shipping_method):
            raise ValidationError({"shipping_method": [f"Unknown shipping method '{command.shipping_method}'"]})

        cart_repo = current_domain.repository_for(ShoppingCart)
        try:
            cart = cart_repo.get(command.customer_id)
        except ObjectNotFoundError:
            raise EmptyCartError() from None
        if not cart.items or cart.total_items == 0:
            raise EmptyCartError()

        order = Order.place(
            customer_id=command.customer_id,
            cart_items=list(cart.items),
            subtotal=cart.total_amount,
            shipping_address=_address_from(command.shipping_address, "shipping_address"),
            billing_address=_address_from(command.billing_address, "billing_address"),
            payment_method=command.payment_method,
            shipping_method=command.shipping_method,
            notes=command.notes,
            checkout_id=command.checkout_id,
            customer_email=command.customer_email,
        )
        order_repo.add(order)

        cart.clear()
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            customer_id=str(command.customer_id),
            order_id=str(order.id),
            total=order.total,
        )
        return str(order.id)
