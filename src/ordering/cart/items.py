"""Cart item management: commands and handler."""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.cart.management import load_or_create_cart
from ordering.catalog import get_catalog
from ordering.domain import ordering
from ordering.lens import eye_power_from

logger = structlog.get_logger(__name__)


def _parse_power(raw):
    """Split a JSON ``{"left_eye": {...}, "right_eye": {...}}`` payload into EyePower values."""
    if not raw:
        return None, None
    power = json.loads(raw) if isinstance(raw, str) else raw
    return eye_power_from(power.get("left_eye")), eye_power_from(power.get("right_eye"))


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    lens_type = String(max_length=50)
    lens_color = String(max_length=50)
    power = Text()  # JSON: {"left_eye": {...}, "right_eye": {...}}


@ordering.command(part_of="ShoppingCart")
class UpdateCartItem:
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(min_value=1)
    lens_type = String(max_length=50)
    lens_color = String(max_length=50)
    power = Text()


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = get_catalog().find_active_product(str(command.product_id))
        if product is None:
            raise ObjectNotFoundError(f"Product {command.product_id} not found")

        left_eye, right_eye = _parse_power(command.power)

        repo = current_domain.repository_for(ShoppingCart)
        cart = load_or_create_cart(repo, command.customer_id)
        item = cart.add_item(
            product,
            command.quantity,
            lens_type=command.lens_type,
            lens_color=command.lens_color,
            left_eye=left_eye,
            right_eye=right_eye,
        )
        repo.add(cart)

        logger.info(
            "Item added to cart",
            customer_id=str(command.customer_id),
            product_id=str(command.product_id),
            quantity=item.quantity,
        )
        return str(item.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = load_or_create_cart(repo, command.customer_id)
        item = cart.find_item(command.item_id)

        available_stock = None
        if command.quantity is not None:
            product = get_catalog().find_active_product(str(item.product_id))
            if product is None:
                raise ObjectNotFoundError(f"Product {item.product_id} not found")
            available_stock = product.stock

        left_eye, right_eye = _parse_power(command.power)

        cart.update_item(
            command.item_id,
            quantity=command.quantity,
            available_stock=available_stock,
            lens_type=command.lens_type,
            lens_color=command.lens_color,
            left_eye=left_eye,
            right_eye=right_eye,
        )
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = load_or_create_cart(repo, command.customer_id)
        cart.remove_item(command.item_id)
        repo.add(cart)
