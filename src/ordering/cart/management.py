"""Cart lifecycle: lazy creation, clearing and validation against the catalogue."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.catalog import get_catalog
from ordering.domain import ordering
from ordering.errors import EmptyCartError

logger = structlog.get_logger(__name__)


def load_or_create_cart(repo, customer_id):
    """Return the customer's cart, creating an empty one when absent.

    The new cart is registered with ``repo`` but the caller decides when to
    persist it.
    """
    try:
        return repo.get(customer_id)
    except ObjectNotFoundError:
        logger.info("Cart created", customer_id=str(customer_id))
        return ShoppingCart.create(customer_id=customer_id)


def get_or_create_cart(customer_id):
    """Fetch the customer's cart, persisting a new empty one on first access."""
    repo = current_domain.repository_for(ShoppingCart)
    try:
        return repo.get(customer_id)
    except ObjectNotFoundError:
        cart = ShoppingCart.create(customer_id=customer_id)
        repo.add(cart)
        logger.info("Cart created", customer_id=str(customer_id))
        return cart


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    """Remove every item from the customer's cart."""

    customer_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class ValidateCart:
    """Check the cart against live product data and re-price drifted lines."""

    customer_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = load_or_create_cart(repo, command.customer_id)
        cart.clear()
        repo.add(cart)

    @handle(ValidateCart)
    def validate_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        try:
            cart = repo.get(command.customer_id)
        except ObjectNotFoundError:
            raise EmptyCartError() from None

        if not cart.items:
            raise EmptyCartError()

        catalog = get_catalog()
        products = {str(i.product_id): catalog.find_product(str(i.product_id)) for i in cart.items}

        result = cart.validate_against(products)
        repo.add(cart)

        if not result.is_valid:
            logger.info(
                "Cart validation found problems",
                customer_id=str(command.customer_id),
                error_count=len(result.errors),
            )

        return {
            "is_valid": result.is_valid,
            "errors": result.errors,
            "updated_items": result.updated_items,
        }
