"""Wishlist commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.catalog import get_catalog
from ordering.domain import ordering
from ordering.wishlist.wishlist import Wishlist

logger = structlog.get_logger(__name__)


def _load_or_create(repo, customer_id):
    try:
        return repo.get(customer_id)
    except ObjectNotFoundError:
        return Wishlist.create(customer_id)


@ordering.command(part_of="Wishlist")
class AddToWishlist:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command(part_of="Wishlist")
class RemoveFromWishlist:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command(part_of="Wishlist")
class ClearWishlist:
    customer_id = Identifier(required=True)


@ordering.command_handler(part_of=Wishlist)
class ManageWishlistHandler:
    @handle(AddToWishlist)
    def add_to_wishlist(self, command):
        if get_catalog().find_active_product(str(command.product_id)) is None:
            raise ObjectNotFoundError(f"Product {command.product_id} not found")

        repo = current_domain.repository_for(Wishlist)
        wishlist = _load_or_create(repo, command.customer_id)
        wishlist.add_product(command.product_id)
        repo.add(wishlist)

        logger.info(
            "Product added to wishlist",
            customer_id=str(command.customer_id),
            product_id=str(command.product_id),
        )

    @handle(RemoveFromWishlist)
    def remove_from_wishlist(self, command):
        repo = current_domain.repository_for(Wishlist)
        try:
            wishlist = repo.get(command.customer_id)
        except ObjectNotFoundError:
            raise ObjectNotFoundError("Wishlist not found") from None

        wishlist.remove_product(command.product_id)
        repo.add(wishlist)

    @handle(ClearWishlist)
    def clear_wishlist(self, command):
        repo = current_domain.repository_for(Wishlist)
        try:
            wishlist = repo.get(command.customer_id)
        except ObjectNotFoundError:
            return

        wishlist.clear()
        repo.add(wishlist)
