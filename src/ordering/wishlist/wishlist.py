"""Wishlist aggregate: the products a customer saved for later, one list per customer."""

from datetime import datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, HasMany, Identifier

from ordering.domain import ordering
from ordering.errors import ConflictError


@ordering.entity(part_of="Wishlist")
class WishlistEntry:
    product_id = Identifier(required=True)
    added_at = DateTime()


@ordering.aggregate
class Wishlist:
    customer_id = Identifier(identifier=True)
    entries = HasMany(WishlistEntry)
    updated_at = DateTime()

    @classmethod
    def create(cls, customer_id):
        return cls(customer_id=customer_id, updated_at=datetime.now())

    @property
    def product_ids(self):
        return [str(e.product_id) for e in self.entries]

    def _entry_for(self, product_id):
        return next((e for e in self.entries if str(e.product_id) == str(product_id)), None)

    def contains(self, product_id):
        return self._entry_for(product_id) is not None

    def add_product(self, product_id):
        if self._entry_for(product_id) is not None:
            raise ConflictError({"product_id": ["Product already in wishlist"]})

        now = datetime.now()
        self.add_entries(WishlistEntry(product_id=product_id, added_at=now))
        self.updated_at = now

    def remove_product(self, product_id):
        entry = self._entry_for(product_id)
        if entry is None:
            raise ObjectNotFoundError(f"Product {product_id} is not in the wishlist")

        self.remove_entries(entry)
        self.updated_at = datetime.now()

    def clear(self):
        for entry in list(self.entries):
            self.remove_entries(entry)
        self.updated_at = datetime.now()
