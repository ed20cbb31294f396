"""Shopping Cart aggregate: one persistent cart per customer.

The cart is keyed by the customer id, so a customer can never own two carts.
Line prices are snapshots of the product's effective price taken when the
line is added; they are only corrected again by an explicit validation.
Totals are derived from the lines on every mutation and checked by a post
invariant.
"""

from dataclasses import dataclass, field
from datetime import datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartItemUpdated,
    CartRepriced,
)
from ordering.domain import ordering
from ordering.errors import CartItemNotFoundError, InsufficientStockError
from ordering.lens import EyePower


@dataclass
class CartValidation:
    """Outcome of checking a cart against the live catalogue."""

    is_valid: bool = True
    errors: list[dict] = field(default_factory=list)
    updated_items: list[dict] = field(default_factory=list)


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    lens_type = String(max_length=50)
    lens_color = String(max_length=50)
    left_eye = ValueObject(EyePower)
    right_eye = ValueObject(EyePower)
    added_at = DateTime()

    @property
    def line_total(self):
        return self.price * self.quantity


@ordering.aggregate
class ShoppingCart:
    customer_id = Identifier(identifier=True)
    items = HasMany(CartItem)
    total_items = Integer(default=0)
    total_amount = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def totals_must_match_items(self):
        expected_items = sum(i.quantity for i in self.items)
        expected_amount = round(sum(i.price * i.quantity for i in self.items), 2)
        if self.total_items != expected_items or round(self.total_amount or 0.0, 2) != expected_amount:
            raise ValidationError({"totals": ["Cart totals do not match its items"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id):
        now = datetime.now()
        return cls(
            customer_id=customer_id,
            total_items=0,
            total_amount=0.0,
            created_at=now,
            updated_at=now,
        )

    def _recalculate_totals(self):
        self.total_items = sum(i.quantity for i in self.items)
        self.total_amount = round(sum(i.price * i.quantity for i in self.items), 2)
        self.updated_at = datetime.now()

    def find_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise CartItemNotFoundError(f"Item {item_id} not found in cart")
        return item

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity, lens_type=None, lens_color=None, left_eye=None, right_eye=None):
        """Add ``quantity`` units of a product, merging into an existing line.

        ``product`` is a catalog snapshot; its effective price becomes the
        line price, replacing any older snapshot on a merged line.
        """
        existing = next((i for i in self.items if str(i.product_id) == str(product.product_id)), None)
        already_in_cart = existing.quantity if existing else 0

        if product.stock < already_in_cart + quantity:
            raise InsufficientStockError(product.product_id, product.stock, already_in_cart + quantity)

        with atomic_change(self):
            if existing:
                existing.quantity = already_in_cart + quantity
                existing.price = product.effective_price
                if lens_type is not None:
                    existing.lens_type = lens_type
                if lens_color is not None:
                    existing.lens_color = lens_color
                if left_eye is not None:
                    existing.left_eye = left_eye
                if right_eye is not None:
                    existing.right_eye = right_eye
                item = existing
            else:
                item = CartItem(
                    product_id=product.product_id,
                    quantity=quantity,
                    price=product.effective_price,
                    lens_type=lens_type,
                    lens_color=lens_color,
                    left_eye=left_eye,
                    right_eye=right_eye,
                    added_at=datetime.now(),
                )
                self.add_items(item)

            self._recalculate_totals()

        self.raise_(
            CartItemAdded(
                customer_id=str(self.customer_id),
                item_id=str(item.id),
                product_id=str(product.product_id),
                quantity=item.quantity,
                price=item.price,
            )
        )
        return item

    def update_item(
        self,
        item_id,
        quantity=None,
        available_stock=None,
        lens_type=None,
        lens_color=None,
        left_eye=None,
        right_eye=None,
    ):
        """Change a line's quantity and/or lens options.

        When ``quantity`` is given, ``available_stock`` must be the product's
        current stock.
        """
        item = self.find_item(item_id)

        if quantity is not None and available_stock is not None and available_stock < quantity:
            raise InsufficientStockError(item.product_id, available_stock, quantity)

        previous_quantity = item.quantity
        with atomic_change(self):
            if quantity is not None:
                item.quantity = quantity
            if lens_type is not None:
                item.lens_type = lens_type
            if lens_color is not None:
                item.lens_color = lens_color
            if left_eye is not None:
                item.left_eye = left_eye
            if right_eye is not None:
                item.right_eye = right_eye
            self._recalculate_totals()

        self.raise_(
            CartItemUpdated(
                customer_id=str(self.customer_id),
                item_id=str(item.id),
                previous_quantity=previous_quantity,
                new_quantity=item.quantity,
            )
        )
        return item

    def remove_item(self, item_id):
        """Remove a line. Removing a line that is not there is an error."""
        item = self.find_item(item_id)

        with atomic_change(self):
            self.remove_items(item)
            self._recalculate_totals()

        self.raise_(
            CartItemRemoved(
                customer_id=str(self.customer_id),
                item_id=str(item_id),
            )
        )

    def clear(self):
        """Empty the cart. Clearing an empty cart is a no-op."""
        items = list(self.items)
        if not items:
            return

        with atomic_change(self):
            for item in items:
                self.remove_items(item)
            self._recalculate_totals()

        self.raise_(
            CartCleared(
                customer_id=str(self.customer_id),
                items_removed=len(items),
            )
        )

    # -------------------------------------------------------------------
    # Validation against the catalogue
    # -------------------------------------------------------------------
    def validate_against(self, products):
        """Check every line against catalog snapshots keyed by product id.

        Missing or inactive products and short stock are reported without
        touching the line. Lines whose price drifted from the current
        effective price are re-priced in place.
        """
        result = CartValidation()
        repriced = 0

        with atomic_change(self):
            for item in self.items:
                product = products.get(str(item.product_id))
                if product is None or not product.is_active:
                    result.errors.append(
                        {
                            "item_id": str(item.id),
                            "product_id": str(item.product_id),
                            "error": "Product is no longer available",
                        }
                    )
                    continue

                if product.stock < item.quantity:
                    result.errors.append(
                        {
                            "item_id": str(item.id),
                            "product_id": str(item.product_id),
                            "error": f"Only {product.stock} items available in stock",
                        }
                    )

                if item.price != product.effective_price:
                    result.updated_items.append(
                        {
                            "item_id": str(item.id),
                            "product_id": str(item.product_id),
                            "old_price": item.price,
                            "new_price": product.effective_price,
                        }
                    )
                    item.price = product.effective_price
                    repriced += 1

            self._recalculate_totals()

        result.is_valid = not result.errors

        if repriced:
            self.raise_(
                CartRepriced(
                    customer_id=str(self.customer_id),
                    items_repriced=repriced,
                    total_amount=self.total_amount,
                )
            )
        return result
