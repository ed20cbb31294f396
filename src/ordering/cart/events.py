"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Float, Identifier, Integer

from ordering.domain import ordering


@ordering.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the shopping cart, or its line grew."""

    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    price = Float(required=True)


@ordering.event(part_of="ShoppingCart")
class CartItemUpdated:
    """The quantity or lens options of a cart item changed."""

    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartItemRemoved:
    """An item was removed from the shopping cart."""

    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)


@ordering.event(part_of="ShoppingCart")
class CartCleared:
    """Every item was removed from the cart, by the customer or at checkout."""

    customer_id = Identifier(required=True)
    items_removed = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartRepriced:
    """Validation corrected line prices that drifted from the catalogue."""

    customer_id = Identifier(required=True)
    items_repriced = Integer(required=True)
    total_amount = Float(required=True)
