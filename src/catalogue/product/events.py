"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductCreated:
    """A new eyewear product was added to the catalogue."""

    product_id: Identifier(required=True)
    name: String(required=True)
    frame_type: String(required=True)
    price: Float(required=True)
    offer_price: Float()
    stock: Integer()
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductPriceChanged:
    """The list price or offer price of a product changed."""

    product_id: Identifier(required=True)
    previous_price: Float(required=True)
    previous_offer_price: Float()
    new_price: Float(required=True)
    new_offer_price: Float()


@catalogue.event(part_of="Product")
class StockAdjusted:
    """Units were added to or removed from a product's stock."""

    product_id: Identifier(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
    reason: Text()


@catalogue.event(part_of="Product")
class ProductActivated:
    """A product became available for purchase."""

    product_id: Identifier(required=True)


@catalogue.event(part_of="Product")
class ProductDeactivated:
    """A product was withdrawn from sale."""

    product_id: Identifier(required=True)
