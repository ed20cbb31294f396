"""Pricing and stock commands for products."""

from protean import handle
from protean.fields import Float, Identifier, Integer, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class UpdateProductPricing:
    product_id: Identifier(required=True)
    price: Float(required=True, min_value=0.0)
    offer_price: Float(min_value=0.0)


@catalogue.command(part_of="Product")
class AdjustStock:
    product_id: Identifier(required=True)
    quantity_change: Integer(required=True)
    reason: Text()


@catalogue.command_handler(part_of=Product)
class MerchandisingHandler:
    @handle(UpdateProductPricing)
    def update_pricing(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_pricing(command.price, command.offer_price)
        repo.add(product)

    @handle(AdjustStock)
    def adjust_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.adjust_stock(command.quantity_change, reason=command.reason)
        repo.add(product)
