"""Catalog port: the read-only view of products the ordering side relies on.

Carts, checkout and wishlists need a product's current price, stock and
availability. They get it through this interface so the ordering domain
never loads catalogue aggregates itself.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ordering.pricing import effective_price


@dataclass(frozen=True)
class ProductSnapshot:
    """Point-in-time view of a product."""

    product_id: str
    name: str
    price: float
    offer_price: float | None = None
    stock: int = 0
    is_active: bool = True

    @property
    def effective_price(self) -> float:
        return effective_price(self.price, self.offer_price)


class CatalogPort(ABC):
    """Abstract product catalog interface."""

    @abstractmethod
    def find_product(self, product_id: str) -> ProductSnapshot | None:
        """Return the product regardless of availability, or None when unknown."""
        ...

    def find_active_product(self, product_id: str) -> ProductSnapshot | None:
        """Return the product only when it exists and is on sale."""
        product = self.find_product(product_id)
        if product is None or not product.is_active:
            return None
        return product
