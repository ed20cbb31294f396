"""Catalog adapter reading products from the catalogue domain."""

from protean import UnitOfWork
from protean.exceptions import ObjectNotFoundError

from ordering.catalog.port import CatalogPort, ProductSnapshot


class CatalogueAdapter(CatalogPort):
    """Looks products up in the catalogue domain's Product repository.

    Each lookup pushes the catalogue's domain context and its own unit of
    work, so it can run inside an ordering command handler without sharing
    the handler's sessions.
    """

    def __init__(self, domain=None) -> None:
        if domain is None:
            from catalogue.domain import catalogue

            domain = catalogue
        self.domain = domain

    def find_product(self, product_id: str) -> ProductSnapshot | None:
        from catalogue.product.product import Product

        with self.domain.domain_context(), UnitOfWork():
            try:
                product = self.domain.repository_for(Product).get(product_id)
            except ObjectNotFoundError:
                return None

            return ProductSnapshot(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                offer_price=product.offer_price,
                stock=product.stock or 0,
                is_active=bool(product.is_active),
            )
