"""In-memory catalog for development and testing."""

from ordering.catalog.port import CatalogPort, ProductSnapshot


class FakeCatalog(CatalogPort):
    """Catalog backed by a dict of snapshots keyed by product id."""

    def __init__(self, products: list[ProductSnapshot] | None = None) -> None:
        self.products: dict[str, ProductSnapshot] = {}
        for product in products or []:
            self.add(product)

    def add(self, product: ProductSnapshot) -> None:
        self.products[str(product.product_id)] = product

    def find_product(self, product_id: str) -> ProductSnapshot | None:
        return self.products.get(str(product_id))
