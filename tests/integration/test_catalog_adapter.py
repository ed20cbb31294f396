"""The ordering domain reading live products from the catalogue domain."""

import pytest
from catalogue.product.lifecycle import DeactivateProduct
from catalogue.product.merchandising import UpdateProductPricing
from ordering.cart.cart import ShoppingCart
from ordering.cart.items import AddToCart
from ordering.cart.management import ValidateCart
from ordering.catalog import get_catalog
from ordering.catalog.catalogue_adapter import CatalogueAdapter
from ordering.errors import InsufficientStockError
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain


class TestCatalogueAdapter:
    def test_default_catalog_reads_the_catalogue(self):
        assert isinstance(get_catalog(), CatalogueAdapter)

    def test_snapshot_of_a_product(self, create_product):
        product_id = create_product(offer_price=45.0, stock=3)

        snapshot = CatalogueAdapter().find_product(product_id)

        assert snapshot.product_id == product_id
        assert snapshot.name == "Aviator Classic"
        assert snapshot.price == 60.0
        assert snapshot.effective_price == 45.0
        assert snapshot.stock == 3
        assert snapshot.is_active is True

    def test_unknown_product(self):
        assert CatalogueAdapter().find_product("missing") is None

    def test_inactive_product_is_hidden_from_shoppers(self, create_product, catalogue_domain):
        product_id = create_product()
        with catalogue_domain.domain_context():
            catalogue_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)

        adapter = CatalogueAdapter()
        assert adapter.find_product(product_id).is_active is False
        assert adapter.find_active_product(product_id) is None


class TestCartAgainstCatalogue:
    def _add(self, product_id, quantity=1):
        current_domain.process(
            AddToCart(customer_id="cust-001", product_id=product_id, quantity=quantity),
            asynchronous=False,
        )

    def test_add_uses_the_catalogue_price_and_stock(self, create_product):
        product_id = create_product(offer_price=50.0, stock=2)

        self._add(product_id, 2)

        cart = current_domain.repository_for(ShoppingCart).get("cust-001")
        assert cart.total_amount == 100.0

        with pytest.raises(InsufficientStockError):
            self._add(product_id, 1)

    def test_inactive_product_cannot_be_added(self, create_product, catalogue_domain):
        product_id = create_product()
        with catalogue_domain.domain_context():
            catalogue_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            self._add(product_id)

    def test_validation_picks_up_price_changes(self, create_product, catalogue_domain):
        product_id = create_product()
        self._add(product_id)
        with catalogue_domain.domain_context():
            catalogue_domain.process(UpdateProductPricing(product_id=product_id, price=70.0), asynchronous=False)

        result = current_domain.process(ValidateCart(customer_id="cust-001"), asynchronous=False)

        assert result["updated_items"][0]["new_price"] == 70.0
        assert current_domain.repository_for(ShoppingCart).get("cust-001").total_amount == 70.0
