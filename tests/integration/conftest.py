"""Fixtures for cross-domain integration tests.

These tests run the ordering domain against the real catalogue domain
instead of the in-memory catalog.
"""

import pytest


@pytest.fixture(autouse=True)
def ordering_ctx(ordering_bed):
    """Push the ordering domain context for each test."""
    with ordering_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def catalogue_domain(_catalogue_domain):
    """The catalogue domain, with its data cleaned up after each test."""
    yield _catalogue_domain

    with _catalogue_domain.domain_context():
        for _, provider in _catalogue_domain.providers.items():
            provider._data_reset()

        _catalogue_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def _fake_ports():
    from ordering.gateway import set_gateway
    from ordering.gateway.fake_adapter import FakeGateway
    from ordering.mailer import set_mailer
    from ordering.mailer.fake_adapter import FakeEmailAdapter

    set_gateway(FakeGateway())
    set_mailer(FakeEmailAdapter())


@pytest.fixture()
def create_product(catalogue_domain):
    """Create a product in the catalogue domain and return its id."""
    from catalogue.product.creation import CreateProduct

    def _create(**overrides):
        fields = {"name": "Aviator Classic", "frame_type": "sunglasses", "price": 60.0, "stock": 5}
        fields.update(overrides)
        with catalogue_domain.domain_context():
            return catalogue_domain.process(CreateProduct(**fields), asynchronous=False)

    return _create
