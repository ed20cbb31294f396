import pytest
from ordering.catalog import set_catalog
from ordering.catalog.fake_adapter import FakeCatalog
from ordering.catalog.port import ProductSnapshot
from ordering.gateway import set_gateway
from ordering.gateway.fake_adapter import FakeGateway
from ordering.mailer import set_mailer
from ordering.mailer.fake_adapter import FakeEmailAdapter

AVIATOR = ProductSnapshot(product_id="prod-aviator", name="Aviator Classic", price=60.0, offer_price=50.0, stock=10)
READER = ProductSnapshot(product_id="prod-reader", name="Round Reader", price=80.0, stock=3)
LAST_ONE = ProductSnapshot(product_id="prod-last", name="Limited Edition", price=120.0, stock=1)
RETIRED = ProductSnapshot(product_id="prod-retired", name="Retired Frame", price=40.0, stock=5, is_active=False)


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def catalog():
    fake = FakeCatalog([AVIATOR, READER, LAST_ONE, RETIRED])
    set_catalog(fake)
    return fake


@pytest.fixture(autouse=True)
def gateway():
    fake = FakeGateway()
    set_gateway(fake)
    return fake


@pytest.fixture(autouse=True)
def mailer():
    fake = FakeEmailAdapter()
    set_mailer(fake)
    return fake


@pytest.fixture()
def address():
    return {
        "street": "12 Harbour Road",
        "city": "Mumbai",
        "state": "MH",
        "country": "India",
        "zip_code": "400001",
        "phone": "+91-9800000000",
    }
