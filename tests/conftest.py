import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the domain.toml overlay before any domain module is imported.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _catalogue_domain():
    """Initialize the catalogue domain once per session."""
    from catalogue.domain import catalogue

    catalogue.init()
    return catalogue


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering
    from protean.integrations.pytest import DomainFixture

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _reset_ports():
    """Restore the default catalog, gateway and mailer after every test."""
    yield

    from ordering.catalog import reset_catalog
    from ordering.gateway import reset_gateway
    from ordering.mailer import reset_mailer

    reset_catalog()
    reset_gateway()
    reset_mailer()
