"""Catalog factory.

Provides get_catalog() / set_catalog() to swap implementations:
- CatalogueAdapter reading the catalogue domain (default)
- FakeCatalog for testing
"""

from ordering.catalog.catalogue_adapter import CatalogueAdapter
from ordering.catalog.port import CatalogPort

_current_catalog: CatalogPort | None = None


def get_catalog() -> CatalogPort:
    """Return the current catalog. Defaults to the catalogue domain adapter."""
    global _current_catalog
    if _current_catalog is None:
        _current_catalog = CatalogueAdapter()
    return _current_catalog


def set_catalog(catalog: CatalogPort) -> None:
    """Override the active catalog (useful for tests)."""
    global _current_catalog
    _current_catalog = catalog


def reset_catalog() -> None:
    """Reset to the default catalog."""
    global _current_catalog
    _current_catalog = None
