"""Schema management for SQL-backed providers.

The memory provider needs no schema, so both functions skip it. Used by
``manage.py`` for the catalogue and ordering domains alike.
"""

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

logger = structlog.get_logger(__name__)

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for name, provider in domain.providers.items():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield name, provider


def setup_db(domain: Domain) -> int:
    """Create tables for every aggregate and entity; returns the number of providers touched."""
    touched = 0
    with domain.domain_context():
        for name, provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])

            # Building each DAO registers its table on the provider's metadata
            records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
            for record in records:
                if record.cls.meta_.provider == name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)
            logger.info("Database schema created", domain=domain.name, provider=name)
            touched += 1
    return touched


def drop_db(domain: Domain) -> int:
    """Drop all tables known to each SQL provider; returns the number of providers touched."""
    touched = 0
    with domain.domain_context():
        for name, provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            logger.info("Database schema dropped", domain=domain.name, provider=name)
            touched += 1
    return touched
