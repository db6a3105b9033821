"""Schema management for SQL-backed providers.

The default configuration keeps everything in memory, in which case both
helpers are no-ops. With a sqlite or postgresql provider configured, DAOs are
touched first so that Protean registers their tables on the provider metadata.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    return [
        provider for provider in domain.providers.values() if provider.conn_info["provider"] in SQL_PROVIDERS
    ]


def setup_db(domain: Domain) -> list[str]:
    """Create tables for baskets, products and discounts. Returns the provider names touched."""
    prepared = []
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])

            records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
            for record in records:
                if record.cls.meta_.provider == provider.name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)
            prepared.append(provider.name)
    return prepared


def drop_db(domain: Domain) -> list[str]:
    """Drop every table known to the SQL providers. Returns the provider names touched."""
    dropped = []
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            dropped.append(provider.name)
    return dropped
