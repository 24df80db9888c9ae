"""Cassandra Persistence (Lucene index)."""

from catalog.infrastructure.persistence_cassandra.cassandra_catalog_backend import (
    CassandraCatalogBackend,
)
from catalog.infrastructure.persistence_cassandra.cassandra_category_store import (
    CassandraCategoryStore,
)
from catalog.infrastructure.persistence_cassandra.lucene_query import to_lucene
from catalog.infrastructure.persistence_cassandra.session import (
    create_cluster,
    execute_async,
)

__all__ = [
    "CassandraCatalogBackend",
    "CassandraCategoryStore",
    "create_cluster",
    "execute_async",
    "to_lucene",
]
