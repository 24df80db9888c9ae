"""MongoDB Persistence."""

from catalog.infrastructure.persistence_mongo.mongo_catalog_backend import (
    MongoCatalogBackend,
)
from catalog.infrastructure.persistence_mongo.mongo_category_store import (
    MongoCategoryStore,
)
from catalog.infrastructure.persistence_mongo.mongo_query import MongoQuery, to_mongo

__all__ = [
    "MongoCatalogBackend",
    "MongoCategoryStore",
    "MongoQuery",
    "to_mongo",
]
