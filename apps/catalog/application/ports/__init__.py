"""Application Ports (Interfaces)."""

from catalog.application.ports.catalog_backend import CatalogBackendPort, Page
from catalog.application.ports.category_source import CategorySourcePort
from catalog.application.ports.category_store import CategoryStorePort
from catalog.application.ports.refresh_lock import RefreshLockPort

__all__ = [
    "CatalogBackendPort",
    "CategorySourcePort",
    "CategoryStorePort",
    "Page",
    "RefreshLockPort",
]
