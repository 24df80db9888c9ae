"""Application Services."""

from catalog.application.services.catalog_service import CatalogService
from catalog.application.services.list_orchestrator import ListOrchestrator

__all__ = ["CatalogService", "ListOrchestrator"]
