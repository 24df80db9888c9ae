"""External Integrations."""

from catalog.infrastructure.integrations.youtube import YoutubeCategoryClient

__all__ = ["YoutubeCategoryClient"]
