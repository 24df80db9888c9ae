"""YouTube Data API Integration."""

from catalog.infrastructure.integrations.youtube.youtube_category_client import (
    YoutubeCategoryClient,
)

__all__ = ["YoutubeCategoryClient"]
