"""Catalog Domain Layer."""

from catalog.domain.constants import DURATION_BUCKETS, classify_duration
from catalog.domain.entities import (
    CategoryCollection,
    Channel,
    Playlist,
    PlaylistVideo,
    Video,
    VideoCategory,
)
from catalog.domain.enums import SortKey, VideoDuration

__all__ = [
    "CategoryCollection",
    "Channel",
    "DURATION_BUCKETS",
    "Playlist",
    "PlaylistVideo",
    "SortKey",
    "Video",
    "VideoCategory",
    "VideoDuration",
    "classify_duration",
]
