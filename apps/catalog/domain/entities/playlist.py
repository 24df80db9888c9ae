"""Playlist Entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Playlist:
    """재생목록 엔티티."""

    id: str
    channel_id: str | None = None
    channel_title: str | None = None
    title: str | None = None
    description: str | None = None
    localized_title: str | None = None
    localized_description: str | None = None
    published_at: datetime | None = None
    thumbnail: str | None = None
    medium_thumbnail: str | None = None
    high_thumbnail: str | None = None
    standard_thumbnail: str | None = None
    maxres_thumbnail: str | None = None
    count: int | None = None
    item_count: int | None = None
    channel_type: str | None = None
    relevance_language: str | None = None
    blocked_regions: list[str] | None = None
