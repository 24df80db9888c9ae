"""Channel Entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Channel:
    """채널 엔티티.

    projection 결과에 따라 일부 필드만 채워질 수 있으므로
    id 외의 필드는 모두 optional.
    """

    id: str
    title: str | None = None
    description: str | None = None
    custom_url: str | None = None
    country: str | None = None
    published_at: datetime | None = None
    thumbnail: str | None = None
    medium_thumbnail: str | None = None
    high_thumbnail: str | None = None
    channel_type: str | None = None
    topic_id: str | None = None
    relevance_language: str | None = None
    localized_title: str | None = None
    localized_description: str | None = None
    uploads: str | None = None
    favorites: str | None = None
    likes: str | None = None
    last_upload: datetime | None = None
    count: int | None = None
    item_count: int | None = None
    playlist_count: int | None = None
    playlist_item_count: int | None = None
    playlist_video_count: int | None = None
    playlist_video_item_count: int | None = None
    blocked_regions: list[str] | None = None
