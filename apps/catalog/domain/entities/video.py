"""Video Entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from catalog.domain.constants import classify_duration


@dataclass(frozen=True)
class Video:
    """영상 엔티티.

    Attributes:
        duration: 재생 시간 (초)
        blocked_regions: 재생이 차단된 지역 코드 목록
    """

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
    tags: list[str] | None = None
    category_id: str | None = None
    duration: int | None = None
    dimension: str | None = None
    definition: str | None = None
    caption: str | None = None
    licensed_content: bool | None = None
    projection: str | None = None
    default_language: str | None = None
    default_audio_language: str | None = None
    live_broadcast_content: str | None = None
    allowed_regions: list[str] | None = None
    blocked_regions: list[str] | None = None
    channel_type: str | None = None
    topic_id: str | None = None
    relevance_language: str | None = None

    @property
    def duration_bucket(self) -> str | None:
        """재생 시간 구간 ("short" | "medium" | "long")."""
        return classify_duration(self.duration)


@dataclass(frozen=True)
class PlaylistVideo:
    """재생목록/채널 목록용 영상 요약.

    video_owner_* 필드는 영상 저장소의 채널 필드에서 매핑됨.
    """

    id: str
    title: str | None = None
    description: str | None = None
    published_at: datetime | None = None
    video_owner_channel_id: str | None = None
    video_owner_channel_title: str | None = None
    localized_title: str | None = None
    localized_description: str | None = None
    thumbnail: str | None = None
    medium_thumbnail: str | None = None
    high_thumbnail: str | None = None
    standard_thumbnail: str | None = None
    maxres_thumbnail: str | None = None
