"""Search Criteria DTOs.

엔티티별 검색 조건. 모든 필드는 optional이며
None 또는 빈 문자열은 "해당 조건 없음"을 의미.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SearchCriteria:
    """공통 검색 조건.

    Attributes:
        q: 제목/설명 부분 일치 검색어 (대소문자 무시)
        published_after: 게시일 조건 (하단 참고)
        published_before: 게시일 조건
        region_code: 차단 지역 제외 조건 (포함 조건 아님)
        channel_id: 채널 ID 일치
        relevance_language: 언어 일치
        sort: "date" | "relevance" | "rating" | "viewCount"

    게시일 조건은 기존 데이터 동작을 유지하여
    (published_before, published_after] 구간으로 해석됨.
    """

    q: str | None = None
    published_after: datetime | None = None
    published_before: datetime | None = None
    region_code: str | None = None
    channel_id: str | None = None
    relevance_language: str | None = None
    sort: str | None = None


@dataclass(frozen=True)
class VideoSearchCriteria(SearchCriteria):
    """영상 검색 조건."""

    video_duration: str | None = None
    channel_type: str | None = None
    topic_id: str | None = None


@dataclass(frozen=True)
class PlaylistSearchCriteria(SearchCriteria):
    """재생목록 검색 조건."""

    channel_type: str | None = None


@dataclass(frozen=True)
class ChannelSearchCriteria(SearchCriteria):
    """채널 검색 조건.

    channel_id는 외래키가 아닌 채널 자신의 id와 매칭됨.
    """

    channel_type: str | None = None
    topic_id: str | None = None
