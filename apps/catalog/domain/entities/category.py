"""Video Category Entities."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class VideoCategory:
    """영상 카테고리.

    assignable이 True인 카테고리만 영상에 지정 가능.
    """

    id: str
    title: str
    assignable: bool = False
    channel_id: str | None = None


@dataclass(frozen=True)
class CategoryCollection:
    """지역별 카테고리 캐시 레코드.

    Attributes:
        id: 지역 코드 (예: "US", "KR")
        data: assignable 카테고리 목록
    """

    id: str
    data: list[VideoCategory] = field(default_factory=list)
