"""Domain Constants.

도메인 레이어의 상수 정의.
"""

from __future__ import annotations

from dataclasses import dataclass

from catalog.domain.enums import SortKey, VideoDuration

ID_FIELD = "id"
PUBLISHED_AT_FIELD = "published_at"

# 검색어(q)가 매칭되는 필드
TEXT_SEARCH_FIELDS: tuple[str, ...] = ("title", "description")

# no_snippet 요청 시 기본 필드에서 제외되는 대용량 텍스트 필드
SNIPPET_FIELDS: tuple[str, ...] = ("description", "localized_description")


@dataclass(frozen=True)
class DurationBucket:
    """영상 길이 구간 (초).

    하한은 include_lower에 따라 포함/미포함, 상한은 항상 미포함.
    upper가 None이면 상한 없음.
    """

    lower: int
    upper: int | None
    include_lower: bool = True

    def contains(self, seconds: float) -> bool:
        if self.include_lower:
            if seconds < self.lower:
                return False
        elif seconds <= self.lower:
            return False
        return self.upper is None or seconds < self.upper


DURATION_BUCKETS: dict[str, DurationBucket] = {
    VideoDuration.SHORT.value: DurationBucket(lower=0, upper=240, include_lower=False),
    VideoDuration.MEDIUM.value: DurationBucket(lower=240, upper=1200),
    VideoDuration.LONG.value: DurationBucket(lower=1200, upper=None),
}


def classify_duration(seconds: float | None) -> str | None:
    """재생 시간(초)이 속한 구간 이름. 어느 구간에도 없으면 None."""
    if seconds is None:
        return None
    for name, bucket in DURATION_BUCKETS.items():
        if bucket.contains(seconds):
            return name
    return None


# 엔티티별 정렬 키 → 논리 필드
_PUBLISHED_SORT: dict[str, str] = {key.value: PUBLISHED_AT_FIELD for key in SortKey}

VIDEO_SORT_FIELDS: dict[str, str] = dict(_PUBLISHED_SORT)
PLAYLIST_SORT_FIELDS: dict[str, str] = dict(_PUBLISHED_SORT)
CHANNEL_SORT_FIELDS: dict[str, str] = dict(_PUBLISHED_SORT)
