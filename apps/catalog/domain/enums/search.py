"""검색 조건 Enum."""

from enum import Enum


class VideoDuration(str, Enum):
    """영상 길이 구간."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class SortKey(str, Enum):
    """검색 정렬 키.

    현재는 모두 게시일 내림차순으로 해석됨.
    """

    DATE = "date"
    RELEVANCE = "relevance"
    RATING = "rating"
    VIEW_COUNT = "viewCount"
