"""Query Builder.

검색 조건(SearchCriteria) → Query 변환과 목록 조회용 Query 조립.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from catalog.application.dto.search_criteria import SearchCriteria
from catalog.application.mapping import FieldMap
from catalog.application.query.predicates import (
    Contains,
    Match,
    Predicate,
    Query,
    Range,
    SortField,
    TextMatch,
)
from catalog.domain.constants import DURATION_BUCKETS, TEXT_SEARCH_FIELDS

EQUALITY_FIELDS: tuple[str, ...] = ("channel_type", "topic_id", "relevance_language")


def _is_set(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    return True


class QueryBuilder:
    """Query 조립기.

    비어 있는 값(None, "")은 조건으로 추가하지 않음.
    """

    def __init__(self) -> None:
        self._must: list[Predicate] = []
        self._should: list[Predicate] = []
        self._must_not: list[Predicate] = []
        self._sort: list[SortField] = []

    def match(self, field: str, value: Any) -> QueryBuilder:
        if _is_set(value):
            self._must.append(Match(field, value))
        return self

    def range(
        self,
        field: str,
        lower: Any = None,
        upper: Any = None,
        *,
        include_lower: bool = False,
        include_upper: bool = False,
    ) -> QueryBuilder:
        if lower is not None or upper is not None:
            self._must.append(
                Range(
                    field,
                    lower=lower,
                    upper=upper,
                    include_lower=include_lower,
                    include_upper=include_upper,
                )
            )
        return self

    def text(self, fields: Iterable[str], text: str | None) -> QueryBuilder:
        if _is_set(text):
            self._must.append(TextMatch(tuple(fields), text))
        return self

    def any_of(self, field: str, values: Iterable[Any]) -> QueryBuilder:
        """배열 필드가 values 중 하나라도 포함 (should 그룹)."""
        for value in values:
            if _is_set(value):
                self._should.append(Contains(field, (value,)))
        return self

    def exclude(self, field: str, value: Any) -> QueryBuilder:
        if _is_set(value):
            self._must_not.append(Match(field, value))
        return self

    def exclude_containing(self, field: str, value: Any) -> QueryBuilder:
        if _is_set(value):
            self._must_not.append(Contains(field, (value,)))
        return self

    def sort_by(self, field: str, descending: bool = True) -> QueryBuilder:
        self._sort.append(SortField(field, descending))
        return self

    def build(self) -> Query:
        return Query(
            must=tuple(self._must),
            should=tuple(self._should),
            must_not=tuple(self._must_not),
            sort=tuple(self._sort),
        )


def _published_range(
    builder: QueryBuilder,
    published_after: datetime | None,
    published_before: datetime | None,
) -> None:
    # 기존 데이터 동작 유지: before가 하한(미포함), after가 상한(포함)
    if published_before and published_after:
        builder.range(
            "published_at",
            lower=published_before,
            upper=published_after,
            include_upper=True,
        )
    elif published_after:
        builder.range("published_at", upper=published_after, include_upper=True)
    elif published_before:
        builder.range("published_at", lower=published_before)


def build_search_query(
    criteria: SearchCriteria,
    sort_fields: Mapping[str, str] | None = None,
    *,
    channel_id_field: str = "channel_id",
) -> Query:
    """검색 조건 → Query.

    Args:
        criteria: 영상/재생목록/채널 검색 조건
        sort_fields: 정렬 키 → 논리 필드 매핑 (없는 키는 그대로 사용)
        channel_id_field: channel_id 조건을 적용할 필드 (채널 검색은 "id")

    Returns:
        Query
    """
    builder = QueryBuilder()

    builder.text(TEXT_SEARCH_FIELDS, criteria.q)

    duration = getattr(criteria, "video_duration", None)
    bucket = DURATION_BUCKETS.get(duration) if duration else None
    if bucket is not None:
        builder.range(
            "duration",
            lower=bucket.lower,
            upper=bucket.upper,
            include_lower=bucket.include_lower,
        )

    _published_range(builder, criteria.published_after, criteria.published_before)

    builder.exclude_containing("blocked_regions", criteria.region_code)

    builder.match(channel_id_field, criteria.channel_id)
    for name in EQUALITY_FIELDS:
        builder.match(name, getattr(criteria, name, None))

    if criteria.sort:
        builder.sort_by(FieldMap(sort_fields).to_storage(criteria.sort))

    return builder.build()
