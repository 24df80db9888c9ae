"""Lucene Index Query.

Query → Cassandra Lucene 인덱스 검색 JSON 변환.

형식:
    {
        "filter": {"type": "boolean", "must": [...], "not": [...]},
        "sort": [{"field": "publishedat", "reverse": true}]
    }

비어 있는 그룹(must, not, filter, sort)은 생략.
결과 JSON은 expr(<index>, %s)의 바인드 값으로 전달.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from catalog.application.mapping import FieldMap
from catalog.application.query import (
    Contains,
    Match,
    Predicate,
    Query,
    Range,
    TextMatch,
)

_WILDCARD_SPECIALS = ("\\", "*", "?")


def escape_wildcard(text: str) -> str:
    """와일드카드 메타문자 이스케이프."""
    for char in _WILDCARD_SPECIALS:
        text = text.replace(char, f"\\{char}")
    return text


def format_value(value: Any) -> Any:
    """인덱스 날짜 형식: "yyyy-MM-dd HH:mm:ss.SSSZ" (UTC)."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%d %H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
    return value


def _text_conditions(field: str, text: str) -> list[dict[str, Any]]:
    """부분 일치를 근사하기 위한 phrase/prefix/wildcard 조합."""
    escaped = escape_wildcard(text)
    return [
        {"type": "phrase", "field": field, "value": text},
        {"type": "prefix", "field": field, "value": text},
        {"type": "wildcard", "field": field, "value": f"*{escaped}"},
        {"type": "wildcard", "field": field, "value": f"{escaped}*"},
        {"type": "wildcard", "field": field, "value": f"*{escaped}*"},
    ]


def _condition(predicate: Predicate, field_map: FieldMap) -> dict[str, Any]:
    if isinstance(predicate, Match):
        return {
            "type": "match",
            "field": field_map.to_storage(predicate.field),
            "value": format_value(predicate.value),
        }
    if isinstance(predicate, Range):
        condition: dict[str, Any] = {
            "type": "range",
            "field": field_map.to_storage(predicate.field),
        }
        if predicate.lower is not None:
            condition["lower"] = format_value(predicate.lower)
            condition["include_lower"] = predicate.include_lower
        if predicate.upper is not None:
            condition["upper"] = format_value(predicate.upper)
            condition["include_upper"] = predicate.include_upper
        return condition
    if isinstance(predicate, Contains):
        return {
            "type": "contains",
            "field": field_map.to_storage(predicate.field),
            "values": [format_value(value) for value in predicate.values],
        }
    if isinstance(predicate, TextMatch):
        should: list[dict[str, Any]] = []
        for field in predicate.fields:
            should.extend(_text_conditions(field_map.to_storage(field), predicate.text))
        return {"type": "boolean", "should": should}
    raise TypeError(f"Unsupported predicate: {type(predicate).__name__}")


def to_lucene(query: Query, field_map: FieldMap) -> dict[str, Any] | None:
    """Query → Lucene 검색 JSON (dict).

    Args:
        query: 저장소 중립 Query
        field_map: 논리 → 컬럼 매핑

    Returns:
        검색 dict, 조건과 정렬이 모두 없으면 None
    """
    must = [_condition(predicate, field_map) for predicate in query.must]
    if query.should:
        # must와 같은 레벨의 should는 필터로 동작하지 않으므로 별도 그룹으로 묶음
        must.append(
            {
                "type": "boolean",
                "should": [_condition(predicate, field_map) for predicate in query.should],
            }
        )
    not_ = [_condition(predicate, field_map) for predicate in query.must_not]

    search: dict[str, Any] = {}
    if must or not_:
        boolean: dict[str, Any] = {"type": "boolean"}
        if must:
            boolean["must"] = must
        if not_:
            boolean["not"] = not_
        search["filter"] = boolean
    if query.sort:
        search["sort"] = [
            {"field": field_map.to_storage(sort.field), "reverse": sort.descending}
            for sort in query.sort
        ]
    return search or None
