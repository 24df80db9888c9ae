"""Mongo Query.

Query → MongoDB 필터 문서 / 정렬 변환.

- Match: {field: value}, 제외는 {field: {"$ne": value}}
- Range: $gt/$gte/$lt/$lte
- Contains: {"$in": [...]}, 제외는 {"$nin": [...]}
- TextMatch: 필드별 대소문자 무시 $regex의 $or (입력값은 re.escape)
- should: $or

같은 키가 겹치면 $and로 묶음.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from pymongo import ASCENDING, DESCENDING

from catalog.application.mapping import FieldMap
from catalog.application.query import (
    Contains,
    Match,
    Predicate,
    Query,
    Range,
    TextMatch,
)


@dataclass(frozen=True)
class MongoQuery:
    filter: dict[str, Any] = field(default_factory=dict)
    sort: list[tuple[str, int]] = field(default_factory=list)


def _clause(predicate: Predicate, field_map: FieldMap) -> dict[str, Any]:
    if isinstance(predicate, Match):
        return {field_map.to_storage(predicate.field): predicate.value}
    if isinstance(predicate, Range):
        bounds: dict[str, Any] = {}
        if predicate.lower is not None:
            bounds["$gte" if predicate.include_lower else "$gt"] = predicate.lower
        if predicate.upper is not None:
            bounds["$lte" if predicate.include_upper else "$lt"] = predicate.upper
        return {field_map.to_storage(predicate.field): bounds}
    if isinstance(predicate, Contains):
        return {field_map.to_storage(predicate.field): {"$in": list(predicate.values)}}
    if isinstance(predicate, TextMatch):
        pattern = re.escape(predicate.text)
        return {
            "$or": [
                {field_map.to_storage(name): {"$regex": pattern, "$options": "i"}}
                for name in predicate.fields
            ]
        }
    raise TypeError(f"Unsupported predicate: {type(predicate).__name__}")


def _negated_clause(predicate: Predicate, field_map: FieldMap) -> dict[str, Any]:
    if isinstance(predicate, Match):
        return {field_map.to_storage(predicate.field): {"$ne": predicate.value}}
    if isinstance(predicate, Contains):
        return {field_map.to_storage(predicate.field): {"$nin": list(predicate.values)}}
    return {"$nor": [_clause(predicate, field_map)]}


def _combine(clauses: list[dict[str, Any]]) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    for clause in clauses:
        if any(key in merged for key in clause):
            return {"$and": clauses}
        merged.update(clause)
    return merged


def to_mongo(query: Query, field_map: FieldMap) -> MongoQuery:
    """Query → MongoQuery.

    Args:
        query: 저장소 중립 Query
        field_map: 논리 → 문서 필드 매핑

    Returns:
        MongoQuery (조건이 없으면 빈 filter, 정렬이 없으면 빈 sort)
    """
    clauses = [_clause(predicate, field_map) for predicate in query.must]
    if query.should:
        clauses.append({"$or": [_clause(predicate, field_map) for predicate in query.should]})
    clauses.extend(_negated_clause(predicate, field_map) for predicate in query.must_not)

    sort = [
        (field_map.to_storage(item.field), DESCENDING if item.descending else ASCENDING)
        for item in query.sort
    ]
    return MongoQuery(filter=_combine(clauses), sort=sort)
