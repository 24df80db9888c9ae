"""Query Predicates.

저장소 중립 쿼리 표현. 필드는 모두 논리 필드명이며
백엔드 어댑터가 경계에서 고유 문법으로 직렬화함.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Match:
    """필드 값 일치."""

    field: str
    value: Any


@dataclass(frozen=True)
class Range:
    """범위 조건. lower/upper가 None이면 해당 방향 무제한."""

    field: str
    lower: Any = None
    upper: Any = None
    include_lower: bool = False
    include_upper: bool = False


@dataclass(frozen=True)
class Contains:
    """배열 필드가 values 중 하나 이상을 포함."""

    field: str
    values: tuple[Any, ...]


@dataclass(frozen=True)
class TextMatch:
    """fields 중 하나에 text가 부분 문자열로 포함 (대소문자 무시)."""

    fields: tuple[str, ...]
    text: str


Predicate = Union[Match, Range, Contains, TextMatch]


@dataclass(frozen=True)
class SortField:
    field: str
    descending: bool = True


@dataclass(frozen=True)
class Query:
    """조건 묶음.

    - must: 모두 만족
    - should: 비어 있지 않으면 하나 이상 만족
    - must_not: 하나도 만족하지 않음
    """

    must: tuple[Predicate, ...] = ()
    should: tuple[Predicate, ...] = ()
    must_not: tuple[Predicate, ...] = ()
    sort: tuple[SortField, ...] = ()

    @property
    def has_filter(self) -> bool:
        return bool(self.must or self.should or self.must_not)
