"""List Result DTO."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, is_dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class ListResult(Generic[T]):
    """목록 조회 결과.

    Attributes:
        items: 정렬 순서가 유지된 결과 목록 (len(items) <= limit)
        next_page_token: 다음 페이지 토큰 (불투명 문자열, 없으면 마지막 페이지)
        total: 전체 개수 (알 수 있는 경우만)
        limit: 요청 페이지 크기

    다음 페이지 여부는 "결과 수 == limit" 기준으로 판단하므로
    정확히 limit개가 남은 경우 다음 요청은 빈 페이지를 반환함.
    """

    items: list[T] = field(default_factory=list)
    next_page_token: str | None = None
    total: int | None = None
    limit: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """응답 형식으로 변환.

        {"list": [...], "nextPageToken"?, "total"?, "limit"?}
        """
        result: dict[str, Any] = {
            "list": [asdict(item) if is_dataclass(item) else item for item in self.items],
        }
        if self.next_page_token is not None:
            result["nextPageToken"] = self.next_page_token
        if self.total is not None:
            result["total"] = self.total
        if self.limit is not None:
            result["limit"] = self.limit
        return result
