"""List Orchestrator.

필터 + 정렬 + projection + 페이지네이션 실행 후 ListResult 조립.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

from catalog.application.dto.list_result import ListResult
from catalog.application.mapping import entity_from_row

if TYPE_CHECKING:
    from catalog.application.ports.catalog_backend import CatalogBackendPort
    from catalog.application.query import Query

logger = logging.getLogger(__name__)

E = TypeVar("E")

DEFAULT_LIMIT = 10
MAX_LIMIT = 50


class ListOrchestrator:
    """목록 조회 실행기.

    플로우:
    1. limit 정규화
    2. projection 계산 + Query → 저장소 쿼리 변환
    3. 저장소 실행 (토큰 해석/다음 토큰 계산은 백엔드 코덱 담당)
    4. row → 논리 필드명 → 엔티티
    5. ListResult 반환

    저장소 오류는 BackendExecutionError로 그대로 전파 (재시도 없음).
    """

    def __init__(
        self,
        backend: CatalogBackendPort,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> None:
        self._backend = backend
        self._default_limit = default_limit
        self._max_limit = max_limit

    def normalize_limit(self, limit: int | None) -> int:
        """None/0 이하는 기본값, 최대값 초과는 최대값."""
        if limit is None or limit <= 0:
            return self._default_limit
        return min(int(limit), self._max_limit)

    async def execute(
        self,
        entity: type[E],
        query: Query,
        *,
        limit: int | None = None,
        page_token: str | None = None,
        fields: Iterable[str] | None = None,
        exclude: Iterable[str] = (),
    ) -> ListResult[E]:
        """목록 조회.

        Args:
            entity: 결과 엔티티 클래스
            query: 저장소 중립 Query
            limit: 페이지 크기
            page_token: 이전 결과의 next_page_token
            fields: 반환할 논리 필드 (없으면 기본 필드)
            exclude: 기본 필드 사용 시 제외할 필드

        Returns:
            ListResult
        """
        limit = self.normalize_limit(limit)
        projection = self._backend.project(entity, fields, exclude=exclude)
        native_query = self._backend.translate(entity, query)

        page = await self._backend.fetch_page(
            entity,
            native_query,
            projection,
            limit,
            page_token,
        )

        items = self.hydrate(entity, page.rows)[:limit]

        logger.debug(
            "List executed",
            extra={
                "backend": self._backend.name,
                "entity": entity.__name__,
                "count": len(items),
                "limit": limit,
                "has_more": page.next_page_token is not None,
            },
        )
        return ListResult(items=items, next_page_token=page.next_page_token, limit=limit)

    def hydrate(self, entity: type[E], rows: Sequence[Mapping[str, Any]]) -> list[E]:
        """저장소 row 목록 → 엔티티 목록."""
        field_map = self._backend.field_map(entity)
        return [entity_from_row(entity, field_map.map_row(row)) for row in rows]
