"""Catalog Backend Port.

저장소 백엔드 추상화 인터페이스.
Cassandra(Lucene 인덱스), MongoDB 어댑터가 구현.

기능 집합:
- field_map / project: 논리 ↔ 저장소 필드 변환, projection 계산
- translate: Query → 저장소 고유 쿼리
- fetch_page: 페이지 토큰 해석 → 실행 → 다음 토큰 계산
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from catalog.application.mapping import FieldMap, entity_fields, project_fields
from catalog.application.query import Query


@dataclass(frozen=True)
class Page:
    """저장소 조회 결과 한 페이지.

    Attributes:
        rows: 저장소 필드명 기준 row 목록
        next_page_token: 다음 페이지 토큰 (없으면 마지막 페이지)
    """

    rows: list[dict[str, Any]] = field(default_factory=list)
    next_page_token: str | None = None


class CatalogBackendPort(ABC):
    """카탈로그 저장소 포트.

    Facade는 이 인터페이스에만 의존하며 구체 백엔드를 알지 못함.
    필드 매핑 테이블은 생성 시 한 번 만들고 이후 변경하지 않음.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """백엔드 식별자 (예: "cassandra", "mongo")."""
        pass

    @abstractmethod
    def field_map(self, entity: type) -> FieldMap:
        """엔티티의 논리 → 저장소 필드 매핑."""
        pass

    def project(
        self,
        entity: type,
        fields: Iterable[str] | None = None,
        *,
        exclude: Iterable[str] = (),
    ) -> list[str]:
        """저장소 projection 필드 목록.

        Args:
            entity: 엔티티 클래스
            fields: 요청 논리 필드 (없으면 기본 필드 전체)
            exclude: 기본 필드 전체 사용 시 제외할 필드

        Returns:
            저장소 필드명 목록 (id 항상 포함)
        """
        return project_fields(
            fields,
            entity_fields(entity),
            self.field_map(entity),
            exclude=exclude,
        )

    @abstractmethod
    def translate(self, entity: type, query: Query) -> Any:
        """Query를 저장소 고유 쿼리로 변환."""
        pass

    @abstractmethod
    async def fetch_page(
        self,
        entity: type,
        native_query: Any,
        projection: Sequence[str],
        limit: int,
        page_token: str | None = None,
    ) -> Page:
        """쿼리 실행 (페이지 단위).

        Args:
            entity: 엔티티 클래스
            native_query: translate() 결과
            projection: project() 결과
            limit: 페이지 크기
            page_token: 이전 페이지에서 받은 토큰

        Returns:
            Page

        Raises:
            BackendExecutionError: 저장소 실행 실패
        """
        pass

    @abstractmethod
    async def fetch_by_ids(
        self,
        entity: type,
        ids: Sequence[str],
        projection: Sequence[str],
    ) -> list[dict[str, Any]]:
        """id 목록으로 조회 (순서 보장 안 함).

        Raises:
            BackendExecutionError: 저장소 실행 실패
        """
        pass

    @abstractmethod
    async def fetch_playlist_video_ids(self, playlist_id: str) -> list[str] | None:
        """재생목록에 저장된 영상 id 목록 (순서 유지). 재생목록이 없으면 None."""
        pass

    async def close(self) -> None:
        """리소스 정리 (optional)."""
        pass
