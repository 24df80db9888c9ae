"""Cassandra Catalog Backend.

Cassandra + Lucene 인덱스(expr) 기반 카탈로그 저장소 구현.

테이블:
- channel, playlist, video: 엔티티 (id 파티션 키, *_index Lucene 인덱스)
- playlistvideo: 재생목록별 영상 id 목록 (videos list<text>)

페이지네이션은 드라이버 paging state를 그대로 토큰으로 사용.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from cassandra import DriverException
from cassandra.cluster import NoHostAvailable
from cassandra.query import ValueSequence

from catalog.application.exceptions import BackendExecutionError
from catalog.application.mapping import FieldMap, to_camel
from catalog.application.pagination import NativeCursorCodec
from catalog.application.ports.catalog_backend import CatalogBackendPort, Page
from catalog.domain.entities import Channel, Playlist, PlaylistVideo, Video
from catalog.infrastructure.persistence_cassandra.lucene_query import to_lucene
from catalog.infrastructure.persistence_cassandra.session import execute_async

if TYPE_CHECKING:
    from cassandra.cluster import Session

    from catalog.application.query import Query

logger = logging.getLogger(__name__)

BACKEND_NAME = "cassandra"
PLAYLIST_VIDEO_TABLE = "playlistvideo"

_ERRORS = (DriverException, NoHostAvailable)


@dataclass(frozen=True)
class CassandraTable:
    name: str
    index: str


TABLES: dict[type, CassandraTable] = {
    Channel: CassandraTable("channel", "channel_index"),
    Playlist: CassandraTable("playlist", "playlist_index"),
    Video: CassandraTable("video", "video_index"),
    PlaylistVideo: CassandraTable("video", "video_index"),
}


def column_name(name: str) -> str:
    """논리 필드명 → 컬럼명 (camelCase 소문자)."""
    return to_camel(name).lower()


def build_field_maps() -> dict[type, FieldMap]:
    return {
        Channel: FieldMap.for_entity(Channel, column_name),
        Playlist: FieldMap.for_entity(Playlist, column_name),
        Video: FieldMap.for_entity(Video, column_name),
        PlaylistVideo: FieldMap.for_entity(
            PlaylistVideo,
            column_name,
            overrides={
                "video_owner_channel_id": "channelid",
                "video_owner_channel_title": "channeltitle",
            },
        ),
    }


def _as_dict(row: Any) -> dict[str, Any]:
    if isinstance(row, dict):
        return row
    return row._asdict()


class CassandraCatalogBackend(CatalogBackendPort):
    """Cassandra 카탈로그 저장소.

    세션은 dict_factory row factory 사용을 권장 (named tuple도 처리).
    """

    def __init__(self, session: Session):
        """초기화.

        Args:
            session: Cassandra 세션 (keyspace 연결 완료)
        """
        self._session = session
        self._field_maps = build_field_maps()
        self._cursor = NativeCursorCodec()

    @property
    def name(self) -> str:
        return BACKEND_NAME

    def field_map(self, entity: type) -> FieldMap:
        return self._field_maps[entity]

    def translate(self, entity: type, query: Query) -> dict[str, Any] | None:
        return to_lucene(query, self.field_map(entity))

    async def fetch_page(
        self,
        entity: type,
        native_query: dict[str, Any] | None,
        projection: Sequence[str],
        limit: int,
        page_token: str | None = None,
    ) -> Page:
        """Lucene 검색 실행 (fetch_size = limit)."""
        table = TABLES[entity]
        cql = f"SELECT {', '.join(projection)} FROM {table.name}"
        parameters: tuple[Any, ...] | None = None
        if native_query:
            cql = f"{cql} WHERE expr({table.index}, %s)"
            parameters = (json.dumps(native_query),)

        result = await self._execute(
            "fetch_page",
            cql,
            parameters,
            fetch_size=limit,
            paging_state=self._cursor.decode(page_token),
        )
        rows = [_as_dict(row) for row in result.current_rows]
        return Page(rows=rows, next_page_token=self._cursor.encode(result.paging_state))

    async def fetch_by_ids(
        self,
        entity: type,
        ids: Sequence[str],
        projection: Sequence[str],
    ) -> list[dict[str, Any]]:
        if not ids:
            return []
        table = TABLES[entity]
        cql = f"SELECT {', '.join(projection)} FROM {table.name} WHERE id IN %s"
        result = await self._execute("fetch_by_ids", cql, (ValueSequence(list(ids)),))
        return [_as_dict(row) for row in result.current_rows]

    async def fetch_playlist_video_ids(self, playlist_id: str) -> list[str] | None:
        cql = f"SELECT videos FROM {PLAYLIST_VIDEO_TABLE} WHERE id = %s"
        result = await self._execute("fetch_playlist_video_ids", cql, (playlist_id,))
        rows = result.current_rows
        if not rows:
            return None
        return list(_as_dict(rows[0]).get("videos") or [])

    async def _execute(
        self,
        operation: str,
        cql: str,
        parameters: Sequence[Any] | None = None,
        *,
        fetch_size: int | None = None,
        paging_state: bytes | None = None,
    ):
        try:
            return await execute_async(
                self._session,
                cql,
                parameters,
                fetch_size=fetch_size,
                paging_state=paging_state,
            )
        except _ERRORS as e:
            logger.error(
                "Cassandra query failed",
                extra={"operation": operation, "cql": cql, "error": str(e)},
            )
            raise BackendExecutionError(BACKEND_NAME, operation, str(e)) from e

    async def close(self) -> None:
        """리소스 정리."""
        # 세션/클러스터는 외부에서 관리
        pass
