"""Mongo Catalog Backend.

MongoDB(PyMongo async API) 기반 카탈로그 저장소 구현.

컬렉션:
- channel, playlist, video: 엔티티 (_id = 엔티티 id)
- playlistVideo: 재생목록별 영상 id 목록 ({_id, videos: [...]})

페이지네이션은 "lastKey|skip" 토큰 + skip/limit.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from catalog.application.exceptions import BackendExecutionError
from catalog.application.mapping import FieldMap, to_camel
from catalog.application.pagination import SkipTokenCodec
from catalog.application.ports.catalog_backend import CatalogBackendPort, Page
from catalog.domain.constants import ID_FIELD
from catalog.domain.entities import Channel, Playlist, PlaylistVideo, Video
from catalog.infrastructure.persistence_mongo.mongo_query import MongoQuery, to_mongo

if TYPE_CHECKING:
    from pymongo.asynchronous.database import AsyncDatabase

    from catalog.application.query import Query

logger = logging.getLogger(__name__)

BACKEND_NAME = "mongo"
DOCUMENT_ID = "_id"
PLAYLIST_VIDEO_COLLECTION = "playlistVideo"

COLLECTIONS: dict[type, str] = {
    Channel: "channel",
    Playlist: "playlist",
    Video: "video",
    PlaylistVideo: "video",
}


def document_field(name: str) -> str:
    """논리 필드명 → 문서 필드명 (camelCase, id → _id)."""
    if name == ID_FIELD:
        return DOCUMENT_ID
    return to_camel(name)


def build_field_maps() -> dict[type, FieldMap]:
    return {
        Channel: FieldMap.for_entity(Channel, document_field),
        Playlist: FieldMap.for_entity(Playlist, document_field),
        Video: FieldMap.for_entity(Video, document_field),
        PlaylistVideo: FieldMap.for_entity(
            PlaylistVideo,
            document_field,
            overrides={
                "video_owner_channel_id": "channelId",
                "video_owner_channel_title": "channelTitle",
            },
        ),
    }


class MongoCatalogBackend(CatalogBackendPort):
    """MongoDB 카탈로그 저장소."""

    def __init__(self, database: AsyncDatabase):
        """초기화.

        Args:
            database: AsyncMongoClient의 데이터베이스 핸들
        """
        self._db = database
        self._field_maps = build_field_maps()
        self._skip_codec = SkipTokenCodec(key_field=DOCUMENT_ID)

    @property
    def name(self) -> str:
        return BACKEND_NAME

    def field_map(self, entity: type) -> FieldMap:
        return self._field_maps[entity]

    def translate(self, entity: type, query: Query) -> MongoQuery:
        return to_mongo(query, self.field_map(entity))

    async def fetch_page(
        self,
        entity: type,
        native_query: MongoQuery,
        projection: Sequence[str],
        limit: int,
        page_token: str | None = None,
    ) -> Page:
        """find + sort + skip + limit 실행."""
        skip = self._skip_codec.resume(page_token)
        collection = self._db[COLLECTIONS[entity]]
        try:
            cursor = collection.find(native_query.filter, self._projection(projection))
            if native_query.sort:
                cursor = cursor.sort(self._stable_sort(native_query.sort))
            rows = await cursor.skip(skip).limit(limit).to_list(length=limit)
        except PyMongoError as e:
            raise self._failure("fetch_page", e) from e

        return Page(rows=rows, next_page_token=self._skip_codec.encode(rows, limit, skip))

    async def fetch_by_ids(
        self,
        entity: type,
        ids: Sequence[str],
        projection: Sequence[str],
    ) -> list[dict[str, Any]]:
        if not ids:
            return []
        collection = self._db[COLLECTIONS[entity]]
        try:
            cursor = collection.find(
                {DOCUMENT_ID: {"$in": list(ids)}}, self._projection(projection)
            )
            return await cursor.to_list(length=None)
        except PyMongoError as e:
            raise self._failure("fetch_by_ids", e) from e

    async def fetch_playlist_video_ids(self, playlist_id: str) -> list[str] | None:
        collection = self._db[PLAYLIST_VIDEO_COLLECTION]
        try:
            document = await collection.find_one({DOCUMENT_ID: playlist_id}, {"videos": 1})
        except PyMongoError as e:
            raise self._failure("fetch_playlist_video_ids", e) from e
        if document is None:
            return None
        return list(document.get("videos") or [])

    @staticmethod
    def _stable_sort(sort: list[tuple[str, int]]) -> list[tuple[str, int]]:
        """skip 페이지네이션용 정렬. 동일 값 사이 순서를 _id로 고정."""
        if any(name == DOCUMENT_ID for name, _ in sort):
            return list(sort)
        return [*sort, (DOCUMENT_ID, ASCENDING)]

    @staticmethod
    def _projection(fields: Sequence[str]) -> dict[str, int]:
        return {name: 1 for name in fields}

    @staticmethod
    def _failure(operation: str, error: PyMongoError) -> BackendExecutionError:
        logger.error(
            "MongoDB query failed",
            extra={"operation": operation, "error": str(error)},
        )
        return BackendExecutionError(BACKEND_NAME, operation, str(error))

    async def close(self) -> None:
        """리소스 정리."""
        # 클라이언트는 외부에서 관리
        pass
