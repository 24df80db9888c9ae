"""Test Configuration and Fixtures.

pytest 설정 및 공통 픽스처.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, Generator
from unittest.mock import AsyncMock

import pytest

from catalog.application.mapping import FieldMap
from catalog.application.pagination import SkipTokenCodec
from catalog.application.ports.catalog_backend import CatalogBackendPort, Page
from catalog.application.query import Contains, Match, Query, Range, TextMatch
from catalog.domain.entities import (
    Channel,
    Playlist,
    PlaylistVideo,
    Video,
    VideoCategory,
)

# ============================================================
# Environment
# ============================================================


@pytest.fixture(scope="session", autouse=True)
def _test_env() -> Generator[None, None, None]:
    """Set test environment variables."""
    original = os.environ.copy()
    os.environ.update(
        {
            "CATALOG_ENVIRONMENT": "test",
            "CATALOG_BACKEND": "mongo",
            "CATALOG_MONGO_URL": "mongodb://localhost:27017",
            "CATALOG_YOUTUBE_API_KEY": "test-api-key",
        }
    )
    yield
    os.environ.clear()
    os.environ.update(original)


# ============================================================
# In-memory Backend
# ============================================================

_TABLES: dict[type, str] = {
    Channel: "channel",
    Playlist: "playlist",
    Video: "video",
    PlaylistVideo: "video",
}


def _identity(name: str) -> str:
    return name


def _matches(predicate: Any, row: Mapping[str, Any]) -> bool:
    if isinstance(predicate, Match):
        return row.get(predicate.field) == predicate.value
    if isinstance(predicate, Range):
        value = row.get(predicate.field)
        if value is None:
            return False
        if predicate.lower is not None:
            if predicate.include_lower and value < predicate.lower:
                return False
            if not predicate.include_lower and value <= predicate.lower:
                return False
        if predicate.upper is not None:
            if predicate.include_upper and value > predicate.upper:
                return False
            if not predicate.include_upper and value >= predicate.upper:
                return False
        return True
    if isinstance(predicate, Contains):
        values = row.get(predicate.field) or []
        return any(value in values for value in predicate.values)
    if isinstance(predicate, TextMatch):
        needle = predicate.text.lower()
        return any(needle in str(row.get(name) or "").lower() for name in predicate.fields)
    raise TypeError(predicate)


class InMemoryCatalogBackend(CatalogBackendPort):
    """Query를 dict row 위에서 직접 평가하는 테스트용 백엔드.

    저장소 필드명은 논리 필드명과 같고, 페이지네이션은 skip 토큰.
    """

    def __init__(
        self,
        rows: Mapping[str, list[dict[str, Any]]] | None = None,
        playlist_videos: Mapping[str, list[str]] | None = None,
    ):
        self.rows = {name: list(items) for name, items in (rows or {}).items()}
        self.playlist_videos = dict(playlist_videos or {})
        self.fetch_page_calls: list[dict[str, Any]] = []
        self.fetch_by_ids_calls: list[list[str]] = []
        self._codec = SkipTokenCodec()
        self._field_maps = {
            Channel: FieldMap.for_entity(Channel, _identity),
            Playlist: FieldMap.for_entity(Playlist, _identity),
            Video: FieldMap.for_entity(Video, _identity),
            PlaylistVideo: FieldMap.for_entity(
                PlaylistVideo,
                _identity,
                overrides={
                    "video_owner_channel_id": "channel_id",
                    "video_owner_channel_title": "channel_title",
                },
            ),
        }

    @property
    def name(self) -> str:
        return "memory"

    def field_map(self, entity: type) -> FieldMap:
        return self._field_maps[entity]

    def translate(self, entity: type, query: Query) -> Query:
        field_map = self.field_map(entity)

        def storage(predicate: Any) -> Any:
            if isinstance(predicate, TextMatch):
                return replace(
                    predicate,
                    fields=tuple(field_map.to_storage(name) for name in predicate.fields),
                )
            return replace(predicate, field=field_map.to_storage(predicate.field))

        return Query(
            must=tuple(storage(p) for p in query.must),
            should=tuple(storage(p) for p in query.should),
            must_not=tuple(storage(p) for p in query.must_not),
            sort=query.sort,
        )

    async def fetch_page(
        self,
        entity: type,
        native_query: Query,
        projection: Sequence[str],
        limit: int,
        page_token: str | None = None,
    ) -> Page:
        self.fetch_page_calls.append(
            {"entity": entity, "query": native_query, "limit": limit, "page_token": page_token}
        )
        rows = [
            row
            for row in self.rows.get(_TABLES[entity], [])
            if all(_matches(p, row) for p in native_query.must)
            and (not native_query.should or any(_matches(p, row) for p in native_query.should))
            and not any(_matches(p, row) for p in native_query.must_not)
        ]
        for sort in reversed(native_query.sort):
            rows.sort(
                key=lambda row: (row.get(sort.field) is not None, row.get(sort.field)),
                reverse=sort.descending,
            )

        skip = self._codec.resume(page_token)
        page = [self._project(row, projection) for row in rows[skip : skip + limit]]
        return Page(rows=page, next_page_token=self._codec.encode(page, limit, skip))

    async def fetch_by_ids(
        self,
        entity: type,
        ids: Sequence[str],
        projection: Sequence[str],
    ) -> list[dict[str, Any]]:
        self.fetch_by_ids_calls.append(list(ids))
        wanted = set(ids)
        # 저장소 순서 그대로 반환 (요청 순서 아님)
        return [
            self._project(row, projection)
            for row in self.rows.get(_TABLES[entity], [])
            if row["id"] in wanted
        ]

    async def fetch_playlist_video_ids(self, playlist_id: str) -> list[str] | None:
        return self.playlist_videos.get(playlist_id)

    @staticmethod
    def _project(row: Mapping[str, Any], projection: Sequence[str]) -> dict[str, Any]:
        return {name: row[name] for name in projection if name in row}


# ============================================================
# Domain Fixtures
# ============================================================


@pytest.fixture
def now() -> datetime:
    """기준 시간 (UTC)."""
    return datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def video_rows(now: datetime) -> list[dict[str, Any]]:
    """샘플 영상 row (게시일 내림차순)."""
    return [
        {
            "id": "v1",
            "channel_id": "c1",
            "channel_title": "Cat Channel",
            "title": "Funny Cats compilation",
            "description": "cats being cats",
            "published_at": now,
            "tags": ["cats", "funny"],
            "category_id": "15",
            "duration": 120,
            "blocked_regions": [],
        },
        {
            "id": "v2",
            "channel_id": "c1",
            "channel_title": "Cat Channel",
            "title": "Sleeping kitten",
            "description": "A small CATS documentary",
            "published_at": now - timedelta(days=1),
            "tags": ["cats"],
            "category_id": "15",
            "duration": 240,
            "blocked_regions": ["US"],
        },
        {
            "id": "v3",
            "channel_id": "c2",
            "channel_title": "Dog Channel",
            "title": "Dogs at the park",
            "description": "no felines here",
            "published_at": now - timedelta(days=2),
            "tags": ["dogs", "funny"],
            "category_id": "15",
            "duration": 1200,
            "blocked_regions": ["KR"],
        },
        {
            "id": "v4",
            "channel_id": "c2",
            "channel_title": "Dog Channel",
            "title": "cats vs dogs",
            "description": "short clip",
            "published_at": now - timedelta(days=3),
            "tags": ["cats", "dogs"],
            "category_id": "22",
            "duration": 45,
            "blocked_regions": ["US", "KR"],
        },
        {
            "id": "v5",
            "channel_id": "c3",
            "channel_title": "Cooking",
            "title": "Pasta recipe",
            "description": "Cats not included",
            "published_at": now - timedelta(days=4),
            "tags": [],
            "category_id": "26",
            "duration": 600,
            "blocked_regions": [],
        },
        {
            "id": "v6",
            "channel_id": "c1",
            "channel_title": "Cat Channel",
            "title": "cat nap",
            "description": "Cats sleeping all day",
            "published_at": now - timedelta(days=5),
            "tags": ["cats"],
            "category_id": "15",
            "duration": 30,
            "blocked_regions": [],
        },
    ]


@pytest.fixture
def channel_rows(now: datetime) -> list[dict[str, Any]]:
    return [
        {
            "id": "c1",
            "title": "Cat Channel",
            "custom_url": "@catchannel",
            "published_at": now - timedelta(days=100),
            "channel_type": "pets",
        },
        {
            "id": "c2",
            "title": "Dog Channel",
            "custom_url": "@dogchannel",
            "published_at": now - timedelta(days=50),
            "channel_type": "pets",
        },
    ]


@pytest.fixture
def playlist_rows(now: datetime) -> list[dict[str, Any]]:
    return [
        {
            "id": "p1",
            "channel_id": "c1",
            "title": "Best of cats",
            "published_at": now - timedelta(days=1),
        },
        {
            "id": "p2",
            "channel_id": "c1",
            "title": "Kittens",
            "published_at": now,
        },
        {
            "id": "p3",
            "channel_id": "c2",
            "title": "Dogs",
            "published_at": now,
        },
    ]


@pytest.fixture
def memory_backend(
    video_rows: list[dict[str, Any]],
    channel_rows: list[dict[str, Any]],
    playlist_rows: list[dict[str, Any]],
) -> InMemoryCatalogBackend:
    """샘플 데이터가 채워진 in-memory 백엔드."""
    return InMemoryCatalogBackend(
        rows={"video": video_rows, "channel": channel_rows, "playlist": playlist_rows},
        playlist_videos={"p1": ["v6", "v1", "v2", "v4", "v5"], "p2": []},
    )


@pytest.fixture
def sample_categories() -> list[VideoCategory]:
    """외부 소스가 반환하는 카테고리 (assignable 혼합)."""
    return [
        VideoCategory(id="1", title="Film & Animation", assignable=True, channel_id="UCx"),
        VideoCategory(id="15", title="Pets & Animals", assignable=True, channel_id="UCx"),
        VideoCategory(id="18", title="Short Movies", assignable=False, channel_id="UCx"),
    ]


# ============================================================
# Mock Fixtures
# ============================================================


@pytest.fixture
def mock_category_store() -> AsyncMock:
    """Mock CategoryStorePort."""
    mock = AsyncMock()
    mock.get = AsyncMock(return_value=None)
    mock.save = AsyncMock()
    return mock


@pytest.fixture
def mock_category_source(sample_categories: list[VideoCategory]) -> AsyncMock:
    """Mock CategorySourcePort."""
    mock = AsyncMock()
    mock.source_name = "mock_source"
    mock.get_categories = AsyncMock(return_value=sample_categories)
    return mock


@pytest.fixture
def mock_refresh_lock() -> AsyncMock:
    """Mock RefreshLockPort."""
    mock = AsyncMock()
    mock.acquire = AsyncMock(return_value=True)
    mock.release = AsyncMock()
    return mock
