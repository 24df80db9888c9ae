"""Catalog Service.

채널/재생목록/영상 조회 및 검색 Facade.
구체 백엔드가 아닌 CatalogBackendPort에만 의존.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, TypeVar

from catalog.application.dto.list_result import ListResult
from catalog.application.pagination import SkipTokenCodec
from catalog.application.query import QueryBuilder, build_search_query
from catalog.application.services.list_orchestrator import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    ListOrchestrator,
)
from catalog.domain.constants import (
    CHANNEL_SORT_FIELDS,
    ID_FIELD,
    PLAYLIST_SORT_FIELDS,
    PUBLISHED_AT_FIELD,
    SNIPPET_FIELDS,
    VIDEO_SORT_FIELDS,
)
from catalog.domain.entities import Channel, Playlist, PlaylistVideo, Video

if TYPE_CHECKING:
    from catalog.application.commands import ResolveCategoriesCommand
    from catalog.application.dto.search_criteria import (
        ChannelSearchCriteria,
        PlaylistSearchCriteria,
        VideoSearchCriteria,
    )
    from catalog.application.ports.catalog_backend import CatalogBackendPort
    from catalog.domain.entities import VideoCategory

logger = logging.getLogger(__name__)

E = TypeVar("E")


class CatalogService:
    """카탈로그 조회 Facade.

    - 단건/다건 조회: get_channel(s), get_playlist(s), get_video(s)
    - 목록 조회: 채널별 재생목록/영상, 재생목록 영상
    - 검색: search, search_videos, search_playlists, search_channels
    - 관련/인기 영상, 카테고리 조회

    존재하지 않는 엔티티는 None 또는 빈 목록 (오류 아님).
    """

    def __init__(
        self,
        backend: CatalogBackendPort,
        categories: ResolveCategoriesCommand,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ):
        """초기화.

        Args:
            backend: 카탈로그 저장소
            categories: 카테고리 조회 Command
            default_limit: 기본 페이지 크기
            max_limit: 최대 페이지 크기
        """
        self._backend = backend
        self._categories = categories
        self._lists = ListOrchestrator(backend, default_limit, max_limit)
        self._skip_codec = SkipTokenCodec()

    # ------------------------------------------------------------
    # 단건/다건 조회
    # ------------------------------------------------------------

    async def get_channel(
        self, channel_id: str, fields: Iterable[str] | None = None
    ) -> Channel | None:
        """채널 조회. id가 없으면 custom_url로 다시 조회."""
        if not channel_id:
            return None

        channels = await self.get_channels([channel_id], fields)
        if channels:
            return channels[0]

        query = QueryBuilder().match("custom_url", channel_id).build()
        result = await self._lists.execute(Channel, query, limit=1, fields=fields)
        return result.items[0] if result.items else None

    async def get_channels(
        self, channel_ids: Sequence[str], fields: Iterable[str] | None = None
    ) -> list[Channel]:
        return await self._get_many(Channel, channel_ids, fields)

    async def get_playlist(
        self, playlist_id: str, fields: Iterable[str] | None = None
    ) -> Playlist | None:
        playlists = await self.get_playlists([playlist_id], fields)
        return playlists[0] if playlists else None

    async def get_playlists(
        self, playlist_ids: Sequence[str], fields: Iterable[str] | None = None
    ) -> list[Playlist]:
        return await self._get_many(Playlist, playlist_ids, fields)

    async def get_video(
        self,
        video_id: str,
        fields: Iterable[str] | None = None,
        no_snippet: bool = False,
    ) -> Video | None:
        videos = await self.get_videos([video_id], fields, no_snippet)
        return videos[0] if videos else None

    async def get_videos(
        self,
        video_ids: Sequence[str],
        fields: Iterable[str] | None = None,
        no_snippet: bool = False,
    ) -> list[Video]:
        """영상 다건 조회.

        no_snippet이면 기본 필드에서 설명(description) 계열을 제외.
        """
        exclude = SNIPPET_FIELDS if no_snippet else ()
        return await self._get_many(Video, video_ids, fields, exclude)

    # ------------------------------------------------------------
    # 목록 조회
    # ------------------------------------------------------------

    async def get_channel_playlists(
        self,
        channel_id: str,
        limit: int | None = None,
        page_token: str | None = None,
        fields: Iterable[str] | None = None,
    ) -> ListResult[Playlist]:
        """채널의 재생목록 (게시일 내림차순)."""
        if not channel_id:
            return ListResult(items=[], limit=self._lists.normalize_limit(limit))

        query = (
            QueryBuilder()
            .match("channel_id", channel_id)
            .sort_by(PUBLISHED_AT_FIELD)
            .build()
        )
        return await self._lists.execute(
            Playlist, query, limit=limit, page_token=page_token, fields=fields
        )

    async def get_channel_videos(
        self,
        channel_id: str,
        limit: int | None = None,
        page_token: str | None = None,
        fields: Iterable[str] | None = None,
    ) -> ListResult[PlaylistVideo]:
        """채널의 영상 (게시일 내림차순)."""
        if not channel_id:
            return ListResult(items=[], limit=self._lists.normalize_limit(limit))

        query = (
            QueryBuilder()
            .match("video_owner_channel_id", channel_id)
            .sort_by(PUBLISHED_AT_FIELD)
            .build()
        )
        return await self._lists.execute(
            PlaylistVideo, query, limit=limit, page_token=page_token, fields=fields
        )

    async def get_playlist_videos(
        self,
        playlist_id: str,
        limit: int | None = None,
        page_token: str | None = None,
        fields: Iterable[str] | None = None,
    ) -> ListResult[PlaylistVideo]:
        """재생목록의 영상.

        저장된 영상 id 목록을 [skip, skip + limit) 구간으로 잘라 일괄 조회.
        id 목록이 더 남아 있을 때만 다음 페이지 토큰 발급.
        """
        limit = self._lists.normalize_limit(limit)
        skip = self._skip_codec.resume(page_token)

        video_ids = await self._backend.fetch_playlist_video_ids(playlist_id)
        if video_ids is None:
            return ListResult(items=[], limit=limit)

        page_ids = video_ids[skip : skip + limit]
        items = await self._get_many(PlaylistVideo, page_ids, fields) if page_ids else []

        next_page_token = None
        if skip + limit < len(video_ids):
            next_page_token = self._skip_codec.encode(
                [{ID_FIELD: video_id} for video_id in page_ids], limit, skip
            )

        return ListResult(
            items=items,
            next_page_token=next_page_token,
            total=len(video_ids),
            limit=limit,
        )

    # ------------------------------------------------------------
    # 검색
    # ------------------------------------------------------------

    async def search(
        self,
        criteria: VideoSearchCriteria,
        limit: int | None = None,
        page_token: str | None = None,
        fields: Iterable[str] | None = None,
    ) -> ListResult[Video]:
        return await self.search_videos(criteria, limit, page_token, fields)

    async def search_videos(
        self,
        criteria: VideoSearchCriteria,
        limit: int | None = None,
        page_token: str | None = None,
        fields: Iterable[str] | None = None,
    ) -> ListResult[Video]:
        query = build_search_query(criteria, VIDEO_SORT_FIELDS)
        return await self._lists.execute(
            Video, query, limit=limit, page_token=page_token, fields=fields
        )

    async def search_playlists(
        self,
        criteria: PlaylistSearchCriteria,
        limit: int | None = None,
        page_token: str | None = None,
        fields: Iterable[str] | None = None,
    ) -> ListResult[Playlist]:
        query = build_search_query(criteria, PLAYLIST_SORT_FIELDS)
        return await self._lists.execute(
            Playlist, query, limit=limit, page_token=page_token, fields=fields
        )

    async def search_channels(
        self,
        criteria: ChannelSearchCriteria,
        limit: int | None = None,
        page_token: str | None = None,
        fields: Iterable[str] | None = None,
    ) -> ListResult[Channel]:
        # 채널 검색의 channel_id는 채널 자신의 id
        query = build_search_query(criteria, CHANNEL_SORT_FIELDS, channel_id_field=ID_FIELD)
        return await self._lists.execute(
            Channel, query, limit=limit, page_token=page_token, fields=fields
        )

    # ------------------------------------------------------------
    # 관련/인기 영상
    # ------------------------------------------------------------

    async def get_related_videos(
        self,
        video_id: str,
        limit: int | None = None,
        page_token: str | None = None,
        fields: Iterable[str] | None = None,
    ) -> ListResult[Video]:
        """태그가 겹치는 영상 (원본 영상 제외, 게시일 내림차순)."""
        video = await self.get_video(video_id, fields=[ID_FIELD, "tags"])
        if video is None or not video.tags:
            return ListResult(items=[], limit=self._lists.normalize_limit(limit))

        query = (
            QueryBuilder()
            .any_of("tags", video.tags)
            .exclude(ID_FIELD, video_id)
            .sort_by(PUBLISHED_AT_FIELD)
            .build()
        )
        return await self._lists.execute(
            Video, query, limit=limit, page_token=page_token, fields=fields
        )

    async def get_popular_videos(
        self,
        limit: int | None = None,
        page_token: str | None = None,
        fields: Iterable[str] | None = None,
    ) -> ListResult[Video]:
        query = QueryBuilder().sort_by(PUBLISHED_AT_FIELD).build()
        return await self._lists.execute(
            Video, query, limit=limit, page_token=page_token, fields=fields
        )

    async def get_popular_videos_by_category(
        self,
        category_id: str | None = None,
        limit: int | None = None,
        page_token: str | None = None,
        fields: Iterable[str] | None = None,
    ) -> ListResult[Video]:
        query = (
            QueryBuilder()
            .match("category_id", category_id)
            .sort_by(PUBLISHED_AT_FIELD)
            .build()
        )
        return await self._lists.execute(
            Video, query, limit=limit, page_token=page_token, fields=fields
        )

    async def get_popular_videos_by_region(
        self,
        region_code: str | None = None,
        limit: int | None = None,
        page_token: str | None = None,
        fields: Iterable[str] | None = None,
    ) -> ListResult[Video]:
        """해당 지역에서 차단되지 않은 영상."""
        query = (
            QueryBuilder()
            .exclude_containing("blocked_regions", region_code)
            .sort_by(PUBLISHED_AT_FIELD)
            .build()
        )
        return await self._lists.execute(
            Video, query, limit=limit, page_token=page_token, fields=fields
        )

    # ------------------------------------------------------------
    # 카테고리
    # ------------------------------------------------------------

    async def get_categories(self, region_code: str) -> list[VideoCategory]:
        return await self._categories.execute(region_code)

    # ------------------------------------------------------------

    async def _get_many(
        self,
        entity: type[E],
        ids: Sequence[str],
        fields: Iterable[str] | None,
        exclude: Iterable[str] = (),
    ) -> list[E]:
        """id 목록 조회. 요청한 id 순서대로 정렬하여 반환."""
        ids = [entity_id for entity_id in ids if entity_id]
        if not ids:
            return []

        projection = self._backend.project(entity, fields, exclude=exclude)
        rows = await self._backend.fetch_by_ids(entity, ids, projection)
        items = self._lists.hydrate(entity, rows)

        position = {entity_id: index for index, entity_id in enumerate(ids)}
        items.sort(key=lambda item: position.get(getattr(item, ID_FIELD), len(position)))
        return items
