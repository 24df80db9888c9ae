"""YouTube Video Category Client.

YouTube Data API v3 영상 카테고리 조회 클라이언트.

API 문서: https://developers.google.com/youtube/v3/docs/videoCategories/list

인증:
- key: API 키 (쿼리 파라미터)
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from catalog.application.exceptions import ExternalSourceError
from catalog.application.ports.category_source import CategorySourcePort
from catalog.domain.entities import VideoCategory

logger = logging.getLogger(__name__)

YOUTUBE_CATEGORIES_URL = "https://www.googleapis.com/youtube/v3/videoCategories"


class YoutubeCategoryClient(CategorySourcePort):
    """YouTube 영상 카테고리 클라이언트.

    응답의 모든 카테고리를 반환 (assignable 필터링은 호출자 담당).
    """

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
    ):
        """초기화.

        Args:
            api_key: YouTube Data API 키
            http_client: HTTP 클라이언트 (외부 주입)
        """
        self._api_key = api_key
        self._client = http_client

    @property
    def source_name(self) -> str:
        """소스 식별자."""
        return "youtube"

    async def get_categories(self, region_code: str) -> list[VideoCategory]:
        """지역별 카테고리 조회.

        Args:
            region_code: ISO 3166-1 alpha-2 지역 코드

        Returns:
            카테고리 목록

        Raises:
            ExternalSourceError: HTTP 오류 또는 응답 형식 오류
        """
        params = {
            "part": "snippet",
            "regionCode": region_code,
            "key": self._api_key,
        }

        try:
            response = await self._client.get(YOUTUBE_CATEGORIES_URL, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "YouTube API HTTP error",
                extra={"status": e.response.status_code, "region_code": region_code},
            )
            raise ExternalSourceError(
                self.source_name, region_code, f"HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                "YouTube API request failed",
                extra={"error": str(e), "region_code": region_code},
            )
            raise ExternalSourceError(self.source_name, region_code, str(e)) from e
        except ValueError as e:
            # JSON 디코딩 실패
            logger.error(
                "YouTube API returned invalid JSON",
                extra={"region_code": region_code},
            )
            raise ExternalSourceError(self.source_name, region_code, "invalid JSON") from e

        try:
            categories = [self._parse_item(item) for item in data.get("items", [])]
        except (AttributeError, KeyError, TypeError) as e:
            logger.error(
                "Failed to parse YouTube categories",
                extra={"error": str(e), "region_code": region_code},
            )
            raise ExternalSourceError(
                self.source_name, region_code, "unexpected payload"
            ) from e

        logger.info(
            "YouTube categories fetched",
            extra={"region_code": region_code, "fetched": len(categories)},
        )
        return categories

    def _parse_item(self, item: dict[str, Any]) -> VideoCategory:
        """API 응답 아이템 → VideoCategory."""
        snippet = item.get("snippet") or {}
        return VideoCategory(
            id=str(item["id"]),
            title=snippet.get("title", ""),
            assignable=snippet.get("assignable") is True,
            channel_id=snippet.get("channelId"),
        )

    async def close(self) -> None:
        """리소스 정리 (클라이언트는 외부에서 관리)."""
        pass
