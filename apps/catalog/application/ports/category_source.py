"""Category Source Port.

외부 카테고리 메타데이터 소스 추상화.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from catalog.domain.entities import VideoCategory


class CategorySourcePort(ABC):
    """카테고리 소스 포트."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """소스 식별자 (예: "youtube")."""
        pass

    @abstractmethod
    async def get_categories(self, region_code: str) -> list[VideoCategory]:
        """지역별 카테고리 목록 (assignable 여부 무관 전체).

        Raises:
            ExternalSourceError: 소스 조회 실패
        """
        pass

    async def close(self) -> None:
        """리소스 정리 (optional)."""
        pass
