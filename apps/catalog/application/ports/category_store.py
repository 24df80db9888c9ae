"""Category Store Port.

지역별 카테고리 캐시 레코드 저장소.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from catalog.domain.entities import CategoryCollection


class CategoryStorePort(ABC):
    """카테고리 캐시 저장소 포트."""

    @abstractmethod
    async def get(self, region_code: str) -> CategoryCollection | None:
        """지역 코드로 캐시 레코드 조회. 없으면 None."""
        pass

    @abstractmethod
    async def save(self, collection: CategoryCollection) -> None:
        """캐시 레코드 저장 (전체 덮어쓰기)."""
        pass
