"""Resolve Categories Command.

지역별 카테고리 조회 UseCase (cache-aside).
로컬 저장소 확인 → 미스 시 외부 소스 조회 → assignable 필터 → 저장 → 반환.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from catalog.domain.entities import CategoryCollection

if TYPE_CHECKING:
    from catalog.application.ports.category_source import CategorySourcePort
    from catalog.application.ports.category_store import CategoryStorePort
    from catalog.application.ports.refresh_lock import RefreshLockPort
    from catalog.domain.entities import VideoCategory

logger = logging.getLogger(__name__)

LOCK_KEY_PREFIX = "category:"


class ResolveCategoriesCommand:
    """카테고리 조회 Command (UseCase).

    플로우:
    1. 저장소 조회 → HIT면 저장된 data 반환
    2. MISS → 지역 코드별 single-flight 락 안에서 다시 확인
    3. 외부 소스 조회 → assignable == True만 남김
    4. 저장소에 덮어쓰기 → 결과 반환

    외부 소스 실패 시 ExternalSourceError 전파, 저장하지 않음.
    refresh_lock이 있으면 프로세스 간에도 중복 조회를 줄임.
    """

    def __init__(
        self,
        store: CategoryStorePort,
        source: CategorySourcePort,
        refresh_lock: RefreshLockPort | None = None,
        lock_ttl: int = 30,
        lock_wait: float = 0.5,
    ):
        """초기화.

        Args:
            store: 카테고리 캐시 저장소
            source: 외부 카테고리 소스
            refresh_lock: 분산 갱신 락 (optional)
            lock_ttl: 분산 락 TTL (초)
            lock_wait: 분산 락 획득 실패 시 대기 시간 (초)
        """
        self._store = store
        self._source = source
        self._refresh_lock = refresh_lock
        self._lock_ttl = lock_ttl
        self._lock_wait = lock_wait
        self._locks: dict[str, asyncio.Lock] = {}
        # 락을 보유 또는 대기 중인 요청 수 (0이 되면 락 제거)
        self._lock_users: dict[str, int] = {}

    async def execute(self, region_code: str) -> list[VideoCategory]:
        """Command 실행.

        Args:
            region_code: 지역 코드

        Returns:
            assignable 카테고리 목록
        """
        cached = await self._store.get(region_code)
        if cached is not None:
            return cached.data

        lock = self._locks.setdefault(region_code, asyncio.Lock())
        self._lock_users[region_code] = self._lock_users.get(region_code, 0) + 1
        try:
            async with lock:
                # 같은 프로세스의 다른 요청이 먼저 채웠는지 확인
                cached = await self._store.get(region_code)
                if cached is not None:
                    return cached.data

                if self._refresh_lock is None:
                    return await self._populate(region_code)
                return await self._populate_with_refresh_lock(region_code)
        finally:
            self._release_lock(region_code)

    def _release_lock(self, region_code: str) -> None:
        remaining = self._lock_users[region_code] - 1
        if remaining:
            self._lock_users[region_code] = remaining
            return
        del self._lock_users[region_code]
        del self._locks[region_code]

    async def _populate_with_refresh_lock(self, region_code: str) -> list[VideoCategory]:
        lock_key = f"{LOCK_KEY_PREFIX}{region_code}"
        acquired = await self._refresh_lock.acquire(lock_key, ttl=self._lock_ttl)
        if acquired:
            try:
                cached = await self._store.get(region_code)
                if cached is not None:
                    return cached.data
                return await self._populate(region_code)
            finally:
                await self._refresh_lock.release(lock_key)

        logger.info(
            "Category refresh in progress by another process",
            extra={"region_code": region_code},
        )
        await asyncio.sleep(self._lock_wait)

        cached = await self._store.get(region_code)
        if cached is not None:
            return cached.data
        # 결과가 같으므로 덮어써도 무방
        return await self._populate(region_code)

    async def _populate(self, region_code: str) -> list[VideoCategory]:
        categories = await self._source.get_categories(region_code)
        assignable = [category for category in categories if category.assignable is True]

        await self._store.save(CategoryCollection(id=region_code, data=assignable))

        logger.info(
            "Category cache populated",
            extra={
                "region_code": region_code,
                "source": self._source.source_name,
                "fetched": len(categories),
                "assignable": len(assignable),
            },
        )
        return assignable
