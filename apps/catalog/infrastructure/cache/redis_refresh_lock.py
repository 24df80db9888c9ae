"""Redis Refresh Lock.

SET NX EX 기반 캐시 갱신 분산 락.

키: catalog:lock:{key}
"""

from __future__ import annotations

import logging

from redis.asyncio import Redis

from catalog.application.ports.refresh_lock import RefreshLockPort

logger = logging.getLogger(__name__)

LOCK_KEY_PREFIX = "catalog:lock:"


class RedisRefreshLock(RefreshLockPort):
    """Redis 갱신 락.

    TTL이 지나면 자동 해제되므로 보유 프로세스가 죽어도 교착되지 않음.
    """

    def __init__(self, redis: Redis):
        """초기화.

        Args:
            redis: Redis 클라이언트
        """
        self._redis = redis

    def _lock_key(self, key: str) -> str:
        return f"{LOCK_KEY_PREFIX}{key}"

    async def acquire(self, key: str, ttl: int = 30) -> bool:
        """락 획득 (SETNX + EXPIRE 원자적 수행)."""
        acquired = await self._redis.set(
            self._lock_key(key),
            "1",
            nx=True,
            ex=ttl,
        )

        if acquired:
            logger.debug("Acquired refresh lock", extra={"key": key})
        else:
            logger.debug("Failed to acquire refresh lock", extra={"key": key})

        return bool(acquired)

    async def release(self, key: str) -> None:
        await self._redis.delete(self._lock_key(key))
        logger.debug("Released refresh lock", extra={"key": key})
