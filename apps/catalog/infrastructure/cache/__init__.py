"""Cache Infrastructure."""

from catalog.infrastructure.cache.redis_refresh_lock import RedisRefreshLock

__all__ = ["RedisRefreshLock"]
