"""Refresh Lock Port.

캐시 갱신 분산 락. 여러 프로세스가 같은 키를 동시에 채우는 것을 줄임.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class RefreshLockPort(ABC):
    """캐시 갱신 락 포트."""

    @abstractmethod
    async def acquire(self, key: str, ttl: int = 30) -> bool:
        """락 획득 시도 (대기하지 않음).

        Args:
            key: 락 키
            ttl: 락 만료 시간 (초)

        Returns:
            획득 성공 여부
        """
        pass

    @abstractmethod
    async def release(self, key: str) -> None:
        """락 해제."""
        pass
