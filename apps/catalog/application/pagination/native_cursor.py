"""Native Cursor Codec.

저장소가 반환한 paging state를 그대로 감싸는 토큰.
바이트 값은 URL-safe 하도록 hex 문자열로 표현.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class NativeCursorCodec:
    """서버 측 커서(paging state) 토큰 코덱."""

    def encode(self, paging_state: bytes | None) -> str | None:
        """paging state → 토큰. 마지막 페이지면 None."""
        if not paging_state:
            return None
        return paging_state.hex()

    def decode(self, token: str | None) -> bytes | None:
        """토큰 → paging state.

        해석할 수 없는 토큰은 None (첫 페이지부터 다시 조회).
        """
        if not token:
            return None
        try:
            return bytes.fromhex(token)
        except ValueError:
            logger.warning(
                "Malformed page token, restarting from first page",
                extra={"page_token": token},
            )
            return None
