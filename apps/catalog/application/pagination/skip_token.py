"""Skip Token Codec.

형식: "{마지막 항목 key}|{skip 수}"
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from catalog.domain.constants import ID_FIELD

logger = logging.getLogger(__name__)

SEPARATOR = "|"


class SkipTokenCodec:
    """skip 기반 페이지 토큰 코덱.

    다음 페이지 여부는 "결과 수 == limit"으로 판단.
    정확히 limit개가 남아 있으면 토큰이 발급되고
    다음 요청은 빈 페이지(토큰 없음)를 반환함.
    """

    def __init__(self, key_field: str = ID_FIELD) -> None:
        self._key_field = key_field

    def decode(self, token: str | None) -> int | None:
        """토큰 → skip 수.

        Returns:
            - 토큰 없음: 0
            - 구분자 없음: None (해석 불가, 호출자가 "토큰 없음"과 구분)
            - skip 부분이 숫자가 아님: 0
            - 그 외: 반올림한 정수 (음수는 0)
        """
        if not token:
            return 0
        parts = str(token).split(SEPARATOR)
        if len(parts) < 2:
            return None
        try:
            value = float(parts[1])
        except ValueError:
            return 0
        if not math.isfinite(value):
            return 0
        # 0.5는 올림 (round()의 은행가 반올림 사용 안 함)
        return max(0, math.floor(value + 0.5))

    def resume(self, token: str | None) -> int:
        """재개 위치. 해석 불가 토큰은 0부터 다시 시작."""
        skip = self.decode(token)
        if skip is None:
            logger.warning(
                "Malformed page token, restarting from first page",
                extra={"page_token": token},
            )
            return 0
        return skip

    def encode(self, items: Sequence[Any], limit: int, skip: int) -> str | None:
        """다음 페이지 토큰. 결과가 limit보다 적으면 None."""
        if not items or len(items) < limit:
            return None
        return f"{self._key_of(items[-1])}{SEPARATOR}{skip + limit}"

    def _key_of(self, item: Any) -> Any:
        if isinstance(item, Mapping):
            return item.get(self._key_field)
        return getattr(item, self._key_field, None)
