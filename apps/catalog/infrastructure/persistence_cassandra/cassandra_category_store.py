"""Cassandra Category Store.

category 테이블 (id text PRIMARY KEY, data text).
data는 카테고리 목록 JSON.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from cassandra import DriverException
from cassandra.cluster import NoHostAvailable

from catalog.application.exceptions import BackendExecutionError
from catalog.application.ports.category_store import CategoryStorePort
from catalog.domain.entities import CategoryCollection, VideoCategory
from catalog.infrastructure.persistence_cassandra.session import execute_async

if TYPE_CHECKING:
    from cassandra.cluster import Session

logger = logging.getLogger(__name__)

CATEGORY_TABLE = "category"


class CassandraCategoryStore(CategoryStorePort):
    """Cassandra 카테고리 캐시 저장소."""

    def __init__(self, session: Session):
        self._session = session

    async def get(self, region_code: str) -> CategoryCollection | None:
        cql = f"SELECT id, data FROM {CATEGORY_TABLE} WHERE id = %s"
        try:
            result = await execute_async(self._session, cql, (region_code,))
        except (DriverException, NoHostAvailable) as e:
            logger.error(
                "Category lookup failed",
                extra={"region_code": region_code, "error": str(e)},
            )
            raise BackendExecutionError("cassandra", "get_categories", str(e)) from e

        rows = result.current_rows
        if not rows:
            return None
        row = rows[0] if isinstance(rows[0], dict) else rows[0]._asdict()
        return CategoryCollection(id=row["id"], data=self._deserialize(row.get("data")))

    async def save(self, collection: CategoryCollection) -> None:
        cql = f"INSERT INTO {CATEGORY_TABLE} (id, data) VALUES (%s, %s)"
        data = json.dumps([asdict(category) for category in collection.data])
        try:
            await execute_async(self._session, cql, (collection.id, data))
        except (DriverException, NoHostAvailable) as e:
            logger.error(
                "Category save failed",
                extra={"region_code": collection.id, "error": str(e)},
            )
            raise BackendExecutionError("cassandra", "save_categories", str(e)) from e

    @staticmethod
    def _deserialize(data: str | None) -> list[VideoCategory]:
        if not data:
            return []
        items: list[dict[str, Any]] = json.loads(data)
        return [
            VideoCategory(
                id=item["id"],
                title=item.get("title", ""),
                assignable=bool(item.get("assignable", False)),
                channel_id=item.get("channel_id"),
            )
            for item in items
        ]
