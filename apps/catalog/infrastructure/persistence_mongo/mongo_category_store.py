"""Mongo Category Store.

category 컬렉션:
    {"_id": "US", "data": [{"id", "title", "assignable", "channelId"}, ...]}
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pymongo.errors import PyMongoError

from catalog.application.exceptions import BackendExecutionError
from catalog.application.ports.category_store import CategoryStorePort
from catalog.domain.entities import CategoryCollection, VideoCategory

if TYPE_CHECKING:
    from pymongo.asynchronous.database import AsyncDatabase

logger = logging.getLogger(__name__)

CATEGORY_COLLECTION = "category"


class MongoCategoryStore(CategoryStorePort):
    """MongoDB 카테고리 캐시 저장소."""

    def __init__(self, database: AsyncDatabase):
        self._collection = database[CATEGORY_COLLECTION]

    async def get(self, region_code: str) -> CategoryCollection | None:
        try:
            document = await self._collection.find_one({"_id": region_code})
        except PyMongoError as e:
            logger.error(
                "Category lookup failed",
                extra={"region_code": region_code, "error": str(e)},
            )
            raise BackendExecutionError("mongo", "get_categories", str(e)) from e

        if document is None:
            return None
        return CategoryCollection(
            id=document["_id"],
            data=[self._to_entity(item) for item in document.get("data") or []],
        )

    async def save(self, collection: CategoryCollection) -> None:
        document = {
            "_id": collection.id,
            "data": [self._to_document(category) for category in collection.data],
        }
        try:
            await self._collection.replace_one({"_id": collection.id}, document, upsert=True)
        except PyMongoError as e:
            logger.error(
                "Category save failed",
                extra={"region_code": collection.id, "error": str(e)},
            )
            raise BackendExecutionError("mongo", "save_categories", str(e)) from e

    @staticmethod
    def _to_document(category: VideoCategory) -> dict[str, Any]:
        return {
            "id": category.id,
            "title": category.title,
            "assignable": category.assignable,
            "channelId": category.channel_id,
        }

    @staticmethod
    def _to_entity(item: dict[str, Any]) -> VideoCategory:
        return VideoCategory(
            id=item["id"],
            title=item.get("title", ""),
            assignable=bool(item.get("assignable", False)),
            channel_id=item.get("channelId"),
        )
