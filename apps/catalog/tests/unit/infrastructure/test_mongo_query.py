"""Mongo Query Serializer Unit Tests."""

from __future__ import annotations

from datetime import datetime, timezone

from pymongo import ASCENDING, DESCENDING

from catalog.application.dto import VideoSearchCriteria
from catalog.application.query import QueryBuilder, TextMatch, build_search_query
from catalog.domain.constants import VIDEO_SORT_FIELDS
from catalog.domain.entities import Video
from catalog.infrastructure.persistence_mongo.mongo_catalog_backend import build_field_maps
from catalog.infrastructure.persistence_mongo.mongo_query import to_mongo

FIELD_MAP = build_field_maps()[Video]


class TestMongoQuery:
    """Query → MongoDB 필터."""

    def test_empty_query(self) -> None:
        mongo = to_mongo(QueryBuilder().build(), FIELD_MAP)

        assert mongo.filter == {}
        assert mongo.sort == []

    def test_text_query_is_escaped_regex(self) -> None:
        mongo = to_mongo(QueryBuilder().text(("title", "description"), "c.a+ts").build(), FIELD_MAP)

        assert mongo.filter == {
            "$or": [
                {"title": {"$regex": "c\\.a\\+ts", "$options": "i"}},
                {"description": {"$regex": "c\\.a\\+ts", "$options": "i"}},
            ]
        }

    def test_duration_and_region(self) -> None:
        query = build_search_query(VideoSearchCriteria(video_duration="short", region_code="US"))

        assert to_mongo(query, FIELD_MAP).filter == {
            "duration": {"$gt": 0, "$lt": 240},
            "blockedRegions": {"$nin": ["US"]},
        }

    def test_id_maps_to_document_id(self) -> None:
        query = QueryBuilder().exclude("id", "v1").build()

        assert to_mongo(query, FIELD_MAP).filter == {"_id": {"$ne": "v1"}}

    def test_published_range_inverted_pairing(self) -> None:
        before = datetime(2024, 1, 1, tzinfo=timezone.utc)
        after = datetime(2024, 6, 1, tzinfo=timezone.utc)
        query = build_search_query(
            VideoSearchCriteria(published_after=after, published_before=before)
        )

        assert to_mongo(query, FIELD_MAP).filter == {
            "publishedAt": {"$gt": before, "$lte": after}
        }

    def test_same_key_clauses_use_and(self) -> None:
        """같은 필드 조건이 겹치면 $and."""
        query = (
            QueryBuilder()
            .match("channel_id", "c1")
            .exclude("channel_id", "c2")
            .build()
        )

        assert to_mongo(query, FIELD_MAP).filter == {
            "$and": [{"channelId": "c1"}, {"channelId": {"$ne": "c2"}}]
        }

    def test_should_group_and_sort(self) -> None:
        query = (
            QueryBuilder()
            .any_of("tags", ["a", "b"])
            .sort_by("published_at")
            .sort_by("title", descending=False)
            .build()
        )

        mongo = to_mongo(query, FIELD_MAP)

        assert mongo.filter == {
            "$or": [{"tags": {"$in": ["a"]}}, {"tags": {"$in": ["b"]}}]
        }
        assert mongo.sort == [("publishedAt", DESCENDING), ("title", ASCENDING)]

    def test_negated_text_uses_nor(self) -> None:
        from catalog.application.query import Query

        query = Query(must_not=(TextMatch(("title",), "x"),))

        assert to_mongo(query, FIELD_MAP).filter == {
            "$nor": [{"$or": [{"title": {"$regex": "x", "$options": "i"}}]}]
        }

    def test_sort_key_mapping(self) -> None:
        query = build_search_query(VideoSearchCriteria(sort="viewCount"), VIDEO_SORT_FIELDS)

        assert to_mongo(query, FIELD_MAP).sort == [("publishedAt", DESCENDING)]
