"""Query Builder Unit Tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from catalog.application.dto import (
    ChannelSearchCriteria,
    PlaylistSearchCriteria,
    VideoSearchCriteria,
)
from catalog.application.query import (
    Contains,
    Match,
    QueryBuilder,
    Range,
    SortField,
    TextMatch,
    build_search_query,
)
from catalog.domain.constants import VIDEO_SORT_FIELDS, classify_duration


class TestQueryBuilder:
    """QueryBuilder 테스트."""

    def test_empty_values_are_skipped(self) -> None:
        """None, 빈 문자열은 조건으로 추가하지 않음."""
        query = (
            QueryBuilder()
            .match("channel_id", None)
            .match("topic_id", "")
            .text(("title",), "")
            .exclude("id", None)
            .exclude_containing("blocked_regions", "")
            .range("duration")
            .build()
        )

        assert not query.has_filter

    def test_any_of_builds_should_group(self) -> None:
        query = QueryBuilder().any_of("tags", ["a", "", "b"]).build()

        assert query.must == ()
        assert query.should == (Contains("tags", ("a",)), Contains("tags", ("b",)))

    def test_sort_defaults_to_descending(self) -> None:
        query = QueryBuilder().sort_by("published_at").build()

        assert query.sort == (SortField("published_at", True),)


class TestBuildSearchQuery:
    """검색 조건 → Query 변환 테스트."""

    def test_empty_criteria(self) -> None:
        query = build_search_query(VideoSearchCriteria())

        assert not query.has_filter
        assert query.sort == ()

    def test_text_query_over_title_and_description(self) -> None:
        query = build_search_query(VideoSearchCriteria(q="cats"))

        assert query.must == (TextMatch(("title", "description"), "cats"),)

    @pytest.mark.parametrize(
        ("bucket", "expected"),
        [
            ("short", Range("duration", lower=0, upper=240, include_lower=False)),
            ("medium", Range("duration", lower=240, upper=1200, include_lower=True)),
            ("long", Range("duration", lower=1200, upper=None, include_lower=True)),
        ],
    )
    def test_duration_buckets(self, bucket: str, expected: Range) -> None:
        query = build_search_query(VideoSearchCriteria(video_duration=bucket))

        assert query.must == (expected,)

    def test_unknown_duration_is_ignored(self) -> None:
        query = build_search_query(VideoSearchCriteria(video_duration="any"))

        assert not query.has_filter

    def test_published_range_keeps_inverted_pairing(self) -> None:
        """published_before가 하한, published_after가 상한."""
        before = datetime(2024, 1, 1, tzinfo=timezone.utc)
        after = datetime(2024, 6, 1, tzinfo=timezone.utc)

        query = build_search_query(
            VideoSearchCriteria(published_after=after, published_before=before)
        )

        assert query.must == (
            Range("published_at", lower=before, upper=after, include_upper=True),
        )

    def test_published_after_only(self) -> None:
        after = datetime(2024, 6, 1, tzinfo=timezone.utc)

        query = build_search_query(VideoSearchCriteria(published_after=after))

        assert query.must == (Range("published_at", upper=after, include_upper=True),)

    def test_published_before_only(self) -> None:
        before = datetime(2024, 1, 1, tzinfo=timezone.utc)

        query = build_search_query(VideoSearchCriteria(published_before=before))

        assert query.must == (Range("published_at", lower=before),)

    def test_region_code_is_exclusion(self) -> None:
        query = build_search_query(PlaylistSearchCriteria(region_code="US"))

        assert query.must == ()
        assert query.must_not == (Contains("blocked_regions", ("US",)),)

    def test_equality_conditions(self) -> None:
        query = build_search_query(
            VideoSearchCriteria(
                channel_id="c1",
                channel_type="pets",
                topic_id="/m/01",
                relevance_language="en",
            )
        )

        assert set(query.must) == {
            Match("channel_id", "c1"),
            Match("channel_type", "pets"),
            Match("topic_id", "/m/01"),
            Match("relevance_language", "en"),
        }

    def test_channel_search_matches_own_id(self) -> None:
        query = build_search_query(
            ChannelSearchCriteria(channel_id="c1"), channel_id_field="id"
        )

        assert query.must == (Match("id", "c1"),)

    @pytest.mark.parametrize("key", ["date", "relevance", "rating", "viewCount"])
    def test_sort_keys_map_to_published_at(self, key: str) -> None:
        query = build_search_query(VideoSearchCriteria(sort=key), VIDEO_SORT_FIELDS)

        assert query.sort == (SortField("published_at", True),)

    def test_unmapped_sort_key_passes_through(self) -> None:
        query = build_search_query(VideoSearchCriteria(sort="title"), VIDEO_SORT_FIELDS)

        assert query.sort == (SortField("title", True),)


class TestDurationClassification:
    """재생 시간 구간 경계."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, None),
            (1, "short"),
            (239, "short"),
            (240, "medium"),
            (241, "medium"),
            (1199, "medium"),
            (1200, "long"),
            (1201, "long"),
            (None, None),
        ],
    )
    def test_classify(self, seconds: int | None, expected: str | None) -> None:
        assert classify_duration(seconds) == expected
