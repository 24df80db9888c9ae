"""Domain Enums."""

from catalog.domain.enums.search import SortKey, VideoDuration

__all__ = ["SortKey", "VideoDuration"]
