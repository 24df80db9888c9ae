"""Application DTOs."""

from catalog.application.dto.list_result import ListResult
from catalog.application.dto.search_criteria import (
    ChannelSearchCriteria,
    PlaylistSearchCriteria,
    SearchCriteria,
    VideoSearchCriteria,
)

__all__ = [
    "ChannelSearchCriteria",
    "ListResult",
    "PlaylistSearchCriteria",
    "SearchCriteria",
    "VideoSearchCriteria",
]
