"""Domain Entities."""

from catalog.domain.entities.category import CategoryCollection, VideoCategory
from catalog.domain.entities.channel import Channel
from catalog.domain.entities.playlist import Playlist
from catalog.domain.entities.video import PlaylistVideo, Video

__all__ = [
    "CategoryCollection",
    "Channel",
    "Playlist",
    "PlaylistVideo",
    "Video",
    "VideoCategory",
]
