from .base_repository import BaseRepository
from .content_repository import ContentRepository
from .channel_repository import ChannelRepository
from .music_repository import PlaylistRepository, ArtistRepository

__all__ = [
    "BaseRepository",
    "ContentRepository",
    "ChannelRepository",
    "PlaylistRepository",
    "ArtistRepository"
]
