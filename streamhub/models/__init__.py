from streamhub.db import Base
from .content import (
    Content, ContentVideo, ContentAudio, ContentSubtitle,
    ContentCast, ContentCrew, ContentTag, content_tag_pivot
)
from .live_channel import LiveChannel, ChannelProgram
from .music import Artist, Album, Track, Playlist, playlist_tracks
from .user import User
from .user_interaction import (
    ContentRating, UserWatchHistory, user_favorites, user_watchlist
)

__all__ = [
    'Content', 'ContentVideo', 'ContentAudio', 'ContentSubtitle',
    'ContentCast', 'ContentCrew', 'ContentTag', 'content_tag_pivot',
    'LiveChannel', 'ChannelProgram', 'User',
    'Artist', 'Album', 'Track', 'Playlist', 'playlist_tracks',
    'ContentRating', 'UserWatchHistory', 'user_favorites', 'user_watchlist'
]
