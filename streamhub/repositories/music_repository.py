from typing import Optional
from sqlalchemy.orm import Session, selectinload

from streamhub.models.music import Artist, Playlist
from streamhub.repositories.base_repository import BaseRepository

class PlaylistRepository(BaseRepository[Playlist]):
    def __init__(self, db: Session):
        super().__init__(Playlist, db)

    def get_detail(self, playlist_id: int) -> Optional[Playlist]:
        """Active playlist with its tracks in playlist order"""
        return self.db.query(Playlist).options(
            selectinload(Playlist.tracks),
        ).filter(Playlist.id == playlist_id, Playlist.is_active == True).first()  # noqa: E712


class ArtistRepository(BaseRepository[Artist]):
    def __init__(self, db: Session):
        super().__init__(Artist, db)

    def get_detail(self, artist_id: int) -> Optional[Artist]:
        """Active artist with albums and tracks loaded"""
        return self.db.query(Artist).options(
            selectinload(Artist.albums),
            selectinload(Artist.tracks),
        ).filter(Artist.id == artist_id, Artist.is_active == True).first()  # noqa: E712
