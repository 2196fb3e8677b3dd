import logging
from typing import Any, Mapping, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from streamhub.core.exceptions import EntityNotFound, UnexpectedStoreFailure
from streamhub.repositories.music_repository import ArtistRepository, PlaylistRepository
from streamhub.schemas.music import (
    AlbumItem, ArtistDetail, ArtistItem, ArtistPage, PlaylistDetail, PlaylistItem, PlaylistPage, TrackItem,
)
from streamhub.services.filter_compiler import compile_query
from streamhub.services.pagination import paginate

logger = logging.getLogger(__name__)


class MusicService:
    """Playlist and artist listings and their detail views"""

    def __init__(self, db: Session):
        self.db = db
        self.playlist_repo = PlaylistRepository(db)
        self.artist_repo = ArtistRepository(db)

    def get_playlists(self, filters: Optional[Mapping[str, Any]] = None, sort: Optional[str] = None,
                      page: int = 1, limit: Optional[int] = None) -> PlaylistPage:
        descriptor = compile_query("playlists", filters, sort)
        try:
            result = paginate(self.playlist_repo.query_for(descriptor), page, limit)
        except SQLAlchemyError as e:
            raise self._store_failure("playlists", e)
        return PlaylistPage(
            items=[PlaylistItem.model_validate(p) for p in result.items],
            total=result.total,
            page=result.page,
            limit=result.limit,
            total_pages=result.total_pages,
        )

    def get_playlist(self, playlist_id: int) -> PlaylistDetail:
        try:
            playlist = self.playlist_repo.get_detail(playlist_id)
        except SQLAlchemyError as e:
            raise self._store_failure("playlist detail", e)
        if not playlist:
            raise EntityNotFound(f"Playlist {playlist_id} not found")
        detail = PlaylistDetail.model_validate(playlist)
        return detail.model_copy(update={
            "tracks": [TrackItem.model_validate(t) for t in playlist.tracks if t.is_active],
        })

    def get_artists(self, filters: Optional[Mapping[str, Any]] = None, sort: Optional[str] = None,
                    page: int = 1, limit: Optional[int] = None) -> ArtistPage:
        descriptor = compile_query("artists", filters, sort)
        try:
            result = paginate(self.artist_repo.query_for(descriptor), page, limit)
        except SQLAlchemyError as e:
            raise self._store_failure("artists", e)
        return ArtistPage(
            items=[ArtistItem.model_validate(a) for a in result.items],
            total=result.total,
            page=result.page,
            limit=result.limit,
            total_pages=result.total_pages,
        )

    def get_artist(self, artist_id: int) -> ArtistDetail:
        try:
            artist = self.artist_repo.get_detail(artist_id)
        except SQLAlchemyError as e:
            raise self._store_failure("artist detail", e)
        if not artist:
            raise EntityNotFound(f"Artist {artist_id} not found")
        detail = ArtistDetail.model_validate(artist)
        return detail.model_copy(update={
            "albums": [AlbumItem.model_validate(a) for a in artist.albums if a.is_active],
            "tracks": [TrackItem.model_validate(t) for t in artist.tracks if t.is_active],
        })

    def _store_failure(self, operation: str, error: Exception) -> UnexpectedStoreFailure:
        logger.error(f"Catalog store error during {operation}: {str(error)}")
        self.db.rollback()
        return UnexpectedStoreFailure()
