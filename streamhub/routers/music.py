from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import Optional

from streamhub.db import get_db
from streamhub.routers.utils import collect_filters, handle_exception
from streamhub.schemas.music import (
    ArtistDetailResponse, ArtistListResponse, PlaylistDetailResponse, PlaylistListResponse,
)
from streamhub.services.music_service import MusicService

router = APIRouter(tags=["music"])


@router.get("/playlists", response_model=PlaylistListResponse)
def get_playlists(
    request: Request,
    sort: Optional[str] = Query(None, description="Sıralama: '-created_at', 'title'"),
    page: Optional[int] = Query(None, description="Page number"),
    limit: Optional[int] = Query(None, description="Items per page"),
    db: Session = Depends(get_db)
):
    """Playlists; filters: category, language"""
    try:
        data = MusicService(db).get_playlists(collect_filters(request), sort=sort, page=page, limit=limit)
        return PlaylistListResponse(success=True, data=data)
    except Exception as e:
        raise handle_exception(e)


@router.get("/playlists/{playlist_id}", response_model=PlaylistDetailResponse)
def get_playlist(playlist_id: int, db: Session = Depends(get_db)):
    try:
        return PlaylistDetailResponse(success=True, data=MusicService(db).get_playlist(playlist_id))
    except Exception as e:
        raise handle_exception(e)


@router.get("/artists", response_model=ArtistListResponse)
def get_artists(
    request: Request,
    sort: Optional[str] = Query(None, description="Sıralama: 'name', '-created_at'"),
    page: Optional[int] = Query(None, description="Page number"),
    limit: Optional[int] = Query(None, description="Items per page"),
    db: Session = Depends(get_db)
):
    """Artists; filters: language"""
    try:
        data = MusicService(db).get_artists(collect_filters(request), sort=sort, page=page, limit=limit)
        return ArtistListResponse(success=True, data=data)
    except Exception as e:
        raise handle_exception(e)


@router.get("/artists/{artist_id}", response_model=ArtistDetailResponse)
def get_artist(artist_id: int, db: Session = Depends(get_db)):
    try:
        return ArtistDetailResponse(success=True, data=MusicService(db).get_artist(artist_id))
    except Exception as e:
        raise handle_exception(e)
