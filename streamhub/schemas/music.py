from pydantic import AliasChoices, BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import date, datetime

class TrackItem(BaseModel):
    id: int
    title: str
    artist_id: int
    album_id: Optional[int] = None
    duration: Optional[int] = None
    audio_url: str
    language: Optional[str] = None

    class Config:
        from_attributes = True

class AlbumItem(BaseModel):
    id: int
    artist_id: int
    title: str
    cover_image: Optional[str] = None
    release_date: Optional[date] = None

    class Config:
        from_attributes = True

class PlaylistItem(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    cover_image: Optional[str] = None
    category: Optional[str] = None
    language: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = Field(None, validation_alias=AliasChoices("extra_metadata", "metadata"))
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class PlaylistDetail(PlaylistItem):
    tracks: List[TrackItem] = []

class ArtistItem(BaseModel):
    id: int
    name: str
    bio: Optional[str] = None
    image: Optional[str] = None
    language: str
    country: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = Field(None, validation_alias=AliasChoices("extra_metadata", "metadata"))
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ArtistDetail(ArtistItem):
    albums: List[AlbumItem] = []
    tracks: List[TrackItem] = []

class PlaylistPage(BaseModel):
    items: List[PlaylistItem]
    total: int
    page: int
    limit: int
    total_pages: int

class ArtistPage(BaseModel):
    items: List[ArtistItem]
    total: int
    page: int
    limit: int
    total_pages: int

class PlaylistListResponse(BaseModel):
    success: bool
    data: PlaylistPage

class PlaylistDetailResponse(BaseModel):
    success: bool
    data: PlaylistDetail

class ArtistListResponse(BaseModel):
    success: bool
    data: ArtistPage

class ArtistDetailResponse(BaseModel):
    success: bool
    data: ArtistDetail
