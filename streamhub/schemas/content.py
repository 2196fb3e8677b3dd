from pydantic import AliasChoices, BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any
from datetime import date, datetime
from streamhub.core.enums import ContentType, ContentCategory, VideoQuality, VideoFormat

# Child records
class ContentVideoResponse(BaseModel):
    id: int
    url: str
    quality: VideoQuality
    format: VideoFormat
    title: Optional[str] = None
    duration: Optional[int] = None
    file_size: Optional[int] = None
    is_hls: bool = False
    is_dash: bool = False
    is_embedded: bool = False

    class Config:
        from_attributes = True

class ContentAudioResponse(BaseModel):
    id: int
    url: str
    language: Optional[str] = None
    label: Optional[str] = None
    codec: Optional[str] = None
    is_default: bool = False

    class Config:
        from_attributes = True

class ContentSubtitleResponse(BaseModel):
    id: int
    url: str
    language: str
    label: Optional[str] = None
    format: Optional[str] = None
    is_default: bool = False

    class Config:
        from_attributes = True

class ContentCastResponse(BaseModel):
    id: int
    name: str
    character_name: Optional[str] = None
    profile_url: Optional[str] = None
    order: int = 0

    class Config:
        from_attributes = True

class ContentCrewResponse(BaseModel):
    id: int
    name: str
    job: str
    department: Optional[str] = None

    class Config:
        from_attributes = True

class ContentTagResponse(BaseModel):
    id: int
    name: str
    slug: str

    class Config:
        from_attributes = True

# Content
class ContentItem(BaseModel):
    """Listing representation of a catalog item"""
    id: int
    title: str
    short_description: Optional[str] = None
    type: ContentType
    category: ContentCategory
    genres: List[str] = []
    languages: List[str] = []
    countries: List[str] = []
    year: Optional[int] = None
    duration: Optional[int] = None
    duration_formatted: str = ""
    rating: Optional[str] = None
    imdb_rating: Optional[float] = None
    total_views: int = 0
    total_likes: int = 0
    is_featured: bool = False
    is_trending: bool = False
    is_new: bool = False
    is_exclusive: bool = False
    is_downloadable: bool = False
    is_live: bool = False
    release_date: Optional[date] = None
    trailer_url: Optional[str] = None
    has_trailer: bool = False
    created_at: Optional[datetime] = None

    @field_validator("genres", "languages", "countries", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return v or []

    class Config:
        from_attributes = True

class ContentDetail(ContentItem):
    """Full representation returned by the detail endpoints"""
    description: Optional[str] = None
    display_description: str = ""
    metadata: Optional[Dict[str, Any]] = Field(None, validation_alias=AliasChoices("extra_metadata", "metadata"))
    videos: List[ContentVideoResponse] = []
    audios: List[ContentAudioResponse] = []
    subtitles: List[ContentSubtitleResponse] = []
    cast: List[ContentCastResponse] = []
    crew: List[ContentCrewResponse] = []
    tags: List[ContentTagResponse] = []
    average_rating: float = 0.0
    total_ratings: int = 0
    # Only filled for an identified caller
    is_favorited: Optional[bool] = None
    in_watchlist: Optional[bool] = None
    user_rating: Optional[int] = None

class ContentPage(BaseModel):
    items: List[ContentItem]
    total: int
    page: int
    limit: int
    total_pages: int

class ContentListResponse(BaseModel):
    success: bool
    data: ContentPage

class ContentDetailResponse(BaseModel):
    success: bool
    data: ContentDetail

class RelatedContentResponse(BaseModel):
    success: bool
    data: List[ContentItem]

class CounterData(BaseModel):
    id: int
    total_views: Optional[int] = None
    total_likes: Optional[int] = None

class CounterResponse(BaseModel):
    success: bool
    data: CounterData
