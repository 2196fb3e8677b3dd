from pydantic import AliasChoices, BaseModel, Field
from typing import Optional, List, Dict, Any
import datetime as dt
from datetime import datetime
from streamhub.core.enums import ContentCategory

class LiveChannelItem(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    logo: Optional[str] = None
    stream_url: str
    backup_url: Optional[str] = None
    category: ContentCategory
    language: str
    country: Optional[str] = None
    is_live: bool = True
    is_hd: bool = False
    viewers: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = Field(None, validation_alias=AliasChoices("extra_metadata", "metadata"))
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ChannelPage(BaseModel):
    items: List[LiveChannelItem]
    total: int
    page: int
    limit: int
    total_pages: int

class ChannelListResponse(BaseModel):
    success: bool
    data: ChannelPage

class ChannelDetailResponse(BaseModel):
    success: bool
    data: LiveChannelItem

class ChannelProgramItem(BaseModel):
    """EPG slot"""
    id: int
    channel_id: int
    title: str
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime

    class Config:
        from_attributes = True

class EPGResponse(BaseModel):
    success: bool
    data: List[ChannelProgramItem]
    channel_id: int
    date: dt.date
