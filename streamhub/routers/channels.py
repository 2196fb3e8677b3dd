import datetime as dt
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import Optional

from streamhub.db import get_db
from streamhub.routers.utils import collect_filters, handle_exception
from streamhub.schemas.channel import ChannelDetailResponse, ChannelListResponse, EPGResponse
from streamhub.services.channel_service import ChannelService

router = APIRouter(prefix="/channels", tags=["channels"])


@router.get("", response_model=ChannelListResponse)
def get_live_channels(
    request: Request,
    sort: Optional[str] = Query(None, description="Sıralama: 'name', '-viewers', '-created_at'"),
    page: Optional[int] = Query(None, description="Page number"),
    limit: Optional[int] = Query(None, description="Items per page"),
    db: Session = Depends(get_db)
):
    """Live channels; filters: category, language, country, is_hd"""
    try:
        service = ChannelService(db)
        data = service.get_live_channels(collect_filters(request), sort=sort, page=page, limit=limit)
        return ChannelListResponse(success=True, data=data)
    except Exception as e:
        raise handle_exception(e)


@router.get("/{channel_id}", response_model=ChannelDetailResponse)
def get_live_channel(channel_id: int, db: Session = Depends(get_db)):
    try:
        return ChannelDetailResponse(success=True, data=ChannelService(db).get_live_channel(channel_id))
    except Exception as e:
        raise handle_exception(e)


@router.get("/{channel_id}/epg", response_model=EPGResponse)
def get_channel_epg(
    channel_id: int,
    date: Optional[dt.date] = Query(None, description="YYYY-MM-DD, defaults to today (UTC)"),
    db: Session = Depends(get_db)
):
    try:
        day = date or dt.datetime.now(dt.timezone.utc).date()
        entries = ChannelService(db).get_channel_epg(channel_id, day)
        return EPGResponse(success=True, data=entries, channel_id=channel_id, date=day)
    except Exception as e:
        raise handle_exception(e)
