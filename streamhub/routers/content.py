from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import Optional

from streamhub.db import get_db
from streamhub.core.auth import get_current_user_id
from streamhub.routers.utils import collect_filters, handle_exception
from streamhub.schemas.content import (
    ContentDetailResponse, ContentListResponse, CounterData, CounterResponse, RelatedContentResponse
)
from streamhub.services.discovery_service import DiscoveryService

router = APIRouter(prefix="/content", tags=["content"])

SORT_DESCRIPTION = "Sıralama: '-created_at', 'title', '-total_views', '-imdb_rating' ..."


def _listing(operation: str, request: Request, db: Session, sort, page, limit) -> ContentListResponse:
    service = DiscoveryService(db)
    method = {
        "trending": service.get_trending,
        "featured": service.get_featured,
        "new": service.get_new,
        "shorts": service.get_shorts_feed,
    }[operation]
    data = method(collect_filters(request), sort=sort, page=page, limit=limit)
    return ContentListResponse(success=True, data=data)


@router.get("/trending", response_model=ContentListResponse)
def get_trending(
    request: Request,
    sort: Optional[str] = Query(None, description=SORT_DESCRIPTION),
    page: Optional[int] = Query(None, description="Page number"),
    limit: Optional[int] = Query(None, description="Items per page"),
    db: Session = Depends(get_db)
):
    """Trending content; filters: type, category, language, genre, year, rating"""
    try:
        return _listing("trending", request, db, sort, page, limit)
    except Exception as e:
        raise handle_exception(e)


@router.get("/featured", response_model=ContentListResponse)
def get_featured(
    request: Request,
    sort: Optional[str] = Query(None, description=SORT_DESCRIPTION),
    page: Optional[int] = Query(None, description="Page number"),
    limit: Optional[int] = Query(None, description="Items per page"),
    db: Session = Depends(get_db)
):
    """Featured content; filters: type, category"""
    try:
        return _listing("featured", request, db, sort, page, limit)
    except Exception as e:
        raise handle_exception(e)


@router.get("/new", response_model=ContentListResponse)
def get_new(
    request: Request,
    sort: Optional[str] = Query(None, description=SORT_DESCRIPTION),
    page: Optional[int] = Query(None, description="Page number"),
    limit: Optional[int] = Query(None, description="Items per page"),
    db: Session = Depends(get_db)
):
    """New arrivals; filters: type, category"""
    try:
        return _listing("new", request, db, sort, page, limit)
    except Exception as e:
        raise handle_exception(e)


@router.get("/shorts", response_model=ContentListResponse)
def get_shorts_feed(
    request: Request,
    sort: Optional[str] = Query(None, description=SORT_DESCRIPTION),
    page: Optional[int] = Query(None, description="Page number"),
    limit: Optional[int] = Query(None, description="Items per page"),
    db: Session = Depends(get_db)
):
    """Shorts feed; filters: category, language"""
    try:
        return _listing("shorts", request, db, sort, page, limit)
    except Exception as e:
        raise handle_exception(e)


@router.get("/search", response_model=ContentListResponse)
def search_content(
    request: Request,
    q: Optional[str] = Query(None, description="Search query"),
    sort: Optional[str] = Query(None, description=SORT_DESCRIPTION),
    page: Optional[int] = Query(None, description="Page number"),
    limit: Optional[int] = Query(None, description="Items per page"),
    db: Session = Depends(get_db)
):
    """
    Case-insensitive search in title and descriptions.
    Filters: type, category, language, genre.
    """
    try:
        service = DiscoveryService(db)
        data = service.search(q, collect_filters(request), sort=sort, page=page, limit=limit)
        return ContentListResponse(success=True, data=data)
    except Exception as e:
        raise handle_exception(e)


@router.get("/shorts/{content_id}", response_model=ContentDetailResponse)
def get_short(
    content_id: int,
    current_user_id: Optional[int] = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    try:
        service = DiscoveryService(db)
        return ContentDetailResponse(success=True, data=service.get_short(content_id, current_user_id))
    except Exception as e:
        raise handle_exception(e)


@router.get("/{content_id}", response_model=ContentDetailResponse)
def get_content_details(
    content_id: int,
    current_user_id: Optional[int] = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Content details; every successful call counts as a view"""
    try:
        service = DiscoveryService(db)
        return ContentDetailResponse(success=True, data=service.get_content(content_id, current_user_id))
    except Exception as e:
        raise handle_exception(e)


@router.get("/{content_id}/related", response_model=RelatedContentResponse)
def get_related_content(
    content_id: int,
    limit: Optional[int] = Query(None, description="Maximum number of items"),
    db: Session = Depends(get_db)
):
    try:
        service = DiscoveryService(db)
        return RelatedContentResponse(success=True, data=service.get_related(content_id, limit))
    except Exception as e:
        raise handle_exception(e)


@router.get("/{content_id}/cast")
def get_cast(content_id: int, db: Session = Depends(get_db)):
    try:
        return {"success": True, "data": DiscoveryService(db).get_cast(content_id)}
    except Exception as e:
        raise handle_exception(e)


@router.get("/{content_id}/crew")
def get_crew(content_id: int, db: Session = Depends(get_db)):
    try:
        return {"success": True, "data": DiscoveryService(db).get_crew(content_id)}
    except Exception as e:
        raise handle_exception(e)


@router.get("/{content_id}/videos")
def get_videos(content_id: int, db: Session = Depends(get_db)):
    try:
        return {"success": True, "data": DiscoveryService(db).get_videos(content_id)}
    except Exception as e:
        raise handle_exception(e)


@router.get("/{content_id}/audios")
def get_audios(content_id: int, db: Session = Depends(get_db)):
    try:
        return {"success": True, "data": DiscoveryService(db).get_audios(content_id)}
    except Exception as e:
        raise handle_exception(e)


@router.get("/{content_id}/subtitles")
def get_subtitles(content_id: int, db: Session = Depends(get_db)):
    try:
        return {"success": True, "data": DiscoveryService(db).get_subtitles(content_id)}
    except Exception as e:
        raise handle_exception(e)


@router.post("/{content_id}/like", response_model=CounterResponse)
def like_content(content_id: int, db: Session = Depends(get_db)):
    try:
        total_likes = DiscoveryService(db).like(content_id)
        return CounterResponse(success=True, data=CounterData(id=content_id, total_likes=total_likes))
    except Exception as e:
        raise handle_exception(e)


@router.delete("/{content_id}/like", response_model=CounterResponse)
def unlike_content(content_id: int, db: Session = Depends(get_db)):
    try:
        total_likes = DiscoveryService(db).unlike(content_id)
        return CounterResponse(success=True, data=CounterData(id=content_id, total_likes=total_likes))
    except Exception as e:
        raise handle_exception(e)
