import logging
from datetime import date, datetime, timezone
from typing import Any, List, Mapping, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from streamhub.core.cache import CacheService, get_cache
from streamhub.core.config import get_settings
from streamhub.core.exceptions import EntityNotFound, UnexpectedStoreFailure
from streamhub.models.live_channel import LiveChannel
from streamhub.repositories.channel_repository import ChannelRepository
from streamhub.schemas.channel import ChannelPage, ChannelProgramItem, LiveChannelItem
from streamhub.services.filter_compiler import compile_query
from streamhub.services.pagination import paginate

logger = logging.getLogger(__name__)


class ChannelService:
    """Live channel listings and the per-day program guide"""

    def __init__(self, db: Session, cache: Optional[CacheService] = None):
        self.db = db
        self.settings = get_settings()
        self.channel_repo = ChannelRepository(db)
        self.cache = cache or get_cache()

    def get_live_channels(self, filters: Optional[Mapping[str, Any]] = None, sort: Optional[str] = None,
                          page: int = 1, limit: Optional[int] = None) -> ChannelPage:
        descriptor = compile_query("live_channels", filters, sort)
        try:
            result = paginate(self.channel_repo.query_for(descriptor), page, limit)
        except SQLAlchemyError as e:
            raise self._store_failure("live channels", e)
        return ChannelPage(
            items=[LiveChannelItem.model_validate(c) for c in result.items],
            total=result.total,
            page=result.page,
            limit=result.limit,
            total_pages=result.total_pages,
        )

    def get_live_channel(self, channel_id: int) -> LiveChannelItem:
        return LiveChannelItem.model_validate(self._get_active_or_404(channel_id))

    def get_channel_epg(self, channel_id: int, day: Optional[date] = None) -> List[ChannelProgramItem]:
        """Schedule of one channel for one calendar day; empty when nothing is scheduled"""
        day = day or datetime.now(timezone.utc).date()
        self._get_active_or_404(channel_id)

        key = CacheService.epg_key(channel_id, day)
        cached = self.cache.get_json(key)
        if cached is not None:
            return [ChannelProgramItem.model_validate(entry) for entry in cached]

        try:
            programs = self.channel_repo.get_programs_for_day(channel_id, day)
        except SQLAlchemyError as e:
            raise self._store_failure("epg", e)
        entries = [ChannelProgramItem.model_validate(p) for p in programs]
        self.cache.set_json(
            key,
            [entry.model_dump(mode="json") for entry in entries],
            self.settings.EPG_CACHE_TTL_SECONDS,
        )
        return entries

    def _get_active_or_404(self, channel_id: int) -> LiveChannel:
        try:
            channel = self.channel_repo.get_active(channel_id)
        except SQLAlchemyError as e:
            raise self._store_failure("channel lookup", e)
        if not channel:
            raise EntityNotFound(f"Channel {channel_id} not found")
        return channel

    def _store_failure(self, operation: str, error: Exception) -> UnexpectedStoreFailure:
        logger.error(f"Catalog store error during {operation}: {str(error)}")
        self.db.rollback()
        return UnexpectedStoreFailure()
