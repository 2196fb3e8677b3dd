import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from streamhub.core.config import get_settings
from streamhub.core.enums import ContentType, EnumHelper
from streamhub.core.exceptions import ContentNotAShort, EntityNotFound, UnexpectedStoreFailure
from streamhub.models.content import Content
from streamhub.repositories.content_repository import ContentRepository
from streamhub.schemas.content import (
    ContentAudioResponse, ContentCastResponse, ContentCrewResponse, ContentDetail, ContentItem,
    ContentPage, ContentSubtitleResponse, ContentVideoResponse,
)
from streamhub.services.counter_service import CounterService
from streamhub.services.filter_compiler import compile_query
from streamhub.services.pagination import Page, paginate
from streamhub.services.ranking import normalize_query, rank_related, search_clause

logger = logging.getLogger(__name__)


def to_content_page(page: Page) -> ContentPage:
    return ContentPage(
        items=[ContentItem.model_validate(item) for item in page.items],
        total=page.total,
        page=page.page,
        limit=page.limit,
        total_pages=page.total_pages,
    )


def sort_videos(videos) -> list:
    """Highest quality first"""
    return sorted(videos, key=lambda v: (-EnumHelper.quality_rank(v.quality), v.id))


class DiscoveryService:
    """Content discovery listings, details and their view/like side effects"""

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()
        self.content_repo = ContentRepository(db)
        self.counter_service = CounterService(db)

    # Listings

    def get_trending(self, filters: Optional[Mapping[str, Any]] = None, sort: Optional[str] = None,
                     page: int = 1, limit: Optional[int] = None) -> ContentPage:
        return self._listing("trending", filters, sort, page, limit)

    def get_featured(self, filters: Optional[Mapping[str, Any]] = None, sort: Optional[str] = None,
                     page: int = 1, limit: Optional[int] = None) -> ContentPage:
        return self._listing("featured", filters, sort, page, limit)

    def get_new(self, filters: Optional[Mapping[str, Any]] = None, sort: Optional[str] = None,
                page: int = 1, limit: Optional[int] = None) -> ContentPage:
        return self._listing("new", filters, sort, page, limit)

    def get_shorts_feed(self, filters: Optional[Mapping[str, Any]] = None, sort: Optional[str] = None,
                        page: int = 1, limit: Optional[int] = None) -> ContentPage:
        return self._listing("shorts", filters, sort, page, limit)

    def search(self, query: Optional[str], filters: Optional[Mapping[str, Any]] = None,
               sort: Optional[str] = None, page: int = 1, limit: Optional[int] = None) -> ContentPage:
        """Substring search over title and descriptions"""
        text = normalize_query(query)
        descriptor = compile_query("search", filters, sort)
        logger.info(f"Searching content for '{text}' with {len(descriptor.predicates)} filters")
        try:
            result = paginate(self.content_repo.search_query(descriptor, search_clause(text)), page, limit)
        except SQLAlchemyError as e:
            raise self._store_failure("search", e)
        return to_content_page(result)

    def _listing(self, operation: str, filters, sort, page, limit) -> ContentPage:
        descriptor = compile_query(operation, filters, sort)
        try:
            result = paginate(self.content_repo.query_for(descriptor), page, limit)
        except SQLAlchemyError as e:
            raise self._store_failure(operation, e)
        return to_content_page(result)

    # Details

    def get_content(self, content_id: int, user_id: Optional[int] = None) -> ContentDetail:
        """Content detail; counts a view (at least once per successful fetch)"""
        return self._show(self._get_detail_or_404(content_id), user_id)

    def get_short(self, content_id: int, user_id: Optional[int] = None) -> ContentDetail:
        content = self._get_detail_or_404(content_id)
        if content.type != ContentType.SHORT:
            raise ContentNotAShort()
        return self._show(content, user_id)

    def _show(self, content: Content, user_id: Optional[int]) -> ContentDetail:
        self.counter_service.increment_views(content.id)
        if user_id is not None:
            self._record_history(user_id, content.id)
        try:
            self.db.refresh(content)
            return self._build_detail(content, user_id)
        except SQLAlchemyError as e:
            raise self._store_failure("detail", e)

    def get_related(self, content_id: int, limit: Optional[int] = None) -> List[ContentItem]:
        limit = self.settings.RELATED_DEFAULT_LIMIT if limit is None else limit
        source = self._get_active_or_404(content_id)
        try:
            candidates = self.content_repo.related_candidates(source)
        except SQLAlchemyError as e:
            raise self._store_failure("related", e)
        return [ContentItem.model_validate(c) for c in rank_related(source, candidates, limit)]

    def get_cast(self, content_id: int) -> List[ContentCastResponse]:
        self._get_active_or_404(content_id)
        return [ContentCastResponse.model_validate(c) for c in self.content_repo.get_cast(content_id)]

    def get_crew(self, content_id: int) -> List[ContentCrewResponse]:
        self._get_active_or_404(content_id)
        return [ContentCrewResponse.model_validate(c) for c in self.content_repo.get_crew(content_id)]

    def get_videos(self, content_id: int) -> List[ContentVideoResponse]:
        self._get_active_or_404(content_id)
        videos = sort_videos(self.content_repo.get_videos(content_id))
        return [ContentVideoResponse.model_validate(v) for v in videos]

    def get_audios(self, content_id: int) -> List[ContentAudioResponse]:
        self._get_active_or_404(content_id)
        return [ContentAudioResponse.model_validate(a) for a in self.content_repo.get_audios(content_id)]

    def get_subtitles(self, content_id: int) -> List[ContentSubtitleResponse]:
        self._get_active_or_404(content_id)
        return [ContentSubtitleResponse.model_validate(s) for s in self.content_repo.get_subtitles(content_id)]

    # Likes

    def like(self, content_id: int) -> int:
        self._get_active_or_404(content_id)
        return self.counter_service.increment_likes(content_id)

    def unlike(self, content_id: int) -> int:
        self._get_active_or_404(content_id)
        return self.counter_service.decrement_likes(content_id)

    # Helpers

    def _get_active_or_404(self, content_id: int) -> Content:
        try:
            content = self.content_repo.get_active(content_id)
        except SQLAlchemyError as e:
            raise self._store_failure("lookup", e)
        if not content:
            raise EntityNotFound(f"Content {content_id} not found")
        return content

    def _get_detail_or_404(self, content_id: int) -> Content:
        try:
            content = self.content_repo.get_detail(content_id)
        except SQLAlchemyError as e:
            raise self._store_failure("detail", e)
        if not content:
            raise EntityNotFound(f"Content {content_id} not found")
        return content

    def _record_history(self, user_id: int, content_id: int) -> None:
        """History is auxiliary to the view; a failed insert is logged, not raised"""
        try:
            self.content_repo.add_history(user_id, content_id)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(f"Could not record history for user {user_id}, content {content_id}: {str(e)}")

    def _build_detail(self, content: Content, user_id: Optional[int]) -> ContentDetail:
        average, count = self.content_repo.rating_summary(content.id)
        detail = ContentDetail.model_validate(content)
        update: Dict[str, Any] = {
            "videos": [ContentVideoResponse.model_validate(v) for v in sort_videos(content.videos)],
            "average_rating": round(average, 1),
            "total_ratings": count,
        }
        if user_id is not None:
            rating = self.content_repo.get_user_rating(user_id, content.id)
            update.update({
                "is_favorited": self.content_repo.is_favorited(user_id, content.id),
                "in_watchlist": self.content_repo.is_in_watchlist(user_id, content.id),
                "user_rating": rating.rating if rating else None,
            })
        return detail.model_copy(update=update)

    def _store_failure(self, operation: str, error: Exception) -> UnexpectedStoreFailure:
        logger.error(f"Catalog store error during {operation}: {str(error)}")
        self.db.rollback()
        return UnexpectedStoreFailure()
