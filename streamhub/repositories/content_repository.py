from typing import List, Optional
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, Query, selectinload

from streamhub.models.content import (
    Content, ContentVideo, ContentAudio, ContentSubtitle, ContentCast, ContentCrew
)
from streamhub.models.user_interaction import (
    ContentRating, UserWatchHistory, user_favorites, user_watchlist
)
from streamhub.repositories.base_repository import BaseRepository, json_array_contains
from streamhub.services.filter_compiler import QueryDescriptor

class ContentRepository(BaseRepository[Content]):
    """Catalog reads plus the single-statement counter updates"""

    def __init__(self, db: Session):
        super().__init__(Content, db)

    def get_detail(self, content_id: int) -> Optional[Content]:
        """Active content with all child records loaded"""
        return self.db.query(Content).options(
            selectinload(Content.videos),
            selectinload(Content.audios),
            selectinload(Content.subtitles),
            selectinload(Content.cast),
            selectinload(Content.crew),
            selectinload(Content.tags),
        ).filter(Content.id == content_id, Content.is_active == True).first()  # noqa: E712

    def search_query(self, descriptor: QueryDescriptor, match_clause) -> Query:
        return self.order(self.filtered_query(descriptor).filter(match_clause), descriptor)

    def related_candidates(self, source: Content) -> List[Content]:
        """Active content sharing the category or at least one genre with ``source``"""
        shared = [Content.category == source.category]
        shared.extend(json_array_contains(Content.genres, genre, self.dialect_name) for genre in (source.genres or []))
        return self.db.query(Content).filter(
            Content.is_active == True,  # noqa: E712
            Content.id != source.id,
            or_(*shared),
        ).all()

    # Counters

    def increment_counter(self, content_id: int, column: str, amount: int = 1) -> int:
        """``UPDATE contents SET col = col + amount``; returns affected rows"""
        attr = getattr(Content, column)
        return self.db.query(Content).filter(Content.id == content_id).update(
            {attr: attr + amount}, synchronize_session=False
        )

    def decrement_counter_floor(self, content_id: int, column: str) -> int:
        """Decrement only while positive so the value never goes below zero"""
        attr = getattr(Content, column)
        return self.db.query(Content).filter(Content.id == content_id, attr > 0).update(
            {attr: attr - 1}, synchronize_session=False
        )

    def counter_value(self, content_id: int, column: str) -> Optional[int]:
        return self.db.execute(
            select(getattr(Content, column)).where(Content.id == content_id)
        ).scalar()

    # Child records

    def get_cast(self, content_id: int) -> List[ContentCast]:
        return self.db.query(ContentCast).filter(ContentCast.content_id == content_id).order_by(
            ContentCast.order, ContentCast.id
        ).all()

    def get_crew(self, content_id: int) -> List[ContentCrew]:
        return self.db.query(ContentCrew).filter(ContentCrew.content_id == content_id).order_by(ContentCrew.id).all()

    def get_videos(self, content_id: int) -> List[ContentVideo]:
        return self.db.query(ContentVideo).filter(ContentVideo.content_id == content_id).order_by(ContentVideo.id).all()

    def get_audios(self, content_id: int) -> List[ContentAudio]:
        return self.db.query(ContentAudio).filter(ContentAudio.content_id == content_id).order_by(
            ContentAudio.is_default.desc(), ContentAudio.id
        ).all()

    def get_subtitles(self, content_id: int) -> List[ContentSubtitle]:
        return self.db.query(ContentSubtitle).filter(ContentSubtitle.content_id == content_id).order_by(
            ContentSubtitle.is_default.desc(), ContentSubtitle.id
        ).all()

    # Per-user relations

    def rating_summary(self, content_id: int):
        """(average, count) over all user ratings"""
        average, count = self.db.query(
            func.avg(ContentRating.rating), func.count(ContentRating.id)
        ).filter(ContentRating.content_id == content_id).one()
        return float(average or 0), int(count or 0)

    def get_user_rating(self, user_id: int, content_id: int) -> Optional[ContentRating]:
        return self.db.query(ContentRating).filter(
            ContentRating.user_id == user_id,
            ContentRating.content_id == content_id
        ).first()

    def is_favorited(self, user_id: int, content_id: int) -> bool:
        return self._in_set(user_favorites, user_id, content_id)

    def is_in_watchlist(self, user_id: int, content_id: int) -> bool:
        return self._in_set(user_watchlist, user_id, content_id)

    def _in_set(self, table, user_id: int, content_id: int) -> bool:
        row = self.db.execute(
            select(table.c.user_id).where(table.c.user_id == user_id, table.c.content_id == content_id)
        ).first()
        return row is not None

    def add_history(self, user_id: int, content_id: int) -> UserWatchHistory:
        entry = UserWatchHistory(user_id=user_id, content_id=content_id)
        self.db.add(entry)
        return entry
