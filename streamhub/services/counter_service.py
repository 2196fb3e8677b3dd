import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from streamhub.core.exceptions import EntityNotFound, UnexpectedStoreFailure
from streamhub.repositories.content_repository import ContentRepository

logger = logging.getLogger(__name__)

VIEWS = "total_views"
LIKES = "total_likes"


class CounterService:
    """View/like counters.

    Every mutation is one UPDATE statement evaluated by the database, so
    concurrent requests never lose an increment. Calls are safe to re-send:
    they record "a view happened", not an absolute value.
    """

    def __init__(self, db: Session):
        self.db = db
        self.content_repo = ContentRepository(db)

    def increment_views(self, content_id: int) -> int:
        return self._apply(content_id, VIEWS, lambda: self.content_repo.increment_counter(content_id, VIEWS))

    def increment_likes(self, content_id: int) -> int:
        return self._apply(content_id, LIKES, lambda: self.content_repo.increment_counter(content_id, LIKES))

    def decrement_likes(self, content_id: int) -> int:
        """Floors at zero; decrementing an empty counter is a successful no-op"""
        return self._apply(
            content_id, LIKES,
            lambda: self.content_repo.decrement_counter_floor(content_id, LIKES),
            allow_noop=True,
        )

    def _apply(self, content_id: int, column: str, mutate, allow_noop: bool = False) -> int:
        try:
            affected = mutate()
            if affected == 0 and not (allow_noop and self.content_repo.exists(id=content_id)):
                self.db.rollback()
                raise EntityNotFound(f"Content {content_id} not found")
            self.db.commit()
            value = self.content_repo.counter_value(content_id, column)
        except SQLAlchemyError as e:
            logger.error(f"Error updating {column} for content {content_id}: {str(e)}")
            self.db.rollback()
            raise UnexpectedStoreFailure()
        logger.debug(f"Content {content_id} {column} -> {value}")
        return int(value or 0)
