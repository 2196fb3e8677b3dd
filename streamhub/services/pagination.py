import math
from dataclasses import dataclass, field
from typing import Any, List, Optional

from sqlalchemy.orm import Query

from streamhub.core.config import get_settings
from streamhub.core.exceptions import InvalidPageNumber, InvalidPageSize


@dataclass
class Page:
    items: List[Any] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20
    total_pages: int = 0


def resolve_window(page: Optional[int], limit: Optional[int]):
    """Validated (page, limit); oversized limits are clamped to MAX_PAGE_SIZE"""
    settings = get_settings()
    page = 1 if page is None else page
    limit = settings.DEFAULT_PAGE_SIZE if limit is None else limit
    if limit <= 0:
        raise InvalidPageSize()
    if page < 1:
        raise InvalidPageNumber()
    return page, min(limit, settings.MAX_PAGE_SIZE)


def paginate(query: Query, page: Optional[int] = 1, limit: Optional[int] = None) -> Page:
    """Slice an ordered query into one page.

    The query must already be ordered deterministically (the compiled
    ordering ends with ``id``), otherwise rows could repeat across pages.
    """
    page, limit = resolve_window(page, limit)
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all() if total else []
    return Page(
        items=items,
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )
