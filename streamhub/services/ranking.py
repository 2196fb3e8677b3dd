"""Orderings that are not plain column sorts: text matching and related content."""
from typing import Iterable, List, Sequence

from sqlalchemy import func, or_

from streamhub.core.exceptions import EmptySearchQuery, InvalidPageSize
from streamhub.models.content import Content


def normalize_query(query) -> str:
    text = (query or "").strip()
    if not text:
        raise EmptySearchQuery()
    return text


def search_clause(query: str):
    """Case-insensitive substring match on title, description or short_description.

    Matching is binary; callers order the match set with the regular ordering.
    """
    needle = normalize_query(query).lower()
    return or_(*[
        func.lower(column).contains(needle, autoescape=True)
        for column in (Content.title, Content.description, Content.short_description)
    ])


def shared_genre_count(source: Content, candidate: Content) -> int:
    return len(set(source.genres or []) & set(candidate.genres or []))


def rank_related(source: Content, candidates: Iterable[Content], limit: int = 10) -> List[Content]:
    """Rank candidates by similarity to ``source``.

    Tie-break chain: shared genres desc, total_views desc, created_at desc,
    id asc. Each pass is a stable sort, applied from the last key to the first.
    """
    if limit is None or limit <= 0:
        raise InvalidPageSize()
    ranked: Sequence[Content] = [c for c in candidates if c.id != source.id]
    ranked = sorted(ranked, key=lambda c: c.id)
    ranked = sorted(ranked, key=lambda c: (c.created_at is not None, c.created_at), reverse=True)
    ranked = sorted(ranked, key=lambda c: c.total_views or 0, reverse=True)
    ranked = sorted(ranked, key=lambda c: shared_genre_count(source, c), reverse=True)
    return list(ranked[:limit])
