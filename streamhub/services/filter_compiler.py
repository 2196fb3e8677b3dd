"""Declarative filter/sort compilation for discovery listings.

Every listing operation is described once in ``OPERATIONS``: which model it
reads, the base predicate that is always applied, the filters a client may
request and how they are compared, and the default ordering. ``compile_query``
validates a request against that table and returns a ``QueryDescriptor`` that
the repositories turn into SQL.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from streamhub.core.enums import ContentCategory, ContentType, EnumHelper
from streamhub.core.exceptions import InvalidFilterField, InvalidFilterValue, InvalidSortField
from streamhub.models.content import Content
from streamhub.models.live_channel import LiveChannel
from streamhub.models.music import Artist, Playlist

EXACT = "exact"
CONTAINS = "contains"

TIE_BREAK = ("id", False)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(value)


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(value)
    return int(str(value).strip())


def _as_str(value: Any) -> str:
    return str(value).strip()


def _as_enum(enum_cls) -> Callable[[Any], Any]:
    return lambda value: EnumHelper.parse(enum_cls, value)


@dataclass(frozen=True)
class FilterField:
    """A client-facing filter key bound to a model column"""
    column: str
    kind: str = EXACT
    coerce: Callable[[Any], Any] = _as_str


@dataclass(frozen=True)
class OperationSpec:
    model: type
    base_filter: Dict[str, Any]
    filters: Dict[str, FilterField]
    sorts: Tuple[str, ...]
    default_sort: str


@dataclass(frozen=True)
class Predicate:
    field: str
    column: str
    kind: str
    value: Any


@dataclass
class QueryDescriptor:
    operation: str
    model: type
    base_filter: Dict[str, Any]
    predicates: List[Predicate] = field(default_factory=list)
    # (column, descending) pairs, always ending with the id tie-break
    ordering: List[Tuple[str, bool]] = field(default_factory=list)


CONTENT_SORTS = ("created_at", "title", "year", "imdb_rating", "total_views", "total_likes", "release_date")
CHANNEL_SORTS = ("name", "viewers", "created_at")
PLAYLIST_SORTS = ("created_at", "title")
ARTIST_SORTS = ("name", "created_at")

TYPE_FILTER = FilterField("type", EXACT, _as_enum(ContentType))
CATEGORY_FILTER = FilterField("category", EXACT, _as_enum(ContentCategory))
LANGUAGE_FILTER = FilterField("languages", CONTAINS)
GENRE_FILTER = FilterField("genres", CONTAINS)

OPERATIONS: Dict[str, OperationSpec] = {
    "trending": OperationSpec(
        model=Content,
        base_filter={"is_active": True, "is_trending": True},
        filters={
            "type": TYPE_FILTER,
            "category": CATEGORY_FILTER,
            "language": LANGUAGE_FILTER,
            "genre": GENRE_FILTER,
            "year": FilterField("year", EXACT, _as_int),
            "rating": FilterField("rating", EXACT, _as_str),
        },
        sorts=CONTENT_SORTS,
        default_sort="-created_at",
    ),
    "featured": OperationSpec(
        model=Content,
        base_filter={"is_active": True, "is_featured": True},
        filters={"type": TYPE_FILTER, "category": CATEGORY_FILTER},
        sorts=CONTENT_SORTS,
        default_sort="-created_at",
    ),
    "new": OperationSpec(
        model=Content,
        base_filter={"is_active": True, "is_new": True},
        filters={"type": TYPE_FILTER, "category": CATEGORY_FILTER},
        sorts=CONTENT_SORTS,
        default_sort="-created_at",
    ),
    "search": OperationSpec(
        model=Content,
        base_filter={"is_active": True},
        filters={
            "type": TYPE_FILTER,
            "category": CATEGORY_FILTER,
            "language": LANGUAGE_FILTER,
            "genre": GENRE_FILTER,
        },
        sorts=CONTENT_SORTS,
        default_sort="-created_at",
    ),
    "shorts": OperationSpec(
        model=Content,
        base_filter={"is_active": True, "type": ContentType.SHORT},
        filters={"category": CATEGORY_FILTER, "language": LANGUAGE_FILTER},
        sorts=CONTENT_SORTS,
        default_sort="-created_at",
    ),
    "live_channels": OperationSpec(
        model=LiveChannel,
        base_filter={"is_active": True, "is_live": True},
        filters={
            "category": CATEGORY_FILTER,
            "language": FilterField("language", EXACT, _as_str),
            "country": FilterField("country", EXACT, _as_str),
            "is_hd": FilterField("is_hd", EXACT, _as_bool),
        },
        sorts=CHANNEL_SORTS,
        default_sort="name",
    ),
    "playlists": OperationSpec(
        model=Playlist,
        base_filter={"is_active": True},
        filters={
            "category": FilterField("category", EXACT, _as_str),
            "language": FilterField("language", EXACT, _as_str),
        },
        sorts=PLAYLIST_SORTS,
        default_sort="-created_at",
    ),
    "artists": OperationSpec(
        model=Artist,
        base_filter={"is_active": True},
        filters={"language": FilterField("language", EXACT, _as_str)},
        sorts=ARTIST_SORTS,
        default_sort="name",
    ),
}


def parse_sort(operation: str, sort: Optional[str]) -> List[Tuple[str, bool]]:
    """Turn ``"-created_at"`` style keys into ordering pairs plus the id tie-break.

    Several keys may be given comma separated; keys apply in order.
    """
    spec = OPERATIONS[operation]
    raw = sort.strip() if sort and sort.strip() else spec.default_sort
    ordering = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        descending = part.startswith("-")
        column = part.lstrip("-+")
        if column not in spec.sorts:
            raise InvalidSortField(column, operation)
        ordering.append((column, descending))
    if not any(column == TIE_BREAK[0] for column, _ in ordering):
        ordering.append(TIE_BREAK)
    return ordering


def compile_query(operation: str, filters: Optional[Mapping[str, Any]] = None,
                  sort: Optional[str] = None) -> QueryDescriptor:
    """Validate requested filters/sort for ``operation``.

    Unknown keys are rejected instead of ignored so a typo can never widen
    the result set. Blank values are treated as "not requested".
    """
    spec = OPERATIONS[operation]
    predicates = []
    for key, value in (filters or {}).items():
        allowed = spec.filters.get(key)
        if allowed is None:
            raise InvalidFilterField(key, operation)
        if value is None or (isinstance(value, str) and value.strip() == ""):
            continue
        try:
            coerced = allowed.coerce(value)
        except (TypeError, ValueError):
            raise InvalidFilterValue(key, value)
        predicates.append(Predicate(field=key, column=allowed.column, kind=allowed.kind, value=coerced))

    return QueryDescriptor(
        operation=operation,
        model=spec.model,
        base_filter=dict(spec.base_filter),
        predicates=predicates,
        ordering=parse_sort(operation, sort),
    )
