import pytest

from streamhub.core.enums import ContentCategory, ContentType
from streamhub.core.exceptions import InvalidFilterField, InvalidFilterValue, InvalidSortField
from streamhub.models import Artist, Content, LiveChannel, Playlist
from streamhub.services.filter_compiler import CONTAINS, EXACT, OPERATIONS, compile_query


def test_every_operation_filters_active_rows():
    for name, spec in OPERATIONS.items():
        assert spec.base_filter["is_active"] is True, name


def test_trending_descriptor_has_flag_and_default_ordering():
    descriptor = compile_query("trending")
    assert descriptor.model is Content
    assert descriptor.base_filter == {"is_active": True, "is_trending": True}
    assert descriptor.predicates == []
    assert descriptor.ordering == [("created_at", True), ("id", False)]


def test_channels_use_live_flag_and_name_ordering():
    descriptor = compile_query("live_channels")
    assert descriptor.model is LiveChannel
    assert descriptor.base_filter == {"is_active": True, "is_live": True}
    assert descriptor.ordering == [("name", False), ("id", False)]


def test_unknown_filter_is_rejected():
    with pytest.raises(InvalidFilterField) as exc:
        compile_query("featured", {"genre": "Drama"})
    assert exc.value.status_code == 400
    assert "genre" in exc.value.message


def test_values_are_coerced():
    descriptor = compile_query("trending", {"type": "Movie", "category": "drama", "year": "1999", "rating": "PG-13"})
    values = {p.field: p.value for p in descriptor.predicates}
    assert values == {
        "type": ContentType.MOVIE,
        "category": ContentCategory.DRAMA,
        "year": 1999,
        "rating": "PG-13",
    }


def test_array_fields_use_contains():
    descriptor = compile_query("search", {"genre": "Action", "language": "en"})
    kinds = {p.field: (p.column, p.kind) for p in descriptor.predicates}
    assert kinds == {"genre": ("genres", CONTAINS), "language": ("languages", CONTAINS)}


def test_channel_language_is_exact_and_is_hd_boolean():
    descriptor = compile_query("live_channels", {"language": "fr", "is_hd": "true"})
    kinds = {p.field: (p.kind, p.value) for p in descriptor.predicates}
    assert kinds == {"language": (EXACT, "fr"), "is_hd": (EXACT, True)}


@pytest.mark.parametrize("operation, filters", [
    ("trending", {"year": "nineteen"}),
    ("trending", {"type": "podcast"}),
    ("live_channels", {"is_hd": "maybe"}),
])
def test_uncoercible_values_are_rejected(operation, filters):
    with pytest.raises(InvalidFilterValue):
        compile_query(operation, filters)


def test_blank_values_are_ignored():
    descriptor = compile_query("trending", {"genre": "", "type": None})
    assert descriptor.predicates == []


def test_sort_keys():
    descriptor = compile_query("new", sort="-total_views,title")
    assert descriptor.ordering == [("total_views", True), ("title", False), ("id", False)]

    with pytest.raises(InvalidSortField):
        compile_query("live_channels", sort="-total_views")


def test_invalid_sort_is_a_filter_error():
    with pytest.raises(InvalidFilterField):
        compile_query("trending", sort="popularity")


def test_music_operations():
    playlists = compile_query("playlists", {"category": "pop", "language": "en"})
    assert playlists.model is Playlist
    assert [(p.column, p.kind, p.value) for p in playlists.predicates] == [
        ("category", EXACT, "pop"), ("language", EXACT, "en"),
    ]
    assert playlists.ordering == [("created_at", True), ("id", False)]

    artists = compile_query("artists")
    assert artists.model is Artist
    assert artists.ordering == [("name", False), ("id", False)]
    with pytest.raises(InvalidFilterField):
        compile_query("artists", {"category": "pop"})
