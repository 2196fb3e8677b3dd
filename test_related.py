from datetime import datetime
from types import SimpleNamespace

import pytest

from streamhub.core.enums import ContentCategory
from streamhub.core.exceptions import EntityNotFound, InvalidPageSize
from streamhub.services.discovery_service import DiscoveryService
from streamhub.services.ranking import rank_related


def item(id, genres, views=0, created=datetime(2024, 1, 1)):
    return SimpleNamespace(id=id, genres=genres, total_views=views, created_at=created)


def test_shared_genres_outrank_views():
    source = item(1, ["A", "B"])
    x = item(2, ["A", "B"], views=10)
    y = item(3, ["A"], views=5)
    z = item(4, ["B", "C"], views=100)
    w = item(5, ["D"], views=1000)

    ranked = rank_related(source, [w, z, y, x])
    assert [c.id for c in ranked] == [2, 4, 3, 5]


def test_tie_break_chain_views_then_recency_then_id():
    source = item(1, ["A"])
    older = item(2, ["A"], views=7, created=datetime(2023, 1, 1))
    newer = item(3, ["A"], views=7, created=datetime(2024, 6, 1))
    twin_a = item(5, ["A"], views=7, created=datetime(2024, 6, 1))
    popular = item(4, ["A"], views=8, created=datetime(2020, 1, 1))

    ranked = rank_related(source, [older, twin_a, newer, popular])
    assert [c.id for c in ranked] == [4, 3, 5, 2]


def test_source_is_excluded_and_limit_applied():
    source = item(1, ["A"])
    candidates = [source] + [item(i, ["A"], views=i) for i in range(2, 20)]
    ranked = rank_related(source, candidates, limit=3)
    assert [c.id for c in ranked] == [19, 18, 17]


@pytest.mark.parametrize("limit", [0, -1])
def test_non_positive_limit(limit):
    with pytest.raises(InvalidPageSize):
        rank_related(item(1, []), [], limit=limit)


def test_related_candidates_share_category_or_genre(db, make_content):
    source = make_content(title="S", genres=["A", "B"], category=ContentCategory.ACTION)
    x = make_content(title="X", genres=["A", "B"], category=ContentCategory.DRAMA, total_views=10)
    y = make_content(title="Y", genres=["A"], category=ContentCategory.DRAMA, total_views=1)
    z = make_content(title="Z", genres=["B", "C"], category=ContentCategory.DRAMA, total_views=50)
    same_category = make_content(title="Cat", genres=["Q"], category=ContentCategory.ACTION, total_views=500)
    make_content(title="Unrelated", genres=["Q"], category=ContentCategory.NEWS, total_views=900)
    make_content(title="Inactive", genres=["A", "B"], is_active=False)

    related = DiscoveryService(db).get_related(source.id)
    assert [c.title for c in related] == ["X", "Z", "Y", "Cat"]
    assert source.id not in [c.id for c in related]
    assert {x.id, y.id, z.id, same_category.id} == {c.id for c in related}


def test_related_default_limit(db, make_content):
    source = make_content(genres=["A"])
    for i in range(15):
        make_content(genres=["A"], total_views=i)
    assert len(DiscoveryService(db).get_related(source.id)) == 10
    assert len(DiscoveryService(db).get_related(source.id, limit=4)) == 4


def test_related_for_missing_content(db):
    with pytest.raises(EntityNotFound):
        DiscoveryService(db).get_related(42)
