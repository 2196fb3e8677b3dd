from concurrent.futures import ThreadPoolExecutor

import pytest

from streamhub.core.exceptions import EntityNotFound
from streamhub.services.counter_service import CounterService


def test_increment_views_and_likes(db, make_content):
    content = make_content()
    service = CounterService(db)
    assert service.increment_views(content.id) == 1
    assert service.increment_views(content.id) == 2
    assert service.increment_likes(content.id) == 1
    db.refresh(content)
    assert (content.total_views, content.total_likes) == (2, 1)


def test_concurrent_view_increments_are_not_lost(session_factory, make_content):
    content = make_content()
    calls = 25

    def view(_):
        session = session_factory()
        try:
            CounterService(session).increment_views(content.id)
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(view, range(calls)))

    session = session_factory()
    try:
        assert CounterService(session).content_repo.counter_value(content.id, "total_views") == calls
    finally:
        session.close()


def test_decrement_likes_floors_at_zero(db, make_content):
    content = make_content(total_likes=1)
    service = CounterService(db)
    assert service.decrement_likes(content.id) == 0
    assert service.decrement_likes(content.id) == 0
    db.refresh(content)
    assert content.total_likes == 0


def test_counters_on_missing_content(db):
    service = CounterService(db)
    with pytest.raises(EntityNotFound):
        service.increment_views(404)
    with pytest.raises(EntityNotFound):
        service.decrement_likes(404)
