from datetime import date, datetime

import redis

from streamhub.core import cache as cache_module
from streamhub.core.cache import CacheService, get_cache
from streamhub.services.channel_service import ChannelService


class FakeRedis:
    def __init__(self, fail=False):
        self.store = {}
        self.fail = fail
        self.setex_calls = []

    def get(self, key):
        if self.fail:
            raise redis.ConnectionError("down")
        return self.store.get(key)

    def setex(self, key, ttl, value):
        if self.fail:
            raise redis.ConnectionError("down")
        self.setex_calls.append((key, ttl))
        self.store[key] = value

    def delete(self, key):
        return 1 if self.store.pop(key, None) is not None else 0


def test_disabled_cache_is_a_noop():
    cache = CacheService(enabled=False)
    assert cache.get_json("k") is None
    assert cache.set_json("k", [1], 10) is False
    assert cache.delete("k") == 0


def test_json_round_trip_with_compression():
    fake = FakeRedis()
    cache = CacheService(client=fake, enabled=True)
    assert cache.set_json("k", [{"title": "Früh"}], 60) is True
    assert fake.setex_calls == [("k", 60)]
    assert cache.get_json("k") == [{"title": "Früh"}]
    assert cache.delete("k") == 1
    assert cache.get_json("k") is None


def test_redis_errors_are_misses():
    cache = CacheService(client=FakeRedis(fail=True), enabled=True)
    assert cache.get_json("k") is None
    assert cache.set_json("k", [], 60) is False


def test_epg_key():
    assert CacheService.epg_key(7, date(2024, 5, 4)) == "epg:7:2024-05-04"


def test_epg_served_from_cache(db, make_channel, make_program):
    channel = make_channel(name="BBC")
    make_program(channel, datetime(2024, 5, 4, 9, 0), title="Morning")
    fake = FakeRedis()
    service = ChannelService(db, cache=CacheService(client=fake, enabled=True))

    first = service.get_channel_epg(channel.id, date(2024, 5, 4))
    assert [p.title for p in first] == ["Morning"]
    assert CacheService.epg_key(channel.id, date(2024, 5, 4)) in fake.store

    # A program added after the first read is not visible until the entry expires
    make_program(channel, datetime(2024, 5, 4, 12, 0), title="Noon")
    second = service.get_channel_epg(channel.id, date(2024, 5, 4))
    assert [p.title for p in second] == ["Morning"]


def test_channel_service_shares_one_cache(db, monkeypatch):
    monkeypatch.setattr(cache_module, "_cache", None)
    first = ChannelService(db).cache
    second = ChannelService(db).cache
    assert first is second
    assert first is get_cache()
