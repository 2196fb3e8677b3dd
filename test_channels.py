from datetime import date, datetime

import pytest

from streamhub.core.enums import ContentCategory
from streamhub.core.exceptions import EntityNotFound, InvalidFilterField
from streamhub.services.channel_service import ChannelService


def names(page):
    return [c.name for c in page.items]


def test_live_channels_filters(db, make_channel):
    make_channel(name="BBC", language="en", country="UK", is_hd=True)
    make_channel(name="ARD", language="de", country="DE", is_hd=True)
    make_channel(name="CNN", language="en", country="US", is_hd=False)
    make_channel(name="Sport1", language="de", category=ContentCategory.SPORTS)
    make_channel(name="Offline", is_live=False)
    make_channel(name="Disabled", is_active=False)
    service = ChannelService(db)

    assert names(service.get_live_channels()) == ["ARD", "BBC", "CNN", "Sport1"]
    assert names(service.get_live_channels({"language": "en"})) == ["BBC", "CNN"]
    assert names(service.get_live_channels({"is_hd": "1", "language": "de"})) == ["ARD"]
    assert names(service.get_live_channels({"is_hd": "false"})) == ["CNN", "Sport1"]
    assert names(service.get_live_channels({"category": "sports"})) == ["Sport1"]
    assert names(service.get_live_channels({"country": "US"})) == ["CNN"]


def test_live_channels_sort_by_viewers(db, make_channel):
    make_channel(name="A", viewers=10)
    make_channel(name="B", viewers=300)
    make_channel(name="C", viewers=20)
    assert names(ChannelService(db).get_live_channels(sort="-viewers")) == ["B", "C", "A"]


def test_live_channels_reject_content_filters(db):
    with pytest.raises(InvalidFilterField):
        ChannelService(db).get_live_channels({"genre": "News"})


def test_channel_detail(db, make_channel):
    channel = make_channel(name="BBC")
    assert ChannelService(db).get_live_channel(channel.id).name == "BBC"
    with pytest.raises(EntityNotFound):
        ChannelService(db).get_live_channel(channel.id + 1)


def test_epg_for_day(db, make_channel, make_program):
    channel = make_channel()
    other = make_channel(name="Other")
    make_program(channel, datetime(2024, 3, 1, 20, 0), title="Late show")
    make_program(channel, datetime(2024, 3, 1, 6, 0), title="Morning news")
    make_program(channel, datetime(2024, 3, 2, 0, 0), title="Next day")
    make_program(other, datetime(2024, 3, 1, 9, 0), title="Elsewhere")

    entries = ChannelService(db).get_channel_epg(channel.id, date(2024, 3, 1))
    assert [e.title for e in entries] == ["Morning news", "Late show"]


def test_epg_without_schedule_is_empty(db, make_channel):
    channel = make_channel()
    assert ChannelService(db).get_channel_epg(channel.id, date(2030, 1, 1)) == []


def test_epg_for_missing_channel(db):
    with pytest.raises(EntityNotFound):
        ChannelService(db).get_channel_epg(123, date(2024, 1, 1))
