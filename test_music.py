from datetime import date

import pytest

from streamhub.core.exceptions import EntityNotFound, InvalidFilterField
from streamhub.models import Album
from streamhub.services.music_service import MusicService


def test_playlists_newest_first_and_active_only(db, make_playlist):
    make_playlist(title="old")
    make_playlist(title="new")
    make_playlist(title="hidden", is_active=False)

    page = MusicService(db).get_playlists()
    assert [p.title for p in page.items] == ["new", "old"]
    assert page.total == 2


def test_playlist_filters(db, make_playlist):
    make_playlist(title="pop en", category="pop", language="en")
    make_playlist(title="pop tr", category="pop", language="tr")
    make_playlist(title="jazz en", category="jazz", language="en")
    service = MusicService(db)

    page = service.get_playlists({"category": "pop", "language": "tr"})
    assert [p.title for p in page.items] == ["pop tr"]

    with pytest.raises(InvalidFilterField):
        service.get_playlists({"genre": "pop"})


def test_playlist_detail_keeps_track_order(db, make_artist, make_track, make_playlist):
    artist = make_artist()
    first = make_track(artist, title="first")
    second = make_track(artist, title="second")
    gone = make_track(artist, title="gone", is_active=False)
    playlist = make_playlist(tracks=[second, gone, first])

    detail = MusicService(db).get_playlist(playlist.id)
    assert [t.title for t in detail.tracks] == ["second", "first"]


def test_missing_playlist(db, make_playlist):
    hidden = make_playlist(is_active=False)
    with pytest.raises(EntityNotFound):
        MusicService(db).get_playlist(hidden.id)


def test_artists_sorted_by_name_with_language_filter(db, make_artist):
    make_artist(name="Zeynep", language="tr")
    make_artist(name="Adele", language="en")
    make_artist(name="Barış", language="tr")
    service = MusicService(db)

    assert [a.name for a in service.get_artists().items] == ["Adele", "Barış", "Zeynep"]
    assert [a.name for a in service.get_artists({"language": "tr"}).items] == ["Barış", "Zeynep"]
    assert [a.name for a in service.get_artists(sort="-created_at").items] == ["Barış", "Adele", "Zeynep"]


def test_artist_detail(db, make_artist, make_track):
    artist = make_artist(name="Adele")
    db.add(Album(artist_id=artist.id, title="21", release_date=date(2011, 1, 24)))
    db.commit()
    make_track(artist, title="Rolling in the Deep")
    make_track(artist, title="Unreleased", is_active=False)

    detail = MusicService(db).get_artist(artist.id)
    assert [a.title for a in detail.albums] == ["21"]
    assert [t.title for t in detail.tracks] == ["Rolling in the Deep"]

    with pytest.raises(EntityNotFound):
        MusicService(db).get_artist(999)


def test_music_routes(client, make_artist, make_track, make_playlist):
    artist = make_artist(name="Adele")
    playlist = make_playlist(title="Mix", category="pop", tracks=[make_track(artist, title="Hello")])

    body = client.get("/playlists", params={"category": "pop"}).json()
    assert body["success"] is True
    assert [p["title"] for p in body["data"]["items"]] == ["Mix"]

    detail = client.get(f"/playlists/{playlist.id}").json()
    assert [t["title"] for t in detail["data"]["tracks"]] == ["Hello"]

    assert client.get("/artists").json()["data"]["items"][0]["name"] == "Adele"
    assert client.get(f"/artists/{artist.id}").json()["data"]["tracks"][0]["title"] == "Hello"

    missing = client.get("/artists/999")
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "message": "Artist 999 not found"}
    assert client.get("/artists", params={"country": "tr"}).status_code == 400
