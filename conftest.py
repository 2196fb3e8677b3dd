import itertools
import os
from datetime import datetime, timedelta

# Must be set before streamhub.db builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from streamhub.core.enums import ContentCategory, ContentType
from streamhub.db import Base, build_engine, get_db
from streamhub.main import app
from streamhub.models import Artist, ChannelProgram, Content, LiveChannel, Playlist, Track, User, playlist_tracks

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'catalog.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_content(db):
    """Insert a Content row; each call is one minute newer than the previous"""
    ticks = itertools.count()

    def factory(**overrides):
        values = {
            "title": "Untitled",
            "type": ContentType.MOVIE,
            "category": ContentCategory.ENTERTAINMENT,
            "genres": [],
            "languages": ["en"],
            "is_active": True,
            "created_at": BASE_TIME + timedelta(minutes=next(ticks)),
        }
        values.update(overrides)
        content = Content(**values)
        db.add(content)
        db.commit()
        db.refresh(content)
        return content

    return factory


@pytest.fixture
def make_channel(db):
    def factory(**overrides):
        values = {
            "name": "Channel",
            "stream_url": "https://streams.example.com/live.m3u8",
            "category": ContentCategory.NEWS,
            "language": "en",
            "is_live": True,
            "is_active": True,
        }
        values.update(overrides)
        channel = LiveChannel(**values)
        db.add(channel)
        db.commit()
        db.refresh(channel)
        return channel

    return factory


@pytest.fixture
def make_program(db):
    def factory(channel, start, minutes=60, **overrides):
        program = ChannelProgram(
            channel_id=channel.id,
            title=overrides.pop("title", "Program"),
            start_time=start,
            end_time=start + timedelta(minutes=minutes),
            **overrides
        )
        db.add(program)
        db.commit()
        db.refresh(program)
        return program

    return factory


@pytest.fixture
def user(db):
    user = User(email="viewer@example.com", username="viewer")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def make_artist(db):
    ticks = itertools.count()

    def factory(**overrides):
        values = {
            "name": "Artist",
            "language": "en",
            "is_active": True,
            "created_at": BASE_TIME + timedelta(minutes=next(ticks)),
        }
        values.update(overrides)
        artist = Artist(**values)
        db.add(artist)
        db.commit()
        db.refresh(artist)
        return artist

    return factory


@pytest.fixture
def make_track(db):
    def factory(artist, **overrides):
        values = {
            "artist_id": artist.id,
            "title": "Track",
            "audio_url": "https://cdn.example.com/audio/track.mp3",
            "is_active": True,
        }
        values.update(overrides)
        track = Track(**values)
        db.add(track)
        db.commit()
        db.refresh(track)
        return track

    return factory


@pytest.fixture
def make_playlist(db):
    """Insert a playlist; ``tracks`` are linked in the given order"""
    ticks = itertools.count()

    def factory(tracks=(), **overrides):
        values = {
            "title": "Playlist",
            "language": "en",
            "is_active": True,
            "created_at": BASE_TIME + timedelta(minutes=next(ticks)),
        }
        values.update(overrides)
        playlist = Playlist(**values)
        db.add(playlist)
        db.flush()
        for position, track in enumerate(tracks):
            db.execute(playlist_tracks.insert().values(
                playlist_id=playlist.id, track_id=track.id, position=position
            ))
        db.commit()
        db.refresh(playlist)
        return playlist

    return factory
