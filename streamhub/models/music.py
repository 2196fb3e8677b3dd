from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, ForeignKey, JSON, Table, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from streamhub.db import Base


playlist_tracks = Table(
    "playlist_tracks",
    Base.metadata,
    Column("playlist_id", Integer, ForeignKey("playlists.id", ondelete="CASCADE"), primary_key=True),
    Column("track_id", Integer, ForeignKey("tracks.id", ondelete="CASCADE"), primary_key=True),
    Column("position", Integer, nullable=False, default=0),
)


class Artist(Base):
    __tablename__ = "artists"
    __table_args__ = (
        Index("ix_artists_language_active", "language", "is_active"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    bio = Column(Text, nullable=True)
    image = Column(String, nullable=True)
    language = Column(String, nullable=False)
    country = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    extra_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    albums = relationship("Album", back_populates="artist", cascade="all, delete-orphan",
                          order_by="Album.release_date")
    tracks = relationship("Track", back_populates="artist", cascade="all, delete-orphan",
                          order_by="Track.id")


class Album(Base):
    __tablename__ = "albums"
    id = Column(Integer, primary_key=True, index=True)
    artist_id = Column(Integer, ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    cover_image = Column(String, nullable=True)
    release_date = Column(Date, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    artist = relationship("Artist", back_populates="albums")
    tracks = relationship("Track", back_populates="album")


class Track(Base):
    __tablename__ = "tracks"
    id = Column(Integer, primary_key=True, index=True)
    artist_id = Column(Integer, ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True)
    album_id = Column(Integer, ForeignKey("albums.id", ondelete="SET NULL"), nullable=True, index=True)
    title = Column(String, nullable=False)
    duration = Column(Integer, nullable=True)  # seconds
    audio_url = Column(String, nullable=False)
    language = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    artist = relationship("Artist", back_populates="tracks")
    album = relationship("Album", back_populates="tracks")


class Playlist(Base):
    __tablename__ = "playlists"
    __table_args__ = (
        Index("ix_playlists_category_active", "category", "is_active"),
        Index("ix_playlists_language_active", "language", "is_active"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    cover_image = Column(String, nullable=True)
    category = Column(String, nullable=True)  # pop, jazz, podcast ...
    language = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    extra_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    tracks = relationship("Track", secondary=playlist_tracks, order_by=playlist_tracks.c.position)
