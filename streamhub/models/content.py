from sqlalchemy import (
    Column, Integer, BigInteger, String, Text, Boolean, Date, DateTime, Numeric,
    ForeignKey, JSON, Enum, Table, Index,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from streamhub.db import Base
from streamhub.core.enums import ContentType, ContentCategory, VideoQuality, VideoFormat, enum_values


content_tag_pivot = Table(
    "content_tag_pivot",
    Base.metadata,
    Column("content_id", Integer, ForeignKey("contents.id", ondelete="CASCADE"), primary_key=True),
    Column("content_tag_id", Integer, ForeignKey("content_tags.id", ondelete="CASCADE"), primary_key=True),
)


class Content(Base):
    __tablename__ = "contents"
    __table_args__ = (
        Index("ix_contents_type_active", "type", "is_active"),
        Index("ix_contents_category_active", "category", "is_active"),
        Index("ix_contents_featured_active", "is_featured", "is_active"),
        Index("ix_contents_trending_active", "is_trending", "is_active"),
        Index("ix_contents_new_active", "is_new", "is_active"),
        Index("ix_contents_views_active", "total_views", "is_active"),
        Index("ix_contents_created_active", "created_at", "is_active"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    short_description = Column(Text, nullable=True)
    type = Column(Enum(ContentType, name="content_type", values_callable=enum_values), nullable=False)
    category = Column(Enum(ContentCategory, name="content_category", values_callable=enum_values), nullable=False)
    genres = Column(JSON, nullable=True)
    languages = Column(JSON, nullable=True)
    countries = Column(JSON, nullable=True)
    year = Column(Integer, nullable=True)
    duration = Column(Integer, nullable=True)  # minutes
    rating = Column(String, nullable=True)  # PG, PG-13, R ...
    imdb_rating = Column(Numeric(3, 1), nullable=True)

    # Counters are only changed through CounterService
    total_views = Column(BigInteger, nullable=False, default=0, server_default="0")
    total_likes = Column(BigInteger, nullable=False, default=0, server_default="0")

    is_featured = Column(Boolean, default=False, nullable=False)
    is_trending = Column(Boolean, default=False, nullable=False)
    is_new = Column(Boolean, default=False, nullable=False)
    is_exclusive = Column(Boolean, default=False, nullable=False)
    is_downloadable = Column(Boolean, default=False, nullable=False)
    is_live = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    release_date = Column(Date, nullable=True)
    trailer_url = Column(String, nullable=True)
    # "metadata" is reserved on declarative classes
    extra_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    videos = relationship("ContentVideo", back_populates="content", cascade="all, delete-orphan")
    audios = relationship("ContentAudio", back_populates="content", cascade="all, delete-orphan")
    subtitles = relationship("ContentSubtitle", back_populates="content", cascade="all, delete-orphan")
    cast = relationship("ContentCast", back_populates="content", cascade="all, delete-orphan",
                        order_by="ContentCast.order")
    crew = relationship("ContentCrew", back_populates="content", cascade="all, delete-orphan")
    tags = relationship("ContentTag", secondary=content_tag_pivot, back_populates="contents")
    ratings = relationship("ContentRating", back_populates="content", cascade="all, delete-orphan")

    @property
    def duration_formatted(self) -> str:
        if not self.duration:
            return ""
        hours, minutes = divmod(self.duration, 60)
        if hours > 0:
            return f"{hours}h {minutes}m"
        return f"{minutes}m"

    @property
    def display_description(self) -> str:
        return self.description or self.short_description or ""

    @property
    def has_trailer(self) -> bool:
        return bool(self.trailer_url)


class ContentVideo(Base):
    __tablename__ = "content_videos"
    id = Column(Integer, primary_key=True, index=True)
    content_id = Column(Integer, ForeignKey("contents.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String, nullable=False)
    quality = Column(Enum(VideoQuality, name="video_quality", values_callable=enum_values), nullable=False)
    format = Column(Enum(VideoFormat, name="video_format", values_callable=enum_values), nullable=False)
    title = Column(String, nullable=True)
    duration = Column(Integer, nullable=True)  # seconds
    file_size = Column(BigInteger, nullable=True)  # bytes
    is_hls = Column(Boolean, default=False)
    is_dash = Column(Boolean, default=False)
    is_embedded = Column(Boolean, default=False)
    extra_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    content = relationship("Content", back_populates="videos")


class ContentAudio(Base):
    __tablename__ = "content_audios"
    id = Column(Integer, primary_key=True, index=True)
    content_id = Column(Integer, ForeignKey("contents.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String, nullable=False)
    language = Column(String, nullable=True)
    label = Column(String, nullable=True)
    codec = Column(String, nullable=True)
    is_default = Column(Boolean, default=False)

    content = relationship("Content", back_populates="audios")


class ContentSubtitle(Base):
    __tablename__ = "content_subtitles"
    id = Column(Integer, primary_key=True, index=True)
    content_id = Column(Integer, ForeignKey("contents.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String, nullable=False)
    language = Column(String, nullable=False)
    label = Column(String, nullable=True)
    format = Column(String, nullable=True)  # srt, vtt
    is_default = Column(Boolean, default=False)

    content = relationship("Content", back_populates="subtitles")


class ContentCast(Base):
    __tablename__ = "content_cast"
    id = Column(Integer, primary_key=True, index=True)
    content_id = Column(Integer, ForeignKey("contents.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    character_name = Column(String, nullable=True)
    profile_url = Column(String, nullable=True)
    order = Column(Integer, nullable=False, default=0)

    content = relationship("Content", back_populates="cast")


class ContentCrew(Base):
    __tablename__ = "content_crew"
    id = Column(Integer, primary_key=True, index=True)
    content_id = Column(Integer, ForeignKey("contents.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    job = Column(String, nullable=False)
    department = Column(String, nullable=True)

    content = relationship("Content", back_populates="crew")


class ContentTag(Base):
    __tablename__ = "content_tags"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)

    contents = relationship("Content", secondary=content_tag_pivot, back_populates="tags")
