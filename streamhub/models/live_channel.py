from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, JSON, Enum, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from streamhub.db import Base
from streamhub.core.enums import ContentCategory, enum_values


class LiveChannel(Base):
    __tablename__ = "live_channels"
    __table_args__ = (
        Index("ix_live_channels_category_active", "category", "is_active"),
        Index("ix_live_channels_language_active", "language", "is_active"),
        Index("ix_live_channels_live_active", "is_live", "is_active"),
        Index("ix_live_channels_hd_active", "is_hd", "is_active"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    logo = Column(String, nullable=True)
    stream_url = Column(String, nullable=False)
    backup_url = Column(String, nullable=True)
    category = Column(Enum(ContentCategory, name="content_category", values_callable=enum_values), nullable=False)
    language = Column(String, nullable=False)
    country = Column(String, nullable=True)
    is_live = Column(Boolean, default=True, nullable=False)
    is_hd = Column(Boolean, default=False, nullable=False)
    viewers = Column(Integer, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    extra_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    programs = relationship("ChannelProgram", back_populates="channel", cascade="all, delete-orphan",
                            order_by="ChannelProgram.start_time")


class ChannelProgram(Base):
    """One EPG slot of a live channel"""
    __tablename__ = "channel_programs"
    __table_args__ = (
        Index("ix_channel_programs_channel_start", "channel_id", "start_time"),
    )

    id = Column(Integer, primary_key=True, index=True)
    channel_id = Column(Integer, ForeignKey("live_channels.id", ondelete="CASCADE"), nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    extra_metadata = Column("metadata", JSON, nullable=True)

    channel = relationship("LiveChannel", back_populates="programs")
