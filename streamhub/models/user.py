from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from streamhub.db import Base

class User(Base):
    """Identity owned by the account service; only referenced here"""
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, unique=True, index=True, nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    ratings = relationship("ContentRating", back_populates="user", cascade="all, delete-orphan")
    history = relationship("UserWatchHistory", back_populates="user", cascade="all, delete-orphan")
    favorites = relationship("Content", secondary="user_favorites")
    watchlist = relationship("Content", secondary="user_watchlist")
