"""SQLAlchemy models for profiles and subscription edges."""
from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)

from .session import Base


class Profile(Base):
    __tablename__ = "user_profiles"
    __table_args__ = (
        CheckConstraint("followers_count >= 0", name="ck_user_profiles_followers_count"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, unique=True, nullable=False)
    username = Column(String(64), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False, default="")
    avatar_url = Column(String(512), nullable=False, default="")
    birthday = Column(Date, nullable=True)
    followers_count = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Subscription(Base):
    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("follower_id", "followee_id", name="uq_subscriptions_pair"),
    )

    # surrogate id doubles as insertion order for follower/followee listings
    id = Column(Integer, primary_key=True, autoincrement=True)
    follower_id = Column(
        Integer, ForeignKey("user_profiles.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    followee_id = Column(
        Integer, ForeignKey("user_profiles.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
