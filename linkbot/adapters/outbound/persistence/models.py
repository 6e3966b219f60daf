"""SQLAlchemy ORM models for users, conversation states and link requests."""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class UserModel(Base):
    """SQLAlchemy model for users table."""

    __tablename__ = "users"

    telegram_id = Column(BigInteger, primary_key=True)
    username = Column(Text, nullable=True)
    first_name = Column(Text, nullable=True)
    last_name = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )


class UserStateModel(Base):
    """SQLAlchemy model for user_states table."""

    __tablename__ = "user_states"

    user_id = Column(
        BigInteger,
        ForeignKey("users.telegram_id", ondelete="CASCADE"),
        primary_key=True,
    )
    state = Column(String, nullable=True)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class LinkRequestModel(Base):
    """SQLAlchemy model for link_requests table."""

    __tablename__ = "link_requests"
    __table_args__ = (
        CheckConstraint("request_type IN ('stars', 'nft')", name="ck_link_requests_type"),
    )

    token = Column(String, primary_key=True, index=True)
    user_id = Column(
        BigInteger,
        ForeignKey("users.telegram_id", ondelete="CASCADE"),
        nullable=False,
    )
    request_type = Column(String, nullable=False)
    request_value = Column(Text, nullable=False)
    generated_link = Column(Text, nullable=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
