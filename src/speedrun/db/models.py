"""ORM models for the speedrun schema.

Tables are created by the Alembic migrations in ``alembic/versions``; these
models mirror them column for column.
"""

from __future__ import annotations

import enum
from datetime import date, datetime, time

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from speedrun.db.base import Base


class RecordStatus(str, enum.Enum):
    """Moderation state of a record."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class User(Base):
    """Maps to the 'users' table."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    profile_picture_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    records: Mapped[list[Record]] = relationship("Record", back_populates="user", passive_deletes=True)
    comments: Mapped[list[Comment]] = relationship("Comment", back_populates="user", passive_deletes=True)


# ---------------------------------------------------------------------------
# Games, versions, categories
# ---------------------------------------------------------------------------


class Game(Base):
    """Maps to the 'games' table."""

    __tablename__ = "games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    icon_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    release_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    rules: Mapped[str] = mapped_column(Text, nullable=False)
    developer: Mapped[str | None] = mapped_column(String(255), nullable=True)

    versions: Mapped[list[GameVersion]] = relationship("GameVersion", back_populates="game", passive_deletes=True)
    categories: Mapped[list[Category]] = relationship("Category", back_populates="game", passive_deletes=True)


class GameVersion(Base):
    """A release/build of a game that records are attributed to."""

    __tablename__ = "game_versions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(128), nullable=False)

    game: Mapped[Game] = relationship("Game", back_populates="versions")


class Category(Base):
    """A run-type classification (Any%, 100%...) scoped to one game."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    game: Mapped[Game] = relationship("Game", back_populates="categories")


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class Record(Base):
    """A timed speedrun submission."""

    __tablename__ = "records"
    __table_args__ = (
        CheckConstraint("status IN ('Pending', 'Approved', 'Rejected')", name="status"),
        Index("ix_records_game_time", "game_id", "record_time", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    game_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True
    )
    version_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("game_versions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    record_time: Mapped[time] = mapped_column(Time, nullable=False)
    video_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=RecordStatus.PENDING.value)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    user: Mapped[User] = relationship("User", back_populates="records")
    links: Mapped[list[RecordCategory]] = relationship(
        "RecordCategory", back_populates="record", passive_deletes=True
    )


class RecordCategory(Base):
    """Join row linking a record to one of its categories."""

    __tablename__ = "record_categories"
    __table_args__ = (UniqueConstraint("record_id", "category_id", name="uq_record_categories_pair"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    record_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("records.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True
    )

    record: Mapped[Record] = relationship("Record", back_populates="links")
    category: Mapped[Category] = relationship("Category")


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    record_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("records.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    user: Mapped[User] = relationship("User", back_populates="comments")
