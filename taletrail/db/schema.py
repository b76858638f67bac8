"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from taletrail.core.shared_types import Role


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    title: Mapped[str]
    theme: Mapped[str]
    city: Mapped[str]
    difficulty: Mapped[str]
    estimated_duration: Mapped[int]
    pub_count: Mapped[int]
    puzzles_per_pub: Mapped[int]
    content: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    location_placeholders: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    route_info: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)


class DBUserProfile(Base):
    __tablename__ = "user_profiles"
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[str] = mapped_column(String(320), unique=True)
    role: Mapped[str] = mapped_column(String(16), default=Role.USER.value)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)


class DBGameTemplate(Base):
    __tablename__ = "game_templates"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    name: Mapped[str]
    theme: Mapped[str]
    description: Mapped[str]
    story_framework: Mapped[str]
    character_types: Mapped[list[str]] = mapped_column(JSON, default=list)
    puzzle_types: Mapped[list[str]] = mapped_column(JSON, default=list)
    difficulty: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
