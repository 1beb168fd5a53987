# src/secret_game/models/room.py
"""SQLAlchemy models for rooms, their members and their questions.

Rooms and memberships are managed by other systems; this service only reads
them to answer "is this user a member" and to scope questions.
"""
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from secret_game.db.ids import new_id
from secret_game.db.session import Base
from secret_game.db.time import utcnow


class Room(Base):
    """A group of participants sharing questions."""

    __tablename__ = "rooms"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    owner_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class RoomMember(Base):
    """Join table mapping users into rooms."""

    __tablename__ = "room_members"

    room_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("rooms.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    # Presence implies membership.
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class RoomQuestion(Base):
    """A question asked in a room. Content columns are opaque to the game engine."""

    __tablename__ = "room_questions"
    __table_args__ = (Index("ix_room_questions_room_id", "room_id"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    room_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False
    )
    # Curated question bank reference; null for custom questions.
    question_ref: Mapped[str | None] = mapped_column(String(64), nullable=True)
    text: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    question_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    answer_config: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    allow_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
