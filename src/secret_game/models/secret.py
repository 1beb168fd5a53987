# src/secret_game/models/secret.py
"""The answer entity ("secret")."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from secret_game.db.ids import new_id
from secret_game.db.session import Base
from secret_game.db.time import utcnow

if TYPE_CHECKING:
    from .user import User

ANSWER_TYPE_TEXT = "text"
ANSWER_TYPE_SLIDER = "slider"
ANSWER_TYPE_MULTIPLE_CHOICE = "multipleChoice"
ANSWER_TYPE_IMAGE_UPLOAD = "imageUpload"

ANSWER_TYPES = (
    ANSWER_TYPE_TEXT,
    ANSWER_TYPE_SLIDER,
    ANSWER_TYPE_MULTIPLE_CHOICE,
    ANSWER_TYPE_IMAGE_UPLOAD,
)


class Secret(Base):
    """One participant's answer to one question in one room.

    ``self_rating`` is the price other participants pay to unlock the body;
    ``avg_rating`` and ``buyers_count`` are derived and only ever written by
    the rating and unlock services.
    """

    __tablename__ = "secrets"
    __table_args__ = (
        # Resubmission revives and overwrites the same row, so this also keeps
        # at most one non-hidden answer per (room, author, question).
        UniqueConstraint(
            "room_id", "author_id", "question_id", name="uq_secrets_room_author_question"
        ),
        CheckConstraint("self_rating BETWEEN 1 AND 5", name="ck_secrets_self_rating"),
        CheckConstraint("importance BETWEEN 1 AND 5", name="ck_secrets_importance"),
        CheckConstraint("buyers_count >= 0", name="ck_secrets_buyers_count"),
        Index("ix_secrets_room_created_at", "room_id", "created_at"),
        Index("ix_secrets_author_id", "author_id"),
        Index("ix_secrets_question_id", "question_id"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    room_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False
    )
    author_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    # Null only for legacy single-question rooms.
    question_id: Mapped[str | None] = mapped_column(
        String(32), ForeignKey("room_questions.id", ondelete="CASCADE"), nullable=True
    )

    body: Mapped[str] = mapped_column(Text, nullable=False)
    self_rating: Mapped[int] = mapped_column(Integer, nullable=False)
    importance: Mapped[int] = mapped_column(Integer, nullable=False)
    avg_rating: Mapped[Decimal | None] = mapped_column(Numeric(3, 1), nullable=True)
    buyers_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    answer_type: Mapped[str] = mapped_column(
        String(50), nullable=False, default=ANSWER_TYPE_TEXT
    )
    # Tagged payload, see secret_game.schemas.answer_data; body stays the
    # human-readable fallback.
    answer_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    author: Mapped[User] = relationship("User", lazy="joined")
