# src/secret_game/models/secret_rating.py
"""Rating ledger: what each unlocker thought of a secret."""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from secret_game.db.ids import new_id
from secret_game.db.session import Base
from secret_game.db.time import utcnow


class SecretRating(Base):
    """Per-user rating on an unlocked secret; resubmitting overwrites it."""

    __tablename__ = "secret_ratings"
    __table_args__ = (
        UniqueConstraint("rater_id", "secret_id", name="uq_secret_ratings_rater_secret"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_secret_ratings_rating"),
        Index("ix_secret_ratings_secret_id", "secret_id"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    secret_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("secrets.id", ondelete="CASCADE"), nullable=False
    )
    rater_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
