# src/secret_game/models/secret_access.py
"""Access ledger: who unlocked which secret."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from secret_game.db.ids import new_id
from secret_game.db.session import Base
from secret_game.db.time import utcnow


class SecretAccess(Base):
    """Proof that ``buyer_id`` paid to read ``secret_id``.

    The row's existence is the only authority for "has unlocked"; the unique
    constraint is what makes a concurrent second unlock lose.
    """

    __tablename__ = "secret_access"
    __table_args__ = (
        UniqueConstraint("buyer_id", "secret_id", name="uq_secret_access_buyer_secret"),
        Index("ix_secret_access_secret_id", "secret_id"),
        Index("ix_secret_access_buyer_id", "buyer_id"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    secret_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("secrets.id", ondelete="CASCADE"), nullable=False
    )
    buyer_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
