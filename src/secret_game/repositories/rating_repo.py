"""Data access helpers for the rating ledger."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from secret_game.db.ids import new_id
from secret_game.db.time import utcnow
from secret_game.db.upsert import dialect_insert
from secret_game.models.secret_rating import SecretRating

__all__ = ["RatingLedgerRepository"]


class RatingLedgerRepository:
    """Rating Ledger: one rating per (rater, secret), last write wins."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get(self, secret_id: str, rater_id: str) -> SecretRating | None:
        """Return a rater's rating on a secret, if any."""
        stmt = (
            select(SecretRating)
            .where(SecretRating.secret_id == secret_id, SecretRating.rater_id == rater_id)
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalars().first()

    def upsert(self, secret_id: str, rater_id: str, rating: int) -> None:
        """Insert a rating or overwrite the rater's previous one."""
        now = utcnow()
        stmt = (
            dialect_insert(self.session, SecretRating.__table__)
            .values(
                id=new_id(),
                secret_id=secret_id,
                rater_id=rater_id,
                rating=rating,
                created_at=now,
            )
            .on_conflict_do_update(
                index_elements=["rater_id", "secret_id"],
                set_={"rating": rating, "created_at": now},
            )
        )
        self.session.execute(stmt)

    def aggregate(self, secret_id: str) -> tuple[int, int]:
        """Return ``(sum, count)`` over every rating of a secret."""
        stmt = select(
            func.coalesce(func.sum(SecretRating.rating), 0),
            func.count(SecretRating.id),
        ).where(SecretRating.secret_id == secret_id)
        total, count = self.session.execute(stmt).one()
        return int(total), int(count)
