"""Data access helpers for the access ledger."""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from secret_game.db.ids import new_id
from secret_game.db.time import utcnow
from secret_game.db.upsert import dialect_insert
from secret_game.models.secret_access import SecretAccess

__all__ = ["AccessLedgerRepository"]


class AccessLedgerRepository:
    """Access Ledger: at most one unlock record per (buyer, secret)."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def exists(self, secret_id: str, buyer_id: str) -> bool:
        """Return True if ``buyer_id`` has unlocked ``secret_id``."""
        stmt = select(SecretAccess.id).where(
            SecretAccess.secret_id == secret_id,
            SecretAccess.buyer_id == buyer_id,
        )
        return self.session.execute(stmt).first() is not None

    def grant(self, secret_id: str, buyer_id: str) -> bool:
        """Record an unlock unless one already exists.

        Returns:
            True if this call inserted the row, False if another request
            already holds it.
        """
        stmt = (
            dialect_insert(self.session, SecretAccess.__table__)
            .values(id=new_id(), secret_id=secret_id, buyer_id=buyer_id, created_at=utcnow())
            .on_conflict_do_nothing(index_elements=["buyer_id", "secret_id"])
        )
        result = self.session.execute(stmt)
        return result.rowcount == 1

    def unlocked_ids(self, buyer_id: str, secret_ids: Iterable[str] | None = None) -> set[str]:
        """Return the ids of secrets the buyer has unlocked, optionally restricted."""
        stmt = select(SecretAccess.secret_id).where(SecretAccess.buyer_id == buyer_id)
        if secret_ids is not None:
            wanted = list(secret_ids)
            if not wanted:
                return set()
            stmt = stmt.where(SecretAccess.secret_id.in_(wanted))
        return set(self.session.execute(stmt).scalars())
