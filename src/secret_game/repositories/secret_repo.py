"""Data access helpers for working with secrets."""
from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from secret_game.db.ids import new_id
from secret_game.db.time import utcnow
from secret_game.db.upsert import dialect_insert
from secret_game.models.secret import ANSWER_TYPE_TEXT, Secret

__all__ = ["SecretRepository"]


class SecretRepository:
    """Secret Store: one answer per (room, author, question)."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get(self, secret_id: str, *, include_hidden: bool = False) -> Secret | None:
        """Return a secret by identifier."""
        stmt = select(Secret).where(Secret.id == secret_id)
        if not include_hidden:
            stmt = stmt.where(Secret.is_hidden.is_(False))
        return self.session.execute(stmt).scalars().first()

    def get_for_update(self, secret_id: str) -> Secret | None:
        """Return a visible secret, row-locked for the rest of the transaction.

        SQLite ignores ``FOR UPDATE``; it serialises writers on its own.
        """
        stmt = (
            select(Secret)
            .where(Secret.id == secret_id, Secret.is_hidden.is_(False))
            .with_for_update(of=Secret)
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalars().first()

    def find_answer(
        self,
        room_id: str,
        author_id: str,
        question_id: str | None,
        *,
        include_hidden: bool = False,
    ) -> Secret | None:
        """Return an author's answer to a question in a room."""
        stmt = select(Secret).where(
            Secret.room_id == room_id,
            Secret.author_id == author_id,
            Secret.question_id == question_id,
        )
        if not include_hidden:
            stmt = stmt.where(Secret.is_hidden.is_(False))
        stmt = stmt.execution_options(populate_existing=True)
        return self.session.execute(stmt).scalars().first()

    def has_answered(self, room_id: str, author_id: str, question_id: str) -> bool:
        """Return True if the author has a visible answer to the question."""
        return self.find_answer(room_id, author_id, question_id) is not None

    def list_room(self, room_id: str) -> list[Secret]:
        """Return a room's visible secrets, newest first."""
        stmt = (
            select(Secret)
            .where(Secret.room_id == room_id, Secret.is_hidden.is_(False))
            .order_by(Secret.created_at.desc(), Secret.id.desc())
        )
        return list(self.session.execute(stmt).scalars())

    def list_question(self, room_id: str, question_id: str) -> list[Secret]:
        """Return every visible answer to a question, oldest first."""
        stmt = (
            select(Secret)
            .where(
                Secret.room_id == room_id,
                Secret.question_id == question_id,
                Secret.is_hidden.is_(False),
            )
            .order_by(Secret.created_at.asc(), Secret.id.asc())
        )
        return list(self.session.execute(stmt).scalars())

    def upsert_answer(
        self,
        *,
        room_id: str,
        author_id: str,
        question_id: str,
        body: str,
        self_rating: int,
        importance: int,
        extra: Mapping[str, Any] | None = None,
    ) -> Secret:
        """Insert the author's answer or overwrite it in place.

        Relies on the (room_id, author_id, question_id) unique constraint so a
        concurrent first submission cannot create a second row. A new row
        starts with no buyers and ``avg_rating`` equal to its self-rating;
        an existing row keeps both and is un-hidden.

        Args:
            extra: Additional columns (answer type/data, anonymity) written on
                both insert and update.
        """
        self._upsert(
            room_id, author_id, question_id, body, self_rating, importance, extra, visible_wins=False
        )
        secret = self.find_answer(room_id, author_id, question_id)
        if secret is None:  # pragma: no cover - the upsert above guarantees a row
            raise RuntimeError("Upserted secret could not be read back")
        return secret

    def claim_answer(
        self,
        *,
        room_id: str,
        author_id: str,
        question_id: str,
        body: str,
        self_rating: int,
        importance: int,
        extra: Mapping[str, Any] | None = None,
    ) -> Secret | None:
        """Like :meth:`upsert_answer`, but never overwrite a visible answer.

        Returns:
            The stored answer, or None when the author already has a visible
            answer to the question.
        """
        written = self._upsert(
            room_id, author_id, question_id, body, self_rating, importance, extra, visible_wins=True
        )
        if not written:
            return None
        return self.find_answer(room_id, author_id, question_id)

    def _upsert(
        self,
        room_id: str,
        author_id: str,
        question_id: str,
        body: str,
        self_rating: int,
        importance: int,
        extra: Mapping[str, Any] | None,
        *,
        visible_wins: bool,
    ) -> bool:
        overwrite: dict[str, Any] = {
            "body": body,
            "self_rating": self_rating,
            "importance": importance,
            "is_hidden": False,
            **(extra or {}),
        }
        insert_values: dict[str, Any] = {
            "answer_type": ANSWER_TYPE_TEXT,
            "is_anonymous": False,
            "answer_data": None,
            "avg_rating": Decimal(self_rating),
            **overwrite,
            "id": new_id(),
            "room_id": room_id,
            "author_id": author_id,
            "question_id": question_id,
            "buyers_count": 0,
            "created_at": utcnow(),
        }
        table = Secret.__table__
        stmt = dialect_insert(self.session, table).values(**insert_values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["room_id", "author_id", "question_id"],
            set_=overwrite,
            where=table.c.is_hidden.is_(True) if visible_wins else None,
        )
        result = self.session.execute(stmt)
        return result.rowcount == 1

    def increment_buyers(self, secret_id: str) -> None:
        """Atomically add one to ``buyers_count``."""
        self.session.execute(
            update(Secret)
            .where(Secret.id == secret_id)
            .values(buyers_count=Secret.buyers_count + 1)
            .execution_options(synchronize_session=False)
        )

    def set_avg_rating(self, secret_id: str, avg_rating: Decimal) -> None:
        """Persist a recomputed aggregate rating."""
        self.session.execute(
            update(Secret)
            .where(Secret.id == secret_id)
            .values(avg_rating=avg_rating)
            .execution_options(synchronize_session=False)
        )

    def hide(self, secret: Secret) -> Secret:
        """Soft-delete a secret so it drops out of every listing."""
        secret.is_hidden = True
        self.session.flush()
        return secret
