"""The answer-to-unlock transaction.

A participant pays for another participant's secret with an answer of their
own, rated at least as high as the target. The access grant, the buyer's
answer and the target's buyer counter are written in one transaction; the
unique constraint on the access ledger decides the winner when the same buyer
races themselves.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from secret_game.models.secret import Secret
from secret_game.repositories import AccessLedgerRepository, SecretRepository

from .errors import (
    AlreadyUnlockedError,
    InsufficientRatingError,
    InvalidAnswerError,
    NotFoundError,
    SecretGameError,
    SelfUnlockForbiddenError,
)
from .membership import RoomMembership
from .validation import validate_body, validate_ratings

logger = logging.getLogger(__name__)

__all__ = ["AnswerInput", "UnlockResult", "UnlockService"]


@dataclass(frozen=True)
class AnswerInput:
    """The buyer's own answer offered as payment."""

    body: str | None
    self_rating: int | None
    importance: int | None


@dataclass(frozen=True)
class UnlockResult:
    secret: Secret
    buyer_secret_id: str


class UnlockService:
    """Grant read access to a secret in exchange for an answer."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.secrets = SecretRepository(session)
        self.access = AccessLedgerRepository(session)
        self.rooms = RoomMembership(session)

    def unlock(
        self,
        secret_id: str,
        buyer_id: str,
        question_id: str | None,
        answer: AnswerInput,
        room_id: str | None = None,
    ) -> UnlockResult:
        """Unlock ``secret_id`` for ``buyer_id``.

        Args:
            secret_id: Target secret.
            buyer_id: Participant paying with their answer.
            question_id: Question the buyer is answering; defaults to the
                target's question and must belong to the target's room.
            answer: The buyer's answer body and ratings.
            room_id: Room the caller believes the target lives in; defaults
                to the target's room.

        Returns:
            The refreshed target secret and the id of the buyer's answer.

        Raises:
            SecretGameError: One of InvalidAnswer, InvalidRating, NotFound,
                SelfUnlockForbidden, AlreadyUnlocked, InsufficientRating,
                NotAMember, then NotFound or InvalidAnswer for the question,
                checked in that order.
            SQLAlchemyError: On storage failures other than a lost race.
        """
        body = validate_body(answer.body)
        validate_ratings(answer.self_rating, answer.importance)

        try:
            secret = self.secrets.get_for_update(secret_id)
            if secret is None or (room_id is not None and secret.room_id != room_id):
                raise NotFoundError()
            if secret.author_id == buyer_id:
                raise SelfUnlockForbiddenError()
            if self.access.exists(secret.id, buyer_id):
                raise AlreadyUnlockedError()
            if answer.self_rating < secret.self_rating:
                raise InsufficientRatingError(secret.self_rating)
            self.rooms.require_member(secret.room_id, buyer_id)

            target_room_id = secret.room_id
            target_question_id = question_id or secret.question_id
            if target_question_id is None:
                # Legacy target without a question and none supplied.
                raise InvalidAnswerError("A question is required to unlock this secret")
            if question_id is not None:
                self.rooms.require_question(target_room_id, question_id)

            if not self.access.grant(secret.id, buyer_id):
                raise AlreadyUnlockedError()
            buyer_secret = self.secrets.upsert_answer(
                room_id=target_room_id,
                author_id=buyer_id,
                question_id=target_question_id,
                body=body,
                self_rating=answer.self_rating,
                importance=answer.importance,
            )
            buyer_secret_id = buyer_secret.id
            self.secrets.increment_buyers(secret.id)
            self.session.commit()
        except SecretGameError:
            self.session.rollback()
            raise
        except IntegrityError as exc:
            self.session.rollback()
            if not self.access.exists(secret_id, buyer_id):
                logger.exception("Failed to unlock secret %s for %s", secret_id, buyer_id)
                raise
            logger.warning(
                "Unlock of secret %s by %s lost a race: %s", secret_id, buyer_id, exc.orig
            )
            raise AlreadyUnlockedError() from exc
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Failed to unlock secret %s for %s", secret_id, buyer_id)
            raise

        self.session.refresh(secret)
        logger.info(
            "User %s unlocked secret %s (buyers=%d)", buyer_id, secret.id, secret.buyers_count
        )
        return UnlockResult(secret=secret, buyer_secret_id=buyer_secret_id)
