"""Posting, editing and hiding one's own answers."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from secret_game.core.settings import settings
from secret_game.models.secret import ANSWER_TYPE_TEXT, Secret
from secret_game.repositories import SecretRepository
from secret_game.schemas.answer_data import dump_answer_data

from .errors import AlreadyAnsweredError, NotAuthorError, NotFoundError, SecretGameError
from .membership import RoomMembership
from .validation import AnswerContext, parse_answer_data, validate_body, validate_ratings

logger = logging.getLogger(__name__)

__all__ = ["SubmissionResult", "SubmissionService"]


@dataclass(frozen=True)
class SubmissionResult:
    secret: Secret
    created: bool


class SubmissionService:
    """Write side of the Secret Store for an author's own answers."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.secrets = SecretRepository(session)
        self.rooms = RoomMembership(session)

    def submit(
        self,
        room_id: str,
        author_id: str,
        question_id: str,
        body: str | None,
        self_rating: int | None,
        importance: int | None,
        answer_type: str = ANSWER_TYPE_TEXT,
        answer_data: dict[str, Any] | None = None,
        is_anonymous: bool = False,
    ) -> SubmissionResult:
        """Create the author's answer to a question, or edit it in place.

        Editing never touches ``buyers_count`` or ``avg_rating``; those belong
        to the unlock and rating flows.

        Raises:
            SecretGameError: InvalidAnswer, InvalidRating, NotFound or
                NotAMember.
            SQLAlchemyError: On storage failures.
        """
        clean_body = validate_body(body, answer_type, AnswerContext.SECRET)
        payload = parse_answer_data(answer_type, answer_data)
        validate_ratings(self_rating, importance)

        self.rooms.require_room(room_id)
        self.rooms.require_member(room_id, author_id)
        self.rooms.require_question(room_id, question_id)

        created = not self.secrets.has_answered(room_id, author_id, question_id)
        try:
            secret = self.secrets.upsert_answer(
                room_id=room_id,
                author_id=author_id,
                question_id=question_id,
                body=clean_body,
                self_rating=self_rating,
                importance=importance,
                extra={
                    "answer_type": answer_type,
                    "answer_data": dump_answer_data(payload),
                    "is_anonymous": is_anonymous,
                },
            )
            secret_id = secret.id
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Failed to save answer of %s to question %s", author_id, question_id)
            raise

        secret = self.secrets.get(secret_id)
        if secret is None:  # pragma: no cover - committed above
            raise NotFoundError()
        logger.info(
            "User %s %s secret %s", author_id, "posted" if created else "edited", secret_id
        )
        return SubmissionResult(secret=secret, created=created)

    def quick_answer(
        self,
        room_id: str,
        author_id: str,
        question_id: str,
        answer: str,
        is_anonymous: bool = False,
    ) -> Secret:
        """Store a plain answer from the lightweight Q&A surface.

        Quick answers carry a fixed default rating and no aggregate until
        someone rates them. A second answer to the same question is rejected.

        Raises:
            SecretGameError: InvalidAnswer, NotFound, NotAMember or
                AlreadyAnswered.
        """
        clean_answer = validate_body(answer, ANSWER_TYPE_TEXT, AnswerContext.QUICK)

        self.rooms.require_room(room_id)
        self.rooms.require_member(room_id, author_id)
        self.rooms.require_question(room_id, question_id)

        default_rating = settings.quick_answer_default_rating
        try:
            secret = self.secrets.claim_answer(
                room_id=room_id,
                author_id=author_id,
                question_id=question_id,
                body=clean_answer,
                self_rating=default_rating,
                importance=default_rating,
                extra={
                    "answer_type": ANSWER_TYPE_TEXT,
                    "answer_data": None,
                    "is_anonymous": is_anonymous,
                    "avg_rating": None,
                },
            )
            if secret is None:
                raise AlreadyAnsweredError()
            self.session.commit()
        except SecretGameError:
            self.session.rollback()
            raise
        except IntegrityError as exc:
            self.session.rollback()
            raise AlreadyAnsweredError() from exc
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Failed to save quick answer of %s to %s", author_id, question_id)
            raise

        logger.info("User %s answered question %s", author_id, question_id)
        return secret

    def hide(self, secret_id: str, author_id: str) -> None:
        """Soft-delete the caller's own secret.

        Raises:
            NotFoundError: If the secret is missing or already hidden.
            NotAuthorError: If the caller did not write it.
        """
        secret = self.secrets.get(secret_id)
        if secret is None:
            raise NotFoundError()
        if secret.author_id != author_id:
            raise NotAuthorError()
        try:
            self.secrets.hide(secret)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Failed to hide secret %s", secret_id)
            raise
        logger.info("User %s hid secret %s", author_id, secret_id)
