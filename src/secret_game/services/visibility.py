"""Per-viewer projection of secrets.

Every read path goes through :func:`project_secret` so that redaction and
anonymity rules live in exactly one place.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping

from sqlalchemy.orm import Session

from secret_game.models.secret import Secret
from secret_game.repositories import AccessLedgerRepository, SecretRepository
from secret_game.schemas.secret import ProjectedSecret, QuestionAnswersResponse

from .errors import MustAnswerFirstError, NotAMemberError, NotFoundError
from .membership import RoomMembership

ANONYMOUS_NAME = "Anonymous"
UNKNOWN_NAME = "Unknown"

__all__ = [
    "ANONYMOUS_NAME",
    "QuestionAnswersView",
    "RoomSecretsView",
    "SecretView",
    "project_many",
    "project_secret",
]


def project_secret(
    secret: Secret,
    viewer_id: str,
    has_access: bool,
    question_text: str | None = None,
) -> ProjectedSecret:
    """Return ``secret`` as ``viewer_id`` is allowed to see it.

    Authors always see everything, themselves included. Buyers see the body
    and payload. Everyone else sees the price and aggregate numbers only.
    Anonymous secrets hide the author's identity from everyone but the author.
    """
    is_own = secret.author_id == viewer_id
    unlocked = is_own or has_access
    masked = secret.is_anonymous and not is_own

    if masked:
        author_id = None
        author_name = ANONYMOUS_NAME
        author_avatar = None
    else:
        author = secret.author
        author_id = secret.author_id
        author_name = (author.name if author is not None else None) or UNKNOWN_NAME
        author_avatar = author.avatar_url if author is not None else None

    return ProjectedSecret(
        id=secret.id,
        room_id=secret.room_id,
        question_id=secret.question_id,
        question_text=question_text,
        body=secret.body if unlocked else None,
        self_rating=secret.self_rating,
        importance=secret.importance,
        avg_rating=float(secret.avg_rating) if secret.avg_rating is not None else None,
        buyers_count=secret.buyers_count,
        author_id=author_id,
        author_name=author_name,
        author_avatar=author_avatar,
        is_anonymous=masked,
        is_unlocked=unlocked,
        is_own_secret=is_own,
        answer_type=secret.answer_type,
        answer_data=secret.answer_data if unlocked else None,
        created_at=secret.created_at,
    )


def project_many(
    secrets: Iterable[Secret],
    viewer_id: str,
    unlocked_ids: set[str],
    question_texts: Mapping[str, str] | None = None,
) -> list[ProjectedSecret]:
    texts = question_texts or {}
    return [
        project_secret(
            secret,
            viewer_id,
            secret.id in unlocked_ids,
            texts.get(secret.question_id) if secret.question_id else None,
        )
        for secret in secrets
    ]


class SecretView:
    """Single-secret read for room members."""

    def __init__(self, session: Session) -> None:
        self.secrets = SecretRepository(session)
        self.access = AccessLedgerRepository(session)
        self.rooms = RoomMembership(session)

    def for_viewer(self, secret_id: str, viewer_id: str) -> ProjectedSecret:
        secret = self.secrets.get(secret_id)
        if secret is None:
            raise NotFoundError()
        self.rooms.require_member(secret.room_id, viewer_id)
        texts = self.rooms.question_texts({secret.question_id} if secret.question_id else set())
        return project_secret(
            secret,
            viewer_id,
            self.access.exists(secret.id, viewer_id),
            texts.get(secret.question_id) if secret.question_id else None,
        )


class RoomSecretsView:
    """Everything posted in a room, newest first."""

    def __init__(self, session: Session) -> None:
        self.secrets = SecretRepository(session)
        self.access = AccessLedgerRepository(session)
        self.rooms = RoomMembership(session)

    def for_viewer(self, room_id: str, viewer_id: str) -> list[ProjectedSecret]:
        """Project a room's secrets for a member.

        Raises:
            NotFoundError: If the room does not exist.
            NotAMemberError: If the viewer is not in the room.
        """
        self.rooms.require_room(room_id)
        self.rooms.require_member(room_id, viewer_id)

        secrets = self.secrets.list_room(room_id)
        unlocked = self.access.unlocked_ids(viewer_id, [s.id for s in secrets])
        texts = self.rooms.question_texts({s.question_id for s in secrets if s.question_id})
        return project_many(secrets, viewer_id, unlocked, texts)


class QuestionAnswersView:
    """Collaborative view: every answer to one question, once you have answered it."""

    def __init__(self, session: Session) -> None:
        self.secrets = SecretRepository(session)
        self.access = AccessLedgerRepository(session)
        self.rooms = RoomMembership(session)

    def for_viewer(
        self, question_id: str, room_id: str, viewer_id: str
    ) -> QuestionAnswersResponse:
        """Project all answers to ``question_id`` in ``room_id``, oldest first.

        Raises:
            NotAMemberError: If the viewer is not in the room.
            MustAnswerFirstError: If the viewer has no answer of their own.
                Unlocking someone else's answer does not count.
        """
        if not self.rooms.is_member(room_id, viewer_id):
            raise NotAMemberError()
        if not self.secrets.has_answered(room_id, viewer_id, question_id):
            raise MustAnswerFirstError()

        secrets = self.secrets.list_question(room_id, question_id)
        unlocked = self.access.unlocked_ids(viewer_id, [s.id for s in secrets])
        answers = project_many(secrets, viewer_id, unlocked)
        return QuestionAnswersResponse(
            answers=answers,
            question_id=question_id,
            total_answers=len(answers),
            current_user_id=viewer_id,
        )
