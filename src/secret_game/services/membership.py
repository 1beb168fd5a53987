"""Read-only lookups against rooms owned by the rooms subsystem."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from secret_game.models.room import Room, RoomMember, RoomQuestion

from .errors import NotAMemberError, NotFoundError

__all__ = ["RoomMembership"]


class RoomMembership:
    """Answers "does this room exist" and "is this user in it"."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def is_member(self, room_id: str, user_id: str) -> bool:
        stmt = select(RoomMember.user_id).where(
            RoomMember.room_id == room_id,
            RoomMember.user_id == user_id,
        )
        return self.session.execute(stmt).first() is not None

    def require_room(self, room_id: str) -> Room:
        """Return the room or raise ``NotFoundError``."""
        room = self.session.get(Room, room_id)
        if room is None:
            raise NotFoundError("Room not found")
        return room

    def require_member(self, room_id: str, user_id: str) -> None:
        """Raise ``NotAMemberError`` unless ``user_id`` belongs to the room."""
        if not self.is_member(room_id, user_id):
            raise NotAMemberError()

    def require_question(self, room_id: str, question_id: str) -> RoomQuestion:
        """Return a question asked in ``room_id`` or raise ``NotFoundError``."""
        stmt = select(RoomQuestion).where(
            RoomQuestion.id == question_id,
            RoomQuestion.room_id == room_id,
        )
        question = self.session.execute(stmt).scalars().first()
        if question is None:
            raise NotFoundError("Question not found")
        return question

    def question_texts(self, question_ids: set[str]) -> dict[str, str]:
        """Map question ids to their display text, skipping questions without one."""
        if not question_ids:
            return {}
        stmt = select(RoomQuestion.id, RoomQuestion.text).where(
            RoomQuestion.id.in_(question_ids)
        )
        return {qid: text for qid, text in self.session.execute(stmt) if text}
