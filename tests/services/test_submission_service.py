# tests/services/test_submission_service.py
"""Tests for posting, editing and hiding answers."""

from decimal import Decimal

import pytest
from sqlalchemy import select

from secret_game.models import Room, RoomMember, Secret
from secret_game.repositories import SecretRepository
from secret_game.services.errors import (
    AlreadyAnsweredError,
    InvalidAnswerError,
    InvalidRatingError,
    NotAMemberError,
    NotAuthorError,
    NotFoundError,
)
from secret_game.services.submission import SubmissionService


def _submit(service, room, author, question, **overrides):
    values = dict(
        room_id=room.id,
        author_id=author.id,
        question_id=question.id,
        body="I have never seen Star Wars",
        self_rating=3,
        importance=2,
    )
    values.update(overrides)
    return service.submit(**values)


def _rows_for(db_session, author_id):
    return list(db_session.execute(select(Secret).where(Secret.author_id == author_id)).scalars())


class TestSubmit:
    def test_new_answer(self, db_session, room, bob, question):
        result = _submit(SubmissionService(db_session), room, bob, question, self_rating=4)

        assert result.created is True
        assert result.secret.author_id == bob.id
        assert result.secret.avg_rating == Decimal("4")
        assert result.secret.buyers_count == 0
        assert result.secret.is_hidden is False

    def test_resubmission_edits_in_place(self, db_session, room, bob, question):
        service = SubmissionService(db_session)
        first = _submit(service, room, bob, question)
        first.secret.buyers_count = 2
        first.secret.avg_rating = Decimal("4.5")
        db_session.commit()

        second = _submit(
            service, room, bob, question, body="Edited", self_rating=5, is_anonymous=True
        )

        assert second.created is False
        assert second.secret.id == first.secret.id
        assert second.secret.body == "Edited"
        assert second.secret.self_rating == 5
        assert second.secret.is_anonymous is True
        assert second.secret.buyers_count == 2
        assert second.secret.avg_rating == Decimal("4.5")
        assert len(_rows_for(db_session, bob.id)) == 1

    def test_typed_answer_payload_is_stored(self, db_session, room, bob, question):
        result = _submit(
            SubmissionService(db_session),
            room,
            bob,
            question,
            body="7 out of 10",
            answer_type="slider",
            answer_data={"value": 7},
        )

        assert result.secret.answer_type == "slider"
        assert result.secret.answer_data == {"type": "slider", "value": 7.0}

    def test_invalid_payload(self, db_session, room, bob, question):
        with pytest.raises(InvalidAnswerError):
            _submit(
                SubmissionService(db_session),
                room,
                bob,
                question,
                answer_type="multipleChoice",
                answer_data={"selected": []},
            )

    def test_body_and_ratings_are_validated(self, db_session, room, bob, question):
        service = SubmissionService(db_session)
        with pytest.raises(InvalidAnswerError):
            _submit(service, room, bob, question, body=" ".join(["w"] * 101))
        with pytest.raises(InvalidRatingError):
            _submit(service, room, bob, question, importance=9)

    def test_unknown_room(self, db_session, room, bob, question):
        with pytest.raises(NotFoundError) as exc_info:
            _submit(SubmissionService(db_session), room, bob, question, room_id="0" * 32)
        assert exc_info.value.message == "Room not found"

    def test_non_member(self, db_session, room, outsider, question):
        with pytest.raises(NotAMemberError):
            _submit(SubmissionService(db_session), room, outsider, question)

    def test_question_from_another_room(self, db_session, room, alice, bob, make_question):
        other_room = Room(name="Elsewhere", owner_id=alice.id)
        db_session.add(other_room)
        db_session.flush()
        db_session.add(RoomMember(room_id=other_room.id, user_id=bob.id))
        db_session.commit()
        foreign_question = make_question(other_room)

        with pytest.raises(NotFoundError) as exc_info:
            _submit(SubmissionService(db_session), room, bob, foreign_question)
        assert exc_info.value.message == "Question not found"


class TestQuickAnswer:
    def test_quick_answer_defaults(self, db_session, room, bob, question):
        secret = SubmissionService(db_session).quick_answer(
            room.id, bob.id, question.id, "Pineapple belongs on pizza"
        )

        assert secret.self_rating == 3
        assert secret.importance == 3
        assert secret.avg_rating is None
        assert secret.answer_type == "text"
        assert secret.buyers_count == 0

    def test_second_quick_answer_is_rejected(self, db_session, room, bob, question):
        service = SubmissionService(db_session)
        first = service.quick_answer(room.id, bob.id, question.id, "first")

        with pytest.raises(AlreadyAnsweredError):
            service.quick_answer(room.id, bob.id, question.id, "second")

        assert SecretRepository(db_session).get(first.id).body == "first"

    def test_character_limit(self, db_session, room, bob, question):
        with pytest.raises(InvalidAnswerError) as exc_info:
            SubmissionService(db_session).quick_answer(room.id, bob.id, question.id, "z" * 501)
        assert exc_info.value.message == "Answer must be 500 characters or less"

    def test_non_member(self, db_session, room, outsider, question):
        with pytest.raises(NotAMemberError):
            SubmissionService(db_session).quick_answer(room.id, outsider.id, question.id, "hi")

    def test_hidden_answer_can_be_replaced(self, db_session, room, bob, question):
        service = SubmissionService(db_session)
        first = service.quick_answer(room.id, bob.id, question.id, "first")
        service.hide(first.id, bob.id)

        second = service.quick_answer(room.id, bob.id, question.id, "second")

        assert second.id == first.id
        assert second.body == "second"
        assert second.is_hidden is False


class TestHide:
    def test_author_hides_secret(self, db_session, alice, alice_secret):
        SubmissionService(db_session).hide(alice_secret.id, alice.id)

        assert SecretRepository(db_session).get(alice_secret.id) is None
        assert SecretRepository(db_session).get(alice_secret.id, include_hidden=True) is not None

    def test_other_user_cannot_hide(self, db_session, bob, alice_secret):
        with pytest.raises(NotAuthorError):
            SubmissionService(db_session).hide(alice_secret.id, bob.id)

    def test_hiding_twice_is_not_found(self, db_session, alice, alice_secret):
        service = SubmissionService(db_session)
        service.hide(alice_secret.id, alice.id)
        with pytest.raises(NotFoundError):
            service.hide(alice_secret.id, alice.id)

    def test_resubmitting_revives_hidden_answer(self, db_session, room, alice, question, alice_secret):
        service = SubmissionService(db_session)
        service.hide(alice_secret.id, alice.id)

        result = _submit(service, room, alice, question, body="Back again")

        assert result.created is True
        assert result.secret.id == alice_secret.id
        assert result.secret.body == "Back again"
        assert len(_rows_for(db_session, alice.id)) == 1
