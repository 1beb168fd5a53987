# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime
from decimal import Decimal
from itertools import count

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from secret_game.core.security import create_access_token  # noqa: E402
from secret_game.db.session import Base  # noqa: E402
from secret_game.db.session import get_db as app_get_session  # noqa: E402
from secret_game.main import app as fastapi_app  # noqa: E402
from secret_game.models import (  # noqa: E402
    Room,
    RoomMember,
    RoomQuestion,
    Secret,
    SecretAccess,
    User,
)

TEST_DB_URL = "sqlite://"

_QUESTION_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _make_user(db: Session, name: str, avatar_url: str | None = None) -> User:
    user = User(name=name, email=f"{name.lower()}@example.com", avatar_url=avatar_url)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def alice(db_session: Session) -> User:
    """Room owner and the author of most target secrets."""
    return _make_user(db_session, "Alice", avatar_url="https://example.com/alice.png")


@pytest.fixture()
def bob(db_session: Session) -> User:
    return _make_user(db_session, "Bob")


@pytest.fixture()
def carol(db_session: Session) -> User:
    return _make_user(db_session, "Carol")


@pytest.fixture()
def outsider(db_session: Session) -> User:
    """A user who is not a member of the test room."""
    return _make_user(db_session, "Dave")


@pytest.fixture()
def room(db_session: Session, alice: User, bob: User, carol: User) -> Room:
    """A room with Alice, Bob and Carol as members."""
    room = Room(name="Friday Night", owner_id=alice.id)
    db_session.add(room)
    db_session.flush()
    for member in (alice, bob, carol):
        db_session.add(RoomMember(room_id=room.id, user_id=member.id))
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture()
def make_question(db_session: Session) -> Callable[..., RoomQuestion]:
    def _make(room: Room, text: str | None = None) -> RoomQuestion:
        question = RoomQuestion(
            room_id=room.id,
            text=text or f"Question {next(_QUESTION_COUNTER)}?",
            category="confessions",
            question_type="text",
        )
        db_session.add(question)
        db_session.commit()
        db_session.refresh(question)
        return question

    return _make


@pytest.fixture()
def question(room: Room, make_question: Callable[..., RoomQuestion]) -> RoomQuestion:
    return make_question(room, "What is the worst thing you have ever cooked?")


@pytest.fixture()
def make_secret(db_session: Session) -> Callable[..., Secret]:
    """Persist a secret directly, bypassing the submission rules."""

    def _make(
        author: User,
        room: Room,
        question: RoomQuestion,
        *,
        body: str = "I once burned water",
        self_rating: int = 3,
        importance: int = 3,
        is_anonymous: bool = False,
        answer_type: str = "text",
        answer_data: dict | None = None,
        created_at: datetime | None = None,
    ) -> Secret:
        secret = Secret(
            room_id=room.id,
            author_id=author.id,
            question_id=question.id,
            body=body,
            self_rating=self_rating,
            importance=importance,
            avg_rating=Decimal(self_rating),
            buyers_count=0,
            is_anonymous=is_anonymous,
            answer_type=answer_type,
            answer_data=answer_data,
        )
        if created_at is not None:
            secret.created_at = created_at
        db_session.add(secret)
        db_session.commit()
        db_session.refresh(secret)
        return secret

    return _make


@pytest.fixture()
def alice_secret(
    alice: User, room: Room, question: RoomQuestion, make_secret: Callable[..., Secret]
) -> Secret:
    """Alice's answer to the default question, priced at 3."""
    return make_secret(alice, room, question, body="I ate the last slice and blamed the dog")


@pytest.fixture()
def grant_access(db_session: Session) -> Callable[[Secret, User], None]:
    """Record an unlock without going through the unlock flow."""

    def _grant(secret: Secret, buyer: User) -> None:
        db_session.add(SecretAccess(secret_id=secret.id, buyer_id=buyer.id))
        secret.buyers_count += 1
        db_session.commit()

    return _grant


def auth_headers(user: User) -> dict[str, str]:
    """Return authorization headers for ``user``."""
    token = create_access_token(user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice_headers(alice: User) -> dict[str, str]:
    return auth_headers(alice)


@pytest.fixture()
def bob_headers(bob: User) -> dict[str, str]:
    return auth_headers(bob)


@pytest.fixture()
def carol_headers(carol: User) -> dict[str, str]:
    return auth_headers(carol)


@pytest.fixture()
def outsider_headers(outsider: User) -> dict[str, str]:
    return auth_headers(outsider)


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    return auth_headers
