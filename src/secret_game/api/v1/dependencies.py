"""Shared API dependencies for authentication and error translation."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from secret_game.core.security import decode_subject
from secret_game.db.session import get_db
from secret_game.models import User
from secret_game.services import (
    QuestionAnswersView,
    RatingService,
    RoomSecretsView,
    SecretView,
    SubmissionService,
    UnlockService,
)
from secret_game.services.errors import SecretGameError

# HTTP Bearer scheme; missing credentials are reported as 401 below
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]

ERROR_KIND_HEADER = "X-Error-Kind"


def _credentials_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If token is invalid or user not found
    """
    if credentials is None:
        raise _credentials_error()
    try:
        subject = decode_subject(credentials.credentials)
    except JWTError as err:
        raise _credentials_error() from err
    if subject is None:
        raise _credentials_error()

    user = db.get(User, subject)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def to_http_exception(exc: SecretGameError) -> HTTPException:
    """Map a rejected game operation onto its HTTP response."""
    return HTTPException(
        status_code=exc.status_code,
        detail=exc.message,
        headers={ERROR_KIND_HEADER: exc.kind},
    )


def get_unlock_service(db: SessionDep) -> UnlockService:
    return UnlockService(db)


def get_rating_service(db: SessionDep) -> RatingService:
    return RatingService(db)


def get_submission_service(db: SessionDep) -> SubmissionService:
    return SubmissionService(db)


def get_secret_view(db: SessionDep) -> SecretView:
    return SecretView(db)


def get_room_secrets_view(db: SessionDep) -> RoomSecretsView:
    return RoomSecretsView(db)


def get_question_answers_view(db: SessionDep) -> QuestionAnswersView:
    return QuestionAnswersView(db)


UnlockServiceDep = Annotated[UnlockService, Depends(get_unlock_service)]
RatingServiceDep = Annotated[RatingService, Depends(get_rating_service)]
SubmissionServiceDep = Annotated[SubmissionService, Depends(get_submission_service)]
SecretViewDep = Annotated[SecretView, Depends(get_secret_view)]
RoomSecretsViewDep = Annotated[RoomSecretsView, Depends(get_room_secrets_view)]
QuestionAnswersViewDep = Annotated[QuestionAnswersView, Depends(get_question_answers_view)]
