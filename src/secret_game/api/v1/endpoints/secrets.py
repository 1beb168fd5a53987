# src/secret_game/api/v1/endpoints/secrets.py
"""Secret-related endpoints: posting, unlocking, rating and hiding."""

from fastapi import APIRouter, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError

from secret_game.schemas.secret import (
    MyRatingResponse,
    ProjectedSecret,
    RateRequest,
    RateResponse,
    SecretCreate,
    SubmitResponse,
    UnlockRequest,
    UnlockResponse,
)
from secret_game.services.errors import SecretGameError
from secret_game.services.unlock import AnswerInput
from secret_game.services.visibility import project_secret

from ..dependencies import (
    CurrentUserDep,
    RatingServiceDep,
    SecretViewDep,
    SubmissionServiceDep,
    UnlockServiceDep,
    to_http_exception,
)

router = APIRouter(prefix="/secrets", tags=["secrets"])


def _storage_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SubmitResponse)
async def submit_secret(
    payload: SecretCreate,
    response: Response,
    current_user: CurrentUserDep,
    service: SubmissionServiceDep,
) -> SubmitResponse:
    """Post an answer to a room question, or edit the caller's existing one."""
    try:
        result = service.submit(
            room_id=payload.room_id,
            author_id=current_user.id,
            question_id=payload.question_id,
            body=payload.body,
            self_rating=payload.self_rating,
            importance=payload.importance,
            answer_type=payload.answer_type,
            answer_data=payload.answer_data,
            is_anonymous=payload.is_anonymous,
        )
    except SecretGameError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        raise _storage_error("Failed to save secret") from exc

    if not result.created:
        response.status_code = status.HTTP_200_OK
    return SubmitResponse(
        message="Secret posted successfully" if result.created else "Secret updated successfully",
        secret=project_secret(result.secret, current_user.id, has_access=False),
    )


@router.get("/{secret_id}", response_model=ProjectedSecret)
async def get_secret(
    secret_id: str,
    current_user: CurrentUserDep,
    view: SecretViewDep,
) -> ProjectedSecret:
    """Return a single secret as the caller is allowed to see it."""
    try:
        return view.for_viewer(secret_id, current_user.id)
    except SecretGameError as exc:
        raise to_http_exception(exc) from exc


@router.delete("/{secret_id}", status_code=status.HTTP_204_NO_CONTENT)
async def hide_secret(
    secret_id: str,
    current_user: CurrentUserDep,
    service: SubmissionServiceDep,
) -> Response:
    """Hide one of the caller's own secrets."""
    try:
        service.hide(secret_id, current_user.id)
    except SecretGameError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        raise _storage_error("Failed to delete secret") from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{secret_id}/unlock", response_model=UnlockResponse)
async def unlock_secret(
    secret_id: str,
    payload: UnlockRequest,
    current_user: CurrentUserDep,
    service: UnlockServiceDep,
) -> UnlockResponse:
    """Pay for a secret with an answer of at least the same self-rating."""
    try:
        result = service.unlock(
            secret_id,
            current_user.id,
            payload.question_id,
            AnswerInput(
                body=payload.body,
                self_rating=payload.self_rating,
                importance=payload.importance,
            ),
        )
    except SecretGameError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        raise _storage_error("Failed to unlock secret") from exc

    return UnlockResponse(
        message="Secret unlocked successfully",
        secret=project_secret(result.secret, current_user.id, has_access=True),
    )


@router.post("/{secret_id}/rate", response_model=RateResponse)
async def rate_secret(
    secret_id: str,
    payload: RateRequest,
    current_user: CurrentUserDep,
    service: RatingServiceDep,
) -> RateResponse:
    """Rate a secret the caller has unlocked."""
    try:
        result = service.rate(secret_id, current_user.id, payload.rating)
    except SecretGameError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        raise _storage_error("Failed to submit rating") from exc

    return RateResponse(message="Rating submitted successfully", avg_rating=float(result.avg_rating))


@router.get("/{secret_id}/my-rating", response_model=MyRatingResponse)
async def get_my_rating(
    secret_id: str,
    current_user: CurrentUserDep,
    service: RatingServiceDep,
) -> MyRatingResponse:
    """Return the caller's rating on a secret, 0 when they have not rated it."""
    rating = service.my_rating(secret_id, current_user.id)
    return MyRatingResponse(rating=rating or 0)
