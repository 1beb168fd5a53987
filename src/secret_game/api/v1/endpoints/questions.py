# src/secret_game/api/v1/endpoints/questions.py
"""Per-question endpoints: the collaborative answer view and quick answers."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError

from secret_game.schemas.secret import (
    QuestionAnswersResponse,
    QuickAnswerCreate,
    QuickAnswerResponse,
)
from secret_game.services.errors import SecretGameError

from ..dependencies import (
    CurrentUserDep,
    QuestionAnswersViewDep,
    SubmissionServiceDep,
    to_http_exception,
)

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("/{question_id}/answers", response_model=QuestionAnswersResponse)
async def list_question_answers(
    question_id: str,
    room_id: Annotated[str, Query(alias="roomId")],
    current_user: CurrentUserDep,
    view: QuestionAnswersViewDep,
) -> QuestionAnswersResponse:
    """Show every answer to a question once the caller has answered it too."""
    try:
        return view.for_viewer(question_id, room_id, current_user.id)
    except SecretGameError as exc:
        raise to_http_exception(exc) from exc


@router.post(
    "/{question_id}/answers",
    status_code=status.HTTP_201_CREATED,
    response_model=QuickAnswerResponse,
)
async def answer_question(
    question_id: str,
    payload: QuickAnswerCreate,
    current_user: CurrentUserDep,
    service: SubmissionServiceDep,
) -> QuickAnswerResponse:
    """Submit a quick plain-text answer to a question."""
    try:
        secret = service.quick_answer(
            room_id=payload.room_id,
            author_id=current_user.id,
            question_id=question_id,
            answer=payload.answer,
            is_anonymous=payload.is_anonymous,
        )
    except SecretGameError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit answer",
        ) from exc
    return QuickAnswerResponse(success=True, secret_id=secret.id)
