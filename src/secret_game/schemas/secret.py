"""Secret-related Pydantic schemas.

Answer and rating fields are optional and only type-checked here; presence and
range checks belong to the services, which report them as ``InvalidAnswer``
or ``InvalidRating``.
"""

from datetime import datetime
from typing import Any

from pydantic import Field

from secret_game.schemas.common import CamelModel


class SecretCreate(CamelModel):
    """Schema for submitting or editing one's answer to a question."""

    room_id: str
    question_id: str
    body: str | None = None
    self_rating: int | None = None
    importance: int | None = None
    answer_type: str = Field("text", description="text, slider, multipleChoice or imageUpload")
    answer_data: dict[str, Any] | None = None
    is_anonymous: bool = False


class UnlockRequest(CamelModel):
    """The buyer's own answer, offered in exchange for reading a secret."""

    question_id: str | None = Field(
        None, description="Question being answered; defaults to the target secret's question"
    )
    body: str | None = None
    self_rating: int | None = None
    importance: int | None = None


class RateRequest(CamelModel):
    """Schema for rating an unlocked secret."""

    rating: int | None = None


class QuickAnswerCreate(CamelModel):
    """Lightweight Q&A answer: plain text, no self-rating."""

    room_id: str
    answer: str
    is_anonymous: bool = False


class ProjectedSecret(CamelModel):
    """A secret as one particular viewer is allowed to see it."""

    id: str
    room_id: str
    question_id: str | None
    question_text: str | None = None
    body: str | None
    self_rating: int
    importance: int
    avg_rating: float | None
    buyers_count: int
    author_id: str | None
    author_name: str
    author_avatar: str | None
    is_anonymous: bool
    is_unlocked: bool
    is_own_secret: bool
    answer_type: str
    answer_data: dict[str, Any] | None
    created_at: datetime


class SubmitResponse(CamelModel):
    """Response for a created or edited answer."""

    message: str
    secret: ProjectedSecret


class UnlockResponse(CamelModel):
    """Response for a successful unlock, carrying the now-visible secret."""

    message: str
    secret: ProjectedSecret


class RateResponse(CamelModel):
    """Response carrying the recomputed aggregate rating."""

    message: str
    avg_rating: float


class MyRatingResponse(CamelModel):
    """The caller's own rating on a secret; 0 when not rated."""

    rating: int


class RoomSecretsResponse(CamelModel):
    """All visible secrets of a room, projected for the caller."""

    secrets: list[ProjectedSecret]


class QuestionAnswersResponse(CamelModel):
    """Collaborative view of every answer to one question."""

    answers: list[ProjectedSecret]
    question_id: str
    total_answers: int
    current_user_id: str


class QuickAnswerResponse(CamelModel):
    """Response for a lightweight Q&A answer."""

    success: bool
    secret_id: str
