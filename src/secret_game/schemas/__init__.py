# src/secret_game/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .answer_data import (
    AnswerData,
    ImageUploadAnswer,
    MultipleChoiceAnswer,
    SliderAnswer,
    TextAnswer,
)
from .secret import (
    MyRatingResponse,
    ProjectedSecret,
    QuestionAnswersResponse,
    QuickAnswerCreate,
    QuickAnswerResponse,
    RateRequest,
    RateResponse,
    RoomSecretsResponse,
    SecretCreate,
    SubmitResponse,
    UnlockRequest,
    UnlockResponse,
)

__all__ = [
    "AnswerData", "ImageUploadAnswer", "MultipleChoiceAnswer", "SliderAnswer", "TextAnswer",
    "MyRatingResponse",
    "ProjectedSecret",
    "QuestionAnswersResponse",
    "QuickAnswerCreate", "QuickAnswerResponse",
    "RateRequest", "RateResponse",
    "RoomSecretsResponse",
    "SecretCreate", "SubmitResponse",
    "UnlockRequest", "UnlockResponse",
]
