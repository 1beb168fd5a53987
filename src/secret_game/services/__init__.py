"""Business services for the secret game."""

from .errors import SecretGameError
from .rating import RatingService
from .submission import SubmissionService
from .unlock import AnswerInput, UnlockService
from .visibility import QuestionAnswersView, RoomSecretsView, SecretView

__all__ = [
    "AnswerInput",
    "QuestionAnswersView",
    "RatingService",
    "RoomSecretsView",
    "SecretGameError",
    "SecretView",
    "SubmissionService",
    "UnlockService",
]
