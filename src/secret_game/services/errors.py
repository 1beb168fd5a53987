"""Business-rule failures raised by the game services.

Every failure carries the ``kind`` clients switch on and the HTTP status the
API layer maps it to. Messages are short and safe to show to end users.
"""
from __future__ import annotations

from typing import ClassVar


class SecretGameError(RuntimeError):
    """Base exception for all rejected game operations."""

    kind: ClassVar[str] = "SecretGameError"
    status_code: ClassVar[int] = 400
    default_message: ClassVar[str] = "Request could not be completed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidAnswerError(SecretGameError):
    """The submitted answer body or payload is malformed."""

    kind = "InvalidAnswer"
    default_message = "Answer is invalid"


class InvalidRatingError(SecretGameError):
    """A rating fell outside 1..5."""

    kind = "InvalidRating"
    default_message = "Ratings must be between 1 and 5"


class InsufficientRatingError(SecretGameError):
    """The buyer's own answer is rated below the unlock price."""

    kind = "InsufficientRating"

    def __init__(self, required_rating: int) -> None:
        self.required_rating = required_rating
        super().__init__(
            f"Your secret must have a rating of {required_rating} or higher"
        )


class SelfUnlockForbiddenError(SecretGameError):
    kind = "SelfUnlockForbidden"
    default_message = "You cannot unlock your own secret"


class AlreadyUnlockedError(SecretGameError):
    kind = "AlreadyUnlocked"
    default_message = "You have already unlocked this secret"


class SelfRatingForbiddenError(SecretGameError):
    kind = "SelfRatingForbidden"
    default_message = "You cannot rate your own secret"


class AlreadyAnsweredError(SecretGameError):
    kind = "AlreadyAnswered"
    default_message = "You have already answered this question"


class NotFoundError(SecretGameError):
    kind = "NotFound"
    status_code = 404
    default_message = "Secret not found"


class NotAMemberError(SecretGameError):
    kind = "NotAMember"
    status_code = 403
    default_message = "You must be a member of this room"


class NotUnlockedError(SecretGameError):
    kind = "NotUnlocked"
    status_code = 403
    default_message = "You must unlock this secret before rating it"


class MustAnswerFirstError(SecretGameError):
    kind = "MustAnswerFirst"
    status_code = 403
    default_message = "You must answer this question before viewing others' answers"


class NotAuthorError(SecretGameError):
    kind = "NotAuthor"
    status_code = 403
    default_message = "You can only hide your own secrets"
