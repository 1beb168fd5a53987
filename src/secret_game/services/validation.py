"""Input validation shared by the submission and unlock paths.

The answer body limit depends on where the answer comes from: secret-style
text answers are capped by words, the lightweight Q&A surface and non-text
fallbacks by characters.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import ValidationError

from secret_game.core.settings import settings
from secret_game.models.secret import ANSWER_TYPE_TEXT, ANSWER_TYPES
from secret_game.schemas.answer_data import AnswerData, answer_data_adapter

from .errors import InvalidAnswerError, InvalidRatingError

RATING_MIN = 1
RATING_MAX = 5


class AnswerContext(Enum):
    """Product surface an answer is submitted through."""

    SECRET = "secret"
    QUICK = "quick"


@dataclass(frozen=True)
class AnswerLimits:
    """Body limits in force for one (answer type, context) pair."""

    max_words: int | None = None
    max_chars: int | None = None


def count_words(text: str) -> int:
    """Count whitespace-separated words in ``text``."""
    return len(text.split())


def limits_for(answer_type: str, context: AnswerContext) -> AnswerLimits:
    """Return the body limits for an answer type submitted in ``context``."""
    if context is AnswerContext.QUICK:
        return AnswerLimits(max_chars=settings.quick_answer_max_chars)
    if answer_type == ANSWER_TYPE_TEXT:
        return AnswerLimits(max_words=settings.secret_max_words)
    return AnswerLimits(max_chars=settings.answer_max_chars)


def validate_body(
    body: str | None,
    answer_type: str = ANSWER_TYPE_TEXT,
    context: AnswerContext = AnswerContext.SECRET,
) -> str:
    """Validate an answer body and return it trimmed.

    Raises:
        InvalidAnswerError: If the body is empty or over the applicable limit.
    """
    trimmed = (body or "").strip()
    limits = limits_for(answer_type, context)

    if limits.max_words is not None:
        words = count_words(trimmed)
        if words == 0:
            raise InvalidAnswerError("Secret cannot be empty")
        if words > limits.max_words:
            raise InvalidAnswerError(f"Secret must be {limits.max_words} words or less")
        return trimmed

    if not trimmed:
        raise InvalidAnswerError("Answer is required")
    if limits.max_chars is not None and len(trimmed) > limits.max_chars:
        raise InvalidAnswerError(f"Answer must be {limits.max_chars} characters or less")
    return trimmed


def _in_range(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and RATING_MIN <= value <= RATING_MAX
    )


def validate_ratings(self_rating: Any, importance: Any) -> None:
    """Check an answer's self-rating and importance.

    Raises:
        InvalidRatingError: If either value is outside 1..5.
    """
    if not (_in_range(self_rating) and _in_range(importance)):
        raise InvalidRatingError("Ratings must be between 1 and 5")


def validate_rating(rating: Any) -> None:
    """Check a rating given to someone else's secret."""
    if not _in_range(rating):
        raise InvalidRatingError("Rating must be between 1 and 5")


def parse_answer_data(answer_type: str, raw: dict[str, Any] | None) -> AnswerData | None:
    """Validate ``raw`` against the payload shape for ``answer_type``.

    A missing ``type`` key is filled in from ``answer_type``; a conflicting one
    is rejected. Text answers may carry no payload at all.

    Raises:
        InvalidAnswerError: On unknown answer types or malformed payloads.
    """
    if answer_type not in ANSWER_TYPES:
        raise InvalidAnswerError(f"Unsupported answer type: {answer_type}")
    if raw is None:
        if answer_type == ANSWER_TYPE_TEXT:
            return None
        raise InvalidAnswerError(f"Answer data is required for {answer_type} answers")

    payload = dict(raw)
    declared = payload.setdefault("type", answer_type)
    if declared != answer_type:
        raise InvalidAnswerError("Answer data does not match the answer type")

    try:
        return answer_data_adapter.validate_python(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        message = str(first.get("msg", "Invalid answer data"))
        raise InvalidAnswerError(message.removeprefix("Value error, ")) from exc
