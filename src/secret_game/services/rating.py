"""Rating unlocked secrets and maintaining their aggregate."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from secret_game.repositories import (
    AccessLedgerRepository,
    RatingLedgerRepository,
    SecretRepository,
)

from .errors import (
    NotFoundError,
    NotUnlockedError,
    SecretGameError,
    SelfRatingForbiddenError,
)
from .validation import validate_rating

logger = logging.getLogger(__name__)

__all__ = ["RatingResult", "RatingService", "compute_avg_rating"]

_ONE_DECIMAL = Decimal("0.1")


def compute_avg_rating(self_rating: int, ratings_sum: int, ratings_count: int) -> Decimal:
    """Average the author's self-rating with every buyer rating, half-up to 0.1.

    The self-rating counts as one vote so an unrated secret averages to its
    own price.
    """
    total = Decimal(self_rating + ratings_sum)
    return (total / Decimal(1 + ratings_count)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class RatingResult:
    avg_rating: Decimal
    ratings_count: int


class RatingService:
    """Record buyer ratings and recompute ``avg_rating`` from the full ledger."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.secrets = SecretRepository(session)
        self.access = AccessLedgerRepository(session)
        self.ratings = RatingLedgerRepository(session)

    def rate(self, secret_id: str, rater_id: str, rating: int | None) -> RatingResult:
        """Rate a secret the caller has unlocked; re-rating replaces the old value.

        Raises:
            SecretGameError: InvalidRating, NotFound, SelfRatingForbidden or
                NotUnlocked.
            SQLAlchemyError: On storage failures.
        """
        validate_rating(rating)

        try:
            return self._rate_once(secret_id, rater_id, rating)
        except IntegrityError as exc:
            # Two first ratings from one rater collided; the second pass updates.
            self.session.rollback()
            logger.warning(
                "Rating of secret %s by %s collided, retrying: %s", secret_id, rater_id, exc.orig
            )
        return self._rate_once(secret_id, rater_id, rating)

    def _rate_once(self, secret_id: str, rater_id: str, rating: int) -> RatingResult:
        try:
            secret = self.secrets.get_for_update(secret_id)
            if secret is None:
                raise NotFoundError()
            if secret.author_id == rater_id:
                raise SelfRatingForbiddenError()
            if not self.access.exists(secret.id, rater_id):
                raise NotUnlockedError()

            self.ratings.upsert(secret.id, rater_id, rating)
            ratings_sum, ratings_count = self.ratings.aggregate(secret.id)
            avg_rating = compute_avg_rating(secret.self_rating, ratings_sum, ratings_count)
            self.secrets.set_avg_rating(secret.id, avg_rating)
            self.session.commit()
        except (SecretGameError, IntegrityError):
            self.session.rollback()
            raise
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Failed to rate secret %s for %s", secret_id, rater_id)
            raise

        logger.info(
            "User %s rated secret %s %d (avg=%s over %d)",
            rater_id,
            secret_id,
            rating,
            avg_rating,
            ratings_count,
        )
        return RatingResult(avg_rating=avg_rating, ratings_count=ratings_count)

    def my_rating(self, secret_id: str, rater_id: str) -> int | None:
        """Return the caller's rating on a secret, or None if they have not rated it."""
        existing = self.ratings.get(secret_id, rater_id)
        return existing.rating if existing is not None else None
