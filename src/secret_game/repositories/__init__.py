"""Repository layer over the transactional store."""

from .access_repo import AccessLedgerRepository
from .rating_repo import RatingLedgerRepository
from .secret_repo import SecretRepository

__all__ = ["AccessLedgerRepository", "RatingLedgerRepository", "SecretRepository"]
