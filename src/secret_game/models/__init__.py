# src/secret_game/models/__init__.py
"""SQLAlchemy models for the Secret Game application."""

from .room import Room, RoomMember, RoomQuestion
from .secret import Secret
from .secret_access import SecretAccess
from .secret_rating import SecretRating
from .user import User

__all__ = [
    "Room", "RoomMember", "RoomQuestion",
    "Secret",
    "SecretAccess",
    "SecretRating",
    "User",
]
