# src/secret_game/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import questions_router, rooms_router, secrets_router

__all__ = [
    "questions_router",
    "rooms_router",
    "secrets_router",
]
