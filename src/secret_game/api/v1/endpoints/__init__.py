# src/secret_game/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .questions import router as questions_router
from .rooms import router as rooms_router
from .secrets import router as secrets_router

__all__ = [
    "questions_router",
    "rooms_router",
    "secrets_router",
]
