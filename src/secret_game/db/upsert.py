"""Dialect-aware INSERT constructs for conflict-guarded writes.

Both Postgres and SQLite understand ``INSERT ... ON CONFLICT``; SQLAlchemy
exposes it through dialect-specific ``insert`` functions, so callers pick the
one matching the session's bind.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

__all__ = ["dialect_insert"]


def dialect_insert(session: Session, table: Any) -> Any:
    """Return an ``insert()`` for ``table`` supporting ``on_conflict_*``.

    Raises:
        NotImplementedError: For dialects without ON CONFLICT support.
    """
    name = session.get_bind().dialect.name
    if name == "postgresql":
        return postgresql.insert(table)
    if name == "sqlite":
        return sqlite.insert(table)
    raise NotImplementedError(f"Upserts are not supported on dialect {name!r}")
