# src/secret_game/scripts/issue_token.py
"""Mint a bearer token for an existing user, for local tooling and smoke tests."""
from __future__ import annotations

import argparse
import sys

from secret_game.core.security import create_access_token
from secret_game.db.session import SessionLocal
from secret_game.models import User


def issue_token(user_id: str) -> str:
    """Return a token for ``user_id`` after checking the user exists.

    Raises:
        LookupError: If no such user is stored.
    """
    db = SessionLocal()
    try:
        if db.get(User, user_id) is None:
            raise LookupError(f"User {user_id} not found")
    finally:
        db.close()
    return create_access_token(user_id)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("user_id", help="id of the user the token authenticates")
    args = parser.parse_args(argv)
    try:
        print(issue_token(args.user_id))
    except LookupError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
