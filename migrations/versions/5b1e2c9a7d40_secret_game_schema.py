"""secret game schema

Revision ID: 5b1e2c9a7d40
Revises:
Create Date: 2026-10-19 09:12:44.418305

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5b1e2c9a7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, rooms, secrets and the access/rating ledgers."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_table(
        "rooms",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("owner_id", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "room_members",
        sa.Column("room_id", sa.String(length=32), nullable=False),
        sa.Column("user_id", sa.String(length=32), nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["room_id"], ["rooms.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("room_id", "user_id"),
    )
    op.create_table(
        "room_questions",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("room_id", sa.String(length=32), nullable=False),
        sa.Column("question_ref", sa.String(length=64), nullable=True),
        sa.Column("text", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("question_type", sa.String(length=50), nullable=True),
        sa.Column("answer_config", sa.JSON(), nullable=True),
        sa.Column("allow_anonymous", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["room_id"], ["rooms.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_room_questions_room_id", "room_questions", ["room_id"])

    op.create_table(
        "secrets",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("room_id", sa.String(length=32), nullable=False),
        sa.Column("author_id", sa.String(length=32), nullable=False),
        sa.Column("question_id", sa.String(length=32), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("self_rating", sa.Integer(), nullable=False),
        sa.Column("importance", sa.Integer(), nullable=False),
        sa.Column("avg_rating", sa.Numeric(precision=3, scale=1), nullable=True),
        sa.Column("buyers_count", sa.Integer(), nullable=False),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False),
        sa.Column("is_hidden", sa.Boolean(), nullable=False),
        sa.Column("answer_type", sa.String(length=50), nullable=False),
        sa.Column("answer_data", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("self_rating BETWEEN 1 AND 5", name="ck_secrets_self_rating"),
        sa.CheckConstraint("importance BETWEEN 1 AND 5", name="ck_secrets_importance"),
        sa.CheckConstraint("buyers_count >= 0", name="ck_secrets_buyers_count"),
        sa.ForeignKeyConstraint(["room_id"], ["rooms.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["question_id"], ["room_questions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "room_id", "author_id", "question_id", name="uq_secrets_room_author_question"
        ),
    )
    op.create_index("ix_secrets_room_created_at", "secrets", ["room_id", "created_at"])
    op.create_index("ix_secrets_author_id", "secrets", ["author_id"])
    op.create_index("ix_secrets_question_id", "secrets", ["question_id"])

    op.create_table(
        "secret_access",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("buyer_id", sa.String(length=32), nullable=False),
        sa.Column("secret_id", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["buyer_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["secret_id"], ["secrets.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("buyer_id", "secret_id", name="uq_secret_access_buyer_secret"),
    )
    op.create_index("ix_secret_access_secret_id", "secret_access", ["secret_id"])
    op.create_index("ix_secret_access_buyer_id", "secret_access", ["buyer_id"])
    op.create_table(
        "secret_ratings",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("rater_id", sa.String(length=32), nullable=False),
        sa.Column("secret_id", sa.String(length=32), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_secret_ratings_rating"),
        sa.ForeignKeyConstraint(["rater_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["secret_id"], ["secrets.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("rater_id", "secret_id", name="uq_secret_ratings_rater_secret"),
    )
    op.create_index("ix_secret_ratings_secret_id", "secret_ratings", ["secret_id"])


def downgrade() -> None:
    """Drop the secret game schema."""
    op.drop_index("ix_secret_ratings_secret_id", table_name="secret_ratings")
    op.drop_table("secret_ratings")
    op.drop_index("ix_secret_access_buyer_id", table_name="secret_access")
    op.drop_index("ix_secret_access_secret_id", table_name="secret_access")
    op.drop_table("secret_access")
    op.drop_index("ix_secrets_question_id", table_name="secrets")
    op.drop_index("ix_secrets_author_id", table_name="secrets")
    op.drop_index("ix_secrets_room_created_at", table_name="secrets")
    op.drop_table("secrets")
    op.drop_index("ix_room_questions_room_id", table_name="room_questions")
    op.drop_table("room_questions")
    op.drop_table("room_members")
    op.drop_table("rooms")
    op.drop_table("users")
