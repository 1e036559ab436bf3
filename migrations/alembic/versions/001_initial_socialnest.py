"""Initial schema: accounts, profiles, posts

Revision ID: 001
Revises:
Create Date: 2026-10-19

Tables created:
  - accounts   Login identities
  - profiles   Public profile per account; followers / following as JSONB lists
  - posts      Posts with media, likes and comments embedded as JSONB lists

profiles.account_id and posts.account_id are plain indexed columns without
foreign keys: deleting an account leaves its profile and posts in place.

Downgrade: drops all three tables.
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _empty_list() -> sa.TextClause:
    return sa.text("'[]'::jsonb")


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("account_id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("photo", sa.String(512), nullable=False, server_default="no-photo.jpg"),
        sa.Column("profile_link", sa.String(255), nullable=False),
        sa.Column("followers", postgresql.JSONB(), nullable=False, server_default=_empty_list()),
        sa.Column("following", postgresql.JSONB(), nullable=False, server_default=_empty_list()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_profiles_account_id", "profiles", ["account_id"], unique=True)
    op.create_index("ix_profiles_username", "profiles", ["username"], unique=True)

    op.create_table(
        "posts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("account_id", sa.Uuid(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("media", postgresql.JSONB(), nullable=False, server_default=_empty_list()),
        sa.Column("likes", postgresql.JSONB(), nullable=False, server_default=_empty_list()),
        sa.Column("comments", postgresql.JSONB(), nullable=False, server_default=_empty_list()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_posts_account_id", "posts", ["account_id"])
    op.create_index("ix_posts_created_at", "posts", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_posts_created_at", table_name="posts")
    op.drop_index("ix_posts_account_id", table_name="posts")
    op.drop_table("posts")
    op.drop_index("ix_profiles_username", table_name="profiles")
    op.drop_index("ix_profiles_account_id", table_name="profiles")
    op.drop_table("profiles")
    op.drop_index("ix_accounts_email", table_name="accounts")
    op.drop_table("accounts")
