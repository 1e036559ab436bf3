"""
Posts domain: SQLAlchemy ORM model.

Tables owned by this module:
  - posts   Posts with their media, likes and comments embedded as JSON

Embedded shapes:
  media     ["<blob reference>", ...]                           (ordered)
  likes     [{"user": "<account id>", "username": "<snapshot>"}, ...]
  comments  [{"id", "user", "text", "created_at", "updated_at"}, ...] (ordered)

Embedded lists are replaced, never mutated in place.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from socialnest.core.database import Base, DocumentList


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    # Owner; soft reference to accounts.id
    account_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(as_uuid=True), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(sa.Text, nullable=False)
    media: Mapped[list] = mapped_column(DocumentList, nullable=False, default=list)
    likes: Mapped[list] = mapped_column(DocumentList, nullable=False, default=list)
    comments: Mapped[list] = mapped_column(DocumentList, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )
