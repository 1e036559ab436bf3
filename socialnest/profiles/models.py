"""
Profiles domain: SQLAlchemy ORM model.

Tables owned by this module:
  - profiles   Public persona of an account plus its follow lists

``followers`` and ``following`` hold account-id strings.  Both lists are
replaced wholesale on every change; in-place mutation is not tracked by the
ORM for plain JSON columns.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from socialnest.core.database import Base, DocumentList

DEFAULT_PHOTO = "no-photo.jpg"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def profile_link_for(account_id: uuid.UUID) -> str:
    return f"/profiles/{account_id}"


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    # Soft reference to accounts.id (no FK: deleting an account keeps the profile)
    account_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(as_uuid=True), unique=True, nullable=False, index=True
    )
    username: Mapped[str] = mapped_column(
        sa.String(50), unique=True, nullable=False, index=True
    )
    photo: Mapped[str] = mapped_column(
        sa.String(512), nullable=False, default=DEFAULT_PHOTO
    )
    profile_link: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    followers: Mapped[list] = mapped_column(DocumentList, nullable=False, default=list)
    following: Mapped[list] = mapped_column(DocumentList, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )
