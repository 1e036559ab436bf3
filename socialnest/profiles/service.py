"""
Profiles domain: pure business logic (zero FastAPI imports).

One profile per account, usernames unique across profiles.  Follow lists are
not touched here; see ``socialnest.social_graph.service``.
"""
from __future__ import annotations

import logging
import uuid

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.exceptions import (
    DuplicateUsername,
    ProfileAlreadyExists,
    ProfileNotFound,
)
from socialnest.profiles.models import DEFAULT_PHOTO, Profile, profile_link_for

logger = logging.getLogger(__name__)


# ── Queries ───────────────────────────────────────────────────────────────────

async def find_by_account_id(session: AsyncSession, account_id: uuid.UUID) -> Profile | None:
    result = await session.execute(sa.select(Profile).where(Profile.account_id == account_id))
    return result.scalar_one_or_none()


async def find_by_account_ids(
    session: AsyncSession, account_ids: list[uuid.UUID]
) -> dict[uuid.UUID, Profile]:
    if not account_ids:
        return {}
    result = await session.execute(
        sa.select(Profile).where(Profile.account_id.in_(account_ids))
    )
    return {p.account_id: p for p in result.scalars().all()}


async def get_by_account_id(session: AsyncSession, account_id: uuid.UUID) -> Profile:
    profile = await find_by_account_id(session, account_id)
    if profile is None:
        raise ProfileNotFound()
    return profile


async def get_by_username(session: AsyncSession, username: str) -> Profile:
    result = await session.execute(sa.select(Profile).where(Profile.username == username))
    profile = result.scalar_one_or_none()
    if profile is None:
        raise ProfileNotFound()
    return profile


async def get_for_update(session: AsyncSession, account_id: uuid.UUID) -> Profile:
    """Load and row-lock the account's profile for a read-modify-write."""
    result = await session.execute(
        sa.select(Profile).where(Profile.account_id == account_id).with_for_update()
    )
    profile = result.scalar_one_or_none()
    if profile is None:
        raise ProfileNotFound()
    return profile


async def _username_taken(
    session: AsyncSession, username: str, exclude_account_id: uuid.UUID | None = None
) -> bool:
    stmt = sa.select(sa.exists().where(Profile.username == username))
    if exclude_account_id is not None:
        stmt = sa.select(
            sa.exists().where(
                Profile.username == username,
                Profile.account_id != exclude_account_id,
            )
        )
    result = await session.execute(stmt)
    return result.scalar_one()


def _conflict_for(exc: IntegrityError) -> DuplicateUsername | ProfileAlreadyExists:
    """Map a unique violation on profiles to the domain error for its column."""
    if "username" in str(exc.orig):
        return DuplicateUsername()
    return ProfileAlreadyExists()


# ── Mutations ─────────────────────────────────────────────────────────────────

async def create_profile(
    session: AsyncSession,
    account_id: uuid.UUID,
    username: str,
) -> Profile:
    if await find_by_account_id(session, account_id) is not None:
        raise ProfileAlreadyExists()
    if await _username_taken(session, username):
        raise DuplicateUsername()
    profile = Profile(
        account_id=account_id,
        username=username,
        photo=DEFAULT_PHOTO,
        profile_link=profile_link_for(account_id),
        followers=[],
        following=[],
    )
    session.add(profile)
    try:
        await session.flush()
    except IntegrityError as exc:
        # A concurrent request won one of the unique constraint races
        raise _conflict_for(exc) from exc
    logger.info("Created profile %s for account %s", profile.username, account_id)
    return profile


async def update_profile(
    session: AsyncSession,
    account_id: uuid.UUID,
    fields: dict,
) -> Profile:
    """Apply the provided, non-null fields; a new username must remain unique."""
    profile = await get_for_update(session, account_id)
    username = fields.get("username")
    if username is not None and username != profile.username:
        if await _username_taken(session, username, exclude_account_id=account_id):
            raise DuplicateUsername()
        profile.username = username
    try:
        await session.flush()
    except IntegrityError as exc:
        raise _conflict_for(exc) from exc
    return profile


async def set_photo(session: AsyncSession, account_id: uuid.UUID, reference: str) -> Profile:
    """Overwrite the profile photo with a stored blob reference."""
    profile = await get_for_update(session, account_id)
    profile.photo = reference
    await session.flush()
    return profile
