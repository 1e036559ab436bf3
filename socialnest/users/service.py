"""
Users domain: pure business logic for accounts and authentication.

Rules:
  - Zero FastAPI imports (errors come from socialnest.exceptions).
  - Only the SQLAlchemy async session passed in is touched.
  - flush() instead of commit(); get_db commits at request end.
"""
from __future__ import annotations

import logging
import uuid

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.exceptions import (
    AccountNotFound,
    EmailAlreadyRegistered,
    InvalidCredentials,
)
from socialnest.users.models import Account
from socialnest.users.security import hash_password, verify_and_upgrade

logger = logging.getLogger(__name__)


# ── Queries ───────────────────────────────────────────────────────────────────

async def get_account_by_email(session: AsyncSession, email: str) -> Account | None:
    result = await session.execute(
        sa.select(Account).where(sa.func.lower(Account.email) == email.lower())
    )
    return result.scalar_one_or_none()


async def get_account_by_id(session: AsyncSession, account_id: uuid.UUID) -> Account | None:
    result = await session.execute(sa.select(Account).where(Account.id == account_id))
    return result.scalar_one_or_none()


async def get_account(session: AsyncSession, account_id: uuid.UUID) -> Account:
    account = await get_account_by_id(session, account_id)
    if account is None:
        raise AccountNotFound()
    return account


async def list_accounts(session: AsyncSession) -> list[Account]:
    result = await session.execute(sa.select(Account).order_by(Account.created_at.asc()))
    return list(result.scalars().all())


async def get_account_names(
    session: AsyncSession, account_ids: set[uuid.UUID]
) -> dict[uuid.UUID, str]:
    """Batch-resolve display names; ids with no account are absent from the result."""
    if not account_ids:
        return {}
    result = await session.execute(
        sa.select(Account.id, Account.name).where(Account.id.in_(list(account_ids)))
    )
    return {row.id: row.name for row in result}


# ── Registration / authentication ─────────────────────────────────────────────

async def register_account(
    session: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
) -> Account:
    if await get_account_by_email(session, email) is not None:
        raise EmailAlreadyRegistered()
    account = Account(name=name, email=email, password_hash=hash_password(password))
    session.add(account)
    await session.flush()
    logger.info("Registered account %s", account.id)
    return account


async def authenticate(session: AsyncSession, email: str, password: str) -> Account:
    """Verify credentials; same error for unknown email and wrong password."""
    account = await get_account_by_email(session, email)
    if account is None:
        raise InvalidCredentials()
    matches, new_hash = verify_and_upgrade(password, account.password_hash)
    if not matches:
        raise InvalidCredentials()
    if new_hash is not None:
        account.password_hash = new_hash
        await session.flush()
    return account


# ── Self-service account CRUD ─────────────────────────────────────────────────

async def update_account(
    session: AsyncSession,
    account_id: uuid.UUID,
    fields: dict,
) -> Account:
    """Apply the provided fields; a changed email must remain unique."""
    account = await get_account(session, account_id)
    email = fields.get("email")
    if email is not None and email.lower() != account.email.lower():
        if await get_account_by_email(session, email) is not None:
            raise EmailAlreadyRegistered()
    for key, value in fields.items():
        if value is None:
            continue
        if key == "password":
            account.password_hash = hash_password(value)
        else:
            setattr(account, key, value)
    await session.flush()
    return account


async def delete_account(session: AsyncSession, account_id: uuid.UUID) -> None:
    """Delete the account row only; its profile and posts are left untouched."""
    account = await get_account(session, account_id)
    await session.delete(account)
    await session.flush()
    logger.info("Deleted account %s (profile and posts retained)", account_id)
