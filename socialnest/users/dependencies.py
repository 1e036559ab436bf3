"""
Users domain: authentication dependency (the request-side authorization guard).

The credential is read from ``Authorization: Bearer <token>`` first and from the
session cookie set at login otherwise.  A valid token whose account has since
been deleted is rejected.  The resolved identity is also attached to
``request.state.current_user`` for downstream use.
"""
from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.config import Settings
from socialnest.core import tokens
from socialnest.core.models import CurrentUser
from socialnest.database import get_db
from socialnest.dependencies import get_settings
from socialnest.exceptions import AccountGone, NotAuthenticated, TokenExpired, TokenInvalid
from socialnest.users.service import get_account_by_id

http_bearer = HTTPBearer(auto_error=False)


def _extract_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    settings: Settings,
) -> str | None:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name) or None


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    token = _extract_token(request, credentials, settings)
    if token is None:
        raise NotAuthenticated()
    account_id = tokens.verify(token, settings)
    account = await get_account_by_id(session, account_id)
    if account is None:
        raise AccountGone()
    user = CurrentUser(id=account.id, email=account.email, name=account.name)
    request.state.current_user = user
    return user


async def get_optional_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> CurrentUser | None:
    """Returns the caller if a usable credential is present, None otherwise."""
    token = _extract_token(request, credentials, settings)
    if token is None:
        return None
    try:
        account_id = tokens.verify(token, settings)
    except (TokenExpired, TokenInvalid):
        return None
    account = await get_account_by_id(session, account_id)
    if account is None:
        return None
    user = CurrentUser(id=account.id, email=account.email, name=account.name)
    request.state.current_user = user
    return user
