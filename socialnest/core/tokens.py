"""
Credential service: issues and verifies signed session tokens.

Tokens are HS256 JWTs carrying the account id in ``sub`` plus issuer and
audience claims.  Verification failures surface as 401 errors; callers never
see the underlying jose exceptions.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from socialnest.config import Settings
from socialnest.exceptions import TokenExpired, TokenInvalid


def issue(account_id: uuid.UUID, settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(account_id),
        "iat": now,
        "exp": now + timedelta(seconds=settings.jwt_expire_seconds),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify(token: str, settings: Settings) -> uuid.UUID:
    """Return the account id carried by ``token``; raise 401 if it is not usable."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        )
    except ExpiredSignatureError:
        raise TokenExpired()
    except JWTError:
        raise TokenInvalid()
    try:
        return uuid.UUID(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise TokenInvalid()
