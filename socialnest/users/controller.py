"""
Users domain: request orchestration (thin glue between router and service).
"""
from __future__ import annotations

import uuid

from fastapi import Response
from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.config import Settings
from socialnest.core import tokens
from socialnest.users import service as svc
from socialnest.users.schemas import (
    AccountResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UpdateAccountRequest,
)


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.jwt_expire_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="strict",
    )


async def register(session: AsyncSession, body: RegisterRequest) -> RegisterResponse:
    account = await svc.register_account(
        session, name=body.name, email=body.email, password=body.password
    )
    return RegisterResponse(
        message="User registered successfully",
        name=account.name,
        email=account.email,
    )


async def login(
    session: AsyncSession,
    body: LoginRequest,
    settings: Settings,
    response: Response,
) -> TokenResponse:
    account = await svc.authenticate(session, body.email, body.password)
    token = tokens.issue(account.id, settings)
    _set_session_cookie(response, token, settings)
    return TokenResponse(access_token=token, expires_in=settings.jwt_expire_seconds)


def logout(response: Response, settings: Settings) -> MessageResponse:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="strict",
    )
    return MessageResponse(message="Logged out successfully")


async def list_accounts(session: AsyncSession) -> list[AccountResponse]:
    accounts = await svc.list_accounts(session)
    return [AccountResponse.model_validate(a) for a in accounts]


async def get_me(session: AsyncSession, account_id: uuid.UUID) -> AccountResponse:
    account = await svc.get_account(session, account_id)
    return AccountResponse.model_validate(account)


async def update_me(
    session: AsyncSession,
    account_id: uuid.UUID,
    body: UpdateAccountRequest,
) -> AccountResponse:
    fields = body.model_dump(exclude_unset=True)
    account = await svc.update_account(session, account_id, fields)
    return AccountResponse.model_validate(account)


async def delete_me(session: AsyncSession, account_id: uuid.UUID) -> MessageResponse:
    await svc.delete_account(session, account_id)
    return MessageResponse(message="User account deleted")
