"""
Users domain: router.

Routes:
  POST   /api/users            Register (public)
  GET    /api/users            List accounts
  POST   /api/users/auth       Login; returns a token and sets the session cookie (public)
  GET    /api/users/logout     Clear the session cookie (public)
  GET    /api/users/profile    Own account
  PUT    /api/users/profile    Update own account (partial)
  DELETE /api/users/profile    Delete own account (profile and posts are kept)
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.config import Settings
from socialnest.core.models import CurrentUser
from socialnest.database import get_db
from socialnest.dependencies import get_settings
from socialnest.rate_limit import limiter
from socialnest.users import controller as ctrl
from socialnest.users.dependencies import get_current_user
from socialnest.users.schemas import (
    AccountResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UpdateAccountRequest,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
)
@limiter.limit("5/hour")
async def register(
    request: Request,
    body: RegisterRequest,
    session: AsyncSession = Depends(get_db),
) -> RegisterResponse:
    return await ctrl.register(session, body)


@router.get("", response_model=list[AccountResponse], summary="List all accounts")
async def list_accounts(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> list[AccountResponse]:
    return await ctrl.list_accounts(session)


@router.post("/auth", response_model=TokenResponse, summary="Login with email + password")
@limiter.limit("10/minute")
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    return await ctrl.login(session, body, settings, response)


@router.get("/logout", response_model=MessageResponse, summary="Logout (clear session cookie)")
async def logout(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    return ctrl.logout(response, settings)


@router.get("/profile", response_model=AccountResponse, summary="Get own account")
async def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> AccountResponse:
    return await ctrl.get_me(session, current_user.id)


@router.put(
    "/profile",
    response_model=AccountResponse,
    summary="Update own account (partial: only provided fields are written)",
)
async def update_me(
    body: UpdateAccountRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> AccountResponse:
    return await ctrl.update_me(session, current_user.id, body)


@router.delete("/profile", response_model=MessageResponse, summary="Delete own account")
async def delete_me(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    return await ctrl.delete_me(session, current_user.id)
