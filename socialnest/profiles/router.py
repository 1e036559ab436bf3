"""
Profiles domain: router.

Routes:
  POST   /api/profiles                     Create own profile
  GET    /api/profiles                     Get own profile
  PUT    /api/profiles                     Update own profile (partial)
  POST   /api/profiles/uploads             Upload / replace own photo (multipart field "photo")
  GET    /api/profiles/username/{username} Look up a profile by username
  GET    /api/profiles/{user_id}           Look up a profile by account id

All routes require a valid token.  The social graph router shares the
/profiles prefix and is included first so /followers and /following are not
captured by /{user_id}.
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.config import Settings
from socialnest.core.models import CurrentUser
from socialnest.database import get_db
from socialnest.dependencies import get_settings
from socialnest.profiles import controller as ctrl
from socialnest.profiles.schemas import (
    CreateProfileRequest,
    PhotoUploadResponse,
    ProfileResponse,
    UpdateProfileRequest,
)
from socialnest.users.dependencies import get_current_user

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create own profile",
)
async def create_profile(
    body: CreateProfileRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    return await ctrl.create_profile(session, current_user.id, body)


@router.get("", response_model=ProfileResponse, summary="Get own profile")
async def get_own_profile(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    return await ctrl.get_own_profile(session, current_user.id)


@router.put(
    "",
    response_model=ProfileResponse,
    summary="Update own profile (partial: only provided fields are written)",
)
async def update_own_profile(
    body: UpdateProfileRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    return await ctrl.update_own_profile(session, current_user.id, body)


@router.post(
    "/uploads",
    response_model=PhotoUploadResponse,
    summary="Upload a profile photo",
    description="JPEG or PNG only. Replaces the current photo.",
)
async def upload_photo(
    photo: UploadFile | None = File(None),
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> PhotoUploadResponse:
    return await ctrl.upload_photo(session, current_user.id, photo, settings)


@router.get(
    "/username/{username}",
    response_model=ProfileResponse,
    summary="Get a profile by username",
)
async def get_by_username(
    username: str,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    return await ctrl.get_by_username(session, username)


@router.get("/{user_id}", response_model=ProfileResponse, summary="Get a profile by account id")
async def get_by_account_id(
    user_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    return await ctrl.get_by_account_id(session, user_id)
