"""
Profiles domain: request orchestration.
"""
from __future__ import annotations

import uuid

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from socialnest import storage
from socialnest.config import Settings
from socialnest.profiles import service as svc
from socialnest.profiles.schemas import (
    CreateProfileRequest,
    PhotoUploadResponse,
    ProfileResponse,
    UpdateProfileRequest,
)


async def create_profile(
    session: AsyncSession,
    account_id: uuid.UUID,
    body: CreateProfileRequest,
) -> ProfileResponse:
    profile = await svc.create_profile(session, account_id, body.username)
    return ProfileResponse.model_validate(profile)


async def get_own_profile(session: AsyncSession, account_id: uuid.UUID) -> ProfileResponse:
    profile = await svc.get_by_account_id(session, account_id)
    return ProfileResponse.model_validate(profile)


async def update_own_profile(
    session: AsyncSession,
    account_id: uuid.UUID,
    body: UpdateProfileRequest,
) -> ProfileResponse:
    profile = await svc.update_profile(session, account_id, body.model_dump(exclude_unset=True))
    return ProfileResponse.model_validate(profile)


async def upload_photo(
    session: AsyncSession,
    account_id: uuid.UUID,
    upload: UploadFile | None,
    settings: Settings,
) -> PhotoUploadResponse:
    # Resolve the profile before storing so a caller without one leaves no orphan blob
    await svc.get_by_account_id(session, account_id)
    reference = await storage.store_upload(upload, field="photo", settings=settings)
    profile = await svc.set_photo(session, account_id, reference)
    return PhotoUploadResponse(message="Profile photo updated", photo=profile.photo)


async def get_by_username(session: AsyncSession, username: str) -> ProfileResponse:
    profile = await svc.get_by_username(session, username)
    return ProfileResponse.model_validate(profile)


async def get_by_account_id(session: AsyncSession, account_id: uuid.UUID) -> ProfileResponse:
    profile = await svc.get_by_account_id(session, account_id)
    return ProfileResponse.model_validate(profile)
