"""
Profiles domain: Pydantic V2 request/response schemas.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _Base(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class CreateProfileRequest(_Base):
    """Body for POST /profiles."""

    username: str = Field(min_length=1, max_length=50)


class UpdateProfileRequest(_Base):
    """PUT /profiles: omitted or null fields are left unchanged."""

    username: str | None = Field(None, min_length=1, max_length=50)


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user: uuid.UUID = Field(validation_alias="account_id")
    username: str
    photo: str
    profile_link: str
    followers: list[str]
    following: list[str]
    created_at: datetime
    updated_at: datetime


class PhotoUploadResponse(BaseModel):
    message: str
    photo: str
