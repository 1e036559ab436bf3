"""
Social graph domain: Pydantic V2 response schemas.
"""
from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field


class FollowListItem(BaseModel):
    """A profile embedded in a followers / following list."""

    model_config = ConfigDict(from_attributes=True)

    user: uuid.UUID = Field(validation_alias="account_id")
    username: str
    photo: str
    profile_link: str


class FollowActionResponse(BaseModel):
    message: str
