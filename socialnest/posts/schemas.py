"""
Posts domain: Pydantic V2 request/response schemas.

Comments and likes are embedded in the post document, so their response
shapes live here and are shared with ``socialnest.interactions``.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _Base(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


# ── Requests ──────────────────────────────────────────────────────────────────

class CreatePostRequest(_Base):
    """Body for POST /posts."""

    content: str = Field(min_length=1, max_length=5000)
    media: list[str] = Field(default_factory=list)


class UpdatePostRequest(_Base):
    """PUT /posts/{id}: omitted or null fields are left unchanged.

    Provided values are applied as-is, including an empty ``content`` or an
    empty ``media`` list.
    """

    content: str | None = Field(None, max_length=5000)
    media: list[str] | None = None


# ── Responses ─────────────────────────────────────────────────────────────────

class LikeItem(BaseModel):
    user: uuid.UUID
    username: str


class CommentItem(BaseModel):
    id: uuid.UUID
    user: uuid.UUID
    name: str | None = None  # commenter's current account name, if the account exists
    text: str
    created_at: datetime
    updated_at: datetime


class PostResponse(BaseModel):
    id: uuid.UUID
    user: uuid.UUID
    name: str | None = None  # author's current account name, if the account exists
    content: str
    media: list[str]
    likes: list[LikeItem]
    comments: list[CommentItem]
    created_at: datetime
    updated_at: datetime


class LikedPostsResponse(BaseModel):
    liked_post_ids: list[uuid.UUID]


class MediaUploadResponse(BaseModel):
    media: str


class MessageResponse(BaseModel):
    message: str
