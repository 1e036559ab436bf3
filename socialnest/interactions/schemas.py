"""
Interactions domain: Pydantic V2 request/response schemas.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from socialnest.posts.schemas import CommentItem, LikeItem


class _Base(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class CommentRequest(_Base):
    """Body for adding or editing a comment."""

    text: str = Field(min_length=1, max_length=2000)


class CommentUpdatedResponse(BaseModel):
    message: str
    comment: CommentItem


class LikesResponse(BaseModel):
    message: str
    likes: list[LikeItem]
