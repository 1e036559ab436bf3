"""
Interactions domain: comment and like routes under /api/posts.

Routes:
  POST   /{post_id}/comments               Add a comment (returns the post)
  PUT    /{post_id}/comments/{comment_id}  Edit own comment
  DELETE /{post_id}/comments/{comment_id}  Delete own comment
  POST   /{post_id}/like                   Like (400 if already liked)
  POST   /{post_id}/unlike                 Unlike (no-op if not liked)
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.core.models import CurrentUser
from socialnest.database import get_db
from socialnest.interactions import controller as ctrl
from socialnest.interactions.schemas import (
    CommentRequest,
    CommentUpdatedResponse,
    LikesResponse,
)
from socialnest.posts.schemas import MessageResponse, PostResponse
from socialnest.users.dependencies import get_current_user

router = APIRouter(prefix="/posts", tags=["interactions"])


# ── Comments ──────────────────────────────────────────────────────────────────

@router.post(
    "/{post_id}/comments",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a comment to a post",
)
async def add_comment(
    post_id: uuid.UUID,
    body: CommentRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> PostResponse:
    return await ctrl.add_comment(session, post_id, current_user.id, body)


@router.put(
    "/{post_id}/comments/{comment_id}",
    response_model=CommentUpdatedResponse,
    summary="Edit a comment (author only)",
)
async def update_comment(
    post_id: uuid.UUID,
    comment_id: uuid.UUID,
    body: CommentRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> CommentUpdatedResponse:
    return await ctrl.update_comment(session, post_id, comment_id, current_user.id, body)


@router.delete(
    "/{post_id}/comments/{comment_id}",
    response_model=MessageResponse,
    summary="Delete a comment (author only)",
)
async def delete_comment(
    post_id: uuid.UUID,
    comment_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    return await ctrl.delete_comment(session, post_id, comment_id, current_user.id)


# ── Likes ─────────────────────────────────────────────────────────────────────

@router.post("/{post_id}/like", response_model=LikesResponse, summary="Like a post")
async def like_post(
    post_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> LikesResponse:
    return await ctrl.like_post(session, post_id, current_user.id)


@router.post("/{post_id}/unlike", response_model=LikesResponse, summary="Unlike a post")
async def unlike_post(
    post_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> LikesResponse:
    return await ctrl.unlike_post(session, post_id, current_user.id)
