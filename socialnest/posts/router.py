"""
Posts domain: router.

Routes:
  POST   /api/posts            Create a post
  GET    /api/posts            All posts, newest first (public)
  GET    /api/posts/user       My posts (404 when I have none)
  GET    /api/posts/liked      Ids of posts I liked (404 when none)
  POST   /api/posts/uploads    Upload a media file (multipart field "media")
  GET    /api/posts/{post_id}  One post (public)
  PUT    /api/posts/{post_id}  Update (owner only, partial)
  DELETE /api/posts/{post_id}  Delete (owner only)

Literal paths are registered before /{post_id}.
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.config import Settings
from socialnest.core.models import CurrentUser
from socialnest.database import get_db
from socialnest.dependencies import get_settings
from socialnest.posts import controller as ctrl
from socialnest.posts.schemas import (
    CreatePostRequest,
    LikedPostsResponse,
    MediaUploadResponse,
    MessageResponse,
    PostResponse,
    UpdatePostRequest,
)
from socialnest.users.dependencies import get_current_user, get_optional_user

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
async def create_post(
    body: CreatePostRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> PostResponse:
    return await ctrl.create_post(session, current_user.id, body)


@router.get(
    "",
    response_model=list[PostResponse],
    summary="List all posts",
    description="Newest first. Auth is optional.",
)
async def list_posts(
    _: CurrentUser | None = Depends(get_optional_user),
    session: AsyncSession = Depends(get_db),
) -> list[PostResponse]:
    return await ctrl.list_posts(session)


@router.get("/user", response_model=list[PostResponse], summary="List my posts")
async def list_own_posts(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> list[PostResponse]:
    return await ctrl.list_own_posts(session, current_user.id)


@router.get("/liked", response_model=LikedPostsResponse, summary="Ids of posts I liked")
async def list_liked(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> LikedPostsResponse:
    return await ctrl.list_liked(session, current_user.id)


@router.post(
    "/uploads",
    response_model=MediaUploadResponse,
    summary="Upload media for a post",
    description="JPEG or PNG only. Returns the stored reference to put in `media`.",
)
async def upload_media(
    media: UploadFile | None = File(None),
    current_user: CurrentUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> MediaUploadResponse:
    return await ctrl.upload_media(media, settings)


@router.get("/{post_id}", response_model=PostResponse, summary="Get a post")
async def get_post(
    post_id: uuid.UUID,
    _: CurrentUser | None = Depends(get_optional_user),
    session: AsyncSession = Depends(get_db),
) -> PostResponse:
    return await ctrl.get_post(session, post_id)


@router.put(
    "/{post_id}",
    response_model=PostResponse,
    summary="Update a post (owner only; only provided fields are written)",
)
async def update_post(
    post_id: uuid.UUID,
    body: UpdatePostRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> PostResponse:
    return await ctrl.update_post(session, post_id, current_user.id, body)


@router.delete("/{post_id}", response_model=MessageResponse, summary="Delete a post (owner only)")
async def delete_post(
    post_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    return await ctrl.delete_post(session, post_id, current_user.id)
