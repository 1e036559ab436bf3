"""
Posts domain: request orchestration and response shaping.
"""
from __future__ import annotations

import uuid

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from socialnest import storage
from socialnest.config import Settings
from socialnest.posts import service as svc
from socialnest.posts.models import Post
from socialnest.posts.schemas import (
    CommentItem,
    CreatePostRequest,
    LikedPostsResponse,
    LikeItem,
    MediaUploadResponse,
    MessageResponse,
    PostResponse,
    UpdatePostRequest,
)


def _name_for(names: dict[uuid.UUID, str], ref: object) -> str | None:
    try:
        return names.get(uuid.UUID(str(ref)))
    except ValueError:
        return None


def comment_item(comment: dict, names: dict[uuid.UUID, str]) -> CommentItem:
    return CommentItem(
        id=comment["id"],
        user=comment["user"],
        name=_name_for(names, comment.get("user")),
        text=comment["text"],
        created_at=comment["created_at"],
        updated_at=comment["updated_at"],
    )


def to_post_response(post: Post, names: dict[uuid.UUID, str]) -> PostResponse:
    return PostResponse(
        id=post.id,
        user=post.account_id,
        name=names.get(post.account_id),
        content=post.content,
        media=list(post.media or []),
        likes=[LikeItem(**like) for like in post.likes or []],
        comments=[comment_item(c, names) for c in post.comments or []],
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


async def render_post(session: AsyncSession, post: Post) -> PostResponse:
    names = await svc.author_names(session, [post])
    return to_post_response(post, names)


async def _render_many(session: AsyncSession, posts: list[Post]) -> list[PostResponse]:
    names = await svc.author_names(session, posts)
    return [to_post_response(p, names) for p in posts]


async def create_post(
    session: AsyncSession,
    account_id: uuid.UUID,
    body: CreatePostRequest,
) -> PostResponse:
    post = await svc.create_post(session, account_id, body.content, body.media)
    return await render_post(session, post)


async def list_posts(session: AsyncSession) -> list[PostResponse]:
    return await _render_many(session, await svc.list_posts(session))


async def get_post(session: AsyncSession, post_id: uuid.UUID) -> PostResponse:
    return await render_post(session, await svc.get_post(session, post_id))


async def list_own_posts(session: AsyncSession, account_id: uuid.UUID) -> list[PostResponse]:
    return await _render_many(session, await svc.list_by_owner(session, account_id))


async def list_liked(session: AsyncSession, account_id: uuid.UUID) -> LikedPostsResponse:
    ids = await svc.list_liked_post_ids(session, account_id)
    return LikedPostsResponse(liked_post_ids=ids)


async def update_post(
    session: AsyncSession,
    post_id: uuid.UUID,
    account_id: uuid.UUID,
    body: UpdatePostRequest,
) -> PostResponse:
    post = await svc.update_post(session, post_id, account_id, body.model_dump(exclude_unset=True))
    return await render_post(session, post)


async def delete_post(
    session: AsyncSession,
    post_id: uuid.UUID,
    account_id: uuid.UUID,
) -> MessageResponse:
    await svc.delete_post(session, post_id, account_id)
    return MessageResponse(message="Post removed")


async def upload_media(upload: UploadFile | None, settings: Settings) -> MediaUploadResponse:
    reference = await storage.store_upload(upload, field="media", settings=settings)
    return MediaUploadResponse(media=reference)
