"""
Interactions domain: request orchestration.
"""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.interactions import service as svc
from socialnest.interactions.schemas import (
    CommentRequest,
    CommentUpdatedResponse,
    LikesResponse,
)
from socialnest.posts.controller import comment_item, render_post
from socialnest.posts.schemas import LikeItem, MessageResponse, PostResponse
from socialnest.users.service import get_account_names


async def add_comment(
    session: AsyncSession,
    post_id: uuid.UUID,
    account_id: uuid.UUID,
    body: CommentRequest,
) -> PostResponse:
    post = await svc.add_comment(session, post_id, account_id, body.text)
    return await render_post(session, post)


async def update_comment(
    session: AsyncSession,
    post_id: uuid.UUID,
    comment_id: uuid.UUID,
    account_id: uuid.UUID,
    body: CommentRequest,
) -> CommentUpdatedResponse:
    comment = await svc.update_comment(session, post_id, comment_id, account_id, body.text)
    names = await get_account_names(session, {account_id})
    return CommentUpdatedResponse(message="Comment updated", comment=comment_item(comment, names))


async def delete_comment(
    session: AsyncSession,
    post_id: uuid.UUID,
    comment_id: uuid.UUID,
    account_id: uuid.UUID,
) -> MessageResponse:
    await svc.delete_comment(session, post_id, comment_id, account_id)
    return MessageResponse(message="Comment removed")


async def like_post(
    session: AsyncSession,
    post_id: uuid.UUID,
    account_id: uuid.UUID,
) -> LikesResponse:
    post = await svc.like_post(session, post_id, account_id)
    return LikesResponse(message="Post liked", likes=[LikeItem(**like) for like in post.likes])


async def unlike_post(
    session: AsyncSession,
    post_id: uuid.UUID,
    account_id: uuid.UUID,
) -> LikesResponse:
    post = await svc.unlike_post(session, post_id, account_id)
    return LikesResponse(message="Post unliked", likes=[LikeItem(**like) for like in post.likes])
