"""
Interactions domain: comments and likes on posts (zero FastAPI imports).

Rules:
  comment:  any authenticated account may comment; only the comment's author
            may edit or delete it (not even the post owner)
  like:     one like per account per post; the liker's username is copied from
            their profile at like time and never refreshed
  unlike:   removing an absent like is a successful no-op

Every mutation re-reads the post row under lock.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.authorization import assert_comment_author
from socialnest.exceptions import AlreadyLiked, CommentNotFound, ProfileNotFound
from socialnest.posts.models import Post
from socialnest.posts.service import get_post_for_update
from socialnest.profiles.service import find_by_account_id

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _find_comment(post: Post, comment_id: uuid.UUID) -> dict:
    ref = str(comment_id)
    for comment in post.comments or []:
        if comment.get("id") == ref:
            return comment
    raise CommentNotFound()


# ── Comments ──────────────────────────────────────────────────────────────────

async def add_comment(
    session: AsyncSession,
    post_id: uuid.UUID,
    account_id: uuid.UUID,
    text: str,
) -> Post:
    post = await get_post_for_update(session, post_id)
    now = _timestamp()
    comment = {
        "id": str(uuid.uuid4()),
        "user": str(account_id),
        "text": text,
        "created_at": now,
        "updated_at": now,
    }
    post.comments = [*(post.comments or []), comment]
    await session.flush()
    return post


async def update_comment(
    session: AsyncSession,
    post_id: uuid.UUID,
    comment_id: uuid.UUID,
    account_id: uuid.UUID,
    text: str,
) -> dict:
    post = await get_post_for_update(session, post_id)
    comment = _find_comment(post, comment_id)
    assert_comment_author(comment, account_id)
    updated = {**comment, "text": text, "updated_at": _timestamp()}
    post.comments = [updated if c.get("id") == comment["id"] else c for c in post.comments]
    await session.flush()
    return updated


async def delete_comment(
    session: AsyncSession,
    post_id: uuid.UUID,
    comment_id: uuid.UUID,
    account_id: uuid.UUID,
) -> None:
    post = await get_post_for_update(session, post_id)
    comment = _find_comment(post, comment_id)
    assert_comment_author(comment, account_id)
    post.comments = [c for c in post.comments if c.get("id") != comment["id"]]
    await session.flush()


# ── Likes ─────────────────────────────────────────────────────────────────────

async def like_post(
    session: AsyncSession,
    post_id: uuid.UUID,
    account_id: uuid.UUID,
) -> Post:
    post = await get_post_for_update(session, post_id)
    ref = str(account_id)
    if any(like.get("user") == ref for like in post.likes or []):
        raise AlreadyLiked()
    profile = await find_by_account_id(session, account_id)
    if profile is None:
        raise ProfileNotFound()
    post.likes = [*(post.likes or []), {"user": ref, "username": profile.username}]
    await session.flush()
    logger.info("Account %s liked post %s", account_id, post_id)
    return post


async def unlike_post(
    session: AsyncSession,
    post_id: uuid.UUID,
    account_id: uuid.UUID,
) -> Post:
    post = await get_post_for_update(session, post_id)
    ref = str(account_id)
    remaining = [like for like in post.likes or [] if like.get("user") != ref]
    if len(remaining) != len(post.likes or []):
        post.likes = remaining
        await session.flush()
        logger.info("Account %s unliked post %s", account_id, post_id)
    return post
