"""
Posts domain: pure business logic (zero FastAPI imports).

Rules:
  - Only the owner may update or delete a post (checked on the locked row).
  - Partial update: a field that is absent or null keeps its stored value.
  - Embedded lists are always reassigned as new lists.
"""
from __future__ import annotations

import logging
import uuid

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.authorization import assert_post_owner
from socialnest.exceptions import LikedPostsNotFound, PostNotFound, PostsNotFound
from socialnest.posts.models import Post
from socialnest.users.service import get_account_names

logger = logging.getLogger(__name__)


# ── Queries ───────────────────────────────────────────────────────────────────

async def list_posts(session: AsyncSession) -> list[Post]:
    """All posts, newest first."""
    result = await session.execute(
        sa.select(Post).order_by(Post.created_at.desc(), Post.id.desc())
    )
    return list(result.scalars().all())


async def get_post(session: AsyncSession, post_id: uuid.UUID) -> Post:
    result = await session.execute(sa.select(Post).where(Post.id == post_id))
    post = result.scalar_one_or_none()
    if post is None:
        raise PostNotFound()
    return post


async def get_post_for_update(session: AsyncSession, post_id: uuid.UUID) -> Post:
    """Load and row-lock a post for a read-modify-write."""
    result = await session.execute(
        sa.select(Post).where(Post.id == post_id).with_for_update()
    )
    post = result.scalar_one_or_none()
    if post is None:
        raise PostNotFound()
    return post


async def list_by_owner(session: AsyncSession, account_id: uuid.UUID) -> list[Post]:
    result = await session.execute(
        sa.select(Post)
        .where(Post.account_id == account_id)
        .order_by(Post.created_at.desc(), Post.id.desc())
    )
    posts = list(result.scalars().all())
    if not posts:
        raise PostsNotFound()
    return posts


async def list_liked_post_ids(session: AsyncSession, account_id: uuid.UUID) -> list[uuid.UUID]:
    """Ids of posts liked by the account; LikedPostsNotFound when there are none."""
    # Likes are embedded JSON; filtered here to stay portable across backends.
    result = await session.execute(
        sa.select(Post.id, Post.likes).order_by(Post.created_at.desc(), Post.id.desc())
    )
    ref = str(account_id)
    liked = [
        row.id
        for row in result
        if any(like.get("user") == ref for like in (row.likes or []))
    ]
    if not liked:
        raise LikedPostsNotFound()
    return liked


async def author_names(session: AsyncSession, posts: list[Post]) -> dict[uuid.UUID, str]:
    """Names of every post author and commenter in ``posts``."""
    ids: set[uuid.UUID] = set()
    for post in posts:
        ids.add(post.account_id)
        for comment in post.comments or []:
            try:
                ids.add(uuid.UUID(comment["user"]))
            except (KeyError, TypeError, ValueError):
                logger.warning("Post %s has a comment without a valid author", post.id)
    return await get_account_names(session, ids)


# ── Mutations ─────────────────────────────────────────────────────────────────

async def create_post(
    session: AsyncSession,
    account_id: uuid.UUID,
    content: str,
    media: list[str],
) -> Post:
    post = Post(
        account_id=account_id,
        content=content,
        media=list(media),
        likes=[],
        comments=[],
    )
    session.add(post)
    await session.flush()
    logger.info("Account %s created post %s", account_id, post.id)
    return post


async def update_post(
    session: AsyncSession,
    post_id: uuid.UUID,
    account_id: uuid.UUID,
    fields: dict,
) -> Post:
    post = await get_post_for_update(session, post_id)
    assert_post_owner(post, account_id)
    if fields.get("content") is not None:
        post.content = fields["content"]
    if fields.get("media") is not None:
        post.media = list(fields["media"])
    await session.flush()
    return post


async def delete_post(
    session: AsyncSession,
    post_id: uuid.UUID,
    account_id: uuid.UUID,
) -> None:
    post = await get_post_for_update(session, post_id)
    assert_post_owner(post, account_id)
    await session.delete(post)
    await session.flush()
    logger.info("Account %s deleted post %s", account_id, post_id)
