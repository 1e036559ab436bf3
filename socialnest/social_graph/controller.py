"""
Social graph domain: request orchestration.
"""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.social_graph import service as svc
from socialnest.social_graph.schemas import FollowActionResponse, FollowListItem


async def follow_user(
    session: AsyncSession,
    follower_id: uuid.UUID,
    following_id: uuid.UUID,
) -> FollowActionResponse:
    await svc.follow(session, follower_id, following_id)
    return FollowActionResponse(message="User followed successfully")


async def unfollow_user(
    session: AsyncSession,
    follower_id: uuid.UUID,
    following_id: uuid.UUID,
) -> FollowActionResponse:
    await svc.unfollow(session, follower_id, following_id)
    return FollowActionResponse(message="User unfollowed successfully")


async def get_followers(session: AsyncSession, account_id: uuid.UUID) -> list[FollowListItem]:
    profiles = await svc.list_followers(session, account_id)
    return [FollowListItem.model_validate(p) for p in profiles]


async def get_following(session: AsyncSession, account_id: uuid.UUID) -> list[FollowListItem]:
    profiles = await svc.list_following(session, account_id)
    return [FollowListItem.model_validate(p) for p in profiles]
