"""
Social graph domain: user-facing routes.

All routes prefixed /api/profiles (same prefix as the profiles router).  This
router is included first so the literal /followers and /following paths win
over the profiles router's /{user_id}.

Routes:
  GET    /followers             Who follows me
  GET    /following             Who I follow
  POST   /{user_id}/follow      Follow an account  (50/hour rate limit)
  POST   /{user_id}/unfollow    Unfollow an account
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.core.models import CurrentUser
from socialnest.database import get_db
from socialnest.rate_limit import limiter
from socialnest.social_graph import controller as ctrl
from socialnest.social_graph.schemas import FollowActionResponse, FollowListItem
from socialnest.users.dependencies import get_current_user

router = APIRouter(prefix="/profiles", tags=["social-graph"])


# ── Lists ─────────────────────────────────────────────────────────────────────

@router.get(
    "/followers",
    response_model=list[FollowListItem],
    summary="List my followers",
)
async def get_followers(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> list[FollowListItem]:
    return await ctrl.get_followers(session, current_user.id)


@router.get(
    "/following",
    response_model=list[FollowListItem],
    summary="List accounts I follow",
)
async def get_following(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> list[FollowListItem]:
    return await ctrl.get_following(session, current_user.id)


# ── Follow ────────────────────────────────────────────────────────────────────

@router.post(
    "/{user_id}/follow",
    response_model=FollowActionResponse,
    status_code=status.HTTP_200_OK,
    summary="Follow an account",
    description="Rate-limited to 50 follow actions per hour.",
)
@limiter.limit("50/hour")
async def follow_user(
    request: Request,
    user_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> FollowActionResponse:
    return await ctrl.follow_user(session, current_user.id, user_id)


@router.post(
    "/{user_id}/unfollow",
    response_model=FollowActionResponse,
    summary="Unfollow an account",
)
async def unfollow_user(
    user_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> FollowActionResponse:
    return await ctrl.unfollow_user(session, current_user.id, user_id)
