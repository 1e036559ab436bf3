"""
Social graph domain: pure business logic (zero FastAPI imports).

The graph lives in two denormalized lists on each profile:
  A.following contains B   <=>   B.followers contains A

State rules:
  follow:    cannot follow self; target account and both profiles must exist;
             must not already be following
  unfollow:  cannot unfollow self; same resolution; the edge must be recorded
             on at least one side

Both profile rows are locked in account-id order and both sides are written in
the caller's transaction.  Writes are ensure-present / ensure-absent so a
half-applied edge converges on retry; ``reconcile_follow_graph`` repairs
anything that slipped through.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.exceptions import (
    AccountNotFound,
    AlreadyFollowing,
    CannotFollowSelf,
    NotFollowing,
    ProfileNotFound,
)
from socialnest.profiles.models import Profile
from socialnest.profiles.service import find_by_account_ids, get_by_account_id
from socialnest.users.service import get_account_by_id

logger = logging.getLogger(__name__)


# ── List helpers (always return a new list) ───────────────────────────────────

def _with(refs: list[str], ref: str) -> list[str]:
    if ref in refs:
        return list(refs)
    return [*refs, ref]


def _without(refs: list[str], ref: str) -> list[str]:
    return [r for r in refs if r != ref]


def _parse_ref(ref: object) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(ref))
    except ValueError:
        return None


# ── Internal helpers ──────────────────────────────────────────────────────────

async def _lock_pair(
    session: AsyncSession,
    actor_id: uuid.UUID,
    target_id: uuid.UUID,
) -> tuple[Profile, Profile]:
    """Resolve and row-lock both profiles; locks are taken in account-id order."""
    if await get_account_by_id(session, target_id) is None:
        raise AccountNotFound()
    result = await session.execute(
        sa.select(Profile)
        .where(Profile.account_id.in_([actor_id, target_id]))
        .order_by(Profile.account_id)
        .with_for_update()
    )
    by_account = {p.account_id: p for p in result.scalars().all()}
    actor = by_account.get(actor_id)
    if actor is None:
        raise ProfileNotFound("Your profile was not found.")
    target = by_account.get(target_id)
    if target is None:
        raise ProfileNotFound("Profile of the target user not found.")
    return actor, target


# ── Follow / unfollow ─────────────────────────────────────────────────────────

async def follow(
    session: AsyncSession,
    follower_id: uuid.UUID,
    following_id: uuid.UUID,
) -> None:
    if follower_id == following_id:
        raise CannotFollowSelf()
    actor, target = await _lock_pair(session, follower_id, following_id)
    if str(following_id) in actor.following:
        raise AlreadyFollowing()
    actor.following = _with(actor.following, str(following_id))
    target.followers = _with(target.followers, str(follower_id))
    await session.flush()
    logger.info("Account %s followed %s", follower_id, following_id)


async def unfollow(
    session: AsyncSession,
    follower_id: uuid.UUID,
    following_id: uuid.UUID,
) -> None:
    if follower_id == following_id:
        raise CannotFollowSelf("You cannot unfollow yourself.")
    actor, target = await _lock_pair(session, follower_id, following_id)
    # An edge recorded on either side counts, so a half-written one is removed
    recorded = str(following_id) in actor.following or str(follower_id) in target.followers
    if not recorded:
        raise NotFollowing()
    actor.following = _without(actor.following, str(following_id))
    target.followers = _without(target.followers, str(follower_id))
    await session.flush()
    logger.info("Account %s unfollowed %s", follower_id, following_id)


# ── Following / Followers lists ───────────────────────────────────────────────

async def _resolve_refs(
    session: AsyncSession,
    owner: Profile,
    refs: list[str],
    list_name: str,
) -> list[Profile]:
    """Resolve references to profiles in list order, skipping dangling ones."""
    ids: list[uuid.UUID] = []
    for ref in refs:
        parsed = _parse_ref(ref)
        if parsed is None:
            logger.warning(
                "Profile %s has malformed %s reference %r", owner.account_id, list_name, ref
            )
            continue
        ids.append(parsed)
    profiles = await find_by_account_ids(session, ids)
    resolved: list[Profile] = []
    for account_id in ids:
        profile = profiles.get(account_id)
        if profile is None:
            logger.warning(
                "Profile %s has dangling %s reference %s", owner.account_id, list_name, account_id
            )
            continue
        resolved.append(profile)
    return resolved


async def list_followers(session: AsyncSession, account_id: uuid.UUID) -> list[Profile]:
    profile = await get_by_account_id(session, account_id)
    return await _resolve_refs(session, profile, profile.followers, "followers")


async def list_following(session: AsyncSession, account_id: uuid.UUID) -> list[Profile]:
    profile = await get_by_account_id(session, account_id)
    return await _resolve_refs(session, profile, profile.following, "following")


# ── Reconciliation ────────────────────────────────────────────────────────────

@dataclass
class ReconcileReport:
    profiles_scanned: int = 0
    self_references_removed: int = 0
    duplicates_removed: int = 0
    dangling_removed: int = 0
    edges_repaired: int = 0
    profiles_changed: int = 0


def _clean(
    owner_ref: str,
    refs: list,
    known: set[str],
    report: ReconcileReport,
) -> list[str]:
    cleaned: list[str] = []
    for raw in refs:
        parsed = _parse_ref(raw)
        ref = str(parsed) if parsed is not None else None
        if ref == owner_ref:
            report.self_references_removed += 1
        elif ref is None or ref not in known:
            report.dangling_removed += 1
        elif ref in cleaned:
            report.duplicates_removed += 1
        else:
            cleaned.append(ref)
    return cleaned


async def reconcile_follow_graph(session: AsyncSession) -> ReconcileReport:
    """Restore the symmetry of follow lists across all profiles.

    Self references, duplicates and references to missing profiles are
    dropped.  An edge recorded on only one side is treated as intended and the
    missing counterpart is added.
    """
    result = await session.execute(
        sa.select(Profile).order_by(Profile.account_id).with_for_update()
    )
    profiles = list(result.scalars().all())
    report = ReconcileReport(profiles_scanned=len(profiles))
    by_ref = {str(p.account_id): p for p in profiles}
    known = set(by_ref)

    followers: dict[str, list[str]] = {}
    following: dict[str, list[str]] = {}
    for ref, profile in by_ref.items():
        followers[ref] = _clean(ref, profile.followers or [], known, report)
        following[ref] = _clean(ref, profile.following or [], known, report)

    for ref in by_ref:
        for target in list(following[ref]):
            if ref not in followers[target]:
                followers[target] = _with(followers[target], ref)
                report.edges_repaired += 1
                logger.warning("Repaired missing follower %s on %s", ref, target)
        for source in list(followers[ref]):
            if ref not in following[source]:
                following[source] = _with(following[source], ref)
                report.edges_repaired += 1
                logger.warning("Repaired missing following %s on %s", ref, source)

    for ref, profile in by_ref.items():
        if profile.followers != followers[ref] or profile.following != following[ref]:
            profile.followers = followers[ref]
            profile.following = following[ref]
            report.profiles_changed += 1
    await session.flush()
    logger.info("Follow graph reconciled: %s", report)
    return report
