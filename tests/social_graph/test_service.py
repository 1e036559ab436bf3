import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.exceptions import (
    AccountNotFound,
    AlreadyFollowing,
    CannotFollowSelf,
    NotFollowing,
    ProfileNotFound,
)
from socialnest.profiles.service import create_profile, find_by_account_id
from socialnest.social_graph.service import (
    follow,
    list_followers,
    list_following,
    reconcile_follow_graph,
    unfollow,
)
from socialnest.users.service import register_account


async def _account(session: AsyncSession, name: str, with_profile: bool = True) -> uuid.UUID:
    account = await register_account(
        session, name=name, email=f"{name}@example.com", password="secret"
    )
    if with_profile:
        await create_profile(session, account.id, name)
    return account.id


@pytest.mark.asyncio
async def test_follow_updates_both_sides(db_session: AsyncSession) -> None:
    alice = await _account(db_session, "alice")
    bob = await _account(db_session, "bob")
    await follow(db_session, alice, bob)

    assert [p.account_id for p in await list_following(db_session, alice)] == [bob]
    assert [p.account_id for p in await list_followers(db_session, bob)] == [alice]
    assert await list_followers(db_session, alice) == []
    assert await list_following(db_session, bob) == []


@pytest.mark.asyncio
async def test_follow_twice_fails_and_leaves_state(db_session: AsyncSession) -> None:
    alice = await _account(db_session, "alice")
    bob = await _account(db_session, "bob")
    await follow(db_session, alice, bob)
    with pytest.raises(AlreadyFollowing):
        await follow(db_session, alice, bob)
    assert (await find_by_account_id(db_session, alice)).following == [str(bob)]
    assert (await find_by_account_id(db_session, bob)).followers == [str(alice)]


@pytest.mark.asyncio
async def test_unfollow_removes_half_written_edge(db_session: AsyncSession) -> None:
    alice = await _account(db_session, "alice")
    bob = await _account(db_session, "bob")
    bob_profile = await find_by_account_id(db_session, bob)
    bob_profile.followers = [str(alice)]
    await db_session.flush()

    await unfollow(db_session, alice, bob)
    assert (await find_by_account_id(db_session, bob)).followers == []
    assert (await find_by_account_id(db_session, alice)).following == []

    report = await reconcile_follow_graph(db_session)
    assert report.edges_repaired == 0
    assert (await find_by_account_id(db_session, alice)).following == []
    assert (await find_by_account_id(db_session, bob)).followers == []


@pytest.mark.asyncio
async def test_follow_self_rejected_even_without_profile(db_session: AsyncSession) -> None:
    loner = await _account(db_session, "loner", with_profile=False)
    with pytest.raises(CannotFollowSelf):
        await follow(db_session, loner, loner)
    with pytest.raises(CannotFollowSelf):
        await unfollow(db_session, loner, loner)


@pytest.mark.asyncio
async def test_follow_unknown_account(db_session: AsyncSession) -> None:
    alice = await _account(db_session, "alice")
    with pytest.raises(AccountNotFound):
        await follow(db_session, alice, uuid.uuid4())


@pytest.mark.asyncio
async def test_follow_requires_both_profiles(db_session: AsyncSession) -> None:
    alice = await _account(db_session, "alice")
    noprofile = await _account(db_session, "noprofile", with_profile=False)
    with pytest.raises(ProfileNotFound):
        await follow(db_session, noprofile, alice)
    with pytest.raises(ProfileNotFound):
        await follow(db_session, alice, noprofile)
    # No placeholder profile is created for the target
    assert await find_by_account_id(db_session, noprofile) is None
    assert (await find_by_account_id(db_session, alice)).following == []


@pytest.mark.asyncio
async def test_unfollow_without_follow(db_session: AsyncSession) -> None:
    alice = await _account(db_session, "alice")
    bob = await _account(db_session, "bob")
    with pytest.raises(NotFollowing):
        await unfollow(db_session, alice, bob)


@pytest.mark.asyncio
async def test_unfollow_removes_both_sides(db_session: AsyncSession) -> None:
    alice = await _account(db_session, "alice")
    bob = await _account(db_session, "bob")
    await follow(db_session, alice, bob)
    await unfollow(db_session, alice, bob)
    assert (await find_by_account_id(db_session, alice)).following == []
    assert (await find_by_account_id(db_session, bob)).followers == []


@pytest.mark.asyncio
async def test_follow_repairs_half_written_edge(db_session: AsyncSession) -> None:
    alice = await _account(db_session, "alice")
    bob = await _account(db_session, "bob")
    bob_profile = await find_by_account_id(db_session, bob)
    bob_profile.followers = [str(alice)]
    await db_session.flush()

    await follow(db_session, alice, bob)
    assert (await find_by_account_id(db_session, bob)).followers == [str(alice)]
    assert (await find_by_account_id(db_session, alice)).following == [str(bob)]


@pytest.mark.asyncio
async def test_lists_skip_dangling_references(db_session: AsyncSession) -> None:
    alice = await _account(db_session, "alice")
    bob = await _account(db_session, "bob")
    profile = await find_by_account_id(db_session, alice)
    profile.following = [str(uuid.uuid4()), str(bob), "not-a-uuid"]
    await db_session.flush()

    following = await list_following(db_session, alice)
    assert [p.username for p in following] == ["bob"]


@pytest.mark.asyncio
async def test_lists_require_a_profile(db_session: AsyncSession) -> None:
    loner = await _account(db_session, "loner", with_profile=False)
    with pytest.raises(ProfileNotFound):
        await list_followers(db_session, loner)
    with pytest.raises(ProfileNotFound):
        await list_following(db_session, loner)


@pytest.mark.asyncio
async def test_reconcile_repairs_and_cleans(db_session: AsyncSession) -> None:
    alice = await _account(db_session, "alice")
    bob = await _account(db_session, "bob")
    carol = await _account(db_session, "carol")
    ghost = str(uuid.uuid4())

    a = await find_by_account_id(db_session, alice)
    b = await find_by_account_id(db_session, bob)
    c = await find_by_account_id(db_session, carol)
    # alice -> bob recorded only on alice's side, plus a dangling ref and a self ref
    a.following = [str(bob), ghost, str(alice)]
    # carol -> alice recorded only on alice's side, twice
    a.followers = [str(carol), str(carol)]
    b.followers = []
    c.following = []
    await db_session.flush()

    report = await reconcile_follow_graph(db_session)

    assert report.profiles_scanned == 3
    assert report.dangling_removed == 1
    assert report.self_references_removed == 1
    assert report.duplicates_removed == 1
    assert report.edges_repaired == 2
    assert report.profiles_changed == 3

    assert (await find_by_account_id(db_session, alice)).following == [str(bob)]
    assert (await find_by_account_id(db_session, alice)).followers == [str(carol)]
    assert (await find_by_account_id(db_session, bob)).followers == [str(alice)]
    assert (await find_by_account_id(db_session, carol)).following == [str(alice)]


@pytest.mark.asyncio
async def test_reconcile_on_consistent_graph_is_noop(db_session: AsyncSession) -> None:
    alice = await _account(db_session, "alice")
    bob = await _account(db_session, "bob")
    await follow(db_session, alice, bob)
    await follow(db_session, bob, alice)

    report = await reconcile_follow_graph(db_session)
    assert report.edges_repaired == 0
    assert report.profiles_changed == 0
