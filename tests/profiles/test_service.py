import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from socialnest.exceptions import DuplicateUsername, ProfileAlreadyExists, ProfileNotFound
from socialnest.profiles import service as profile_service
from socialnest.profiles.models import DEFAULT_PHOTO
from socialnest.profiles.service import (
    create_profile,
    get_by_account_id,
    get_by_username,
    set_photo,
    update_profile,
)


@pytest.mark.asyncio
async def test_create_profile_defaults(db_session: AsyncSession) -> None:
    account_id = uuid.uuid4()
    profile = await create_profile(db_session, account_id, "alice")
    assert profile.username == "alice"
    assert profile.photo == DEFAULT_PHOTO
    assert profile.profile_link == f"/profiles/{account_id}"
    assert profile.followers == []
    assert profile.following == []


@pytest.mark.asyncio
async def test_one_profile_per_account(db_session: AsyncSession) -> None:
    account_id = uuid.uuid4()
    await create_profile(db_session, account_id, "first")
    with pytest.raises(ProfileAlreadyExists):
        await create_profile(db_session, account_id, "second")


@pytest.mark.asyncio
async def test_username_must_be_unique(db_session: AsyncSession) -> None:
    await create_profile(db_session, uuid.uuid4(), "taken")
    with pytest.raises(DuplicateUsername):
        await create_profile(db_session, uuid.uuid4(), "taken")


@pytest.mark.asyncio
async def test_update_profile_partial(db_session: AsyncSession) -> None:
    account_id = uuid.uuid4()
    await create_profile(db_session, account_id, "before")
    unchanged = await update_profile(db_session, account_id, {"username": None})
    assert unchanged.username == "before"
    renamed = await update_profile(db_session, account_id, {"username": "after"})
    assert renamed.username == "after"
    assert (await get_by_username(db_session, "after")).account_id == account_id


@pytest.mark.asyncio
async def test_update_profile_to_taken_username(db_session: AsyncSession) -> None:
    await create_profile(db_session, uuid.uuid4(), "alice")
    bob = uuid.uuid4()
    await create_profile(db_session, bob, "bob")
    with pytest.raises(DuplicateUsername):
        await update_profile(db_session, bob, {"username": "alice"})
    # Keeping one's own username is not a conflict
    assert (await update_profile(db_session, bob, {"username": "bob"})).username == "bob"


@pytest.mark.asyncio
async def test_set_photo_overwrites(db_session: AsyncSession) -> None:
    account_id = uuid.uuid4()
    await create_profile(db_session, account_id, "pic")
    await set_photo(db_session, account_id, "photo-1.png")
    profile = await set_photo(db_session, account_id, "photo-2.png")
    assert profile.photo == "photo-2.png"


@pytest.mark.asyncio
async def test_lookups_raise_not_found(db_session: AsyncSession) -> None:
    with pytest.raises(ProfileNotFound):
        await get_by_account_id(db_session, uuid.uuid4())
    with pytest.raises(ProfileNotFound):
        await get_by_username(db_session, "ghost")
    with pytest.raises(ProfileNotFound):
        await update_profile(db_session, uuid.uuid4(), {"username": "x"})


async def _no_username_clash(*args, **kwargs) -> bool:
    return False


async def _no_existing_profile(*args, **kwargs) -> None:
    return None


@pytest.mark.asyncio
async def test_create_profile_username_race(
    db_session: AsyncSession, monkeypatch: pytest.MonkeyPatch
) -> None:
    await create_profile(db_session, uuid.uuid4(), "taken")
    # Both requests pass the pre-checks; the unique index decides.
    monkeypatch.setattr(profile_service, "_username_taken", _no_username_clash)
    with pytest.raises(DuplicateUsername):
        await create_profile(db_session, uuid.uuid4(), "taken")


@pytest.mark.asyncio
async def test_create_profile_account_race(
    db_session: AsyncSession, monkeypatch: pytest.MonkeyPatch
) -> None:
    account_id = uuid.uuid4()
    await create_profile(db_session, account_id, "first")
    monkeypatch.setattr(profile_service, "find_by_account_id", _no_existing_profile)
    with pytest.raises(ProfileAlreadyExists):
        await create_profile(db_session, account_id, "second")


@pytest.mark.asyncio
async def test_update_profile_username_race(
    db_session: AsyncSession, monkeypatch: pytest.MonkeyPatch
) -> None:
    await create_profile(db_session, uuid.uuid4(), "alice")
    bob = uuid.uuid4()
    await create_profile(db_session, bob, "bob")
    monkeypatch.setattr(profile_service, "_username_taken", _no_username_clash)
    with pytest.raises(DuplicateUsername):
        await update_profile(db_session, bob, {"username": "alice"})
