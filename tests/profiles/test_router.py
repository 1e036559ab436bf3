from pathlib import Path

import pytest
from httpx import AsyncClient

from socialnest.config import Settings


@pytest.mark.asyncio
async def test_create_and_get_own_profile(async_client: AsyncClient, make_user) -> None:
    user = await make_user("Alice", username="alice")
    response = await async_client.get("/api/profiles", headers=user["headers"])
    assert response.status_code == 200
    data = response.json()
    assert data["user"] == user["id"]
    assert data["username"] == "alice"
    assert data["photo"] == "no-photo.jpg"
    assert data["profile_link"] == f"/profiles/{user['id']}"


@pytest.mark.asyncio
async def test_create_profile_twice(async_client: AsyncClient, make_user) -> None:
    user = await make_user("Twice", username="twice")
    response = await async_client.post(
        "/api/profiles", json={"username": "again"}, headers=user["headers"]
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "profile_exists"


@pytest.mark.asyncio
async def test_duplicate_username(async_client: AsyncClient, make_user) -> None:
    await make_user("First", username="same")
    other = await make_user("Second")
    response = await async_client.post(
        "/api/profiles", json={"username": "same"}, headers=other["headers"]
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "duplicate_username"


@pytest.mark.asyncio
async def test_get_own_profile_without_one(async_client: AsyncClient, make_user) -> None:
    user = await make_user("Nobody")
    response = await async_client.get("/api/profiles", headers=user["headers"])
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "profile_not_found"


@pytest.mark.asyncio
async def test_update_profile_omitted_field_unchanged(async_client: AsyncClient, make_user) -> None:
    user = await make_user("Keep", username="keep")
    response = await async_client.put("/api/profiles", json={}, headers=user["headers"])
    assert response.status_code == 200
    assert response.json()["username"] == "keep"
    response = await async_client.put(
        "/api/profiles", json={"username": "kept"}, headers=user["headers"]
    )
    assert response.json()["username"] == "kept"


@pytest.mark.asyncio
async def test_lookup_by_username_and_account_id(async_client: AsyncClient, make_user) -> None:
    alice = await make_user("Alice", username="alice")
    bob = await make_user("Bob")
    by_name = await async_client.get("/api/profiles/username/alice", headers=bob["headers"])
    assert by_name.status_code == 200
    assert by_name.json()["user"] == alice["id"]
    by_id = await async_client.get(f"/api/profiles/{alice['id']}", headers=bob["headers"])
    assert by_id.status_code == 200
    assert by_id.json()["username"] == "alice"
    missing = await async_client.get("/api/profiles/username/ghost", headers=bob["headers"])
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_upload_photo(
    async_client: AsyncClient, make_user, png_bytes: bytes, settings: Settings
) -> None:
    user = await make_user("Pic", username="pic")
    response = await async_client.post(
        "/api/profiles/uploads",
        files={"photo": ("me.png", png_bytes, "image/png")},
        headers=user["headers"],
    )
    assert response.status_code == 200, response.text
    photo = response.json()["photo"]
    assert photo.startswith("photo-") and photo.endswith(".png")
    assert (Path(settings.upload_dir) / photo).read_bytes() == png_bytes
    profile = await async_client.get("/api/profiles", headers=user["headers"])
    assert profile.json()["photo"] == photo


@pytest.mark.asyncio
async def test_upload_photo_without_file(async_client: AsyncClient, make_user) -> None:
    user = await make_user("NoFile", username="nofile")
    response = await async_client.post("/api/profiles/uploads", headers=user["headers"])
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "no_media_provided"


@pytest.mark.asyncio
async def test_upload_photo_rejects_non_image(
    async_client: AsyncClient, make_user
) -> None:
    user = await make_user("Gif", username="gif")
    response = await async_client.post(
        "/api/profiles/uploads",
        files={"photo": ("notes.txt", b"hello", "text/plain")},
        headers=user["headers"],
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "unsupported_media_type"


@pytest.mark.asyncio
async def test_upload_photo_without_profile(
    async_client: AsyncClient, make_user, png_bytes: bytes, settings: Settings
) -> None:
    user = await make_user("Orphan")
    response = await async_client.post(
        "/api/profiles/uploads",
        files={"photo": ("me.png", png_bytes, "image/png")},
        headers=user["headers"],
    )
    assert response.status_code == 404
    assert not Path(settings.upload_dir).exists()
