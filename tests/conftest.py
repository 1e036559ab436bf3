import os
from collections.abc import AsyncGenerator, Awaitable, Callable

# The shared limiter is off for the suite; tests/users/test_rate_limit.py turns it on.
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from socialnest.config import Settings
from socialnest.core.database import Base
from socialnest.database import get_db
from socialnest.dependencies import get_settings
from socialnest.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite://"

# Uploads are checked by name and content type only; a PNG signature is enough.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=TEST_DATABASE_URL,
        jwt_secret="test-secret",
        upload_dir=str(tmp_path / "uploads"),
        blob_backend="local",
        max_upload_bytes=1024 * 1024,
    )


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def async_client(
    session_factory: async_sessionmaker[AsyncSession],
    settings: Settings,
) -> AsyncGenerator[AsyncClient, None]:
    async def _get_test_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_settings] = lambda: settings
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


UserFactory = Callable[..., Awaitable[dict]]


@pytest.fixture
def make_user(async_client: AsyncClient) -> UserFactory:
    """Register and log in an account; optionally create its profile.

    Returns ``{"id", "email", "token", "headers"}``.  The session cookie set by
    login is dropped so every request authenticates only via its headers.
    """

    async def _make(
        name: str,
        username: str | None = None,
        password: str = "secret123",
    ) -> dict:
        email = f"{name.lower()}@example.com"
        reg = await async_client.post(
            "/api/users", json={"name": name, "email": email, "password": password}
        )
        assert reg.status_code == 201, reg.text
        login = await async_client.post(
            "/api/users/auth", json={"email": email, "password": password}
        )
        assert login.status_code == 200, login.text
        async_client.cookies.clear()
        token = login.json()["access_token"]
        headers = {"Authorization": f"Bearer {token}"}
        me = await async_client.get("/api/users/profile", headers=headers)
        assert me.status_code == 200, me.text
        if username is not None:
            created = await async_client.post(
                "/api/profiles", json={"username": username}, headers=headers
            )
            assert created.status_code == 201, created.text
        return {"id": me.json()["id"], "email": email, "token": token, "headers": headers}

    return _make
