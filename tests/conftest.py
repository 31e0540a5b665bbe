"""Shared test fixtures.

Every test gets a fresh SQLite database (through aiosqlite) with the schema
built from the ORM metadata. Redis is left unset, so rate limiting is off
unless a test installs a client on ``app.state.redis``.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import AsyncGenerator
from pathlib import Path

os.environ.setdefault("SPEEDRUN_UPLOAD_DIR", tempfile.mkdtemp(prefix="speedrun_test_uploads_"))
os.environ.setdefault("SPEEDRUN_LOG_FORMAT", "console")
os.environ.setdefault("SPEEDRUN_JWT_SECRET_KEY", "test-secret-key-with-at-least-32-bytes!")

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from speedrun.config import Settings, get_settings
from speedrun.database import Database
from speedrun.db.base import Base
from speedrun.main import create_app
from tests.factories import Factory


@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """A connected Database on a throwaway SQLite file with all tables created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'speedrun.db'}")
    await db.connect()
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield db
    await db.close()


@pytest_asyncio.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Get a direct database session for service tests and assertions."""
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture
async def factory(db_session: AsyncSession) -> Factory:
    return Factory(db_session)


@pytest.fixture
def app(database: Database) -> FastAPI:
    application = create_app()
    application.state.database = database
    application.state.redis = None
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the app without running the lifespan."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _register(client: AsyncClient, username: str = "runner", password: str = "SecureP@ss1") -> dict:
    """Register a user through the API and return its id, credentials and token."""
    response = await client.post("/api/v1/auth/register", json={
        "username": username,
        "email": f"{username}@example.com",
        "password": password,
    })
    data = response.json()
    return {
        "username": username,
        "email": f"{username}@example.com",
        "password": password,
        "user_id": data["user"]["id"],
        "access_token": data["access_token"],
    }


@pytest_asyncio.fixture
async def registered_user(client: AsyncClient) -> dict:
    return await _register(client)


@pytest_asyncio.fixture
async def authed_client(client: AsyncClient, registered_user: dict) -> AsyncClient:
    """Client sending the registered user's bearer token."""
    client.headers["Authorization"] = f"Bearer {registered_user['access_token']}"
    return client
