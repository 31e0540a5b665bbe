"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


class Database:
    """Owns the engine and session factory for one process.

    Built once at startup, handed to the app through ``app.state`` and
    disposed at shutdown.
    """

    def __init__(self, url: str, *, pool_size: int = 10, max_overflow: int = 5, echo: bool = False) -> None:
        self.url = url
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    async def connect(self) -> None:
        """Create the engine and session factory."""
        kwargs: dict[str, Any] = {"echo": self._echo, "pool_pre_ping": True}
        if not self.is_sqlite:
            kwargs["pool_size"] = self._pool_size
            kwargs["max_overflow"] = self._max_overflow
        self._engine = create_async_engine(self.url, **kwargs)

        if self.is_sqlite:
            # SQLite only enforces foreign keys (and their cascades) when asked per connection
            @event.listens_for(self._engine.sync_engine, "connect")
            def _enable_foreign_keys(dbapi_connection: Any, _record: Any) -> None:  # noqa: ANN401
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def close(self) -> None:
        """Dispose of the engine."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            msg = "Database not connected. Call connect() first."
            raise RuntimeError(msg)
        return self._engine

    def session(self) -> AsyncSession:
        """Open a new session. Use as an async context manager."""
        if self._session_factory is None:
            msg = "Database not connected. Call connect() first."
            raise RuntimeError(msg)
        return self._session_factory()


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session (FastAPI dependency)."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
