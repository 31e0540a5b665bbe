"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from redis.asyncio import Redis

from speedrun.auth.router import router as auth_router
from speedrun.categories.router import router as categories_router
from speedrun.comments.router import router as comments_router
from speedrun.config import get_settings
from speedrun.database import Database
from speedrun.games.router import router as games_router
from speedrun.health.router import router as health_router
from speedrun.middleware import setup_middleware
from speedrun.record_categories.router import router as record_categories_router
from speedrun.records.router import router as records_router
from speedrun.users.router import router as users_router
from speedrun.versions.router import router as versions_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    database = Database(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.debug,
    )
    await database.connect()
    app.state.database = database

    redis = Redis.from_url(settings.redis_url, decode_responses=True)
    app.state.redis = redis
    logger.info("startup_complete", environment=settings.environment, version=settings.app_version)

    yield

    await redis.aclose()
    app.state.redis = None
    await database.close()
    app.state.database = None


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Speedrun Tracker API",
        description="Speedrun records, leaderboards and moderation",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.database = None
    app.state.redis = None

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(games_router)
    app.include_router(versions_router)
    app.include_router(categories_router)
    app.include_router(records_router)
    app.include_router(record_categories_router)
    app.include_router(comments_router)

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(settings.upload_url_prefix, StaticFiles(directory=upload_dir), name="uploads")

    return app


app = create_app()
