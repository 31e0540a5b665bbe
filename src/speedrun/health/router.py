"""Liveness, readiness and build info for load balancers and deploy checks."""

from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from speedrun.config import Settings
from speedrun.database import get_session
from speedrun.dependencies import settings_dep

router = APIRouter(tags=["Health"])

_HEALTHY = ("ok", "disabled")


async def _probe(check: Callable[[], Awaitable[Any]]) -> str:
    try:
        await check()
    except Exception as exc:  # noqa: BLE001
        return f"error: {exc}"
    return "ok"


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
async def readiness(
    request: Request,
    db: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict[str, object]:
    """Report ``ready`` when the database answers and Redis is reachable or not configured."""
    redis = request.app.state.redis
    checks = {
        "database": await _probe(lambda: db.execute(text("SELECT 1"))),
        "redis": "disabled" if redis is None else await _probe(redis.ping),
    }
    status = "ready" if all(state in _HEALTHY for state in checks.values()) else "degraded"
    return {"status": status, "checks": checks}


@router.get("/version")
async def version(settings: Settings = Depends(settings_dep)) -> dict[str, str]:  # noqa: B008
    return {"version": settings.app_version, "environment": settings.environment}
