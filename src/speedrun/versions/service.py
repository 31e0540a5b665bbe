"""Game version service."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import delete, select

from speedrun.db.models import Game, GameVersion
from speedrun.db.patch import apply_update
from speedrun.errors import InvalidReferenceError, NotFoundError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from speedrun.versions.schemas import GameVersionCreate, GameVersionUpdate

logger = structlog.get_logger()


class GameVersionService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_all(self) -> list[GameVersion]:
        result = await self.db.execute(select(GameVersion).order_by(GameVersion.id))
        return list(result.scalars().all())

    async def get_by_id(self, version_id: int) -> GameVersion:
        result = await self.db.execute(
            select(GameVersion)
            .where(GameVersion.id == version_id)
            .execution_options(populate_existing=True)
        )
        version = result.scalar_one_or_none()
        if version is None:
            msg = "Game version not found"
            raise NotFoundError(msg)
        return version

    async def list_by_game(self, game_id: int) -> list[GameVersion]:
        """Versions of one game, possibly none. Raises NotFoundError for an unknown game."""
        game = await self.db.execute(select(Game.id).where(Game.id == game_id))
        if game.first() is None:
            msg = "Game not found"
            raise NotFoundError(msg)
        result = await self.db.execute(
            select(GameVersion).where(GameVersion.game_id == game_id).order_by(GameVersion.id)
        )
        return list(result.scalars().all())

    async def create(self, body: GameVersionCreate) -> GameVersion:
        game = await self.db.execute(select(Game.id).where(Game.id == body.game_id).with_for_update())
        if game.first() is None:
            msg = "Game id is invalid"
            raise InvalidReferenceError(msg)

        version = GameVersion(game_id=body.game_id, name=body.name)
        self.db.add(version)
        await self.db.flush()
        await self.db.commit()
        logger.info("game_version_created", version_id=version.id, game_id=version.game_id)
        return version

    async def update(self, version_id: int, body: GameVersionUpdate) -> bool:
        updated = await apply_update(self.db, GameVersion, version_id, body.changes())
        await self.db.commit()
        return updated

    async def delete(self, version_id: int) -> bool:
        result = await self.db.execute(delete(GameVersion).where(GameVersion.id == version_id))
        await self.db.commit()
        return result.rowcount > 0  # type: ignore[attr-defined]
