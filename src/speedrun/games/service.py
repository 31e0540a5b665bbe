"""Game catalogue service."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import delete, select

from speedrun.db.models import Game
from speedrun.db.patch import apply_update
from speedrun.errors import NotFoundError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from speedrun.games.schemas import GameCreate, GameUpdate

logger = structlog.get_logger()


class GameService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_all(self) -> list[Game]:
        result = await self.db.execute(select(Game).order_by(Game.id))
        return list(result.scalars().all())

    async def get_by_id(self, game_id: int) -> Game:
        result = await self.db.execute(
            select(Game).where(Game.id == game_id).execution_options(populate_existing=True)
        )
        game = result.scalar_one_or_none()
        if game is None:
            msg = "Game not found"
            raise NotFoundError(msg)
        return game

    async def search(self, term: str) -> list[Game]:
        """Case-insensitive substring match on the game name."""
        result = await self.db.execute(
            select(Game).where(Game.name.icontains(term, autoescape=True)).order_by(Game.name)
        )
        games = list(result.scalars().all())
        if not games:
            msg = "No games found"
            raise NotFoundError(msg)
        return games

    async def create(self, body: GameCreate) -> Game:
        game = Game(
            name=body.name,
            rules=body.rules,
            release_date=body.release_date,
            developer=body.developer,
            icon_url=body.icon_url,
        )
        self.db.add(game)
        await self.db.flush()
        await self.db.commit()
        logger.info("game_created", game_id=game.id, name=game.name)
        return game

    async def update(self, game_id: int, body: GameUpdate) -> bool:
        updated = await apply_update(self.db, Game, game_id, body.changes())
        await self.db.commit()
        return updated

    async def delete(self, game_id: int) -> bool:
        """Hard delete. Versions, categories and records of the game go with it."""
        result = await self.db.execute(delete(Game).where(Game.id == game_id))
        await self.db.commit()
        deleted = result.rowcount > 0  # type: ignore[attr-defined]
        if deleted:
            logger.info("game_deleted", game_id=game_id)
        return deleted
