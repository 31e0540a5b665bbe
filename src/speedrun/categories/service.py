"""Category service. Categories are scoped to a single game."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import delete, select

from speedrun.db.models import Category, Game
from speedrun.db.patch import apply_update
from speedrun.errors import InvalidReferenceError, NotFoundError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from speedrun.categories.schemas import CategoryCreate, CategoryUpdate

logger = structlog.get_logger()


class CategoryService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_all(self) -> list[Category]:
        result = await self.db.execute(select(Category).order_by(Category.id))
        return list(result.scalars().all())

    async def get_by_id(self, category_id: int) -> Category:
        result = await self.db.execute(
            select(Category).where(Category.id == category_id).execution_options(populate_existing=True)
        )
        category = result.scalar_one_or_none()
        if category is None:
            msg = "Category not found"
            raise NotFoundError(msg)
        return category

    async def list_by_game(self, game_id: int) -> list[Category]:
        game = await self.db.execute(select(Game.id).where(Game.id == game_id))
        if game.first() is None:
            msg = "Game not found"
            raise NotFoundError(msg)
        result = await self.db.execute(
            select(Category).where(Category.game_id == game_id).order_by(Category.id)
        )
        return list(result.scalars().all())

    async def create(self, body: CategoryCreate) -> Category:
        game = await self.db.execute(select(Game.id).where(Game.id == body.game_id).with_for_update())
        if game.first() is None:
            msg = "Game id is invalid"
            raise InvalidReferenceError(msg)

        category = Category(game_id=body.game_id, name=body.name, description=body.description)
        self.db.add(category)
        await self.db.flush()
        await self.db.commit()
        logger.info("category_created", category_id=category.id, game_id=category.game_id)
        return category

    async def update(self, category_id: int, body: CategoryUpdate) -> bool:
        updated = await apply_update(self.db, Category, category_id, body.changes())
        await self.db.commit()
        return updated

    async def delete(self, category_id: int) -> bool:
        result = await self.db.execute(delete(Category).where(Category.id == category_id))
        await self.db.commit()
        return result.rowcount > 0  # type: ignore[attr-defined]
