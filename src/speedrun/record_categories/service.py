"""Links between records and the categories they were run in."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import Select, delete, select
from sqlalchemy.exc import IntegrityError

from speedrun.db.models import Category, Record, RecordCategory
from speedrun.db.patch import apply_update
from speedrun.errors import (
    ConflictError,
    CrossGameMismatchError,
    EmptyUpdateError,
    InvalidReferenceError,
    NotFoundError,
)
from speedrun.record_categories.schemas import RecordCategoryResponse

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from speedrun.record_categories.schemas import RecordCategoryCreate, RecordCategoryUpdate

logger = structlog.get_logger()


def _link_query() -> Select[Any]:
    return select(
        RecordCategory.id,
        RecordCategory.record_id,
        RecordCategory.category_id,
        Category.name.label("category_name"),
    ).join(Category, Category.id == RecordCategory.category_id)


class RecordCategoryService:
    """A link is only valid when the record and the category share a game."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_all(self) -> list[RecordCategoryResponse]:
        result = await self.db.execute(_link_query().order_by(RecordCategory.id))
        return [RecordCategoryResponse.model_validate(row._asdict()) for row in result.all()]

    async def get_by_id(self, link_id: int) -> RecordCategoryResponse:
        result = await self.db.execute(_link_query().where(RecordCategory.id == link_id))
        row = result.one_or_none()
        if row is None:
            msg = "Record category not found"
            raise NotFoundError(msg)
        return RecordCategoryResponse.model_validate(row._asdict())

    async def list_by_record(self, record_id: int) -> list[RecordCategoryResponse]:
        record = await self.db.execute(select(Record.id).where(Record.id == record_id))
        if record.first() is None:
            msg = "Record not found"
            raise NotFoundError(msg)
        result = await self.db.execute(
            _link_query().where(RecordCategory.record_id == record_id).order_by(Category.name)
        )
        return [RecordCategoryResponse.model_validate(row._asdict()) for row in result.all()]

    async def create(self, body: RecordCategoryCreate) -> RecordCategoryResponse:
        """
        Link a record to a category.

        Raises:
            InvalidReferenceError: If the record or category does not exist.
            CrossGameMismatchError: If they belong to different games.
            ConflictError: If the link already exists.
        """
        record_game = await self._record_game(body.record_id)
        category_game = await self._category_game(body.category_id)
        if record_game != category_game:
            msg = "Record and Category belong to different games"
            raise CrossGameMismatchError(msg)
        await self._ensure_unlinked(body.record_id, body.category_id)

        link = RecordCategory(record_id=body.record_id, category_id=body.category_id)
        self.db.add(link)
        try:
            await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            msg = "Record is already linked to this category"
            raise ConflictError(msg) from e
        link_id = link.id
        await self.db.commit()

        logger.info("record_category_created", link_id=link_id, record_id=body.record_id)
        return await self.get_by_id(link_id)

    async def update(self, link_id: int, body: RecordCategoryUpdate) -> bool:
        """Point an existing link at another category of the same game."""
        changes = body.changes()
        if not changes:
            raise EmptyUpdateError

        current = await self.db.execute(
            select(RecordCategory.record_id).where(RecordCategory.id == link_id).with_for_update()
        )
        record_id = current.scalar_one_or_none()
        if record_id is None:
            msg = "Record category not found"
            raise NotFoundError(msg)

        record_game = await self._record_game(record_id)
        category_game = await self._category_game(changes["category_id"])
        if record_game != category_game:
            msg = "Record and Category belong to different games"
            raise CrossGameMismatchError(msg)
        await self._ensure_unlinked(record_id, changes["category_id"], exclude_id=link_id)

        try:
            updated = await apply_update(self.db, RecordCategory, link_id, changes)
        except IntegrityError as e:
            await self.db.rollback()
            msg = "Record is already linked to this category"
            raise ConflictError(msg) from e
        await self.db.commit()
        return updated

    async def delete(self, link_id: int) -> bool:
        result = await self.db.execute(delete(RecordCategory).where(RecordCategory.id == link_id))
        await self.db.commit()
        return result.rowcount > 0  # type: ignore[attr-defined]

    # --- Helpers ---

    async def _record_game(self, record_id: int) -> int:
        result = await self.db.execute(
            select(Record.game_id).where(Record.id == record_id).with_for_update()
        )
        game_id = result.scalar_one_or_none()
        if game_id is None:
            msg = "Record id is invalid"
            raise InvalidReferenceError(msg)
        return game_id

    async def _category_game(self, category_id: int) -> int:
        result = await self.db.execute(
            select(Category.game_id).where(Category.id == category_id).with_for_update()
        )
        game_id = result.scalar_one_or_none()
        if game_id is None:
            msg = "Category id is invalid"
            raise InvalidReferenceError(msg)
        return game_id

    async def _ensure_unlinked(self, record_id: int, category_id: int, exclude_id: int | None = None) -> None:
        query = select(RecordCategory.id).where(
            RecordCategory.record_id == record_id, RecordCategory.category_id == category_id
        )
        if exclude_id is not None:
            query = query.where(RecordCategory.id != exclude_id)
        existing = await self.db.execute(query)
        if existing.first() is not None:
            msg = "Record is already linked to this category"
            raise ConflictError(msg)
