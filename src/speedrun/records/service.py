"""Record submission, moderation and leaderboard queries."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import Row, Select, delete, select

from speedrun.db.models import Category, Game, GameVersion, Record, RecordCategory, RecordStatus, User
from speedrun.db.patch import apply_update
from speedrun.errors import EmptyUpdateError, IncompatibleReferenceError, InvalidReferenceError, NotFoundError
from speedrun.records.schemas import LeaderboardEntry, RecordResponse

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from speedrun.records.schemas import RecordCreate, RecordUpdate

logger = structlog.get_logger()


def _record_query() -> Select[Any]:
    """One row per record with its user, game and version names."""
    return (
        select(
            Record.id,
            Record.user_id,
            User.username,
            Record.game_id,
            Game.name.label("game_name"),
            Record.version_id,
            GameVersion.name.label("version_name"),
            Record.record_time,
            Record.video_url,
            Record.status,
            Record.notes,
            Record.created_at,
        )
        .join(User, User.id == Record.user_id)
        .join(Game, Game.id == Record.game_id)
        .join(GameVersion, GameVersion.id == Record.version_id)
    )


class RecordService:
    """Speedrun records: submission, partial updates, moderation and ranking."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # --- Queries ---

    async def list_all(self) -> list[RecordResponse]:
        result = await self.db.execute(_record_query().order_by(Record.id))
        return await self._responses(result.all())

    async def get_by_id(self, record_id: int) -> RecordResponse:
        result = await self.db.execute(_record_query().where(Record.id == record_id))
        row = result.one_or_none()
        if row is None:
            msg = "Record not found"
            raise NotFoundError(msg)
        (response,) = await self._responses([row])
        return response

    async def leaderboard(
        self,
        game_id: int,
        *,
        category_id: int | None = None,
        version_id: int | None = None,
        status: RecordStatus | None = None,
    ) -> list[LeaderboardEntry]:
        """
        Rank a game's records by ascending time.

        Ties go to the earlier submission. A category filter keeps records linked
        to that category; each kept record still reports all of its categories.

        Raises:
            NotFoundError: If no record matches the filters.
        """
        query = _record_query().where(Record.game_id == game_id)
        if category_id is not None:
            linked = select(RecordCategory.record_id).where(RecordCategory.category_id == category_id)
            query = query.where(Record.id.in_(linked))
        if version_id is not None:
            query = query.where(Record.version_id == version_id)
        if status is not None:
            query = query.where(Record.status == RecordStatus(status).value)

        result = await self.db.execute(query.order_by(Record.record_time, Record.created_at, Record.id))
        rows = result.all()
        if not rows:
            msg = "No records found"
            raise NotFoundError(msg)

        return [
            LeaderboardEntry(rank=rank, **response.model_dump())
            for rank, response in enumerate(await self._responses(rows), start=1)
        ]

    # --- Mutations ---

    async def create(self, body: RecordCreate) -> RecordResponse:
        """
        Submit a record. New records always start as Pending.

        Raises:
            InvalidReferenceError: If the user, game or version does not exist.
            IncompatibleReferenceError: If the version belongs to another game.
        """
        user = await self.db.execute(select(User.id).where(User.id == body.user_id).with_for_update())
        if user.first() is None:
            msg = "User id is invalid"
            raise InvalidReferenceError(msg)

        game = await self.db.execute(select(Game.id).where(Game.id == body.game_id).with_for_update())
        if game.first() is None:
            msg = "Game id is invalid"
            raise InvalidReferenceError(msg)

        version_game = await self._version_game(body.version_id)
        if version_game != body.game_id:
            msg = "Game ID and version ID are not compatible"
            raise IncompatibleReferenceError(msg)

        record = Record(
            user_id=body.user_id,
            game_id=body.game_id,
            version_id=body.version_id,
            record_time=body.record_time,
            video_url=body.video_url,
            status=RecordStatus.PENDING.value,
            notes=body.notes,
            created_at=datetime.now(timezone.utc),
        )
        self.db.add(record)
        await self.db.flush()
        record_id = record.id
        await self.db.commit()

        logger.info("record_created", record_id=record_id, user_id=body.user_id, game_id=body.game_id)
        return await self.get_by_id(record_id)

    async def update(self, record_id: int, body: RecordUpdate) -> bool:
        """
        Apply a partial update. Returns False if the record does not exist.

        Raises:
            EmptyUpdateError: If no fields were supplied.
            InvalidReferenceError: If a new version does not exist.
            IncompatibleReferenceError: If a new version belongs to another game.
        """
        changes = body.changes()
        if not changes:
            raise EmptyUpdateError

        if "version_id" in changes:
            current = await self.db.execute(
                select(Record.game_id).where(Record.id == record_id).with_for_update()
            )
            record_game = current.scalar_one_or_none()
            if record_game is None:
                return False
            version_game = await self._version_game(changes["version_id"])
            if record_game != version_game:
                msg = "Game ID and version ID are not compatible"
                raise IncompatibleReferenceError(msg)

        updated = await apply_update(self.db, Record, record_id, changes)
        await self.db.commit()
        if updated:
            logger.info("record_updated", record_id=record_id, fields=sorted(changes))
        return updated

    async def approve(self, record_id: int) -> None:
        await self._set_status(record_id, RecordStatus.APPROVED, "Record approval failed")

    async def reject(self, record_id: int) -> None:
        await self._set_status(record_id, RecordStatus.REJECTED, "Record rejection failed")

    async def delete(self, record_id: int) -> bool:
        """Hard delete. Category links and comments of the record go with it."""
        result = await self.db.execute(delete(Record).where(Record.id == record_id))
        await self.db.commit()
        deleted = result.rowcount > 0  # type: ignore[attr-defined]
        if deleted:
            logger.info("record_deleted", record_id=record_id)
        return deleted

    # --- Helpers ---

    async def _responses(self, rows: Sequence[Row[Any]]) -> list[RecordResponse]:
        """Attach each record's category names, sorted, loaded in one query keyed by record id."""
        names: defaultdict[int, list[str]] = defaultdict(list)
        if rows:
            linked = await self.db.execute(
                select(RecordCategory.record_id, Category.name)
                .join(Category, Category.id == RecordCategory.category_id)
                .where(RecordCategory.record_id.in_([row.id for row in rows]))
            )
            for record_id, name in linked.all():
                names[record_id].append(name)
        return [
            RecordResponse.model_validate({**row._asdict(), "categories": sorted(names[row.id])})
            for row in rows
        ]

    async def _version_game(self, version_id: int) -> int:
        result = await self.db.execute(
            select(GameVersion.game_id).where(GameVersion.id == version_id).with_for_update()
        )
        game_id = result.scalar_one_or_none()
        if game_id is None:
            msg = "Version id is invalid"
            raise InvalidReferenceError(msg)
        return game_id

    async def _set_status(self, record_id: int, status: RecordStatus, failure: str) -> None:
        updated = await apply_update(self.db, Record, record_id, {"status": status.value})
        await self.db.commit()
        if not updated:
            raise NotFoundError(failure)
        logger.info("record_moderated", record_id=record_id, status=status.value)
