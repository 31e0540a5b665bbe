"""Partial-update support.

Request models for PATCH endpoints subclass :class:`FieldChanges`; the fields a
client actually sent become keyword values of a parameterized ``UPDATE``.
Column names always come from the model class, never from user input.
The session is not synchronized; readers re-select with ``populate_existing``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict
from sqlalchemy import update

from speedrun.errors import EmptyUpdateError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.sql.dml import Update

    from speedrun.db.base import Base


class FieldChanges(BaseModel):
    """Base for partial-update payloads. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")

    def changes(self) -> dict[str, Any]:
        """Fields the client supplied with a non-null value."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


def build_update(model: type[Base], entity_id: int, changes: dict[str, Any]) -> Update:
    """Build ``UPDATE <table> SET ... WHERE id = :id`` for the given changes.

    Raises:
        EmptyUpdateError: If there is nothing to change.
        ValueError: If a key does not name a column of ``model``.
    """
    if not changes:
        raise EmptyUpdateError
    columns = model.__table__.columns
    unknown = [key for key in changes if key not in columns]
    if unknown:
        msg = f"Unknown column(s) for {model.__tablename__}: {', '.join(unknown)}"
        raise ValueError(msg)
    return (
        update(model)
        .where(model.id == entity_id)  # type: ignore[attr-defined]
        .values(**changes)
        .execution_options(synchronize_session=False)
    )


async def apply_update(db: AsyncSession, model: type[Base], entity_id: int, changes: dict[str, Any]) -> bool:
    """Execute a partial update and report whether a row matched."""
    result = await db.execute(build_update(model, entity_id, changes))
    return result.rowcount > 0  # type: ignore[attr-defined]
