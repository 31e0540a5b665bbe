"""User management business logic."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError

from speedrun.auth.password import hash_password_async
from speedrun.db.models import User
from speedrun.db.patch import apply_update
from speedrun.errors import ConflictError, EmptyUpdateError, NotFoundError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from speedrun.users.schemas import UserCreate, UserUpdate

logger = structlog.get_logger()


class UserService:
    """Accounts: CRUD, search and uniqueness of username/email."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # --- Queries ---

    async def list_all(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def get_by_id(self, user_id: int) -> User:
        """Fetch a user by ID. Raises NotFoundError."""
        result = await self.db.execute(
            select(User).where(User.id == user_id).execution_options(populate_existing=True)
        )
        user = result.scalar_one_or_none()
        if user is None:
            msg = "User not found"
            raise NotFoundError(msg)
        return user

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email.lower().strip()))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def search(self, term: str) -> list[User]:
        """Case-insensitive substring match on username. Raises NotFoundError when nothing matches."""
        result = await self.db.execute(
            select(User).where(User.username.icontains(term, autoescape=True)).order_by(User.username)
        )
        users = list(result.scalars().all())
        if not users:
            msg = "No users found"
            raise NotFoundError(msg)
        return users

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(User))
        return result.scalar_one()

    # --- Mutations ---

    async def create(self, body: UserCreate) -> User:
        """
        Create a user with a hashed password.

        Raises:
            ConflictError: If the username or email is already taken.
        """
        existing = await self.db.execute(
            select(User.id).where(or_(User.email == body.email, User.username == body.username))
        )
        if existing.first() is not None:
            msg = "Account with this email or username already exists"
            raise ConflictError(msg)

        now = datetime.now(timezone.utc)
        user = User(
            username=body.username,
            email=body.email,
            password_hash=await hash_password_async(body.password),
            profile_picture_url=body.profile_picture_url,
            bio=body.bio,
            created_at=now,
            updated_at=now,
        )
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError as e:
            # Lost a race with a concurrent signup for the same name/email
            await self.db.rollback()
            msg = "Account with this email or username already exists"
            raise ConflictError(msg) from e
        await self.db.commit()

        logger.info("user_created", user_id=user.id, username=user.username)
        return user

    async def update(self, user_id: int, body: UserUpdate) -> bool:
        """
        Apply a partial update. Returns False if the user does not exist.

        Raises:
            EmptyUpdateError: If no fields were supplied.
            ConflictError: If a new username or email belongs to another user.
        """
        changes = body.changes()
        if not changes:
            raise EmptyUpdateError

        if "username" in changes:
            taken = await self.db.execute(
                select(User.id).where(User.username == changes["username"], User.id != user_id)
            )
            if taken.first() is not None:
                msg = "Username already exists"
                raise ConflictError(msg)

        if "email" in changes:
            taken = await self.db.execute(
                select(User.id).where(User.email == changes["email"], User.id != user_id)
            )
            if taken.first() is not None:
                msg = "Email already exists"
                raise ConflictError(msg)

        if "password" in changes:
            changes["password_hash"] = await hash_password_async(changes.pop("password"))

        changes["updated_at"] = datetime.now(timezone.utc)
        try:
            updated = await apply_update(self.db, User, user_id, changes)
        except IntegrityError as e:
            await self.db.rollback()
            msg = "Username or email already exists"
            raise ConflictError(msg) from e
        await self.db.commit()

        if updated:
            logger.info("user_updated", user_id=user_id, fields=sorted(changes))
        return updated

    async def set_profile_picture(self, user_id: int, url: str) -> bool:
        updated = await apply_update(
            self.db, User, user_id, {"profile_picture_url": url, "updated_at": datetime.now(timezone.utc)}
        )
        await self.db.commit()
        return updated

    async def delete(self, user_id: int) -> bool:
        result = await self.db.execute(delete(User).where(User.id == user_id))
        await self.db.commit()
        deleted = result.rowcount > 0  # type: ignore[attr-defined]
        if deleted:
            logger.info("user_deleted", user_id=user_id)
        return deleted
