"""
Authentication business logic.

Registration delegates to :class:`UserService`; login verifies the stored
argon2id hash and issues a stateless access token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from speedrun.auth.jwt import create_access_token
from speedrun.auth.password import check_needs_rehash, hash_password_async, verify_password_async
from speedrun.db.models import User
from speedrun.db.patch import apply_update
from speedrun.errors import AuthenticationError
from speedrun.users.service import UserService

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from speedrun.users.schemas import UserCreate

logger = structlog.get_logger()


class AuthService:
    """Credential checks and token issuing."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.users = UserService(db)

    async def register(self, body: UserCreate) -> tuple[User, str]:
        """Create an account and log it in."""
        user = await self.users.create(body)
        return user, self.issue_token(user)

    async def login(self, identifier: str, password: str) -> tuple[User, str]:
        """
        Check credentials and issue an access token.

        ``identifier`` is treated as an email address when it contains ``@``,
        otherwise as a username.

        Raises:
            AuthenticationError: Unknown account or wrong password.
        """
        if "@" in identifier:
            user = await self.users.get_by_email(identifier)
        else:
            user = await self.users.get_by_username(identifier)

        if user is None or not await verify_password_async(password, user.password_hash):
            logger.info("login_failed", identifier=identifier)
            msg = "Invalid credentials"
            raise AuthenticationError(msg)

        if check_needs_rehash(user.password_hash):
            new_hash = await hash_password_async(password)
            await apply_update(self.db, User, user.id, {"password_hash": new_hash})
            await self.db.commit()
            user.password_hash = new_hash

        logger.info("login_succeeded", user_id=user.id)
        return user, self.issue_token(user)

    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(user.id, user.username, user.email)
