"""argon2id password hashes.

Cost parameters come from settings. The ``*_async`` variants run the hash on a
worker thread so the event loop is not blocked for the duration of a hash.
"""

from __future__ import annotations

import asyncio
from functools import lru_cache

import argon2
from argon2.exceptions import InvalidHashError, VerificationError

from speedrun.config import get_settings


@lru_cache
def _hasher() -> argon2.PasswordHasher:
    settings = get_settings()
    return argon2.PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost_kib,
        parallelism=1,
        type=argon2.Type.ID,
    )


def hash_password(password: str) -> str:
    return _hasher().hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """True when ``password`` matches. Malformed hashes count as a mismatch."""
    try:
        return _hasher().verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def check_needs_rehash(password_hash: str) -> bool:
    return _hasher().check_needs_rehash(password_hash)


async def hash_password_async(password: str) -> str:
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password, password, password_hash)
