"""Stateless bearer tokens signed with ``settings.jwt_secret_key``."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from speedrun.config import Settings, get_settings

ACCESS = "access"


def _claims(settings: Settings, user_id: int, username: str, email: str) -> dict[str, Any]:
    issued_at = datetime.now(timezone.utc)
    return {
        "sub": str(user_id),
        "username": username,
        "email": email,
        "iss": settings.jwt_issuer,
        "type": ACCESS,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.jwt_access_token_expire_minutes),
    }


def create_access_token(user_id: int, username: str, email: str) -> str:
    """Sign an access token for ``user_id``; it expires after the configured lifetime."""
    settings = get_settings()
    return jwt.encode(
        _claims(settings, user_id, username, email),
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def verify_token(token: str) -> dict[str, Any]:
    """Decode ``token`` and return its claims.

    Any failure (bad signature, wrong issuer, expiry, non-access token) raises
    ``jwt.InvalidTokenError``.
    """
    settings = get_settings()
    claims: dict[str, Any] = jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        issuer=settings.jwt_issuer,
        options={"require": ["sub", "exp", "iat"]},
    )
    if claims.get("type") != ACCESS:
        msg = f"Expected token type {ACCESS!r}, got {claims.get('type')!r}"
        raise jwt.InvalidTokenError(msg)
    return claims
