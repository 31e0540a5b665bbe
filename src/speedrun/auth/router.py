"""Authentication router: all /api/v1/auth/* endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from speedrun.auth.dependencies import get_current_user
from speedrun.auth.schemas import LoginRequest, TokenResponse
from speedrun.auth.service import AuthService
from speedrun.config import Settings
from speedrun.db.models import User
from speedrun.dependencies import get_auth_service, settings_dep
from speedrun.users.schemas import UserCreate, UserResponse

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


def _token_response(user: User, token: str, settings: Settings) -> TokenResponse:
    return TokenResponse(
        access_token=token,
        token_type="bearer",
        expires_in=settings.jwt_access_token_expire_minutes * 60,
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(
    body: UserCreate,
    service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(settings_dep),
) -> TokenResponse:
    """Create an account and return an access token for it."""
    user, token = await service.register(body)
    return _token_response(user, token, settings)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(settings_dep),
) -> TokenResponse:
    """Log in with email or username + password."""
    user, token = await service.login(body.identifier, body.password)
    return _token_response(user, token, settings)


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)) -> UserResponse:
    """Return the account the bearer token belongs to."""
    return UserResponse.model_validate(user)
