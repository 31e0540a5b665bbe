"""User management router: all /api/v1/users/* endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from speedrun.auth.dependencies import get_current_user, require_self
from speedrun.config import Settings
from speedrun.db.models import User
from speedrun.dependencies import get_user_service, settings_dep
from speedrun.uploads import discard_upload, save_upload
from speedrun.users.schemas import UserCreate, UserResponse, UserUpdate
from speedrun.users.service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["Users"])


@router.get("", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)) -> list[UserResponse]:
    return [UserResponse.model_validate(u) for u in await service.list_all()]


@router.get("/search", response_model=list[UserResponse])
async def search_users(
    q: str = Query(..., min_length=1, max_length=64),
    service: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    """Case-insensitive substring search on username."""
    return [UserResponse.model_validate(u) for u in await service.search(q)]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)) -> UserResponse:
    return UserResponse.model_validate(await service.get_by_id(user_id))


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(body: UserCreate, service: UserService = Depends(get_user_service)) -> UserResponse:
    return UserResponse.model_validate(await service.create(body))


@router.patch("/{user_id}")
async def update_user(
    user_id: int,
    body: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> dict[str, str]:
    """Update own profile (username, email, password, profile picture URL, bio)."""
    require_self(user_id, current_user)
    if not await service.update(user_id, body):
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User updated successfully"}


@router.post("/{user_id}/avatar", response_model=UserResponse)
async def upload_avatar(
    user_id: int,
    profile_picture: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(settings_dep),
) -> UserResponse:
    """Store an uploaded profile picture and point the profile at it."""
    require_self(user_id, current_user)
    url = await save_upload(profile_picture, settings)
    if not await service.set_profile_picture(user_id, url):
        discard_upload(url, settings)
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.model_validate(await service.get_by_id(user_id))


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> dict[str, str]:
    require_self(user_id, current_user)
    if not await service.delete(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User deleted successfully"}
