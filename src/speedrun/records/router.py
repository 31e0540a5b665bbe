"""Records API: /api/v1/records/*, including moderation and leaderboards."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from speedrun.config import Settings
from speedrun.db.models import RecordStatus
from speedrun.dependencies import get_record_service, settings_dep
from speedrun.records.schemas import LeaderboardEntry, RecordCreate, RecordResponse, RecordUpdate
from speedrun.records.service import RecordService
from speedrun.uploads import discard_upload, save_upload
from speedrun.validation import parse_form

router = APIRouter(prefix="/api/v1/records", tags=["Records"])


@router.get("", response_model=list[RecordResponse])
async def list_records(service: RecordService = Depends(get_record_service)) -> list[RecordResponse]:
    return await service.list_all()


@router.get("/games/{game_id}/leaderboard", response_model=list[LeaderboardEntry])
async def get_leaderboard(
    game_id: int,
    category_id: int | None = Query(None, gt=0),
    version_id: int | None = Query(None, gt=0),
    status: RecordStatus | None = Query(None),
    service: RecordService = Depends(get_record_service),
) -> list[LeaderboardEntry]:
    """Records of a game ranked fastest first, optionally filtered."""
    return await service.leaderboard(game_id, category_id=category_id, version_id=version_id, status=status)


@router.get("/{record_id}", response_model=RecordResponse)
async def get_record(record_id: int, service: RecordService = Depends(get_record_service)) -> RecordResponse:
    return await service.get_by_id(record_id)


@router.post("", response_model=RecordResponse, status_code=201)
async def create_record(
    user_id: int = Form(...),
    game_id: int = Form(...),
    version_id: int = Form(...),
    record_time: str = Form(...),
    video_url: str | None = Form(None),
    notes: str | None = Form(None),
    proof: UploadFile | None = File(None),
    service: RecordService = Depends(get_record_service),
    settings: Settings = Depends(settings_dep),
) -> RecordResponse:
    """Submit a run. An uploaded ``proof`` video replaces ``video_url``."""
    body = parse_form(
        RecordCreate,
        user_id=user_id,
        game_id=game_id,
        version_id=version_id,
        record_time=record_time,
        video_url=video_url,
        notes=notes,
    )
    if proof is None or not proof.filename:
        return await service.create(body)

    stored = await save_upload(proof, settings)
    body.video_url = stored
    try:
        return await service.create(body)
    except Exception:
        discard_upload(stored, settings)
        raise


@router.patch("/{record_id}")
async def update_record(
    record_id: int,
    body: RecordUpdate,
    service: RecordService = Depends(get_record_service),
) -> dict[str, str]:
    if not await service.update(record_id, body):
        raise HTTPException(status_code=404, detail="Record not found")
    return {"message": "Record updated successfully"}


@router.post("/{record_id}/approve")
async def approve_record(record_id: int, service: RecordService = Depends(get_record_service)) -> dict[str, str]:
    await service.approve(record_id)
    return {"message": "Record approved successfully"}


@router.post("/{record_id}/reject")
async def reject_record(record_id: int, service: RecordService = Depends(get_record_service)) -> dict[str, str]:
    await service.reject(record_id)
    return {"message": "Record rejected successfully"}


@router.delete("/{record_id}")
async def delete_record(record_id: int, service: RecordService = Depends(get_record_service)) -> dict[str, str]:
    if not await service.delete(record_id):
        raise HTTPException(status_code=404, detail="Record not found")
    return {"message": "Record deleted successfully"}
